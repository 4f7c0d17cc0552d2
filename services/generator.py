from __future__ import annotations

import logging
from typing import Dict, Optional

from pydantic import ValidationError

from models.declaration import ResourceCatalog, ResourceDeclaration
from models.docs import Docs
from models.exceptions import InvalidResourceLinkError, JsonHomeError
from models.hints import Hints
from models.json_home import JsonHome
from models.resource_link import HrefVar, ResourceLink
from services.docs import DocsGenerator
from services.registry import ResourceLinkRegistry
from utils.uri import prefix_uri, resolve_uri

logger = logging.getLogger(__name__)


class JsonHomeGenerator:
    """
    Builds the json-home document from the declarations of a scanner.

    Relation types are resolved against `relation_type_base_uri`, hrefs and
    href templates are prefixed with `base_uri`. In strict mode the first
    invalid or conflicting declaration aborts the generation; otherwise it is
    logged and skipped.
    """

    def __init__(
            self,
            base_uri: str,
            relation_type_base_uri: Optional[str] = None,
            docs_generator: Optional[DocsGenerator] = None,
            strict: bool = True
    ) -> None:
        self.base_uri = base_uri
        self.relation_type_base_uri = relation_type_base_uri or base_uri
        self.docs_generator = docs_generator or DocsGenerator(self.relation_type_base_uri)
        self.strict = strict

    def relation_type_of(self, declaration: ResourceDeclaration) -> str:
        return resolve_uri(self.relation_type_base_uri, declaration.rel)

    def resource_link_from(self, declaration: ResourceDeclaration, docs: Optional[Docs] = None) -> ResourceLink:
        """
        Converts one declaration into a resource link.

        :param docs: relation-level docs, merged in front of the declaration's own docs
        :raises JsonHomeError: attributed to the relation type of the declaration
        """
        relation_type = self.relation_type_of(declaration)
        try:
            own_docs = self.docs_generator.documentation_from(relation_type, declaration.doc)
            if docs is not None:
                own_docs = docs.merge_with(own_docs)

            hints = Hints(
                allowed_methods=frozenset(declaration.allow),
                representations=tuple(declaration.representations),
                accept_put=tuple(declaration.accept_put),
                accept_post=tuple(declaration.accept_post),
                precondition_req=tuple(declaration.precondition_req),
                auth_req=tuple(declaration.auth_req),
                status=declaration.status,
                docs=own_docs,
            )
            if declaration.href_template is None:
                return ResourceLink(
                    relation_type=relation_type,
                    href=prefix_uri(self.base_uri, declaration.href) if declaration.href is not None else None,
                    hints=hints,
                )
            return ResourceLink(
                relation_type=relation_type,
                href_template=prefix_uri(self.base_uri, declaration.href_template),
                href_vars=tuple(
                    HrefVar(
                        var=name,
                        var_type=f"{relation_type}#{name}",
                        constraint=var.constraint,
                        docs=self.docs_generator.documentation_from(relation_type, var.doc),
                    )
                    for name, var in declaration.href_vars.items()
                ),
                hints=hints,
            )
        except JsonHomeError as e:
            if e.relation_type is None:
                raise e.for_relation_type(relation_type) from e
            raise
        except ValidationError as e:
            raise InvalidResourceLinkError(str(e), relation_type=relation_type) from e

    def generate(self, catalog: ResourceCatalog) -> JsonHome:
        rel_docs = self._relation_docs(catalog)
        registry = ResourceLinkRegistry()
        skipped = 0
        for declaration in catalog.resources:
            relation_type = self.relation_type_of(declaration)
            # relation-level docs are attached to the first link of the relation type only
            docs = rel_docs.pop(relation_type, None)
            try:
                registry.register(self.resource_link_from(declaration, docs))
            except JsonHomeError as e:
                if self.strict:
                    raise
                skipped += 1
                if docs is not None:
                    rel_docs[relation_type] = docs
                logger.warning("Skipping resource declaration: %s", e)

        for relation_type in rel_docs:
            logger.warning("Documentation of %s does not belong to any resource", relation_type)
        logger.info(
            "Generated json-home document: %d relation types from %d declarations (%d skipped)",
            len(registry), len(catalog.resources), skipped
        )
        return registry.to_json_home()

    def _relation_docs(self, catalog: ResourceCatalog) -> Dict[str, Docs]:
        rel_docs: Dict[str, Docs] = {}
        for declaration in catalog.docs:
            if declaration.rel is None:
                logger.warning("Ignoring documentation without relation type: %s", declaration.value)
                continue
            relation_type = resolve_uri(self.relation_type_base_uri, declaration.rel)
            docs = self.docs_generator.documentation_from(relation_type, declaration)
            existing = rel_docs.get(relation_type)
            rel_docs[relation_type] = docs if existing is None else existing.merge_with(docs)
        return rel_docs

