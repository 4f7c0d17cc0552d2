from __future__ import annotations
import re
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from models.docs import Docs
from models.exceptions import ConflictingResourceLinkError, InvalidResourceLinkError
from models.hints import Hints
from utils.uri import template_variables


# -----------------------------------------------------------------------------
# Href variables
# -----------------------------------------------------------------------------
class ConstraintKind(str, Enum):
    ANY = "any"
    INTEGER = "integer"
    REGEX = "regex"


class VarConstraint(BaseModel):
    """
    Rule a value of an href variable has to satisfy.

    Only carried into the document, for routers and documentation renderers;
    nothing in here validates requests.
    """
    kind: ConstraintKind = ConstraintKind.ANY
    pattern: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def regex_requires_pattern(self) -> VarConstraint:
        if self.kind is ConstraintKind.REGEX:
            if not self.pattern:
                raise ValueError("A regex constraint requires a pattern")
            try:
                re.compile(self.pattern)
            except re.error as e:
                raise ValueError(f"Invalid pattern {self.pattern!r}: {e}") from e
        elif self.pattern is not None:
            raise ValueError(f"A pattern is only allowed for regex constraints, not {self.kind.value}")
        return self

    @classmethod
    def integer(cls) -> VarConstraint:
        return cls(kind=ConstraintKind.INTEGER)

    @classmethod
    def regex(cls, pattern: str) -> VarConstraint:
        return cls(kind=ConstraintKind.REGEX, pattern=pattern)

    def matches(self, value: str) -> bool:
        if self.kind is ConstraintKind.INTEGER:
            return re.fullmatch(r"-?[0-9]+", value) is not None
        if self.kind is ConstraintKind.REGEX:
            return re.fullmatch(self.pattern, value) is not None
        return True


class HrefVar(BaseModel):
    """A variable of an href template."""
    var: str = Field(
        ...,
        min_length=1,
        description="Name of the variable in the template"
    )
    var_type: Optional[str] = Field(
        None,
        description="URI identifying (and documenting) the variable",
        examples=["http://example.org/rel/product#productId"]
    )
    constraint: Optional[VarConstraint] = None
    docs: Docs = Field(default_factory=Docs)

    model_config = ConfigDict(frozen=True)

    def merge_with(self, other: HrefVar) -> HrefVar:
        if other.var != self.var:
            raise ValueError(f"Cannot merge href var {self.var} with {other.var}")
        return HrefVar(
            var=self.var,
            var_type=self.var_type if self.var_type is not None else other.var_type,
            constraint=self.constraint if self.constraint is not None else other.constraint,
            docs=self.docs.merge_with(other.docs),
        )


# -----------------------------------------------------------------------------
# ResourceLink
# -----------------------------------------------------------------------------
class ResourceLink(BaseModel):
    """
    A relation type bound to either a fixed URI (direct link) or a URI
    template with its variables (templated link), plus the hints of the
    resource.
    """
    relation_type: str = Field(
        ...,
        min_length=1,
        description="URI of the link relation type",
        examples=["http://example.org/rel/products"]
    )
    href: Optional[str] = Field(
        None,
        description="URI of a direct link"
    )
    href_template: Optional[str] = Field(
        None,
        description="URI template (RFC 6570) of a templated link",
        examples=["http://example.org/products/{productId}"]
    )
    href_vars: Tuple[HrefVar, ...] = ()
    hints: Hints = Field(default_factory=Hints)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def href_xor_template(self) -> ResourceLink:
        if (self.href is None) == (self.href_template is None):
            raise InvalidResourceLinkError(
                "Exactly one of href and href-template must be provided",
                relation_type=self.relation_type,
            )
        if self.href is not None:
            if self.href_vars:
                raise InvalidResourceLinkError(
                    "href-vars are only allowed for templated links",
                    relation_type=self.relation_type,
                )
            return self

        try:
            variables = template_variables(self.href_template)
        except ValueError as e:
            raise InvalidResourceLinkError(str(e), relation_type=self.relation_type) from e
        names = [href_var.var for href_var in self.href_vars]
        if len(set(names)) != len(names):
            raise InvalidResourceLinkError(
                f"Duplicate href-vars {names}",
                relation_type=self.relation_type,
            )
        unknown = [name for name in names if name not in variables]
        if unknown:
            raise InvalidResourceLinkError(
                f"href-vars {unknown} are not variables of {self.href_template}",
                relation_type=self.relation_type,
            )
        return self

    @property
    def is_templated(self) -> bool:
        return self.href_template is not None

    @property
    def template_variables(self) -> FrozenSet[str]:
        if self.href_template is None:
            return frozenset()
        return frozenset(template_variables(self.href_template))

    def href_var(self, name: str) -> Optional[HrefVar]:
        for href_var in self.href_vars:
            if href_var.var == name:
                return href_var
        return None

    def merge_with(self, other: ResourceLink) -> ResourceLink:
        """
        Merges two links of the same relation type.

        Both must be direct links with the same href, or templated links with
        the same template. Otherwise ConflictingResourceLinkError is raised.
        """
        if other.relation_type != self.relation_type:
            raise ConflictingResourceLinkError(
                f"Cannot merge with a link of relation type {other.relation_type}",
                relation_type=self.relation_type,
            )
        if self.is_templated != other.is_templated:
            raise ConflictingResourceLinkError(
                "Cannot merge a direct link with a templated link",
                relation_type=self.relation_type,
            )
        if not self.is_templated:
            if self.href != other.href:
                raise ConflictingResourceLinkError(
                    f"Conflicting hrefs {self.href} and {other.href}",
                    relation_type=self.relation_type,
                )
            return ResourceLink(
                relation_type=self.relation_type,
                href=self.href,
                hints=self.hints.merge_with(other.hints),
            )

        if self.template_variables != other.template_variables:
            raise ConflictingResourceLinkError(
                f"Conflicting template variables {sorted(self.template_variables)} "
                f"and {sorted(other.template_variables)}",
                relation_type=self.relation_type,
            )
        if self.href_template != other.href_template:
            raise ConflictingResourceLinkError(
                f"Conflicting href templates {self.href_template} and {other.href_template}",
                relation_type=self.relation_type,
            )
        return ResourceLink(
            relation_type=self.relation_type,
            href_template=self.href_template,
            href_vars=_merge_href_vars(self.href_vars, other.href_vars),
            hints=self.hints.merge_with(other.hints),
        )


def _merge_href_vars(these: Iterable[HrefVar], others: Iterable[HrefVar]) -> Tuple[HrefVar, ...]:
    merged: dict[str, HrefVar] = {}
    for href_var in list(these) + list(others):
        existing = merged.get(href_var.var)
        merged[href_var.var] = href_var if existing is None else existing.merge_with(href_var)
    return tuple(merged.values())


def direct_link(relation_type: str, href: str, hints: Optional[Hints] = None) -> ResourceLink:
    return ResourceLink(relation_type=relation_type, href=href, hints=hints if hints is not None else Hints())


def templated_link(
        relation_type: str,
        href_template: str,
        href_vars: Iterable[HrefVar] = (),
        hints: Optional[Hints] = None
) -> ResourceLink:
    return ResourceLink(
        relation_type=relation_type,
        href_template=href_template,
        href_vars=tuple(href_vars),
        hints=hints if hints is not None else Hints(),
    )
