from __future__ import annotations
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, model_validator

from models.resource_link import ResourceLink


class JsonHome(BaseModel):
    """
    A json-home document: one merged resource link per relation type, in the
    order the relation types were first declared.

    Published documents are never modified; a new document is built instead.
    """
    links: Tuple[ResourceLink, ...] = ()

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def unique_relation_types(self) -> JsonHome:
        relation_types = [link.relation_type for link in self.links]
        if len(set(relation_types)) != len(relation_types):
            raise ValueError(f"Relation types must be unique: {relation_types}")
        return self

    @property
    def resources(self) -> Mapping[str, ResourceLink]:
        """Read-only, ordered mapping of relation type to resource link."""
        return MappingProxyType({link.relation_type: link for link in self.links})

    @property
    def relation_types(self) -> Tuple[str, ...]:
        return tuple(link.relation_type for link in self.links)

    def get(self, relation_type: str) -> Optional[ResourceLink]:
        for link in self.links:
            if link.relation_type == relation_type:
                return link
        return None

    def __len__(self) -> int:
        return len(self.links)

    def __contains__(self, relation_type: object) -> bool:
        return self.get(relation_type) is not None


def empty_json_home() -> JsonHome:
    return JsonHome()
