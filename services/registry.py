from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Tuple

from models.json_home import JsonHome
from models.resource_link import ResourceLink

logger = logging.getLogger(__name__)


class ResourceLinkRegistry:
    """
    Collects the resource links contributed by a scanner.

    Links of the same relation type are merged on registration; the first
    registration of a relation type fixes its position in the document.
    """

    def __init__(self) -> None:
        self._links: Dict[str, ResourceLink] = {}

    @property
    def relation_types(self) -> Tuple[str, ...]:
        return tuple(self._links)

    def get(self, relation_type: str) -> Optional[ResourceLink]:
        return self._links.get(relation_type)

    def register(self, link: ResourceLink) -> ResourceLink:
        """
        Adds a link, merging it with the link already registered for its
        relation type.

        :return: the (merged) link now registered for the relation type
        :raises ConflictingResourceLinkError: if both links disagree on href or template
        """
        existing = self._links.get(link.relation_type)
        if existing is None:
            merged = link
        else:
            logger.debug("Merging resource link %s", link.relation_type)
            merged = existing.merge_with(link)
        self._links[link.relation_type] = merged
        return merged

    def register_all(self, links: Iterable[ResourceLink]) -> None:
        for link in links:
            self.register(link)

    def to_json_home(self) -> JsonHome:
        """A new document with the links registered so far."""
        return JsonHome(links=tuple(self._links.values()))

    def __len__(self) -> int:
        return len(self._links)

    def __contains__(self, relation_type: object) -> bool:
        return relation_type in self._links


def assemble_json_home(links: Iterable[ResourceLink]) -> JsonHome:
    """Groups the links by relation type and merges each group into one link."""
    registry = ResourceLinkRegistry()
    registry.register_all(links)
    logger.info("Assembled json-home document with %d relation types", len(registry))
    return registry.to_json_home()
