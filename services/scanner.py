from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol, Union

from models.declaration import ResourceCatalog

logger = logging.getLogger(__name__)


class ResourceScanner(Protocol):
    """Finds the resources of an application, however it likes to."""

    def scan(self) -> ResourceCatalog:
        ...


class StaticResourceScanner:
    """Resources declared in code."""

    def __init__(self, catalog: Optional[ResourceCatalog] = None) -> None:
        self._catalog = catalog if catalog is not None else ResourceCatalog()

    def scan(self) -> ResourceCatalog:
        return self._catalog


class FileResourceScanner:
    """
    Resources declared in a JSON file:

        {
          "docs": [{"rel": "/rel/products", "value": ["..."], "include": "products.md"}],
          "resources": [
            {"rel": "/rel/products", "href": "/products", "allow": ["GET"],
             "representations": ["application/json"]}
          ]
        }

    The file is read on every scan. Read and parse errors propagate.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def scan(self) -> ResourceCatalog:
        logger.info("Reading resource declarations from %s", self.path)
        with self.path.open(encoding="utf-8") as f:
            return ResourceCatalog.model_validate_json(f.read())
