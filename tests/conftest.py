"""Pytest fixtures for the json-home tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from models.declaration import ResourceCatalog
from services.docs import DocsGenerator
from services.generator import JsonHomeGenerator

RESOURCES = Path(__file__).parent / "resources"
BASE_URI = "http://example.org"


@pytest.fixture
def resources_dir() -> Path:
    return RESOURCES


@pytest.fixture
def docs_generator() -> DocsGenerator:
    return DocsGenerator(BASE_URI, "/docs/*", search_path=RESOURCES)


@pytest.fixture
def generator(docs_generator: DocsGenerator) -> JsonHomeGenerator:
    return JsonHomeGenerator(BASE_URI, docs_generator=docs_generator)


@pytest.fixture
def shop_catalog() -> ResourceCatalog:
    """The resources of a small web shop, as a scanner would report them."""
    return ResourceCatalog.model_validate({
        "docs": [
            {
                "rel": "/rel/products",
                "value": ["The collection of products."],
                "include": "/rel/products.md",
            },
            {
                "rel": "/rel/product",
                "value": ["A link to a single product."],
                "link": "http://de.wikipedia.org/wiki/Produkt_(Wirtschaft)",
            },
        ],
        "resources": [
            {
                "rel": "/rel/products",
                "href": "/products",
                "allow": ["GET"],
                "representations": ["text/html"],
            },
            {
                "rel": "/rel/products",
                "href": "/products",
                "allow": ["GET"],
                "representations": ["application/example-products", "application/json"],
            },
            {
                "rel": "/rel/product/form",
                "href": "/products",
                "allow": ["POST"],
                "representations": ["text/html"],
                "accept-post": ["application/x-www-form-urlencoded"],
            },
            {
                "rel": "/rel/product",
                "href-template": "/products/{productId}",
                "href-vars": {
                    "productId": {
                        "constraint": {"kind": "integer"},
                        "doc": {"value": ["The unique identifier of the requested product."]},
                    }
                },
                "allow": ["GET"],
                "representations": ["text/html"],
            },
            {
                "rel": "/rel/product",
                "href-template": "/products/{productId}",
                "allow": ["PUT"],
                "representations": ["application/example-product", "application/json"],
                "accept-put": ["application/example-product", "application/json"],
                "precondition-req": ["etag"],
            },
        ],
    })
