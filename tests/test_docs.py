"""Tests for the Docs value object."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from models.docs import DocDeclaration, Docs, empty_docs

SAMPLES = [
    Docs(),
    Docs(description=["foo", "bar"]),
    Docs(detailed_description="<h1>Hello World!</h1>"),
    Docs(description=["foo"], link="http://example.org/foo.html"),
    Docs(description=["foo"], detailed_description="<p>x</p>", link="http://example.org/foo.html"),
]


@pytest.mark.parametrize("docs", SAMPLES)
def test_empty_docs_is_identity(docs: Docs) -> None:
    assert empty_docs().merge_with(docs) == docs
    assert docs.merge_with(empty_docs()) == docs


def test_empty_docs() -> None:
    docs = empty_docs()
    assert docs.is_empty
    assert not docs.has_description
    assert not docs.has_detailed_description
    assert not docs.has_link


def test_descriptions_are_concatenated_with_duplicates() -> None:
    merged = Docs(description=["foo", "bar"]).merge_with(Docs(description=["bar", "baz"]))
    assert merged.description == ("foo", "bar", "bar", "baz")


def test_first_detailed_description_and_link_win() -> None:
    first = Docs(detailed_description="<p>first</p>", link="http://example.org/first")
    second = Docs(detailed_description="<p>second</p>", link="http://example.org/second")
    merged = first.merge_with(second)
    assert merged.detailed_description == "<p>first</p>"
    assert merged.link == "http://example.org/first"


def test_missing_detailed_description_and_link_are_taken_from_other() -> None:
    merged = Docs(description=["foo"]).merge_with(
        Docs(detailed_description="<p>second</p>", link="http://example.org/second")
    )
    assert merged.detailed_description == "<p>second</p>"
    assert merged.link == "http://example.org/second"


def test_merge_is_associative() -> None:
    a, b, c = SAMPLES[1], SAMPLES[2], SAMPLES[4]
    assert a.merge_with(b).merge_with(c) == a.merge_with(b.merge_with(c))


def test_link_must_be_absolute() -> None:
    with pytest.raises(ValidationError):
        Docs(link="/foo/bar.html")


def test_declaration_accepts_a_single_line() -> None:
    declaration = DocDeclaration(value="A link to a single product.", rel="/rel/product")
    assert declaration.value == ["A link to a single product."]
