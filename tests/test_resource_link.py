"""Tests for ResourceLink, HrefVar and VarConstraint."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from models.docs import Docs
from models.exceptions import ConflictingResourceLinkError, InvalidResourceLinkError
from models.hints import Allow, Hints, Precondition
from models.resource_link import (
    HrefVar,
    ResourceLink,
    VarConstraint,
    direct_link,
    templated_link,
)

REL_PRODUCTS = "http://example.org/rel/products"
REL_PRODUCT = "http://example.org/rel/product"
PRODUCT_TEMPLATE = "http://example.org/products/{productId}"


def get_hints(*representations: str) -> Hints:
    return Hints(allowed_methods={Allow.GET}, representations=representations)


class TestResourceLinkConstruction:

    def test_direct_link(self) -> None:
        link = direct_link(REL_PRODUCTS, "http://example.org/products", get_hints("text/html"))
        assert not link.is_templated
        assert link.href == "http://example.org/products"
        assert link.href_template is None
        assert link.template_variables == frozenset()

    def test_templated_link(self) -> None:
        link = templated_link(
            REL_PRODUCT,
            PRODUCT_TEMPLATE,
            [HrefVar(var="productId", constraint=VarConstraint.integer())],
            get_hints("text/html"),
        )
        assert link.is_templated
        assert link.href is None
        assert link.template_variables == frozenset({"productId"})
        assert link.href_var("productId").constraint == VarConstraint.integer()
        assert link.href_var("unknown") is None

    def test_href_and_template_are_exclusive(self) -> None:
        with pytest.raises(InvalidResourceLinkError, match=REL_PRODUCT):
            ResourceLink(relation_type=REL_PRODUCT, href="http://example.org/products", href_template=PRODUCT_TEMPLATE)

    def test_href_or_template_is_required(self) -> None:
        with pytest.raises(InvalidResourceLinkError):
            ResourceLink(relation_type=REL_PRODUCT)

    def test_href_vars_require_a_template(self) -> None:
        with pytest.raises(InvalidResourceLinkError):
            ResourceLink(
                relation_type=REL_PRODUCT,
                href="http://example.org/products",
                href_vars=[HrefVar(var="productId")],
            )

    def test_href_vars_must_be_template_variables(self) -> None:
        with pytest.raises(InvalidResourceLinkError, match="unknown"):
            templated_link(REL_PRODUCT, PRODUCT_TEMPLATE, [HrefVar(var="unknown")])

    def test_href_vars_must_be_unique(self) -> None:
        with pytest.raises(InvalidResourceLinkError):
            templated_link(REL_PRODUCT, PRODUCT_TEMPLATE, [HrefVar(var="productId"), HrefVar(var="productId")])

    def test_malformed_template(self) -> None:
        with pytest.raises(InvalidResourceLinkError):
            templated_link(REL_PRODUCT, "http://example.org/products/{productId")

    def test_links_are_immutable(self) -> None:
        link = direct_link(REL_PRODUCTS, "http://example.org/products")
        with pytest.raises(ValidationError):
            link.href = "http://example.org/other"


class TestResourceLinkMerge:

    def test_direct_links_merge_hints(self) -> None:
        html = direct_link(REL_PRODUCTS, "http://example.org/products", get_hints("text/html"))
        json = direct_link(REL_PRODUCTS, "http://example.org/products", get_hints("application/json"))
        merged = html.merge_with(json)
        assert merged.href == "http://example.org/products"
        assert merged.hints.representations == ("text/html", "application/json")

    def test_templated_links_merge_hints_and_href_vars(self) -> None:
        get = templated_link(
            REL_PRODUCT,
            PRODUCT_TEMPLATE,
            [HrefVar(var="productId", docs=Docs(description=["The product id."]))],
            get_hints("text/html"),
        )
        put = templated_link(
            REL_PRODUCT,
            PRODUCT_TEMPLATE,
            [HrefVar(var="productId", var_type=REL_PRODUCT + "#productId", constraint=VarConstraint.integer())],
            Hints(
                allowed_methods={Allow.PUT},
                accept_put=["application/json"],
                precondition_req=[Precondition.ETAG],
            ),
        )
        merged = get.merge_with(put)
        assert merged.href_template == PRODUCT_TEMPLATE
        assert merged.hints.allowed_methods == frozenset({Allow.GET, Allow.PUT})
        assert merged.hints.precondition_req == (Precondition.ETAG,)
        product_id = merged.href_var("productId")
        assert product_id.var_type == REL_PRODUCT + "#productId"
        assert product_id.constraint == VarConstraint.integer()
        assert product_id.docs.description == ("The product id.",)

    def test_href_vars_keep_first_seen_order(self) -> None:
        template = "http://example.org/products{?query,page}"
        first = templated_link(REL_PRODUCTS, template, [HrefVar(var="page")])
        second = templated_link(REL_PRODUCTS, template, [HrefVar(var="query"), HrefVar(var="page")])
        merged = first.merge_with(second)
        assert [href_var.var for href_var in merged.href_vars] == ["page", "query"]

    def test_direct_and_templated_link_conflict(self) -> None:
        direct = direct_link(REL_PRODUCT, "http://example.org/products/42")
        templated = templated_link(REL_PRODUCT, PRODUCT_TEMPLATE)
        with pytest.raises(ConflictingResourceLinkError) as exc_info:
            direct.merge_with(templated)
        assert exc_info.value.relation_type == REL_PRODUCT
        with pytest.raises(ConflictingResourceLinkError):
            templated.merge_with(direct)

    def test_different_hrefs_conflict(self) -> None:
        with pytest.raises(ConflictingResourceLinkError):
            direct_link(REL_PRODUCTS, "http://example.org/products").merge_with(
                direct_link(REL_PRODUCTS, "http://example.org/items")
            )

    def test_different_template_variables_conflict(self) -> None:
        with pytest.raises(ConflictingResourceLinkError, match="variables"):
            templated_link(REL_PRODUCT, PRODUCT_TEMPLATE).merge_with(
                templated_link(REL_PRODUCT, "http://example.org/products/{id}")
            )

    def test_different_templates_conflict(self) -> None:
        with pytest.raises(ConflictingResourceLinkError, match="templates"):
            templated_link(REL_PRODUCT, PRODUCT_TEMPLATE).merge_with(
                templated_link(REL_PRODUCT, "http://example.org/items/{productId}")
            )

    def test_different_relation_types_conflict(self) -> None:
        with pytest.raises(ConflictingResourceLinkError):
            direct_link(REL_PRODUCTS, "http://example.org/products").merge_with(
                direct_link(REL_PRODUCT, "http://example.org/products")
            )


class TestVarConstraint:

    def test_integer(self) -> None:
        constraint = VarConstraint.integer()
        assert constraint.matches("42")
        assert constraint.matches("-1")
        assert not constraint.matches("4a")
        assert not constraint.matches("")

    def test_regex(self) -> None:
        constraint = VarConstraint.regex(r"[a-z]{2}-[0-9]+")
        assert constraint.matches("ab-12")
        assert not constraint.matches("ab-12x")

    def test_any(self) -> None:
        assert VarConstraint().matches("anything")

    def test_regex_requires_valid_pattern(self) -> None:
        with pytest.raises(ValidationError):
            VarConstraint(kind="regex")
        with pytest.raises(ValidationError):
            VarConstraint.regex("[unclosed")

    def test_pattern_only_for_regex(self) -> None:
        with pytest.raises(ValidationError):
            VarConstraint(kind="integer", pattern="[0-9]+")
