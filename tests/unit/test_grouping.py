"""Unit tests for row-shape checks and identity grouping."""

from __future__ import annotations

import pytest

from row_hydra.core.exceptions import (
    AllFlatRowsMustHaveSamePropertiesError,
    ModelIsMissingAliasError,
    PrefixedPrimaryKeyNotFoundError,
    SchemaAliasMissingError,
)
from row_hydra.core.model import Model
from row_hydra.mapping.grouping import (
    check_same_properties,
    check_schema_aliases,
    column_prefixes,
    group_rows_by_identity,
    has_alias_columns,
)
from row_hydra.mapping.schema import SchemaNode

PRODUCT = Model("Product", ("code", "name"))


class TestColumnPrefixes:
    def test_prefixes_in_column_order(self) -> None:
        row = {"Customer.code": 1, "Products.code": 2, "Customer.name": 3, "plain": 4}
        assert column_prefixes(row) == ["Customer", "Products", "plain"]

    def test_only_first_dot_splits(self) -> None:
        assert column_prefixes({"a.b.c": 1}) == ["a"]

    def test_has_alias_columns(self) -> None:
        rows = [{"Customer.code": 1, "Products": 2}]
        assert has_alias_columns(rows, "Customer")
        assert not has_alias_columns(rows, "Products")
        assert not has_alias_columns(rows, "Cust")


class TestCheckSameProperties:
    def test_identical_keys_in_any_order(self) -> None:
        check_same_properties([{"a.x": 1, "a.y": 2}, {"a.y": 3, "a.x": 4}])

    def test_empty_and_single(self) -> None:
        check_same_properties([])
        check_same_properties([{"a.x": 1}])

    def test_extra_key(self) -> None:
        with pytest.raises(AllFlatRowsMustHaveSamePropertiesError) as exc_info:
            check_same_properties([{"a.x": 1}, {"a.x": 1}, {"a.x": 1, "a.y": 2}])
        assert exc_info.value.row_index == 2

    def test_missing_key(self) -> None:
        with pytest.raises(AllFlatRowsMustHaveSamePropertiesError):
            check_same_properties([{"Animal.id": 1, "Animal.name": "Dog"}, {"Animal.name": "Cat"}])


class TestCheckSchemaAliases:
    def test_all_present(self) -> None:
        schema = SchemaNode("Customer", children=[SchemaNode("Product", "Products")])
        check_schema_aliases(schema, [{"Customer.code": 1, "Products.code": 2}])

    def test_skipped_for_empty_rows(self) -> None:
        check_schema_aliases(SchemaNode("Anything"), [])

    def test_nested_alias_missing(self) -> None:
        schema = SchemaNode(
            "Customer",
            children=[
                SchemaNode("Product", "Products", children=[SchemaNode("Edition", "Editions")])
            ],
        )
        with pytest.raises(SchemaAliasMissingError) as exc_info:
            check_schema_aliases(schema, [{"Customer.code": 1, "Products.code": 2}])
        assert exc_info.value.alias == "Editions"
        assert exc_info.value.node_model == "Edition"
        assert exc_info.value.available == ["Customer", "Products"]

    def test_model_name_used_without_alias(self) -> None:
        with pytest.raises(SchemaAliasMissingError, match="'Customer'"):
            check_schema_aliases(SchemaNode("Customer"), [{"c.code": 1}])


class TestGroupRowsByIdentity:
    def test_groups_in_first_seen_order(self) -> None:
        rows = [
            {"Products.code": "P2", "Products.name": "b"},
            {"Products.code": "P1", "Products.name": "a"},
            {"Products.code": "P2", "Products.name": "b"},
        ]
        groups = group_rows_by_identity(rows, PRODUCT, "Products")
        assert list(groups) == ["P2", "P1"]
        assert groups["P2"] == [rows[0], rows[2]]

    def test_falsy_identity_dropped(self) -> None:
        rows = [
            {"Products.code": None},
            {"Products.code": ""},
            {"Products.code": 0},
            {"Products.code": False},
            {"Products.code": "P1"},
        ]
        groups = group_rows_by_identity(rows, PRODUCT, "Products")
        assert list(groups) == ["P1"]
        assert groups["P1"] == [rows[4]]

    def test_empty_rows(self) -> None:
        assert group_rows_by_identity([], PRODUCT, "Products") == {}

    def test_empty_alias(self) -> None:
        with pytest.raises(ModelIsMissingAliasError, match="Product"):
            group_rows_by_identity([{"Products.code": "P1"}], PRODUCT, "")

    def test_empty_alias_checked_before_rows(self) -> None:
        with pytest.raises(ModelIsMissingAliasError):
            group_rows_by_identity([], PRODUCT, "")

    def test_identity_column_missing(self) -> None:
        with pytest.raises(PrefixedPrimaryKeyNotFoundError, match="Products"):
            group_rows_by_identity([{"Products.name": "a"}], PRODUCT, "Products")

    def test_only_first_row_sampled(self) -> None:
        rows = [{"Products.code": "P1"}, {"Products.name": "no identity column"}]
        groups = group_rows_by_identity(rows, PRODUCT, "Products")
        assert list(groups) == ["P1"]
