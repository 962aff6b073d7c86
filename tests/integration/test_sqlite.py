"""Integration test: hydrate the result of a real SQLite join.

Covers: registry building, select-list generation for a hand-written query,
and hydration of BelongsTo, HasMany and BelongsToMany from one joined result
set in an in-memory database.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

import pytest

from row_hydra.core.registry import ModelRegistry
from row_hydra.mapping.builder import RegistryBuilder
from row_hydra.mapping.hydrator import Hydrator
from row_hydra.mapping.model import ModelMapper
from row_hydra.mapping.schema import SchemaNode

# --- Test models ---


@dataclass
class Product:
    code: str
    name: str


@dataclass
class Customer:
    code: str
    name: str
    products: list[Product] = field(default_factory=list)


# --- Fixtures ---


@pytest.fixture
def connection() -> Iterator[sqlite3.Connection]:
    conn = sqlite3.connect(":memory:")
    conn.executescript(
        """
        CREATE TABLE addresses (code TEXT PRIMARY KEY, street TEXT NOT NULL);
        CREATE TABLE customers (
            code TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            AddressCode TEXT REFERENCES addresses(code)
        );
        CREATE TABLE products (code TEXT PRIMARY KEY, name TEXT NOT NULL);
        CREATE TABLE customer_products (
            CustomerCode TEXT NOT NULL REFERENCES customers(code),
            ProductCode TEXT NOT NULL REFERENCES products(code)
        );
        CREATE TABLE orders (
            code TEXT PRIMARY KEY,
            CustomerCode TEXT NOT NULL REFERENCES customers(code),
            total REAL NOT NULL
        );

        INSERT INTO addresses VALUES ('A1', 'Main St'), ('A2', 'Side St');
        INSERT INTO customers VALUES
            ('C1', 'Alice', 'A1'), ('C2', 'Bob', 'A2'), ('C3', 'Carol', NULL);
        INSERT INTO products VALUES ('P1', 'Widget'), ('P2', 'Gadget');
        INSERT INTO customer_products VALUES ('C1', 'P1'), ('C1', 'P2'), ('C2', 'P2');
        INSERT INTO orders VALUES ('O1', 'C1', 10.0), ('O2', 'C1', 20.0);
        """
    )
    yield conn
    conn.close()


@pytest.fixture
def shop_registry() -> ModelRegistry:
    return (
        RegistryBuilder()
        .model("Customer", ["code", "name", "AddressCode"])
        .model("Address", ["code", "street"])
        .model("Product", ["code", "name"])
        .model("Order", ["code", "CustomerCode", "total"])
        .model("CustomerProduct", ["CustomerCode", "ProductCode"])
        .belongs_to("Customer", "Address")
        .has_many("Customer", "Order", "Orders")
        .belongs_to_many(
            "Customer",
            "Product",
            "CustomerProduct",
            name="Products",
            through_alias="CustomerProducts",
        )
        .build()
    )


def _fetch(conn: sqlite3.Connection, sql: str) -> list[dict[str, Any]]:
    cursor = conn.execute(sql)
    names = [desc[0] for desc in cursor.description]
    return [dict(zip(names, row, strict=True)) for row in cursor.fetchall()]


def _customer_query(registry: ModelRegistry) -> str:
    select_list = [
        *registry.columns("Customer"),
        *registry.columns("Address"),
        *registry.columns(
            "CustomerProduct", "CustomerProducts", include=["CustomerCode", "ProductCode"]
        ),
        *registry.columns("Product", "Products"),
        *registry.columns("Order", "Orders"),
    ]
    select = ", ".join(select_list)
    return f"""
        SELECT {select}
        FROM customers AS "Customer"
        LEFT JOIN addresses AS "Address" ON "Address"."code" = "Customer"."AddressCode"
        LEFT JOIN customer_products AS "CustomerProducts"
            ON "CustomerProducts"."CustomerCode" = "Customer"."code"
        LEFT JOIN products AS "Products" ON "Products"."code" = "CustomerProducts"."ProductCode"
        LEFT JOIN orders AS "Orders" ON "Orders"."CustomerCode" = "Customer"."code"
        ORDER BY "Customer"."code", "Products"."code", "Orders"."code"
    """


# --- Tests ---


class TestSqliteHydration:
    def test_full_tree(self, connection: sqlite3.Connection, shop_registry: ModelRegistry) -> None:
        rows = _fetch(connection, _customer_query(shop_registry))
        schema = SchemaNode(
            "Customer",
            children=[
                SchemaNode("Address"),
                SchemaNode("Product", "Products"),
                SchemaNode("Order", "Orders"),
            ],
        )

        results = Hydrator(shop_registry).hydrate(rows, schema)

        assert len(rows) == 6  # C1: 2 products x 2 orders, C2: 1, C3: 1
        assert results == [
            {
                "code": "C1",
                "name": "Alice",
                "AddressCode": "A1",
                "Address": {"code": "A1", "street": "Main St"},
                "Products": [
                    {"code": "P1", "name": "Widget"},
                    {"code": "P2", "name": "Gadget"},
                ],
                "Orders": [
                    {"code": "O1", "CustomerCode": "C1", "total": 10.0},
                    {"code": "O2", "CustomerCode": "C1", "total": 20.0},
                ],
            },
            {
                "code": "C2",
                "name": "Bob",
                "AddressCode": "A2",
                "Address": {"code": "A2", "street": "Side St"},
                "Products": [{"code": "P2", "name": "Gadget"}],
                "Orders": [],
            },
            {
                "code": "C3",
                "name": "Carol",
                "AddressCode": None,
                "Products": [],
                "Orders": [],
            },
        ]

    def test_typed_results(
        self, connection: sqlite3.Connection, shop_registry: ModelRegistry
    ) -> None:
        rows = _fetch(connection, _customer_query(shop_registry))

        def to_customer(row: dict[str, Any], parents: Any) -> Customer:
            return Customer(code=row["code"], name=row["name"], products=row["Products"])

        schema = SchemaNode(
            "Customer",
            post_process=to_customer,
            children=[
                SchemaNode("Product", "Products", post_process=ModelMapper(Product)),
            ],
        )

        results = Hydrator(shop_registry).hydrate(rows, schema)

        assert results == [
            Customer("C1", "Alice", [Product("P1", "Widget"), Product("P2", "Gadget")]),
            Customer("C2", "Bob", [Product("P2", "Gadget")]),
            Customer("C3", "Carol", []),
        ]
