"""
Example 03: Hydrating a SQLite Join

This example builds an aliased select list with registry.columns(), runs the
join against SQLite, and hydrates the result into dataclasses.
"""

import sqlite3
from dataclasses import dataclass, field

from row_hydra import Hydrator, ModelMapper, RegistryBuilder, SchemaNode


@dataclass
class Order:
    """Order entity"""
    code: str
    total: float


@dataclass
class Customer:
    """Customer aggregate root with orders collection"""
    code: str
    name: str
    Orders: list[Order] = field(default_factory=list)


def main():
    conn = sqlite3.connect(":memory:")
    conn.executescript("""
        CREATE TABLE customers (code TEXT PRIMARY KEY, name TEXT NOT NULL);
        CREATE TABLE orders (
            code TEXT PRIMARY KEY,
            CustomerCode TEXT NOT NULL REFERENCES customers(code),
            total REAL NOT NULL
        );
        INSERT INTO customers VALUES ('C1', 'Alice'), ('C2', 'Bob');
        INSERT INTO orders VALUES ('O1', 'C1', 100.5), ('O2', 'C1', 50.25), ('O3', 'C2', 200.0);
    """)

    registry = (
        RegistryBuilder()
        .model("Customer", ["code", "name"])
        .model("Order", ["code", "CustomerCode", "total"])
        .has_many("Customer", "Order", "Orders")
        .build()
    )

    select_list = ", ".join(registry.columns("Customer") + registry.columns("Order", "Orders"))
    cursor = conn.execute(f"""
        SELECT {select_list}
        FROM customers AS "Customer"
        LEFT JOIN orders AS "Orders" ON "Orders"."CustomerCode" = "Customer"."code"
        ORDER BY "Customer"."code", "Orders"."code"
    """)
    names = [desc[0] for desc in cursor.description]
    rows = [dict(zip(names, row)) for row in cursor.fetchall()]
    conn.close()

    schema = SchemaNode(
        "Customer",
        post_process=ModelMapper(Customer),
        children=[
            SchemaNode("Order", "Orders", post_process=ModelMapper(Order, ignore_extra=True)),
        ],
    )

    print("=== SQLite Join ===\n")
    for customer in Hydrator(registry).hydrate(rows, schema):
        print(f"Customer: {customer.name}")
        for order in customer.Orders:
            print(f"    - Order {order.code}: ${order.total:.2f}")
        print()


if __name__ == "__main__":
    main()
