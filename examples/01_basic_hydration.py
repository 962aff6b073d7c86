"""
Example 01: Basic Hydration

This example demonstrates rebuilding nested customers from flat rows with a
BelongsTo reference and a HasMany collection.
"""

from pprint import pprint

from row_hydra import RegistryBuilder, SchemaNode, hydrate


def main():
    registry = (
        RegistryBuilder()
        .model("Customer", ["code", "name", "AddressCode"])
        .model("Address", ["code", "street"])
        .model("Product", ["code", "name", "CustomerCode"])
        .belongs_to("Customer", "Address")
        .has_many("Customer", "Product", "Products")
        .build()
    )

    # Rows as a joined query would return them: one row per customer/product pair
    rows = [
        {
            "Customer.code": "C1",
            "Customer.name": "Alice",
            "Customer.AddressCode": "A1",
            "Address.code": "A1",
            "Address.street": "Main St",
            "Products.code": "P1",
            "Products.name": "Widget",
            "Products.CustomerCode": "C1",
        },
        {
            "Customer.code": "C1",
            "Customer.name": "Alice",
            "Customer.AddressCode": "A1",
            "Address.code": "A1",
            "Address.street": "Main St",
            "Products.code": "P2",
            "Products.name": "Gadget",
            "Products.CustomerCode": "C1",
        },
        {
            "Customer.code": "C2",
            "Customer.name": "Bob",
            "Customer.AddressCode": None,
            "Address.code": None,
            "Address.street": None,
            "Products.code": None,
            "Products.name": None,
            "Products.CustomerCode": None,
        },
    ]

    schema = SchemaNode(
        "Customer",
        children=[SchemaNode("Address"), SchemaNode("Product", "Products")],
    )

    print("=== Basic Hydration ===\n")
    for customer in hydrate(rows, registry, schema):
        pprint(customer)
        print()


if __name__ == "__main__":
    main()
