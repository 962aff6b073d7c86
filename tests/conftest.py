"""Shared test fixtures."""

from __future__ import annotations

import pytest

from row_hydra.core.registry import ModelRegistry
from row_hydra.mapping.builder import RegistryBuilder


@pytest.fixture
def builder() -> RegistryBuilder:
    """Customer / Address / Product / Edition models with their associations.

    Usage:
        registry = builder.has_many("Customer", "Product", "Items").build()
    """
    return (
        RegistryBuilder()
        .model("Customer", ["code", "name", "AddressCode"])
        .model("Address", ["code", "street"])
        .model("Product", ["code", "name", "CustomerCode"])
        .model("Edition", ["code", "name", "ProductCode"])
        .has_many("Customer", "Product", "Products")
        .belongs_to("Customer", "Address")
        .has_many("Product", "Edition", "Editions")
    )


@pytest.fixture
def registry(builder: RegistryBuilder) -> ModelRegistry:
    return builder.build()


@pytest.fixture
def join_registry() -> ModelRegistry:
    """Customer <-> Product through the CustomerProduct join model."""
    return (
        RegistryBuilder()
        .model("Customer", ["code", "name"])
        .model("Product", ["code", "name"])
        .model("CustomerProduct", ["CustomerCode", "ProductCode", "meta"])
        .belongs_to_many(
            "Customer",
            "Product",
            "CustomerProduct",
            name="Products",
            through_alias="CustomerProducts",
        )
        .build()
    )
