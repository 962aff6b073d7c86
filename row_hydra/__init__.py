"""RowHydra - rebuild nested objects from flat, alias-prefixed rows."""

from __future__ import annotations

from row_hydra.core.config import RegistryOptions
from row_hydra.core.enums import AssociationKind
from row_hydra.core.exceptions import (
    AllFlatRowsMustHaveSamePropertiesError,
    AssociationNotDeclaredError,
    BelongsToManyThroughModelMissingError,
    ColumnMismatchError,
    DuplicateAssociationError,
    DuplicateModelError,
    HasManyMissingAliasError,
    MappingError,
    ModelIsMissingAliasError,
    ModelNotRegisteredError,
    NodeModelNotFoundError,
    PrefixedPrimaryKeyNotFoundError,
    RegistryError,
    RowHydraError,
    SchemaAliasMissingError,
    SchemaError,
    SchemaModelNotFoundError,
    ThroughModelNotRegisteredError,
)
from row_hydra.core.model import Association, Model, Through
from row_hydra.core.registry import ModelRegistry
from row_hydra.mapping.builder import RegistryBuilder, modeler
from row_hydra.mapping.hydrator import HydrationMapper, Hydrator, hydrate
from row_hydra.mapping.model import ModelMapper
from row_hydra.mapping.schema import SchemaNode

__all__ = [
    # Config
    "RegistryOptions",
    # Registry
    "ModelRegistry",
    "RegistryBuilder",
    "modeler",
    "Model",
    "Association",
    "AssociationKind",
    "Through",
    # Hydration
    "Hydrator",
    "HydrationMapper",
    "hydrate",
    "SchemaNode",
    "ModelMapper",
    # Exceptions
    "RowHydraError",
    "RegistryError",
    "ModelNotRegisteredError",
    "DuplicateModelError",
    "DuplicateAssociationError",
    "ThroughModelNotRegisteredError",
    "HasManyMissingAliasError",
    "SchemaError",
    "SchemaModelNotFoundError",
    "NodeModelNotFoundError",
    "AssociationNotDeclaredError",
    "BelongsToManyThroughModelMissingError",
    "SchemaAliasMissingError",
    "MappingError",
    "PrefixedPrimaryKeyNotFoundError",
    "AllFlatRowsMustHaveSamePropertiesError",
    "ModelIsMissingAliasError",
    "ColumnMismatchError",
]
