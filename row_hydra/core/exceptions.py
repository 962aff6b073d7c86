"""RowHydra exception hierarchy.

Every failure is raised synchronously and aborts the current call; no
partial hydration result is ever returned.
"""

from __future__ import annotations


class RowHydraError(Exception):
    """Base exception for all RowHydra errors."""


# --- Registry ---


class RegistryError(RowHydraError):
    """Base for model/association registration and lookup errors."""


class ModelNotRegisteredError(RegistryError):
    """Raised when a model name is looked up but was never registered."""

    def __init__(self, model_name: str) -> None:
        self.model_name = model_name
        super().__init__(f"Model '{model_name}' not found.")


class DuplicateModelError(RegistryError):
    """Raised when the same model name is registered twice."""

    def __init__(self, model_name: str) -> None:
        self.model_name = model_name
        super().__init__(f"Model '{model_name}' is already registered.")


class DuplicateAssociationError(RegistryError):
    """Raised when an association name is reused on the same source model."""

    def __init__(self, source_model: str, association_name: str) -> None:
        self.source_model = source_model
        self.association_name = association_name
        super().__init__(
            f"Association '{association_name}' is already declared on model '{source_model}'."
        )


class ThroughModelNotRegisteredError(RegistryError):
    """Raised when a BelongsToMany join model is unknown at registration."""

    def __init__(self, through_model: str, source_model: str, target_model: str) -> None:
        self.through_model = through_model
        self.source_model = source_model
        self.target_model = target_model
        super().__init__(
            f"Through model '{through_model}' for association from "
            f"'{source_model}' to '{target_model}' not found."
        )


class HasManyMissingAliasError(RegistryError):
    """Raised when a HasMany association is registered without a name."""

    def __init__(self, source_model: str, target_model: str) -> None:
        self.source_model = source_model
        self.target_model = target_model
        super().__init__(
            f"Target '{target_model}' in '{source_model}' model hasMany association "
            f"requires an explicit name"
        )


# --- Schema ---


class SchemaError(RowHydraError):
    """Base for errors caused by a schema tree that does not fit the registry or rows."""


class SchemaModelNotFoundError(SchemaError):
    """Raised when the root schema model is not registered."""

    def __init__(self, model_name: str) -> None:
        self.model_name = model_name
        super().__init__(f"Root schema model '{model_name}' not found in registry.")


class NodeModelNotFoundError(SchemaError):
    """Raised when a descendant schema node names an unregistered model."""

    def __init__(self, model_name: str) -> None:
        self.model_name = model_name
        super().__init__(f"Schema node model '{model_name}' not found in registry.")


class AssociationNotDeclaredError(SchemaError):
    """Raised when a schema child has no matching association on its parent model."""

    def __init__(self, source_model: str, association_name: str) -> None:
        self.source_model = source_model
        self.association_name = association_name
        super().__init__(
            f"No explicit association from '{source_model}' to '{association_name}'. "
            f"Associations must be declared explicitly."
        )


class BelongsToManyThroughModelMissingError(SchemaError):
    """Raised when a BelongsToMany association has no resolved join model."""

    def __init__(self, source_model: str, child_model: str) -> None:
        self.source_model = source_model
        self.child_model = child_model
        super().__init__(
            f"Missing through model for BelongsToMany association from "
            f"'{source_model}' to '{child_model}'."
        )


class SchemaAliasMissingError(SchemaError):
    """Raised when a schema alias matches no column prefix in the input rows."""

    def __init__(self, alias: str, node_model: str, available: list[str]) -> None:
        self.alias = alias
        self.node_model = node_model
        self.available = available
        super().__init__(
            f"Alias '{alias}' (from schema node '{node_model}') not found as any "
            f"column prefix in the input rows. Available column prefixes: "
            f"{', '.join(available)}"
        )


# --- Mapping ---


class MappingError(RowHydraError):
    """Base for errors raised while turning rows into objects."""


class PrefixedPrimaryKeyNotFoundError(MappingError):
    """Raised when the identity column for an alias is absent from the rows."""

    def __init__(self, alias: str, primary_key: str) -> None:
        self.alias = alias
        self.primary_key = primary_key
        super().__init__(
            f"Primary key '{primary_key}' with prefix '{alias}' not found in flat rows."
        )


class AllFlatRowsMustHaveSamePropertiesError(MappingError):
    """Raised when the input rows do not share one key set."""

    def __init__(self, row_index: int) -> None:
        self.row_index = row_index
        super().__init__(
            f"All flat rows must have the same properties (row {row_index} differs from row 0)."
        )


class ModelIsMissingAliasError(MappingError):
    """Raised when rows are grouped for a model without an alias."""

    def __init__(self, model_name: str) -> None:
        self.model_name = model_name
        super().__init__(f"Model '{model_name}' must have an explicit alias defined.")


class ColumnMismatchError(MappingError):
    """Raised when a hydrated mapping cannot be turned into the target class."""

    def __init__(self, target_class: str, missing_fields: list[str]) -> None:
        self.target_class = target_class
        self.missing_fields = missing_fields
        super().__init__(f"Cannot map to {target_class}: missing fields {missing_fields}")
