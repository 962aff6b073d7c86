"""Hydration engine.

Rebuilds nested objects from flat, alias-prefixed rows by walking a schema
tree and regrouping rows by identity at every level.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any, Generic, TypeVar

import structlog

from row_hydra.core.enums import AssociationKind
from row_hydra.core.exceptions import (
    AssociationNotDeclaredError,
    BelongsToManyThroughModelMissingError,
    NodeModelNotFoundError,
    SchemaModelNotFoundError,
)
from row_hydra.core.model import Association, Model
from row_hydra.core.registry import ModelRegistry
from row_hydra.mapping.grouping import (
    Row,
    check_same_properties,
    check_schema_aliases,
    group_rows_by_identity,
    has_alias_columns,
)
from row_hydra.mapping.schema import SchemaInput, SchemaNode, as_schema

T = TypeVar("T")

logger = structlog.get_logger(__name__)

_EMPTY_PARENTS: Mapping[str, Any] = MappingProxyType({})


def _project(row: Row, alias: str, model: Model) -> dict[str, Any]:
    """Copy the model's attributes present under ``alias``; absent columns are omitted."""
    result: dict[str, Any] = {}
    for attr in model.attributes:
        column = f"{alias}.{attr}"
        if column in row:
            result[attr] = row[column]
    return result


class Hydrator:
    """Builds nested objects from flat rows against a ModelRegistry.

    The registry is only read. A Hydrator holds no per-call state, so one
    instance can serve any number of ``hydrate`` calls.
    """

    def __init__(self, registry: ModelRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> ModelRegistry:
        return self._registry

    def hydrate(self, rows: Sequence[Row], schema: SchemaInput) -> list[Any]:
        """Hydrate ``rows`` into one object per root identity.

        Roots come out in the order their identity first appears in ``rows``.

        Raises:
            AllFlatRowsMustHaveSamePropertiesError: Rows have differing key sets.
            SchemaAliasMissingError: A schema alias is not a column prefix.
            SchemaModelNotFoundError: The root model is not registered.
        """
        root = as_schema(schema)
        check_same_properties(rows)
        check_schema_aliases(root, rows)

        root_model = self._registry.find_model(root.model)
        if root_model is None:
            raise SchemaModelNotFoundError(root.model)

        groups = group_rows_by_identity(rows, root_model, root.effective_alias)
        logger.debug(
            "hydration_started",
            model=root.model,
            alias=root.effective_alias,
            rows=len(rows),
            roots=len(groups),
        )
        results = [self._build(root, group, _EMPTY_PARENTS) for group in groups.values()]
        logger.debug("hydration_finished", model=root.model, results=len(results))
        return results

    def _build(self, node: SchemaNode, rows: Sequence[Row], parents: Mapping[str, Any]) -> Any:
        """Hydrate one entity from ``rows``, which all share its identity."""
        model = self._registry.find_model(node.model)
        if model is None:
            raise NodeModelNotFoundError(node.model)

        alias = node.effective_alias
        row = rows[0]
        result = _project(row, alias, model)
        scope: Mapping[str, Any] = MappingProxyType({**parents, alias: result})

        for child in node.children:
            child_alias = child.effective_alias
            if not has_alias_columns(rows, child_alias):
                logger.debug("child_skipped", parent=alias, child=child_alias)
                continue

            association = self._registry.get_association(model.name, child_alias)
            if association is None:
                raise AssociationNotDeclaredError(model.name, child_alias)

            # An explicit schema alias wins over the association's own name.
            output_key = association.name if child.alias is None else child_alias

            if association.kind is AssociationKind.BELONGS_TO_MANY:
                result[output_key] = self._build_many_to_many(
                    child, rows, scope, model, alias, association
                )
                continue

            groups = group_rows_by_identity(rows, association.target, child_alias)
            if association.kind.is_collection:
                result[output_key] = [
                    self._build(child, group, scope) for group in groups.values()
                ]
            else:
                first = next(iter(groups.values()), None)
                if first is not None:
                    result[output_key] = self._build(child, first, scope)

        if node.post_process is None:
            return result
        snapshot = MappingProxyType({k: v for k, v in scope.items() if v is not None})
        return node.post_process(result, snapshot)

    def _build_many_to_many(
        self,
        child: SchemaNode,
        rows: Sequence[Row],
        scope: Mapping[str, Any],
        model: Model,
        alias: str,
        association: Association,
    ) -> list[Any]:
        """Resolve a BelongsToMany child through its join-table columns."""
        through = association.through
        if through is None or through.model is None:
            raise BelongsToManyThroughModelMissingError(model.name, child.model)

        options = self._registry.options
        child_alias = child.effective_alias
        parent_key = association.source_key or association.source.primary_key
        child_key = association.target_key or association.target.primary_key
        parent_value = rows[0].get(f"{alias}.{parent_key}")

        join_alias = through.effective_alias
        join_parent_fk = through.foreign_key or options.foreign_key_for(association.source.name)
        join_child_fk = through.other_key or options.foreign_key_for(association.target.name)
        join_parent_column = f"{join_alias}.{join_parent_fk}"
        join_child_column = f"{join_alias}.{join_child_fk}"
        child_key_column = f"{child_alias}.{child_key}"

        groups: dict[Any, list[Row]] = {}
        for row in rows:
            if row.get(join_parent_column) != parent_value:
                continue
            child_value = row.get(child_key_column)
            if child_value is None:
                continue
            # Callers may leave the join's child column out of the projection.
            join_child = row.get(join_child_column)
            if join_child is not None and join_child != child_value:
                continue
            groups.setdefault(child_value, []).append(row)

        return [self._build(child, group, scope) for group in groups.values()]


def hydrate(
    rows: Sequence[Row],
    registry: ModelRegistry,
    schema: SchemaInput,
) -> list[Any]:
    """Hydrate ``rows`` against ``registry`` in the shape of ``schema``."""
    return Hydrator(registry).hydrate(rows, schema)


class HydrationMapper(Generic[T]):
    """Mapper adapter binding a registry and a schema.

    Implements the Mapper protocol so hydration can be passed wherever a
    row mapper is expected.
    """

    def __init__(self, registry: ModelRegistry, schema: SchemaInput) -> None:
        self._hydrator = Hydrator(registry)
        self._schema = as_schema(schema)

    @property
    def schema(self) -> SchemaNode:
        return self._schema

    def map_one(self, row: Row) -> T | None:
        """Hydrate a single row; None when its root identity is empty."""
        results = self._hydrator.hydrate([row], self._schema)
        return results[0] if results else None

    def map_many(self, rows: Sequence[Row]) -> list[T]:
        """Hydrate all rows, one object per root identity."""
        return self._hydrator.hydrate(rows, self._schema)
