"""Row-shape checks and identity grouping for flat rows.

Flat rows are keyed ``"Alias.attribute"``. Everything here inspects the
column prefix (text before the first ``.``) or an identity column
``"{alias}.{primary_key}"``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from row_hydra.core.exceptions import (
    AllFlatRowsMustHaveSamePropertiesError,
    ModelIsMissingAliasError,
    PrefixedPrimaryKeyNotFoundError,
    SchemaAliasMissingError,
)
from row_hydra.core.model import Model
from row_hydra.mapping.schema import SchemaNode

Row = Mapping[str, Any]


def column_prefixes(row: Row) -> list[str]:
    """Distinct column prefixes of a row, in column order."""
    return list(dict.fromkeys(key.split(".", 1)[0] for key in row))


def check_same_properties(rows: Sequence[Row]) -> None:
    """Ensure every row has exactly the key set of the first row.

    Raises:
        AllFlatRowsMustHaveSamePropertiesError: On the first differing row.
    """
    if len(rows) <= 1:
        return
    reference = set(rows[0].keys())
    for index, row in enumerate(rows):
        if set(row.keys()) != reference:
            raise AllFlatRowsMustHaveSamePropertiesError(index)


def check_schema_aliases(schema: SchemaNode, rows: Sequence[Row]) -> None:
    """Ensure every schema alias appears as a column prefix.

    Only the first row is inspected; nothing is checked for empty input.

    Raises:
        SchemaAliasMissingError: For the first node (pre-order) whose alias
            has no matching prefix.
    """
    if not rows:
        return
    prefixes = column_prefixes(rows[0])
    known = set(prefixes)
    for node in schema.walk():
        alias = node.effective_alias
        if alias not in known:
            raise SchemaAliasMissingError(alias, node.model, prefixes)


def has_alias_columns(rows: Sequence[Row], alias: str) -> bool:
    """True if any row carries a column under ``alias``."""
    marker = alias + "."
    return any(key.startswith(marker) for row in rows for key in row)


def group_rows_by_identity(rows: Sequence[Row], model: Model, alias: str) -> dict[Any, list[Row]]:
    """Partition rows by the value of ``"{alias}.{model.primary_key}"``.

    Groups keep first-seen order. Rows with a falsy identity (None, "", 0,
    False) are dropped; they come from outer joins with no matching entity.
    Only the first row is checked for the identity column, the rest are
    assumed to share its shape.

    Raises:
        ModelIsMissingAliasError: If ``alias`` is empty.
        PrefixedPrimaryKeyNotFoundError: If the first row lacks the identity column.
    """
    if not alias:
        raise ModelIsMissingAliasError(model.name)

    groups: dict[Any, list[Row]] = {}
    if not rows:
        return groups

    key_column = f"{alias}.{model.primary_key}"
    if key_column not in rows[0]:
        raise PrefixedPrimaryKeyNotFoundError(alias, model.primary_key)

    for row in rows:
        identity = row.get(key_column)
        if not identity:
            continue
        groups.setdefault(identity, []).append(row)
    return groups
