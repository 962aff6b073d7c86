"""Typed conversion of hydrated mappings.

Supports dataclasses, Pydantic models, and plain classes. A ModelMapper is
callable with ``(row, parents)``, so it can be used directly as a schema
node's ``post_process``.
"""

from __future__ import annotations

import dataclasses
import inspect
from collections.abc import Mapping, Sequence
from typing import Any, Generic, TypeVar

from row_hydra.core.exceptions import ColumnMismatchError

T = TypeVar("T")


def _is_pydantic_model(cls: type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    from pydantic import BaseModel

    return isinstance(cls, type) and issubclass(cls, BaseModel)


def _get_field_names(cls: type) -> list[str]:
    """Extract field names from a class (dataclass, Pydantic, or plain)."""
    if _is_pydantic_model(cls):
        return list(cls.model_fields.keys())  # type: ignore[attr-defined]

    if dataclasses.is_dataclass(cls):
        return [f.name for f in dataclasses.fields(cls)]

    # Plain class - use __init__ parameters
    try:
        sig = inspect.signature(cls.__init__)  # type: ignore[misc]
    except (ValueError, TypeError):
        return []
    return [
        name
        for name, param in sig.parameters.items()
        if name != "self" and param.kind not in (param.VAR_POSITIONAL, param.VAR_KEYWORD)
    ]


class ModelMapper(Generic[T]):
    """Hydrated-mapping to typed-object mapper.

    Detection order:
    1. Pydantic BaseModel -> model_validate(row)
    2. dataclass -> target_class(**row)
    3. Plain class -> target_class(**row)

    Args:
        target_class: The class to construct.
        aliases: Optional key -> field-name renames applied first.
        ignore_extra: Drop keys the target class does not declare, such as
            foreign-key columns that only exist to join rows.
    """

    def __init__(
        self,
        target_class: type[T],
        aliases: dict[str, str] | None = None,
        ignore_extra: bool = False,
    ) -> None:
        self._target_class = target_class
        self._aliases = aliases
        self._is_pydantic = _is_pydantic_model(target_class)
        self._fields = set(_get_field_names(target_class)) if ignore_extra else None

    def _prepare(self, row: Mapping[str, Any]) -> dict[str, Any]:
        aliases = self._aliases or {}
        prepared = {aliases.get(key, key): value for key, value in row.items()}
        if self._fields is not None:
            prepared = {k: v for k, v in prepared.items() if k in self._fields}
        return prepared

    def map_one(self, row: Mapping[str, Any]) -> T:
        """Construct one ``target_class`` instance from a hydrated mapping."""
        data = self._prepare(row)

        if self._is_pydantic:
            try:
                return self._target_class.model_validate(data)  # type: ignore[attr-defined, no-any-return]
            except Exception as e:
                raise ColumnMismatchError(self._target_class.__name__, [str(e)]) from e

        try:
            return self._target_class(**data)
        except TypeError as e:
            raise ColumnMismatchError(self._target_class.__name__, [str(e)]) from e

    def map_many(self, rows: Sequence[Mapping[str, Any]]) -> list[T]:
        """Map all rows via map_one."""
        return [self.map_one(row) for row in rows]

    def __call__(self, row: Mapping[str, Any], parents: Mapping[str, Any] | None = None) -> T:
        return self.map_one(row)
