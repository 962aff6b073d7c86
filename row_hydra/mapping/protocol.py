"""Mapper protocol.

Two mappers implement it. HydrationMapper takes alias-prefixed flat rows
(``"Customer.code"``) and returns nested objects. ModelMapper takes already
hydrated mappings and returns typed instances. The protocol is runtime
checkable, so callers can accept either one with an ``isinstance`` check.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, TypeVar, runtime_checkable

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class Mapper(Protocol[T_co]):
    """Turns rows into objects, one at a time or as a batch."""

    def map_one(self, row: Mapping[str, Any]) -> T_co | None:
        """Map a single row. None means the row held no entity to build."""
        ...

    def map_many(self, rows: Sequence[Mapping[str, Any]]) -> list[T_co]:
        """Map a batch of rows; the result may be shorter than ``rows``."""
        ...
