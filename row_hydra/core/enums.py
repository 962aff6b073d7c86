"""Association kind enumeration."""

from __future__ import annotations

from enum import Enum


class AssociationKind(Enum):
    """Supported association kinds."""

    BELONGS_TO = "BelongsTo"
    HAS_ONE = "HasOne"
    HAS_MANY = "HasMany"
    BELONGS_TO_MANY = "BelongsToMany"

    @property
    def is_collection(self) -> bool:
        """True for kinds that hydrate into a list."""
        return self in (AssociationKind.HAS_MANY, AssociationKind.BELONGS_TO_MANY)
