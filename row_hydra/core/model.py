"""Model and association records.

Frozen dataclasses held by the ModelRegistry. They are created once at
registration and never change afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass

from row_hydra.core.enums import AssociationKind


@dataclass(frozen=True)
class Model:
    """A registered entity: its name, attribute names and primary key.

    Attributes keep declaration order. The primary key is appended when the
    caller did not declare it.
    """

    name: str
    attributes: tuple[str, ...]
    primary_key: str = "code"

    def __post_init__(self) -> None:
        attributes = tuple(dict.fromkeys(self.attributes))
        if self.primary_key not in attributes:
            attributes = (*attributes, self.primary_key)
        object.__setattr__(self, "attributes", attributes)


@dataclass(frozen=True)
class Through:
    """Join specification for a BelongsToMany association.

    ``foreign_key`` is the join column pointing at the source (parent) model,
    ``other_key`` the join column pointing at the target (child) model. Either
    may be None, in which case the registry's naming convention applies.
    """

    model: Model | None
    alias: str | None = None
    foreign_key: str | None = None
    other_key: str | None = None

    @property
    def effective_alias(self) -> str:
        if self.alias:
            return self.alias
        if self.model is None:
            raise ValueError("Through specification has no model to derive an alias from")
        return self.model.name


@dataclass(frozen=True)
class Association:
    """A typed edge from ``source`` to ``target``, keyed on the source by ``name``."""

    name: str
    kind: AssociationKind
    source: Model
    target: Model
    source_key: str
    target_key: str
    foreign_key: str | None = None
    through: Through | None = None
