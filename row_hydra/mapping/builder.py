"""Registry builder DSL.

Provides a fluent builder for registering models and associations and
compiling them into an immutable ModelRegistry.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import structlog

from row_hydra.core.config import RegistryOptions
from row_hydra.core.enums import AssociationKind
from row_hydra.core.exceptions import (
    DuplicateAssociationError,
    DuplicateModelError,
    HasManyMissingAliasError,
    ModelNotRegisteredError,
    ThroughModelNotRegisteredError,
)
from row_hydra.core.model import Association, Model, Through
from row_hydra.core.registry import ModelRegistry

logger = structlog.get_logger(__name__)


def modeler(options: RegistryOptions | None = None, **overrides: Any) -> RegistryBuilder:
    """Entry point for the registry DSL.

    Args:
        options: Naming conventions. Defaults to ``RegistryOptions()``.
        **overrides: Individual option fields, e.g. ``default_primary_key="id"``.

    Returns:
        A builder for chaining model and association declarations.
    """
    if overrides:
        base = options.model_dump() if options is not None else {}
        options = RegistryOptions(**{**base, **overrides})
    return RegistryBuilder(options)


class RegistryBuilder:
    """Fluent builder for model and association definitions."""

    def __init__(self, options: RegistryOptions | None = None) -> None:
        self._options = options or RegistryOptions()
        self._models: dict[str, Model] = {}
        self._associations: dict[str, dict[str, Association]] = {}

    @classmethod
    def from_registry(cls, registry: ModelRegistry) -> RegistryBuilder:
        """Start a builder from a deep copy of ``registry``."""
        source = registry.clone()
        builder = cls(source.options)
        for model in source:
            builder._models[model.name] = model
            builder._associations[model.name] = dict(source.associations(model.name))
        return builder

    @property
    def options(self) -> RegistryOptions:
        return self._options

    def model(
        self,
        name: str,
        attributes: Iterable[str],
        primary_key: str | None = None,
    ) -> RegistryBuilder:
        """Register a model.

        ``attributes`` may be any iterable of names, including the keys of a
        mapping. The primary key defaults to ``options.default_primary_key``
        and is added to the attributes when missing.
        """
        if name in self._models:
            raise DuplicateModelError(name)
        model = Model(
            name=name,
            attributes=tuple(attributes),
            primary_key=primary_key or self._options.default_primary_key,
        )
        self._models[name] = model
        self._associations[name] = {}
        logger.debug("model_registered", model=name, primary_key=model.primary_key)
        return self

    def belongs_to(
        self,
        source: str,
        target: str,
        *,
        name: str | None = None,
        foreign_key: str | None = None,
        source_key: str | None = None,
        target_key: str | None = None,
    ) -> RegistryBuilder:
        """Declare that ``source`` holds a reference to one ``target``."""
        return self._add(
            AssociationKind.BELONGS_TO,
            source,
            target,
            name=name or target,
            foreign_key=foreign_key or self._options.foreign_key_for(target),
            source_key=source_key,
            target_key=target_key,
        )

    def has_one(
        self,
        source: str,
        target: str,
        *,
        name: str | None = None,
        foreign_key: str | None = None,
        source_key: str | None = None,
        target_key: str | None = None,
    ) -> RegistryBuilder:
        """Declare that one ``target`` points back at ``source``."""
        return self._add(
            AssociationKind.HAS_ONE,
            source,
            target,
            name=name or target,
            foreign_key=foreign_key or self._options.foreign_key_for(source),
            source_key=source_key,
            target_key=target_key,
        )

    def has_many(
        self,
        source: str,
        target: str,
        name: str,
        *,
        foreign_key: str | None = None,
        source_key: str | None = None,
        target_key: str | None = None,
    ) -> RegistryBuilder:
        """Declare a one-to-many collection. ``name`` is required."""
        if not name:
            raise HasManyMissingAliasError(source, target)
        return self._add(
            AssociationKind.HAS_MANY,
            source,
            target,
            name=name,
            foreign_key=foreign_key or self._options.foreign_key_for(source),
            source_key=source_key,
            target_key=target_key,
        )

    def belongs_to_many(
        self,
        source: str,
        target: str,
        through: str,
        *,
        name: str | None = None,
        through_alias: str | None = None,
        foreign_key: str | None = None,
        other_key: str | None = None,
        source_key: str | None = None,
        target_key: str | None = None,
    ) -> RegistryBuilder:
        """Declare a many-to-many relation resolved through a join model.

        Args:
            through: Registered join model name.
            through_alias: Column prefix of the join model in the rows.
                Defaults to the join model name.
            foreign_key: Join column pointing at ``source``.
            other_key: Join column pointing at ``target``.
        """
        source_model = self._require(source)
        target_model = self._require(target)
        through_model = self._models.get(through)
        if through_model is None:
            raise ThroughModelNotRegisteredError(through, source, target)

        foreign_key = foreign_key or self._options.foreign_key_for(source)
        spec = Through(
            model=through_model,
            alias=through_alias,
            foreign_key=foreign_key,
            other_key=other_key or self._options.foreign_key_for(target),
        )
        return self._store(
            Association(
                name=name or target,
                kind=AssociationKind.BELONGS_TO_MANY,
                source=source_model,
                target=target_model,
                source_key=source_key or self._options.default_primary_key,
                target_key=target_key or self._options.default_primary_key,
                foreign_key=foreign_key,
                through=spec,
            )
        )

    def build(self) -> ModelRegistry:
        """Compile the declarations into an immutable ModelRegistry snapshot."""
        return ModelRegistry(self._models, self._associations, self._options)

    def _require(self, name: str) -> Model:
        try:
            return self._models[name]
        except KeyError:
            raise ModelNotRegisteredError(name) from None

    def _add(
        self,
        kind: AssociationKind,
        source: str,
        target: str,
        *,
        name: str,
        foreign_key: str,
        source_key: str | None,
        target_key: str | None,
    ) -> RegistryBuilder:
        return self._store(
            Association(
                name=name,
                kind=kind,
                source=self._require(source),
                target=self._require(target),
                source_key=source_key or self._options.default_primary_key,
                target_key=target_key or self._options.default_primary_key,
                foreign_key=foreign_key,
            )
        )

    def _store(self, association: Association) -> RegistryBuilder:
        source = association.source.name
        declared = self._associations.setdefault(source, {})
        if association.name in declared:
            raise DuplicateAssociationError(source, association.name)
        declared[association.name] = association
        logger.debug(
            "association_registered",
            source=source,
            target=association.target.name,
            name=association.name,
            kind=association.kind.value,
        )
        return self
