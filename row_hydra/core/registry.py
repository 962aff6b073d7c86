"""Model registry - read-only lookup of models and their associations.

Lookup convention:
    registry.get_model("Customer")                  -> Model
    registry.get_association("Customer", "Products") -> Association | None
    registry.columns("Customer", "c")                -> ['"c"."code" as "c.code"', ...]
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from row_hydra.core.config import RegistryOptions
from row_hydra.core.exceptions import ModelNotRegisteredError
from row_hydra.core.model import Association, Model

if TYPE_CHECKING:
    from row_hydra.mapping.schema import SchemaInput


class ModelRegistry:
    """Holds registered models and associations.

    The registry is immutable once constructed: build it once (usually through
    ``RegistryBuilder.build()``), then share it read-only between hydration
    calls. Use ``clone()`` to get a fully independent copy.

    Args:
        models: Model name -> Model.
        associations: Source model name -> association name -> Association.
        options: Naming conventions for keys that are not explicit.
    """

    def __init__(
        self,
        models: Mapping[str, Model] | None = None,
        associations: Mapping[str, Mapping[str, Association]] | None = None,
        options: RegistryOptions | None = None,
    ) -> None:
        self._options = options or RegistryOptions()
        self._models: dict[str, Model] = dict(models or {})
        self._associations: dict[str, dict[str, Association]] = {
            name: {} for name in self._models
        }
        for source_name, by_name in (associations or {}).items():
            self._associations.setdefault(source_name, {}).update(by_name)

    @property
    def options(self) -> RegistryOptions:
        return self._options

    @property
    def default_primary_key(self) -> str:
        return self._options.default_primary_key

    @property
    def default_foreign_key_suffix(self) -> str:
        return self._options.default_foreign_key_suffix

    @property
    def model_names(self) -> list[str]:
        """Registered model names, in registration order."""
        return list(self._models)

    def get_model(self, name: str) -> Model:
        """Look up a model by name.

        Raises:
            ModelNotRegisteredError: If no model has that name.
        """
        try:
            return self._models[name]
        except KeyError:
            raise ModelNotRegisteredError(name) from None

    def find_model(self, name: str) -> Model | None:
        """Look up a model by name, returning None when it is not registered."""
        return self._models.get(name)

    def has_model(self, name: str) -> bool:
        return name in self._models

    def associations(self, model_name: str) -> Mapping[str, Association]:
        """Read-only view of the associations declared on ``model_name``."""
        return MappingProxyType(self._associations.get(model_name, {}))

    def get_association(self, model_name: str, association_name: str) -> Association | None:
        """Association declared on ``model_name`` under ``association_name``, if any."""
        return self._associations.get(model_name, {}).get(association_name)

    def columns(
        self,
        model_name: str,
        alias: str | None = None,
        *,
        include: Iterable[str] | None = None,
        exclude: Iterable[str] | None = None,
        processor: Callable[[str], Any] | None = None,
    ) -> list[Any]:
        """Aliased select-list entries for ``model_name``.

        Each entry reads ``"{alias}"."{attr}" as "{alias}.{attr}"``, matching
        the column names hydration expects. Attributes keep declaration order;
        ``include`` keeps only the named ones, ``exclude`` drops the named ones.

        Args:
            model_name: Registered model whose attributes are listed.
            alias: Table alias and column prefix. Defaults to the model name.
            include: Attribute names to keep.
            exclude: Attribute names to drop.
            processor: Applied to each entry, e.g. to change identifier case.

        Raises:
            ModelNotRegisteredError: If no model has that name.
            ValueError: If both ``include`` and ``exclude`` are given.
        """
        if include is not None and exclude is not None:
            raise ValueError("Pass either include or exclude, not both")

        model = self.get_model(model_name)
        prefix = alias or model_name
        attributes: Iterable[str] = model.attributes
        if include is not None:
            wanted = set(include)
            attributes = [attr for attr in attributes if attr in wanted]
        elif exclude is not None:
            unwanted = set(exclude)
            attributes = [attr for attr in attributes if attr not in unwanted]

        selections = [f'"{prefix}"."{attr}" as "{prefix}.{attr}"' for attr in attributes]
        if processor is None:
            return selections
        return [processor(selection) for selection in selections]

    def clone(self) -> ModelRegistry:
        """Deep copy: new Model and Association instances, no shared references."""
        models, associations = copy.deepcopy((self._models, self._associations))
        return ModelRegistry(models, associations, self._options.model_copy())

    def hydrate(self, rows: Sequence[Mapping[str, Any]], schema: SchemaInput) -> list[Any]:
        """Hydrate ``rows`` into nested objects shaped by ``schema``."""
        from row_hydra.mapping.hydrator import Hydrator

        return Hydrator(self).hydrate(rows, schema)

    def __contains__(self, model_name: object) -> bool:
        return model_name in self._models

    def __iter__(self) -> Iterator[Model]:
        return iter(self._models.values())

    def __len__(self) -> int:
        """Number of registered models."""
        return len(self._models)
