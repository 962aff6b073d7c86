"""Hydration schema tree.

A schema describes which models to materialize, under which aliases, and in
what nesting. It is supplied per call and never stored by the registry.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

# (hydrated_row, parents) -> final object
PostProcess = Callable[[dict[str, Any], Mapping[str, Any]], Any]


@dataclass(frozen=True)
class SchemaNode:
    """One node of a hydration schema.

    ``alias`` does three jobs at once when given: it is the column prefix in
    the flat rows, the association name looked up on the parent model, and
    the output key under which the child is attached.
    """

    model: str
    alias: str | None = None
    children: tuple[SchemaNode, ...] = field(default_factory=tuple)
    post_process: PostProcess | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(as_schema(c) for c in self.children))

    @property
    def effective_alias(self) -> str:
        """Column prefix used for this node: the alias, else the model name."""
        return self.alias or self.model

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> SchemaNode:
        """Build a node tree from nested mappings.

        Accepted keys: ``model`` (required), ``alias``, ``children``,
        ``post_process``.
        """
        if "model" not in data:
            raise ValueError(f"Schema node is missing 'model': {dict(data)!r}")
        return cls(
            model=data["model"],
            alias=data.get("alias"),
            children=tuple(data.get("children") or ()),
            post_process=data.get("post_process"),
        )

    def walk(self) -> Sequence[SchemaNode]:
        """This node and all descendants, pre-order."""
        nodes: list[SchemaNode] = [self]
        for child in self.children:
            nodes.extend(child.walk())
        return nodes


SchemaInput = SchemaNode | Mapping[str, Any]


def as_schema(schema: SchemaInput) -> SchemaNode:
    """Coerce a SchemaNode or nested mapping into a SchemaNode."""
    if isinstance(schema, SchemaNode):
        return schema
    return SchemaNode.from_mapping(schema)
