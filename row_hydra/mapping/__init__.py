"""Mapping layer - hydrate flat aliased rows into nested objects."""

from __future__ import annotations

from row_hydra.mapping.builder import RegistryBuilder, modeler
from row_hydra.mapping.hydrator import HydrationMapper, Hydrator, hydrate
from row_hydra.mapping.model import ModelMapper
from row_hydra.mapping.protocol import Mapper
from row_hydra.mapping.schema import PostProcess, SchemaNode, as_schema

__all__ = [
    "Hydrator",
    "HydrationMapper",
    "hydrate",
    "RegistryBuilder",
    "modeler",
    "ModelMapper",
    "Mapper",
    "SchemaNode",
    "PostProcess",
    "as_schema",
]
