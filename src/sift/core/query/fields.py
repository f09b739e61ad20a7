# src/sift/core/query/fields.py
"""
Field mapping: which query fields exist, how they map to columns and what
kind of filter each one accepts.

A FilterShape is built once at startup (by hand with the builder, or from a
pydantic model) and is read-only afterwards.
"""

import types
from dataclasses import dataclass, field as dc_field
from typing import Any, Dict, Iterator, Optional, Tuple, Type, Union, get_args, get_origin

from pydantic import BaseModel

from ..errors import NotConfiguredError
from .operators import NUMBER_TYPES, FilterKind, get_parser


@dataclass(frozen=True)
class FieldConfig:
    """Mapping of one query field onto a column."""

    source_name: str
    column_name: str
    kind: FilterKind = FilterKind.EQUAL
    value_type: Any = str
    table_prefix: Optional[str] = None
    skipped: bool = False

    @property
    def column_ref(self) -> str:
        if self.table_prefix:
            return f"{self.table_prefix}.{self.column_name}"
        return self.column_name


@dataclass(frozen=True)
class FilterShape:
    """Immutable field-mapping table for one filter declaration."""

    name: str
    fields: Tuple[FieldConfig, ...] = ()
    table: Optional[str] = None
    _index: Dict[str, FieldConfig] = dc_field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: Dict[str, FieldConfig] = {}
        for config in self.fields:
            if config.source_name in index:
                raise ValueError(
                    f"Duplicate field '{config.source_name}' in filter shape '{self.name}'"
                )
            index[config.source_name] = config
        object.__setattr__(self, "_index", index)

    def __iter__(self) -> Iterator[FieldConfig]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def get(self, source_name: str) -> Optional[FieldConfig]:
        return self._index.get(source_name)

    @classmethod
    def builder(cls, name: str, table: Optional[str] = None) -> "ShapeBuilder":
        return ShapeBuilder(name, table)

    @classmethod
    def from_model(cls, model: Type[BaseModel], table: Optional[str] = None) -> "FilterShape":
        """
        Derive a shape from a pydantic model's fields.

        Per-field options are read from `json_schema_extra`:
        `column`, `table`, `skip` and `filter` (one of "string", "number", "equal").
        Without an explicit `filter`, `str` fields become string filters,
        `int`/`float`/`Decimal` fields number filters and everything else equal filters.
        """
        builder = ShapeBuilder(model.__name__, table)
        for name, info in model.model_fields.items():
            extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
            if extra.get("skip"):
                builder.skip(name)
                continue
            value_type = _unwrap_optional(info.annotation)
            kind = FilterKind(extra["filter"]) if "filter" in extra else _infer_kind(value_type)
            builder.add(
                name,
                kind,
                value_type,
                column=extra.get("column"),
                table=extra.get("table"),
            )
        return builder.build()


class ShapeBuilder:
    """Fluent builder for FilterShape."""

    def __init__(self, name: str, table: Optional[str] = None):
        self.name = name
        self.table = table
        self._fields: Dict[str, FieldConfig] = {}

    def add(
        self,
        name: str,
        kind: FilterKind,
        value_type: Any = str,
        column: Optional[str] = None,
        table: Optional[str] = None,
    ) -> "ShapeBuilder":
        if name in self._fields:
            raise ValueError(f"Duplicate field '{name}' in filter shape '{self.name}'")
        if kind is FilterKind.NUMBER and value_type is bool:
            raise ValueError(f"Field '{name}': bool is not a number type")
        if kind is FilterKind.STRING and value_type is not str:
            raise ValueError(f"Field '{name}': string filters take str values")
        # raises TypeError for types without a text parser
        get_parser(value_type)
        self._fields[name] = FieldConfig(
            source_name=name,
            column_name=column or name,
            kind=kind,
            value_type=value_type,
            table_prefix=table or self.table,
        )
        return self

    def string(self, name: str, column: Optional[str] = None, table: Optional[str] = None) -> "ShapeBuilder":
        return self.add(name, FilterKind.STRING, str, column, table)

    def number(
        self,
        name: str,
        value_type: Any = int,
        column: Optional[str] = None,
        table: Optional[str] = None,
    ) -> "ShapeBuilder":
        return self.add(name, FilterKind.NUMBER, value_type, column, table)

    def equal(
        self,
        name: str,
        value_type: Any = str,
        column: Optional[str] = None,
        table: Optional[str] = None,
    ) -> "ShapeBuilder":
        return self.add(name, FilterKind.EQUAL, value_type, column, table)

    def skip(self, name: str) -> "ShapeBuilder":
        if name in self._fields:
            raise ValueError(f"Duplicate field '{name}' in filter shape '{self.name}'")
        self._fields[name] = FieldConfig(source_name=name, column_name=name, skipped=True)
        return self

    def build(self) -> FilterShape:
        return FilterShape(name=self.name, fields=tuple(self._fields.values()), table=self.table)


class FieldMapper:
    """Resolves query field names against a FilterShape."""

    def __init__(self, shape: FilterShape):
        self.shape = shape

    def resolve(self, source_name: str) -> Optional[FieldConfig]:
        """Return the field's config, or None when the shape does not know it."""
        return self.shape.get(source_name)

    def require(self, source_name: str) -> FieldConfig:
        """Like resolve, but absent and skipped fields raise NotConfiguredError."""
        config = self.resolve(source_name)
        if config is None or config.skipped:
            raise NotConfiguredError(source_name)
        return config


# ===== Helper Functions =====


def _unwrap_optional(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _infer_kind(value_type: Any) -> FilterKind:
    if value_type is str:
        return FilterKind.STRING
    if value_type is not bool and value_type in NUMBER_TYPES:
        return FilterKind.NUMBER
    return FilterKind.EQUAL


__all__ = ["FieldConfig", "FilterShape", "ShapeBuilder", "FieldMapper"]
