"""Query-string filter parsing and SQL clause emission."""

from sift.core.query.builder import FilterBuilder, parse_filters
from sift.core.query.emitter import ClauseEmitter, apply_filters
from sift.core.query.fields import FieldConfig, FieldMapper, FilterShape, ShapeBuilder
from sift.core.query.model import (
    EqualFilter,
    FilterModel,
    FilterValue,
    NumberFilter,
    Pagination,
    SortSpec,
    StringFilter,
)
from sift.core.query.operators import FilterKind, OperatorSpec
from sift.core.query.sinks import Sink, SqlBuffer, TextClauseSink
from sift.core.query.tokens import RawToken, parse_tokens

__all__ = [
    "FilterBuilder",
    "parse_filters",
    "ClauseEmitter",
    "apply_filters",
    "FieldConfig",
    "FieldMapper",
    "FilterShape",
    "ShapeBuilder",
    "EqualFilter",
    "FilterModel",
    "FilterValue",
    "NumberFilter",
    "Pagination",
    "SortSpec",
    "StringFilter",
    "FilterKind",
    "OperatorSpec",
    "Sink",
    "SqlBuffer",
    "TextClauseSink",
    "RawToken",
    "parse_tokens",
]
