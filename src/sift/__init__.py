"""
sift-py: Turn bracket-annotated query strings into parameterized SQL filters.
"""

from sift.core.config import SiftConfig
from sift.core.errors import (
    FilterError,
    MalformedKeyError,
    NotConfiguredError,
    TypeMismatchError,
    UnsupportedOperatorError,
)
from sift.core.logging import log
from sift.core.query import (
    ClauseEmitter,
    EqualFilter,
    FieldConfig,
    FieldMapper,
    FilterBuilder,
    FilterKind,
    FilterModel,
    FilterShape,
    NumberFilter,
    SqlBuffer,
    StringFilter,
    TextClauseSink,
    apply_filters,
    parse_filters,
)

__version__ = "0.1.0"

__all__ = [
    "SiftConfig",
    "FilterError",
    "MalformedKeyError",
    "NotConfiguredError",
    "TypeMismatchError",
    "UnsupportedOperatorError",
    "log",
    "ClauseEmitter",
    "EqualFilter",
    "FieldConfig",
    "FieldMapper",
    "FilterBuilder",
    "FilterKind",
    "FilterModel",
    "FilterShape",
    "NumberFilter",
    "SqlBuffer",
    "StringFilter",
    "TextClauseSink",
    "apply_filters",
    "parse_filters",
]
