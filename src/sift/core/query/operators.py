# src/sift/core/query/operators.py
import enum
import math
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Dict

from ..errors import TypeMismatchError, UnsupportedOperatorError


class FilterKind(str, enum.Enum):
    """Semantic category of a field; decides which operators are legal."""

    STRING = "string"
    NUMBER = "number"
    EQUAL = "equal"


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class OperatorSpec:
    """How one operator renders: `<column> <sql> ?` with the bound value rewritten."""

    name: str
    sql: str
    rewrite: Callable[[Any], Any] = _identity

    def bind(self, value: Any) -> Any:
        return self.rewrite(value)


STRING_OPERATORS: Dict[str, OperatorSpec] = {
    "eq": OperatorSpec("eq", "="),
    "ne": OperatorSpec("ne", "<>"),
    "like": OperatorSpec("like", "LIKE"),          # caller controls `%`
    "not_like": OperatorSpec("not_like", "NOT LIKE"),
    "sw": OperatorSpec("sw", "LIKE", lambda v: f"{v}%"),
    "ew": OperatorSpec("ew", "LIKE", lambda v: f"%{v}"),
    "co": OperatorSpec("co", "LIKE", lambda v: f"%{v}%"),
}

NUMBER_OPERATORS: Dict[str, OperatorSpec] = {
    "eq": OperatorSpec("eq", "="),
    "ne": OperatorSpec("ne", "<>"),
    "gt": OperatorSpec("gt", ">"),
    "lt": OperatorSpec("lt", "<"),
    "gte": OperatorSpec("gte", ">="),
    "lte": OperatorSpec("lte", "<="),
}

EQUAL_OPERATORS: Dict[str, OperatorSpec] = {
    "eq": OperatorSpec("eq", "="),
}

OPERATOR_MAP: Dict[FilterKind, Dict[str, OperatorSpec]] = {
    FilterKind.STRING: STRING_OPERATORS,
    FilterKind.NUMBER: NUMBER_OPERATORS,
    FilterKind.EQUAL: EQUAL_OPERATORS,
}

# Long and short spellings accepted for string operators.
OPERATOR_ALIASES: Dict[FilterKind, Dict[str, str]] = {
    FilterKind.STRING: {
        "l": "like",
        "nl": "not_like",
        "starts_with": "sw",
        "ends_with": "ew",
        "contains": "co",
        "c": "co",
    },
}

NUMBER_TYPES = (int, float, Decimal)


def lookup_operator(kind: FilterKind, operator: str, field: str) -> OperatorSpec:
    """Resolve an operator token (or alias) for `kind`, raising if it is not legal."""
    canonical = OPERATOR_ALIASES.get(kind, {}).get(operator, operator)
    spec = OPERATOR_MAP[kind].get(canonical)
    if spec is None:
        raise UnsupportedOperatorError(field, operator, kind.value)
    return spec


# ===== Value coercion =====

_TRUE = {"true", "1"}
_FALSE = {"false", "0"}


def _parse_bool(raw: str) -> bool:
    text = raw.strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(raw)


def _parse_datetime(raw: str) -> datetime:
    return datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))


def _parse_enum(enum_type: type) -> Callable[[str], Any]:
    def parse(raw: str) -> Any:
        try:
            return enum_type(raw)
        except ValueError:
            try:
                return enum_type[raw]
            except KeyError:
                raise ValueError(raw)

    return parse


_PARSERS: Dict[Any, Callable[[str], Any]] = {
    str: str,
    int: lambda raw: int(raw.strip()),
    float: lambda raw: float(raw.strip()),
    Decimal: lambda raw: Decimal(raw.strip()),
    bool: _parse_bool,
    date: lambda raw: date.fromisoformat(raw.strip()),
    datetime: _parse_datetime,
    uuid.UUID: lambda raw: uuid.UUID(raw.strip()),
}


def type_name(value_type: Any) -> str:
    return getattr(value_type, "__name__", repr(value_type))


def get_parser(value_type: Any) -> Callable[[str], Any]:
    """Canonical text parser for a declared type; any other callable is used as-is."""
    if value_type in _PARSERS:
        return _PARSERS[value_type]
    if isinstance(value_type, type) and issubclass(value_type, enum.Enum):
        return _parse_enum(value_type)
    if callable(value_type):
        return value_type
    raise TypeError(f"Cannot parse filter values into {value_type!r}")


def coerce_value(field: str, raw: str, value_type: Any) -> Any:
    """Parse `raw` into `value_type`, reporting failures as TypeMismatchError."""
    parser = get_parser(value_type)
    try:
        value = parser(raw)
    except (ValueError, TypeError, ArithmeticError):
        raise TypeMismatchError(field, raw, type_name(value_type))
    # non-finite numbers are rejected
    if isinstance(value, float) and not math.isfinite(value):
        raise TypeMismatchError(field, raw, type_name(value_type))
    if isinstance(value, Decimal) and not value.is_finite():
        raise TypeMismatchError(field, raw, type_name(value_type))
    return value


__all__ = [
    "FilterKind",
    "OperatorSpec",
    "OPERATOR_MAP",
    "OPERATOR_ALIASES",
    "NUMBER_TYPES",
    "lookup_operator",
    "get_parser",
    "coerce_value",
    "type_name",
]
