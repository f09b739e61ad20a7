# src/sift/core/errors.py
"""
Errors raised while turning query parameters into a FilterModel.

Every error carries the field (or raw key) it refers to so the HTTP layer
can report it back to the client without further lookups.
"""

from typing import Any, Dict, Optional


class FilterError(Exception):
    """Base class for all filter parsing errors."""

    code: str = "filter_error"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form used in HTTP error responses."""
        return {"code": self.code, "field": self.field, "message": self.message}


class MalformedKeyError(FilterError):
    """A query key does not follow the `name` / `name[op]` grammar."""

    code = "malformed_key"

    def __init__(self, key: str):
        super().__init__(f"Malformed filter key '{key}'", field=key)
        self.key = key

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "key": self.key}


class UnsupportedOperatorError(FilterError):
    """The operator is not legal for the field's filter kind."""

    code = "unsupported_operator"

    def __init__(self, field: str, operator: str, kind: str):
        super().__init__(
            f"Operator '{operator}' is not supported for {kind} field '{field}'",
            field=field,
        )
        self.operator = operator
        self.kind = kind

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "operator": self.operator, "kind": self.kind}


class TypeMismatchError(FilterError):
    """A raw value could not be coerced into the field's declared type."""

    code = "type_mismatch"

    def __init__(self, field: str, raw: str, expected: str):
        super().__init__(
            f"Invalid value '{raw}' for field '{field}' (expected {expected})",
            field=field,
        )
        self.raw = raw
        self.expected = expected

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "raw": self.raw, "expected": self.expected}


class NotConfiguredError(FilterError):
    """A field that must be mapped (e.g. a sort target) is not in the shape."""

    code = "not_configured"

    def __init__(self, field: str):
        super().__init__(f"Field '{field}' is not configured for filtering", field=field)


__all__ = [
    "FilterError",
    "MalformedKeyError",
    "UnsupportedOperatorError",
    "TypeMismatchError",
    "NotConfiguredError",
]
