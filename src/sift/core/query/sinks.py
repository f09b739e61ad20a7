# src/sift/core/query/sinks.py
"""
Destinations for emitted clauses.

A sink only needs `push(text)` and `push_bind(value)`; the emitter never
inspects what it has accumulated.
"""

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from sqlalchemy import bindparam, text
from sqlalchemy.sql.elements import TextClause

from ..config import DEFAULT_CONFIG, PlaceholderStyle, SiftConfig


@runtime_checkable
class Sink(Protocol):
    def push(self, sql: str) -> None: ...

    def push_bind(self, value: Any) -> None: ...


class SqlBuffer:
    """In-memory sink collecting SQL text and positional parameters."""

    def __init__(self, initial: str = "", placeholder: PlaceholderStyle = "qmark"):
        self.placeholder = placeholder
        self.params: List[Any] = []
        self._parts: List[str] = [initial] if initial else []

    @classmethod
    def from_config(cls, config: Optional[SiftConfig] = None, initial: str = "") -> "SqlBuffer":
        """Buffer using the placeholder style of `config` (the default config when omitted)."""
        return cls(initial, placeholder=(config or DEFAULT_CONFIG).placeholder)

    @property
    def sql(self) -> str:
        return "".join(self._parts)

    @property
    def named_params(self) -> Dict[str, Any]:
        return {self._param_name(i): value for i, value in enumerate(self.params)}

    def push(self, sql: str) -> None:
        self._parts.append(sql)

    def push_bind(self, value: Any) -> None:
        self._parts.append(self._next_placeholder())
        self.params.append(value)

    def _param_name(self, index: int) -> str:
        return f"p{index}"

    def _next_placeholder(self) -> str:
        index = len(self.params)
        if self.placeholder == "numeric":
            return f"${index + 1}"
        if self.placeholder == "format":
            return "%s"
        if self.placeholder == "named":
            return f":{self._param_name(index)}"
        return "?"

    def __str__(self) -> str:
        return self.sql


class TextClauseSink(SqlBuffer):
    """Named-placeholder buffer that produces a SQLAlchemy TextClause."""

    def __init__(self, initial: str = ""):
        super().__init__(initial, placeholder="named")

    @classmethod
    def from_config(cls, config: Optional[SiftConfig] = None, initial: str = "") -> "TextClauseSink":
        # always named; the configured style does not apply
        return cls(initial)

    def _param_name(self, index: int) -> str:
        return f"sift_{index}"

    def statement(self) -> TextClause:
        """Build `text(sql)` with every pushed value bound by name."""
        params = [bindparam(name, value) for name, value in self.named_params.items()]
        return text(self.sql).bindparams(*params)


__all__ = ["Sink", "SqlBuffer", "TextClauseSink"]
