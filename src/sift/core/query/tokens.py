# src/sift/core/query/tokens.py
import re
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Mapping, Tuple, Union
from urllib.parse import parse_qsl

from ..errors import MalformedKeyError

DEFAULT_OPERATOR = "eq"

# `name`, `name[op]` and `name[op][0]`; the trailing index is tolerated and ignored.
KEY_PATTERN = re.compile(r"(?P<field>[^\[\]]+)(?:\[(?P<op>[^\[\]]+)\](?:\[\d+\])?)?")

QueryParams = Union[str, Mapping[str, Any], Iterable[Tuple[str, str]], Any]


@dataclass(frozen=True)
class RawToken:
    """A single `(field, operator, value)` triple taken from the query string."""

    field: str
    operator: str
    value: str
    key: str = ""


def parse_key(key: str) -> Tuple[str, str]:
    """Split a query key into `(field, operator)`, defaulting the operator to `eq`."""
    match = KEY_PATTERN.fullmatch(key)
    if match is None:
        raise MalformedKeyError(key)
    field = match.group("field")
    if not field.strip():
        raise MalformedKeyError(key)
    return field, match.group("op") or DEFAULT_OPERATOR


def iter_pairs(params: QueryParams) -> Iterator[Tuple[str, str]]:
    """
    Flatten any supported parameter source into ordered `(key, value)` pairs.

    Accepts a raw query string, a Starlette `QueryParams`/`MultiDict`, a mapping of
    key to one or many values, or an iterable of pairs. Repeated keys are kept.
    """
    if params is None:
        return
    if isinstance(params, str):
        yield from parse_qsl(params.lstrip("?"), keep_blank_values=True)
        return
    if hasattr(params, "multi_items"):
        yield from params.multi_items()
        return
    if isinstance(params, Mapping):
        for key, value in params.items():
            if isinstance(value, (list, tuple)):
                for item in value:
                    yield key, str(item)
            else:
                yield key, str(value)
        return
    for key, value in params:
        yield key, str(value)


def parse_tokens(params: QueryParams) -> List[RawToken]:
    """
    Tokenize query parameters, preserving input order.

    The first malformed key aborts the whole parse.
    """
    tokens: List[RawToken] = []
    for key, value in iter_pairs(params):
        field, operator = parse_key(key)
        tokens.append(RawToken(field=field, operator=operator, value=value, key=key))
    return tokens


__all__ = ["RawToken", "DEFAULT_OPERATOR", "parse_key", "iter_pairs", "parse_tokens"]
