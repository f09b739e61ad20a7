# src/sift/core/query/model.py
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Iterator, List, Literal, Optional, Tuple, Union

from .operators import FilterKind

SortDirection = Literal["asc", "desc"]


@dataclass(frozen=True)
class StringFilter:
    operator: str
    value: str
    kind: ClassVar[FilterKind] = FilterKind.STRING


@dataclass(frozen=True)
class NumberFilter:
    operator: str
    value: Any
    kind: ClassVar[FilterKind] = FilterKind.NUMBER


@dataclass(frozen=True)
class EqualFilter:
    value: Any
    kind: ClassVar[FilterKind] = FilterKind.EQUAL

    @property
    def operator(self) -> str:
        return "eq"


FilterValue = Union[StringFilter, NumberFilter, EqualFilter]


def make_filter(kind: FilterKind, operator: str, value: Any) -> FilterValue:
    """Build the FilterValue variant matching `kind`."""
    if kind is FilterKind.STRING:
        return StringFilter(operator, value)
    if kind is FilterKind.NUMBER:
        return NumberFilter(operator, value)
    return EqualFilter(value)


@dataclass(frozen=True)
class SortSpec:
    field: str
    column: str
    direction: SortDirection = "asc"


@dataclass
class Pagination:
    limit: Optional[int] = None
    skip: Optional[int] = None


@dataclass
class FilterModel:
    """
    Structured filters, sort and pagination for a single request.

    Filters are grouped per column reference. Columns keep the order in which
    they were first referenced and filters within a column keep parse order;
    every filter becomes one ANDed term.
    """

    filters: Dict[str, List[FilterValue]] = field(default_factory=dict)
    sort: Optional[SortSpec] = None
    pagination: Pagination = field(default_factory=Pagination)

    @classmethod
    def empty(cls) -> "FilterModel":
        return cls()

    def add(self, column: str, value: FilterValue) -> None:
        self.filters.setdefault(column, []).append(value)

    def filters_for(self, column: str) -> List[FilterValue]:
        return list(self.filters.get(column, []))

    def terms(self) -> Iterator[Tuple[str, FilterValue]]:
        """Yield `(column, filter)` pairs in emission order."""
        for column, values in self.filters.items():
            for value in values:
                yield column, value

    @property
    def limit(self) -> Optional[int]:
        return self.pagination.limit

    @property
    def skip(self) -> Optional[int]:
        return self.pagination.skip

    @property
    def is_empty(self) -> bool:
        return not self.filters and self.sort is None and self.limit is None and self.skip is None

    @property
    def term_count(self) -> int:
        return sum(len(values) for values in self.filters.values())


__all__ = [
    "StringFilter",
    "NumberFilter",
    "EqualFilter",
    "FilterValue",
    "make_filter",
    "SortSpec",
    "SortDirection",
    "Pagination",
    "FilterModel",
]
