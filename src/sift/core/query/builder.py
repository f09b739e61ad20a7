# src/sift/core/query/builder.py
from typing import Optional

from ..config import DEFAULT_CONFIG, SiftConfig
from ..errors import TypeMismatchError, UnsupportedOperatorError
from ..logging import color_palette, log
from .fields import FieldMapper, FilterShape
from .model import FilterModel, SortSpec, make_filter
from .operators import coerce_value, lookup_operator
from .tokens import DEFAULT_OPERATOR, QueryParams, RawToken, parse_tokens

LIMIT = "limit"
SKIP = "skip"
ORDER_BY = "order_by"
RESERVED = frozenset({LIMIT, SKIP, ORDER_BY})

SORT_DIRECTIONS = ("asc", "desc")

# LIMIT and OFFSET must fit a signed 64-bit integer
MAX_PAGINATION_VALUE = 2**63 - 1


class FilterBuilder:
    """
    Builds a FilterModel from API request parameters.

    Holds only the immutable shape and config, so one builder can serve any
    number of concurrent requests.
    """

    def __init__(self, shape: FilterShape, config: Optional[SiftConfig] = None):
        self.shape = shape
        self.config = config or DEFAULT_CONFIG
        self.mapper = FieldMapper(shape)

    def parse(self, params: QueryParams) -> FilterModel:
        """
        Parse raw parameters into a fresh FilterModel.

        Raises a FilterError subclass on the first invalid token; nothing is
        returned in that case, so a partially built model is never visible.
        """
        model = FilterModel()
        with log.timed(f"Parsing filters for {self.shape.name}"):
            for token in parse_tokens(params):
                if token.field in RESERVED:
                    self._apply_reserved(model, token)
                else:
                    self._apply_field(model, token)

        if model.pagination.limit is None and self.config.default_limit is not None:
            model.pagination.limit = self.config.default_limit
        return model

    def _apply_field(self, model: FilterModel, token: RawToken) -> None:
        config = self.mapper.resolve(token.field)
        if config is None or config.skipped:
            log.debug(f"Ignoring unmapped filter field {color_palette['field'](token.field)}")
            return

        spec = lookup_operator(config.kind, token.operator, token.field)
        value = coerce_value(token.field, token.value, config.value_type)
        model.add(config.column_ref, make_filter(config.kind, spec.name, value))

    def _apply_reserved(self, model: FilterModel, token: RawToken) -> None:
        if token.field == ORDER_BY:
            self._apply_sort(model, token)
            return

        if token.operator != DEFAULT_OPERATOR:
            raise UnsupportedOperatorError(token.field, token.operator, "pagination")
        value = _parse_uint(token.field, token.value)

        if token.field == LIMIT:
            max_limit = self.config.max_limit
            if max_limit is not None and value > max_limit:
                log.warn(f"Clamping limit {value} to {max_limit}")
                value = max_limit
            model.pagination.limit = value
        else:
            model.pagination.skip = value

    def _apply_sort(self, model: FilterModel, token: RawToken) -> None:
        if token.operator not in SORT_DIRECTIONS:
            raise UnsupportedOperatorError(ORDER_BY, token.operator, "sort")
        config = self.mapper.require(token.value)

        # last order_by wins
        if model.sort is not None:
            log.debug(
                f"Replacing sort on {color_palette['field'](model.sort.field)} "
                f"with {color_palette['field'](token.value)}"
            )
        model.sort = SortSpec(field=token.value, column=config.column_ref, direction=token.operator)


def _parse_uint(field: str, raw: str) -> int:
    text = raw.strip()
    if not (text.isascii() and text.isdigit()):
        raise TypeMismatchError(field, raw, "unsigned integer")
    value = int(text)
    if value > MAX_PAGINATION_VALUE:
        raise TypeMismatchError(field, raw, "unsigned integer")
    return value


def parse_filters(
    shape: FilterShape, params: QueryParams, config: Optional[SiftConfig] = None
) -> FilterModel:
    """Shortcut for `FilterBuilder(shape, config).parse(params)`."""
    return FilterBuilder(shape, config).parse(params)


__all__ = ["FilterBuilder", "parse_filters", "RESERVED", "LIMIT", "SKIP", "ORDER_BY"]
