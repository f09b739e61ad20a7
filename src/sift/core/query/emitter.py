# src/sift/core/query/emitter.py
from ..logging import color_palette, log
from .model import FilterModel
from .operators import OPERATOR_MAP
from .sinks import Sink


class ClauseEmitter:
    """
    Writes a FilterModel into a sink.

    Emission order is fixed: filter terms (each as ` AND <column> <op> <param>`),
    then ORDER BY, LIMIT and OFFSET. The leading WHERE is the caller's job; the
    sink is expected to already hold something like `WHERE 1=1`.
    Values are always bound; only column references from the shape and the
    validated pagination integers are written as text.
    """

    def __init__(self, model: FilterModel):
        self.model = model

    def emit(self, sink: Sink) -> None:
        self._emit_terms(sink)
        self._emit_order_by(sink)
        self._emit_pagination(sink)

    def _emit_terms(self, sink: Sink) -> None:
        for column, value in self.model.terms():
            spec = OPERATOR_MAP[value.kind][value.operator]
            sink.push(f" AND {column} {spec.sql} ")
            sink.push_bind(spec.bind(value.value))
            log.debug(
                f"Emitted {color_palette['column'](column)} "
                f"{color_palette['operator'](spec.sql)} {color_palette['value'](value.value)}"
            )

    def _emit_order_by(self, sink: Sink) -> None:
        sort = self.model.sort
        if sort is not None:
            sink.push(f" ORDER BY {sort.column} {sort.direction.upper()}")

    def _emit_pagination(self, sink: Sink) -> None:
        if self.model.limit is not None:
            sink.push(f" LIMIT {int(self.model.limit)}")
        if self.model.skip is not None:
            sink.push(f" OFFSET {int(self.model.skip)}")


def apply_filters(model: FilterModel, sink: Sink) -> Sink:
    """Emit `model` into `sink` and hand the sink back for chaining."""
    ClauseEmitter(model).emit(sink)
    return sink


__all__ = ["ClauseEmitter", "apply_filters"]
