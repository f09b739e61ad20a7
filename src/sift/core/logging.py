# src/sift/core/logging.py
"""
Console logging for sift.

Records go through the stdlib `sift` logger and are rendered by rich, so the
host application keeps full control over levels and handlers.
"""

import logging
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape


def _markup(style: str) -> Callable[[Any], str]:
    return lambda text: f"[{style}]{escape(str(text))}[/{style}]"


# Markup helpers for the identifiers that show up in log lines.
color_palette: Dict[str, Callable[[Any], str]] = {
    "field": _markup("cyan"),
    "column": _markup("blue"),
    "operator": _markup("magenta"),
    "value": _markup("green"),
    "kind": _markup("yellow"),
    "sql": _markup("bold white"),
    "error": _markup("bold red"),
}


class Logger:
    """Thin wrapper over a stdlib logger with rich rendering helpers."""

    def __init__(self, name: str = "sift", console: Optional[Console] = None):
        self.name = name
        self.console = console or Console(stderr=True)
        self._logger = logging.getLogger(name)
        self._indent = 0
        self._handler: Optional[RichHandler] = None

    def setup(self, level: str = "INFO") -> None:
        """Attach a RichHandler (once) and set the level."""
        if self._handler is None:
            self._handler = RichHandler(
                console=self.console,
                markup=True,
                show_path=False,
                rich_tracebacks=True,
            )
            self._logger.addHandler(self._handler)
            self._logger.propagate = False
        self._logger.setLevel(level.upper())

    def _emit(self, level: int, message: str) -> None:
        if self._logger.isEnabledFor(level):
            self._logger.log(level, f"{'  ' * self._indent}{message}")

    def debug(self, message: str) -> None:
        self._emit(logging.DEBUG, message)

    def info(self, message: str) -> None:
        self._emit(logging.INFO, message)

    def success(self, message: str) -> None:
        self._emit(logging.INFO, f"[green]✓[/green] {message}")

    def warn(self, message: str) -> None:
        self._emit(logging.WARNING, message)

    def error(self, message: str) -> None:
        self._emit(logging.ERROR, message)

    def section(self, title: str) -> None:
        self.console.rule(f"[bold]{title}[/bold]")

    @contextmanager
    def indented(self) -> Iterator[None]:
        self._indent += 1
        try:
            yield
        finally:
            self._indent -= 1

    @contextmanager
    def timed(self, label: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = (time.perf_counter() - start) * 1000
            self.debug(f"{label} took {elapsed:.3f}ms")


log = Logger()

__all__ = ["Logger", "log", "color_palette"]
