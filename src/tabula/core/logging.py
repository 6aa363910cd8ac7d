# src/tabula/core/logging.py
"""
Console logging for tabula.

Messages go through the standard `logging` machinery so host applications can
reconfigure or silence them, and are rendered by rich on the shared console.
"""

import logging
import time
from contextlib import contextmanager
from typing import Callable, Dict, Iterator

from rich.logging import RichHandler

from tabula.ui import console


def _style(style: str) -> Callable[[str], str]:
    return lambda text: f"[{style}]{text}[/{style}]"


color_palette: Dict[str, Callable[[str], str]] = {
    "schema": _style("bold blue"),
    "table": _style("cyan"),
    "column": _style("green"),
    "relation": _style("magenta"),
    "operation": _style("bold yellow"),
    "dim": _style("dim"),
}


class Logger:
    """Thin wrapper around a stdlib logger with a few rich-aware helpers."""

    def __init__(self, name: str = "tabula"):
        self._logger = logging.getLogger(name)
        self._indent = 0
        if not self._logger.handlers:
            handler = RichHandler(
                console=console,
                markup=True,
                show_path=False,
                rich_tracebacks=True,
            )
            self._logger.addHandler(handler)
            self._logger.setLevel(logging.INFO)
            self._logger.propagate = False

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def set_level(self, level: str) -> None:
        self._logger.setLevel(level.upper())

    def _fmt(self, message: str) -> str:
        return f"{'  ' * self._indent}{message}"

    def debug(self, message: str) -> None:
        self._logger.debug(self._fmt(message))

    def info(self, message: str) -> None:
        self._logger.info(self._fmt(message))

    def success(self, message: str) -> None:
        self._logger.info(self._fmt(f"[green]✓[/green] {message}"))

    def warn(self, message: str) -> None:
        self._logger.warning(self._fmt(message))

    def error(self, message: str) -> None:
        self._logger.error(self._fmt(message))

    def section(self, title: str) -> None:
        if self._logger.isEnabledFor(logging.INFO):
            console.rule(f"[bold]{title}[/bold]")

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
            self.info(f"{label} [dim]({elapsed:.1f} ms)[/dim]")


log = Logger()
