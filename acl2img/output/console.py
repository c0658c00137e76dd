"""Console output abstraction.

Services write through :class:`ConsoleProtocol` so they never depend on rich
directly, and tests can capture everything with :class:`MockConsole`.
Errors and warnings go to stderr, everything else to stdout.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()
    HEADER = auto()


# rich style strings; DEFAULT prints unstyled.
_RICH_STYLES = {
    Style.SUCCESS: "green",
    Style.ERROR: "red bold",
    Style.WARNING: "yellow",
    Style.INFO: "cyan",
    Style.DIM: "dim",
    Style.HEADER: "blue bold",
}


class ConsoleProtocol(Protocol):
    """Interface for styled console output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None:
        """One-line failure message, on stderr."""
        ...

    def warning(self, message: str) -> None:
        """Non-fatal problem, on stderr."""
        ...

    def note(self, message: str) -> None:
        """Dim detail for the preceding error or warning, on stderr."""
        ...

    def header(self, message: str) -> None:
        """Stage banner, preceded by a blank line."""
        ...

    def newline(self) -> None: ...


class RichConsole:
    """Production console backed by rich."""

    def __init__(self) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._out = Console(highlight=False)
        self._err = Console(stderr=True, highlight=False)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        # Image references and docker commands contain brackets: never markup.
        self._out.print(message, style=_RICH_STYLES.get(style), markup=False)

    def success(self, message: str) -> None:
        self._out.print(_labelled("OK", Style.SUCCESS, message))

    def error(self, message: str) -> None:
        self._err.print(_labelled("error:", Style.ERROR, message))

    def warning(self, message: str) -> None:
        self._err.print(_labelled("warning:", Style.WARNING, message))

    def note(self, message: str) -> None:
        self._err.print(message, style=_RICH_STYLES[Style.DIM], markup=False)

    def header(self, message: str) -> None:
        self._out.print()
        self.print(message, Style.HEADER)

    def newline(self) -> None:
        self._out.print()


def _labelled(label: str, style: Style, message: str) -> str:
    from rich.markup import escape

    rich_style = _RICH_STYLES[style]
    return f"[{rich_style}]{label}[/{rich_style}] {escape(message)}"


@dataclass
class OutputRecord:
    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console that records output for tests, prefixing like RichConsole."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.print(f"OK {message}", Style.SUCCESS)

    def error(self, message: str) -> None:
        self.print(f"error: {message}", Style.ERROR)

    def warning(self, message: str) -> None:
        self.print(f"warning: {message}", Style.WARNING)

    def note(self, message: str) -> None:
        self.print(message, Style.DIM)

    def header(self, message: str) -> None:
        self.print(message, Style.HEADER)

    def newline(self) -> None:
        self.print("")

    # Test helpers

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style == Style.WARNING for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Outputs containing ``substring``."""
        return [o for o in self.outputs if substring in o.message]
