"""Presentation helpers rendering scan results for the terminal."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

import typer

from podsmith.core.spans import MarkupSpan
from podsmith.core.suspicious import FlaggedRange
from podsmith.core.text import offset_to_position

from .state import CLIState
from .utils import format_path


if TYPE_CHECKING:  # pragma: no cover - typing only
    from rich.console import Console


def _get_console(state: CLIState) -> Console | None:
    """Return the stdout console when it is attached to a terminal.

    Captured or piped output gets plain lines that are stable to parse.
    """
    console = state.console
    if getattr(console, "is_terminal", False):
        return console
    return None


def _location(text: str, offset: int) -> str:
    line, column = offset_to_position(text, offset)
    return f"{line}:{column}"


def describe_span(text: str, span: MarkupSpan) -> str:
    opener = f"{span.tag}{'<' * span.angle_count}"
    summary = f"{opener} at {_location(text, span.open_start)} ({span.kind.value})"
    if span.close_start is not None:
        summary += f", closed at {_location(text, span.close_start)}"
    if span.entity_start is not None:
        summary += f", entity at {_location(text, span.entity_start)}"
    return summary


def present_span(state: CLIState, text: str, span: MarkupSpan | None) -> None:
    """Display the span enclosing the requested position."""
    if span is None:
        typer.echo("No enclosing markup span.")
        return

    console = _get_console(state)
    if console is not None:
        from rich import box
        from rich.table import Table

        table = Table(title="Enclosing Span", box=box.SQUARE, header_style="bold cyan")
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        for key, value in span.as_dict().items():
            if value is not None:
                table.add_row(key, str(value))
        console.print(table)
        return

    typer.echo(describe_span(text, span))


def present_flags(
    state: CLIState, path: Path, text: str, flags: Iterable[FlaggedRange]
) -> int:
    """Print one line per flagged construct; return how many were printed."""
    ordered = sorted(flags)
    console = _get_console(state)
    label = format_path(path)
    for flag in ordered:
        location = f"{label}:{_location(text, flag.start)}"
        token = text[flag.start : flag.end]
        if console is not None:
            from rich.text import Text

            console.print(
                Text.assemble(
                    (location, "bold"),
                    ": ",
                    (flag.rule, "yellow"),
                    f": {flag.message} ",
                    (repr(token), "magenta"),
                )
            )
        else:
            typer.echo(f"{location}: {flag.rule}: {flag.message} {token!r}")
    return len(ordered)


__all__ = ["describe_span", "present_flags", "present_span"]
