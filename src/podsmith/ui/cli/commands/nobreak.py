"""Implementation of the `podsmith nobreak` command."""

from __future__ import annotations

import typer

from .._options import ColumnOption, LineOption, OffsetOption, SourceArgument
from ..utils import build_assistant, read_source, resolve_offset


def nobreak(
    source: SourceArgument,
    offset: OffsetOption = None,
    line: LineOption = None,
    column: ColumnOption = 1,
) -> None:
    """Tell whether a line break may be inserted at a position."""
    text = read_source(source)
    position = resolve_offset(text, offset, line, column)
    suppressed = build_assistant().should_suppress_break(text, position)
    typer.echo("suppress" if suppressed else "allow")
