"""Implementation of the `podsmith gt` command."""

from __future__ import annotations

import typer

from .._options import ColumnOption, LineOption, OffsetOption, PrecedingOption, SourceArgument
from ..utils import build_assistant, read_source, resolve_offset


def gt(
    source: SourceArgument,
    offset: OffsetOption = None,
    line: LineOption = None,
    column: ColumnOption = 1,
    preceding: PrecedingOption = None,
) -> None:
    """Print what typing '>' at a position should insert."""
    if preceding is not None and len(preceding) != 1:
        raise typer.BadParameter("--preceding expects a single character.")
    text = read_source(source)
    position = resolve_offset(text, offset, line, column)
    typer.echo(build_assistant().resolve_greater_than_keystroke(text, position, preceding))
