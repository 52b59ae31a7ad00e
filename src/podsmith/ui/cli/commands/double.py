"""Implementation of the `podsmith double` command."""

from __future__ import annotations

import typer

from podsmith.core.exceptions import NotInSingleAngleForm

from .._options import ColumnOption, InPlaceOption, LineOption, OffsetOption, SourceArgument
from ..state import get_cli_state
from ..utils import build_assistant, read_source, resolve_offset, write_source


def double(
    source: SourceArgument,
    offset: OffsetOption = None,
    line: LineOption = None,
    column: ColumnOption = 1,
    in_place: InPlaceOption = False,
) -> None:
    """Rewrite the single-angle span at a position into doubled angles."""
    state = get_cli_state()
    text = read_source(source)
    position = resolve_offset(text, offset, line, column)
    try:
        result = build_assistant(state).double_span(text, position)
    except NotInSingleAngleForm as exc:
        # Already reported through the assistant's emitter.
        raise typer.Exit(code=1) from exc

    if in_place:
        write_source(source, result.text)
        return
    typer.echo(result.text, nl=False)
