"""Implementation of the `podsmith span` command."""

from __future__ import annotations

from .._options import ColumnOption, LineOption, OffsetOption, SourceArgument
from ..presenter import present_span
from ..state import get_cli_state
from ..utils import build_assistant, read_source, resolve_offset


def span(
    source: SourceArgument,
    offset: OffsetOption = None,
    line: LineOption = None,
    column: ColumnOption = 1,
) -> None:
    """Show the markup span enclosing a position."""
    state = get_cli_state()
    text = read_source(source)
    position = resolve_offset(text, offset, line, column)
    assistant = build_assistant(state)
    present_span(state, text, assistant.find_enclosing_span(text, None, position))
