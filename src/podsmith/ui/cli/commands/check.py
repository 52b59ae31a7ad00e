"""Implementation of the `podsmith check` command."""

from __future__ import annotations

import typer

from .._options import SourcesArgument
from ..presenter import present_flags
from ..state import get_cli_state
from ..utils import build_assistant, format_path, read_source


def check(sources: SourcesArgument) -> None:
    """Report suspicious markup constructs; exit with 1 when any is found."""
    state = get_cli_state()
    assistant = build_assistant(state)
    total = 0
    for source in sources:
        text = read_source(source)
        flags = assistant.scan_for_warnings(text, source=format_path(source))
        total += present_flags(state, source, text, flags)
    if total:
        raise typer.Exit(code=1)
