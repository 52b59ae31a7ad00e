"""Helper utilities shared by CLI commands."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import typer

from podsmith.api import PodAssistant
from podsmith.core.diagnostics import DiagnosticEmitter, format_event_message
from podsmith.core.text import position_to_offset

from .state import CLIState, emit_error, emit_warning, get_cli_state, render_message


class CliEmitter(DiagnosticEmitter):
    """Route assistant diagnostics to the Rich console of the CLI state."""

    def __init__(self, state: CLIState | None = None) -> None:
        self._state = state or get_cli_state()
        self.debug_enabled = self._state.show_tracebacks

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        emit_warning(message, exception=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        emit_error(message, exception=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self._state.record_event(name, payload)
        if self._state.verbosity < 1:
            return
        message = format_event_message(name, payload)
        if message:
            render_message("info", message)


def read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise typer.BadParameter(f"Unable to read '{path}': {exc}") from exc


def write_source(path: Path, text: str) -> None:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise typer.BadParameter(f"Unable to write '{path}': {exc}") from exc


def resolve_offset(text: str, offset: int | None, line: int | None, column: int) -> int:
    """Turn the ``--offset`` or ``--line/--column`` options into an offset."""
    if offset is not None and line is not None:
        raise typer.BadParameter("Provide either --offset or --line/--column, not both.")
    if line is not None:
        try:
            return position_to_offset(text, line, column)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
    if offset is None:
        raise typer.BadParameter("A position is required: pass --offset or --line/--column.")
    if offset > len(text):
        raise typer.BadParameter(f"Offset {offset} is past the end of the document ({len(text)}).")
    return offset


def build_assistant(state: CLIState | None = None) -> PodAssistant:
    state = state or get_cli_state()
    return PodAssistant(state.config, emitter=CliEmitter(state))


def format_path(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


__all__ = [
    "CliEmitter",
    "build_assistant",
    "format_path",
    "read_source",
    "resolve_offset",
    "write_source",
]
