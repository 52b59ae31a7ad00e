"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


INPUTS_PANEL = "Input Handling"
POSITION_PANEL = "Position"
OUTPUT_PANEL = "Output"

SourceArgument = Annotated[
    Path,
    typer.Argument(
        metavar="FILE",
        help="Document holding the inline markup.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

SourcesArgument = Annotated[
    list[Path],
    typer.Argument(
        metavar="FILE...",
        help="Documents to check for suspicious markup.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

OffsetOption = Annotated[
    int | None,
    typer.Option(
        "--offset",
        "-o",
        min=0,
        help="Character offset into the document (0-based).",
        rich_help_panel=POSITION_PANEL,
    ),
]

LineOption = Annotated[
    int | None,
    typer.Option(
        "--line",
        "-l",
        min=1,
        help="Line of the position (1-based); use with --column.",
        rich_help_panel=POSITION_PANEL,
    ),
]

ColumnOption = Annotated[
    int,
    typer.Option(
        "--column",
        "-c",
        min=1,
        help="Column of the position (1-based).",
        rich_help_panel=POSITION_PANEL,
    ),
]

PrecedingOption = Annotated[
    str | None,
    typer.Option(
        "--preceding",
        help="Character typed before '>' (defaults to the one in the document).",
        rich_help_panel=POSITION_PANEL,
    ),
]

InPlaceOption = Annotated[
    bool,
    typer.Option(
        "--in-place",
        "-i",
        help="Write the rewritten document back instead of printing it.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]
