"""CLI command implementations exposed via `podsmith.ui.cli`.

Each module defines one Typer command function; `podsmith.ui.cli.app` registers
them on the application.
"""

from __future__ import annotations

from .check import check
from .double import double
from .gt import gt
from .nobreak import nobreak
from .span import span


__all__ = ["check", "double", "gt", "nobreak", "span"]
