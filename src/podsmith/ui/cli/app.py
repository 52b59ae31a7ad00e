"""Typer application wiring for the podsmith CLI."""

from __future__ import annotations

from pathlib import Path

from rich.traceback import Traceback
import typer

from podsmith.core.config import load_config
from podsmith.core.diagnostics import format_failure
from podsmith.core.exceptions import ConfigurationError
from podsmith.version import get_version

from .commands import check, double, gt, nobreak, span
from .state import configure_logging, debug_enabled, emit_error, get_cli_state, set_cli_state


def _print_version(value: bool) -> None:
    if value:
        typer.echo(get_version())
        raise typer.Exit(code=0)


app = typer.Typer(
    help="Inspect and rewrite POD-style inline markup (C<...>, B<< ... >>, E<gt>).",
    context_settings={"help_option_names": ["--help"]},
    no_args_is_help=True,
)


@app.callback()
def _app_root(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug/--no-debug",
        help="Show full tracebacks when an unexpected error occurs.",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help="YAML file overriding the recognized tags and paragraph separator.",
        exists=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Print the podsmith version and exit.",
        is_eager=True,
        callback=_print_version,
    ),
) -> None:
    ctx.obj = get_cli_state()
    state = set_cli_state(verbosity=verbose, debug=debug)
    configure_logging(state)
    if config_path is not None:
        try:
            set_cli_state(config=load_config(config_path))
        except ConfigurationError as exc:
            emit_error(format_failure("Could not load the configuration", exc), exception=exc)
            raise typer.Exit(code=1) from exc


app.command(name="span")(span)
app.command(name="nobreak")(nobreak)
app.command(name="gt")(gt)
app.command(name="double")(double)
app.command(name="check")(check)


def main() -> None:
    """Entry point compatible with console scripts."""
    try:
        app()
    except typer.Exit:
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Operation cancelled by user.", exception=exc)
        raise typer.Exit(code=1) from exc
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - defensive catch-all
        state = get_cli_state()
        if state.show_tracebacks:
            tb = Traceback.from_exception(
                type(exc),
                exc,
                exc.__traceback__,
                show_locals=state.verbosity >= 2,
            )
            state.err_console.print(tb)
        else:
            emit_error(format_failure("Unexpected failure", exc), exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
