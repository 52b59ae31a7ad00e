"""Diagnostic abstractions shared by the scanners and their hosts."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Protocol, runtime_checkable

from .exceptions import exception_hint


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Interface used to surface warnings, errors, and structured events."""

    debug_enabled: bool

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NullEmitter:
    """Emitter that ignores every diagnostic."""

    debug_enabled: bool = False

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        return

    def error(self, message: str, exc: BaseException | None = None) -> None:
        return

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        return


class LoggingEmitter:
    """Emitter that forwards diagnostics to the standard logging module."""

    def __init__(
        self, *, logger_obj: logging.Logger | None = None, debug_enabled: bool = False
    ) -> None:
        self._logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None:
            self._logger.warning(message, exc_info=exc)
        else:
            self._logger.warning(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None:
            self._logger.error(message, exc_info=exc)
        else:
            self._logger.error(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message:
            self._logger.info(message)
            return
        self._logger.debug("diagnostic event %s: %s", name, dict(payload))


def ensure_emitter(emitter: DiagnosticEmitter | None) -> DiagnosticEmitter:
    """Return a usable emitter, defaulting to the null implementation."""
    return emitter if emitter is not None else NullEmitter()


def report_failure(emitter: DiagnosticEmitter | None, message: str, exc: BaseException) -> None:
    """Emit an error diagnostic and mark ``exc`` so hosts do not report it twice."""
    ensure_emitter(emitter).error(message, exc)
    exc._podsmith_logged = True  # noqa: SLF001


def format_failure(summary: str, exc: BaseException) -> str:
    """Return ``summary`` followed by the most specific message of ``exc``."""
    hint = exception_hint(exc)
    if hint and hint != summary:
        summary = f"{summary}: {hint}"
    return f"{summary.rstrip('.')}."


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a human-friendly summary for selected diagnostic events."""
    data = dict(payload)

    if name == "span_doubled":
        tag = data.get("tag") or "?"
        start = data.get("start")
        unescaped = int(data.get("unescaped") or 0)
        kept = int(data.get("kept") or 0)
        details: list[str] = []
        if unescaped:
            details.append(f"{unescaped} unescaped")
        if kept:
            details.append(f"{kept} kept escaped")
        suffix = f" ({', '.join(details)})" if details else ""
        return f"Doubled {tag}<> span at offset {start}{suffix}"

    if name == "warnings_flagged":
        count = int(data.get("count") or 0)
        source = data.get("source") or "<buffer>"
        if not count:
            return None
        noun = "construct" if count == 1 else "constructs"
        return f"Flagged {count} suspicious {noun} in {source}"

    return None


__all__ = [
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "ensure_emitter",
    "format_event_message",
    "format_failure",
    "report_failure",
]
