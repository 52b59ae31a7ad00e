"""Host-facing facade bundling the markup scanners behind one configuration."""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from typing import Any

from podsmith.core.config import ScannerConfig, resolve_config
from podsmith.core.diagnostics import (
    DiagnosticEmitter,
    ensure_emitter,
    format_failure,
    report_failure,
)
from podsmith.core.doubling import AngleDoubler, ModifiedSpan
from podsmith.core.exceptions import NotInSingleAngleForm
from podsmith.core.keystrokes import GreaterThanInserter
from podsmith.core.nobreak import NoBreakAdvisor
from podsmith.core.spans import MarkupSpan, MarkupSpanScanner
from podsmith.core.suspicious import FlaggedRange, SuspiciousConstructScanner, WarningLayer


class PodAssistant:
    """Entry point wiring every component to a shared configuration.

    Each query is independent: spans are rescanned on every call so callers
    always see the current text. ``double_span`` and ``scan_for_warnings`` report
    what they did through the diagnostic emitter; a failed rewrite is reported
    as an error before the exception propagates.
    """

    def __init__(
        self,
        config: ScannerConfig | Mapping[str, Any] | None = None,
        *,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.config = resolve_config(config)
        self.emitter = ensure_emitter(emitter)
        self.scanner = MarkupSpanScanner(self.config)
        self.nobreak = NoBreakAdvisor(self.scanner)
        self.inserter = GreaterThanInserter(self.scanner)
        self.doubler = AngleDoubler(self.scanner)
        self.suspicious = SuspiciousConstructScanner(self.config)

    def find_enclosing_span(
        self, text: str, paragraph_start: int | None, offset: int
    ) -> MarkupSpan | None:
        return self.scanner.find_enclosing_span(text, paragraph_start, offset)

    def should_suppress_break(self, text: str, offset: int) -> bool:
        return self.nobreak.should_suppress_break(text, offset)

    def resolve_greater_than_keystroke(
        self, text: str, offset: int, preceding_char: str | None = None
    ) -> str:
        return self.inserter.resolve_greater_than_keystroke(text, offset, preceding_char)

    def double_span(self, text: str, offset: int) -> ModifiedSpan:
        try:
            result = self.doubler.double_span(text, offset)
        except NotInSingleAngleForm as exc:
            report_failure(self.emitter, format_failure("Cannot double the span", exc), exc)
            raise
        self.emitter.event(
            "span_doubled",
            {
                "tag": result.tag,
                "start": result.start,
                "end": result.end,
                "unescaped": result.unescaped,
                "kept": result.kept,
            },
        )
        return result

    def scan_for_warnings(
        self,
        text: str,
        start: int = 0,
        end: int | None = None,
        *,
        source: str | None = None,
    ) -> set[FlaggedRange]:
        flagged = self.suspicious.scan_for_warnings(text, start, len(text) if end is None else end)
        self.emitter.event("warnings_flagged", {"count": len(flagged), "source": source})
        return flagged

    def warning_layer(self) -> WarningLayer:
        """Return a fresh flagged-range store bound to this configuration."""
        return WarningLayer(self.suspicious)


@lru_cache(maxsize=1)
def default_assistant() -> PodAssistant:
    return PodAssistant()


def find_enclosing_span(text: str, paragraph_start: int | None, offset: int) -> MarkupSpan | None:
    """Return the outermost markup span holding ``offset``, or ``None``."""
    return default_assistant().find_enclosing_span(text, paragraph_start, offset)


def should_suppress_break(text: str, offset: int) -> bool:
    """Return whether a line break at ``offset`` would split markup."""
    return default_assistant().should_suppress_break(text, offset)


def resolve_greater_than_keystroke(text: str, offset: int, preceding_char: str | None = None) -> str:
    """Return ``"E<gt>"`` or ``">"`` for a ``>`` typed at ``offset``."""
    return default_assistant().resolve_greater_than_keystroke(text, offset, preceding_char)


def double_span(text: str, offset: int) -> ModifiedSpan:
    """Rewrite the single-angle span at ``offset`` into doubled angles."""
    return default_assistant().double_span(text, offset)


def scan_for_warnings(text: str, start: int = 0, end: int | None = None) -> set[FlaggedRange]:
    """Return the suspicious constructs flagged in ``text[start:end]``."""
    return default_assistant().scan_for_warnings(text, start, end)


__all__ = [
    "PodAssistant",
    "default_assistant",
    "double_span",
    "find_enclosing_span",
    "resolve_greater_than_keystroke",
    "scan_for_warnings",
    "should_suppress_break",
]
