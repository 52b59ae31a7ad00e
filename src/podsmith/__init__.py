"""Primary public API for podsmith."""

from __future__ import annotations

from podsmith.api import (
    PodAssistant,
    default_assistant,
    double_span,
    find_enclosing_span,
    resolve_greater_than_keystroke,
    scan_for_warnings,
    should_suppress_break,
)
from podsmith.core.config import ScannerConfig, load_config
from podsmith.core.diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from podsmith.core.doubling import AngleDoubler, ModifiedSpan
from podsmith.core.exceptions import ConfigurationError, NotInSingleAngleForm, PodsmithError
from podsmith.core.keystrokes import GreaterThanInserter
from podsmith.core.nobreak import NoBreakAdvisor
from podsmith.core.spans import MarkupSpan, MarkupSpanScanner, SpanKind
from podsmith.core.suspicious import FlaggedRange, SuspiciousConstructScanner, WarningLayer
from podsmith.core.text import TextEdit
from podsmith.version import get_version


__version__ = get_version()

__all__ = [
    "AngleDoubler",
    "ConfigurationError",
    "DiagnosticEmitter",
    "FlaggedRange",
    "GreaterThanInserter",
    "LoggingEmitter",
    "MarkupSpan",
    "MarkupSpanScanner",
    "ModifiedSpan",
    "NoBreakAdvisor",
    "NotInSingleAngleForm",
    "NullEmitter",
    "PodAssistant",
    "PodsmithError",
    "ScannerConfig",
    "SpanKind",
    "SuspiciousConstructScanner",
    "TextEdit",
    "WarningLayer",
    "__version__",
    "default_assistant",
    "double_span",
    "find_enclosing_span",
    "load_config",
    "resolve_greater_than_keystroke",
    "scan_for_warnings",
    "should_suppress_break",
]
