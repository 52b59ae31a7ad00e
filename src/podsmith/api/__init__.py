"""Facade exposing the podsmith function surface to host editors.

Usage Example
:
    >>> from podsmith.api import double_span, find_enclosing_span
    >>> find_enclosing_span("see C<$x>", None, 7).tag
    'C'
    >>> double_span("C<foo E<gt> bar>", 3).text
    'C<< foo > bar >>'
"""

from __future__ import annotations

from .assistant import (
    PodAssistant,
    default_assistant,
    double_span,
    find_enclosing_span,
    resolve_greater_than_keystroke,
    scan_for_warnings,
    should_suppress_break,
)


__all__ = [
    "PodAssistant",
    "default_assistant",
    "double_span",
    "find_enclosing_span",
    "resolve_greater_than_keystroke",
    "scan_for_warnings",
    "should_suppress_break",
]
