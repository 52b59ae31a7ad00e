"""Custom exception hierarchy for the markup editing helpers."""

from __future__ import annotations


class PodsmithError(RuntimeError):
    """Base exception for podsmith failures."""


class NotInSingleAngleForm(PodsmithError):
    """Raised when a rewrite is requested outside any single-angle markup span."""


class ConfigurationError(PodsmithError):
    """Raised when a scanner configuration cannot be loaded or validated."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "ConfigurationError",
    "NotInSingleAngleForm",
    "PodsmithError",
    "exception_hint",
    "exception_messages",
]
