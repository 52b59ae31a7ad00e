"""Pattern table flagging likely mistakes inside inline markup.

The scanner works on raw text with regular expressions only; it does not
resolve spans. Each rule points at the offending token itself (the arrow or the
delimiter run) so hosts can highlight exactly that.

Rules are applied in table order. When two rules flag overlapping tokens the
earlier rule wins and the later flag is dropped; ranges are never merged.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
import logging
import re
from typing import Any

from .config import ScannerConfig, resolve_config
from .text import clamp_offset, widen_to_lines


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, order=True)
class FlaggedRange:
    """Offending token located by a warning rule."""

    start: int
    end: int
    rule: str
    message: str = ""

    def overlaps(self, start: int, end: int) -> bool:
        return self.start < end and start < self.end


@dataclass(frozen=True, slots=True)
class WarningRule:
    """Named pattern whose ``token`` group is the range to flag.

    Matches without a ``token`` group (sub-forms stepped over by the
    closing-delimiter rules) flag nothing. A rule with a ``scope`` only looks
    inside the ``body`` group of each scope match.
    """

    name: str
    pattern: re.Pattern[str]
    message: str
    scope: re.Pattern[str] | None = None

    def regions(self, text: str, start: int, end: int) -> Iterator[tuple[int, int]]:
        if self.scope is None:
            yield start, end
            return
        for match in self.scope.finditer(text, start, end):
            yield match.span("body")

    def tokens(self, text: str, start: int, end: int) -> Iterator[tuple[int, int]]:
        for region_start, region_end in self.regions(text, start, end):
            for match in self.pattern.finditer(text, region_start, region_end):
                if match.group("token") is not None:
                    yield match.span("token")


def build_rules(config: ScannerConfig) -> tuple[WarningRule, ...]:
    """Return the warning table for the tags and entity letter of ``config``."""
    tags = config.tag_class
    entity = re.escape(config.entity_tag)
    # A single-angle payload read as if each arrow were part of the text.
    single_payload = re.compile(
        rf"{tags}<(?!<)(?P<body>(?:[-=]>|{entity}<[^<>]*>|{tags}<[^<>]*>|[^<>])*)"
    )
    skip = rf"(?P<skip>{entity}<[^<>]*>|{tags}<(?!<)[^<>]*>)"
    return (
        WarningRule(
            "arrow",
            re.compile(r"(?P<token>->)(?=\w)"),
            "'->' ends the span; use E<gt> or doubled angles",
            scope=single_payload,
        ),
        WarningRule(
            "fat-arrow",
            re.compile(r"(?P<token>=>)"),
            "'=>' ends the span; use E<gt> or doubled angles",
            scope=single_payload,
        ),
        WarningRule(
            "open-space",
            re.compile(rf"{tags}(?P<token><{{2,}})(?=[^\s<])"),
            "doubled opening delimiter must be followed by whitespace",
        ),
        WarningRule(
            "close-space",
            re.compile(rf"{skip}|(?<=[^\s>])(?P<token>>>)(?!>)"),
            "doubled closing delimiter must be preceded by whitespace",
        ),
        WarningRule(
            "close-space-triple",
            re.compile(rf"{skip}|(?<=[^\s>])(?P<token>>{{3,}})"),
            "closing delimiter must be preceded by whitespace",
        ),
    )


class SuspiciousConstructScanner:
    """Apply the warning table to a range of text."""

    def __init__(
        self,
        config: ScannerConfig | Mapping[str, Any] | None = None,
        rules: Iterable[WarningRule] | None = None,
    ) -> None:
        self.config = resolve_config(config)
        self.rules = tuple(rules) if rules is not None else build_rules(self.config)

    def scan_for_warnings(self, text: str, start: int, end: int) -> set[FlaggedRange]:
        start = clamp_offset(text, start)
        end = clamp_offset(text, end)
        flagged: list[FlaggedRange] = []
        for rule in self.rules:
            for token_start, token_end in rule.tokens(text, start, end):
                if any(flag.overlaps(token_start, token_end) for flag in flagged):
                    continue
                flagged.append(FlaggedRange(token_start, token_end, rule.name, rule.message))
        if flagged:
            logger.debug("flagged %d construct(s) in [%d, %d)", len(flagged), start, end)
        return set(flagged)


class WarningLayer:
    """Host-side store of flagged ranges with replace-on-refresh semantics."""

    def __init__(self, scanner: SuspiciousConstructScanner | None = None) -> None:
        self.scanner = scanner or SuspiciousConstructScanner()
        self._flags: set[FlaggedRange] = set()

    @property
    def flags(self) -> frozenset[FlaggedRange]:
        return frozenset(self._flags)

    def refresh(self, text: str, start: int, end: int, *, widen: bool = True) -> set[FlaggedRange]:
        """Rescan ``[start, end)`` and replace the flags previously stored there.

        Returns the flags found in the rescanned range.
        """
        if widen:
            start, end = widen_to_lines(text, start, end)
        self._flags = {flag for flag in self._flags if not flag.overlaps(start, end)}
        found = self.scanner.scan_for_warnings(text, start, end)
        self._flags |= found
        return found

    def clear(self) -> None:
        self._flags.clear()


__all__ = [
    "FlaggedRange",
    "SuspiciousConstructScanner",
    "WarningLayer",
    "WarningRule",
    "build_rules",
]
