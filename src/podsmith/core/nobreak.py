"""Line-break suppression rules for text wrapped around inline markup."""

from __future__ import annotations

import logging
import re

from .spans import MarkupSpanScanner
from .text import clamp_offset, skip_trailing_blanks


logger = logging.getLogger(__name__)

_LEADING_SPACE = re.compile(r"\s*")


class NoBreakAdvisor:
    """Decide whether a line break may be inserted at a buffer offset.

    A break is refused right after an operator reference such as ``C<!>``,
    anywhere inside the non-breaking tag's spans, between an opening delimiter
    and its content, and between content and its closing delimiter.
    """

    def __init__(self, scanner: MarkupSpanScanner | None = None) -> None:
        self.scanner = scanner or MarkupSpanScanner()
        self.config = self.scanner.config
        self._closers: dict[int, re.Pattern[str]] = {}
        self._opener = re.compile(rf"{self.config.tag_class}<")

    def should_suppress_break(self, text: str, offset: int) -> bool:
        offset = clamp_offset(text, offset)

        before = skip_trailing_blanks(text, offset)
        for literal in self.config.nobreak_after:
            if literal and text.endswith(literal, 0, before):
                logger.debug("no break at %d: follows %s", offset, literal)
                return True

        if offset and self._opener.match(text, offset - 1):
            return True

        span = self.scanner.find_enclosing_span(text, None, offset)
        if span is None:
            return False

        if span.tag == self.config.nobreak_tag:
            return True

        content_start = _LEADING_SPACE.match(text, span.open_end).end()
        if span.open_start < offset <= content_start:
            return True

        return self._closer(span.angle_count).match(text, offset) is not None

    def _closer(self, angle_count: int) -> re.Pattern[str]:
        pattern = self._closers.get(angle_count)
        if pattern is None:
            pattern = re.compile(rf"\s*>{{{angle_count}}}(?!>)")
            self._closers[angle_count] = pattern
        return pattern


__all__ = ["NoBreakAdvisor"]
