"""Electric ``>``: escape a typed greater-than where it would close a span."""

from __future__ import annotations

from .spans import MarkupSpanScanner, SpanKind
from .text import TextEdit, clamp_offset


ESCAPED_GT = "E<gt>"
LITERAL_GT = ">"


class GreaterThanInserter:
    """Choose between ``>`` and ``E<gt>`` when the user types ``>``.

    Inside a single-angle span, ``->``, ``=>`` and `` >`` are almost always
    operators rather than the end of the span. Doubled-angle spans only close
    on a matching run of ``>`` so they never need the escape.
    """

    def __init__(self, scanner: MarkupSpanScanner | None = None) -> None:
        self.scanner = scanner or MarkupSpanScanner()
        self.config = self.scanner.config

    def resolve_greater_than_keystroke(
        self, text: str, offset: int, preceding_char: str | None = None
    ) -> str:
        offset = clamp_offset(text, offset)
        if preceding_char is None:
            preceding_char = text[offset - 1] if offset else ""
        if not preceding_char or preceding_char not in self.config.escape_triggers:
            return LITERAL_GT

        span = self.scanner.find_enclosing_span(text, None, offset)
        if span is None or span.kind is SpanKind.INSIDE_ENTITY or span.is_doubled:
            return LITERAL_GT
        return ESCAPED_GT

    def keystroke_edit(self, text: str, offset: int) -> TextEdit:
        """Return the insertion the host should perform for a typed ``>``."""
        offset = clamp_offset(text, offset)
        return TextEdit(offset, offset, self.resolve_greater_than_keystroke(text, offset))


__all__ = ["ESCAPED_GT", "LITERAL_GT", "GreaterThanInserter"]
