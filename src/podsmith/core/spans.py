"""Resolution of the inline markup span enclosing a buffer offset.

The scanner answers one question: given an offset, which ``TAG<...>`` form (if
any) holds it? Markup may nest, so the answer is always the outermost form, the
one whose opening delimiter is met first when scanning forward from the start of
the paragraph.

Scanning states

``SEARCHING_TAG``
: look for the next recognized tag letter followed by a run of ``<``.

``SEARCHING_TERMINATOR``
: look for the run of ``>`` closing the opener, stepping over entity
  sub-forms (``E<gt>``) whose own angle brackets never close anything. Nested
  forms are tracked on a stack; each closes on a run at least as long as its
  own opener, and a shorter run inside a doubled form is literal text.

``INSIDE_ENTITY``
: an entity sub-form runs up to the offset without its ``>``; the outer span is
  reported with :attr:`SpanKind.INSIDE_ENTITY`.

Openers and entities are only resolved between the paragraph start and the
offset. A candidate closed before the offset is skipped, including every form
nested within it. When the offset ends up inside a candidate, its closing run is
looked up up to the end of the paragraph to tell a complete span from one still
being typed.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, auto
import logging
import re
from typing import Any

from .config import ScannerConfig, resolve_config
from .text import clamp_offset, paragraph_end, paragraph_start as find_paragraph_start


logger = logging.getLogger(__name__)


class SpanKind(Enum):
    """Where the reference offset sits within the resolved span."""

    PLAIN = "plain"
    """Ordinary payload text of a span whose closing run exists."""

    INSIDE_ENTITY = "inside-entity"
    """Inside an entity sub-form whose closing ``>`` is not there yet."""

    UNTERMINATED = "unterminated"
    """Payload of a span with no closing run before the paragraph ends."""


@dataclass(frozen=True, slots=True)
class MarkupSpan:
    """Extent and metadata of a markup form enclosing an offset."""

    tag: str
    angle_count: int
    open_start: int
    open_end: int
    kind: SpanKind = SpanKind.PLAIN
    close_start: int | None = None
    close_end: int | None = None
    entity_start: int | None = None

    @property
    def is_doubled(self) -> bool:
        return self.angle_count > 1

    @property
    def is_closed(self) -> bool:
        return self.close_end is not None

    def as_dict(self) -> dict[str, Any]:
        return {
            "tag": self.tag,
            "angle_count": self.angle_count,
            "open_start": self.open_start,
            "open_end": self.open_end,
            "kind": self.kind.value,
            "close_start": self.close_start,
            "close_end": self.close_end,
            "entity_start": self.entity_start,
        }


class _ScanState(Enum):
    SEARCHING_TAG = auto()
    SEARCHING_TERMINATOR = auto()
    INSIDE_ENTITY = auto()


def _run_end(text: str, position: int, char: str) -> int:
    while position < len(text) and text[position] == char:
        position += 1
    return position


def consume_closing_run(open_forms: list[int], start: int, end: int) -> int | None:
    """Apply the ``>`` run ``[start, end)`` to the forms still open.

    ``open_forms`` holds the angle count of each open form, outermost first, and
    loses every form the run closes. A run shorter than the innermost form's
    delimiter is literal text. Returns where the outermost form's closing run
    ends once the run closes it, else ``None``.
    """
    position = start
    while open_forms and end - position >= open_forms[-1]:
        position += open_forms.pop()
    return position if not open_forms else None


class MarkupSpanScanner:
    """Locate the outermost markup span holding a reference offset."""

    def __init__(self, config: ScannerConfig | Mapping[str, Any] | None = None) -> None:
        self.config = resolve_config(config)
        self._opening = re.compile(rf"{self.config.tag_class}(<+)")
        entity = re.escape(self.config.entity_tag)
        # An entity with no ``>`` matches up to the end of the searched region.
        self.payload_pattern = re.compile(
            rf"(?P<entity>{entity}<[^>]*(?:>|\Z))"
            rf"|(?P<open>{self.config.tag_class}<+)"
            r"|(?P<close>>+)"
        )

    def find_enclosing_span(
        self,
        text: str,
        paragraph_start: int | None,
        ref_offset: int,
    ) -> MarkupSpan | None:
        """Return the outermost span holding ``ref_offset``, or ``None``.

        ``paragraph_start`` bounds the backwards reach of the scan; pass ``None``
        to derive it from the configured paragraph separator.
        """
        window_end = clamp_offset(text, ref_offset)
        if paragraph_start is None:
            paragraph_start = find_paragraph_start(text, window_end, self.config)
        position = max(0, min(paragraph_start, window_end))

        state = _ScanState.SEARCHING_TAG
        open_start = open_end = entity_start = 0
        open_forms: list[int] = []
        while True:
            if state is _ScanState.SEARCHING_TAG:
                opening = self._opening.search(text, position, window_end)
                if opening is None:
                    return None
                open_start, open_end = opening.span()
                if open_end >= window_end:
                    # The offset sits within the opener; the run may go on past it.
                    open_end = _run_end(text, open_end, "<")
                    angle_count = open_end - open_start - 1
                    return self._lookahead(text, open_start, open_end, [angle_count], open_end)
                open_forms = [open_end - open_start - 1]
                position = open_end
                state = _ScanState.SEARCHING_TERMINATOR

            elif state is _ScanState.SEARCHING_TERMINATOR:
                match = self.payload_pattern.search(text, position, window_end)
                if match is None:
                    return self._lookahead(text, open_start, open_end, open_forms, position)
                if match.lastgroup == "entity":
                    if not match.group("entity").endswith(">"):
                        entity_start = match.start()
                        state = _ScanState.INSIDE_ENTITY
                        continue
                    position = match.end()
                    continue
                if match.lastgroup == "open":
                    run_end = _run_end(text, match.end(), "<")
                    open_forms.append(run_end - match.start() - 1)
                    position = run_end
                    continue
                run_end = _run_end(text, match.end(), ">")
                close_end = consume_closing_run(open_forms, match.start(), run_end)
                if close_end is None:
                    position = run_end
                    continue
                if close_end >= window_end:
                    return self._build(
                        text,
                        open_start,
                        open_end,
                        SpanKind.PLAIN,
                        close_start=close_end - (open_end - open_start - 1),
                        close_end=close_end,
                    )
                position = close_end
                state = _ScanState.SEARCHING_TAG

            else:
                return self._build(
                    text,
                    open_start,
                    open_end,
                    SpanKind.INSIDE_ENTITY,
                    entity_start=entity_start,
                )

    def _lookahead(
        self,
        text: str,
        open_start: int,
        open_end: int,
        open_forms: list[int],
        position: int,
    ) -> MarkupSpan:
        """Classify a span known to hold the offset by finding its closing run.

        ``open_forms`` lists the angle counts of the forms still open, outermost
        first, and is consumed by the search.
        """
        angle_count = open_end - open_start - 1
        limit = paragraph_end(text, position, self.config)
        while True:
            match = self.payload_pattern.search(text, position, limit)
            if match is None:
                return self._build(text, open_start, open_end, SpanKind.UNTERMINATED)
            if match.lastgroup == "open":
                open_forms.append(match.end() - match.start() - 1)
            elif match.lastgroup == "close":
                close_end = consume_closing_run(open_forms, match.start(), match.end())
                if close_end is not None:
                    return self._build(
                        text,
                        open_start,
                        open_end,
                        SpanKind.PLAIN,
                        close_start=close_end - angle_count,
                        close_end=close_end,
                    )
            position = match.end()

    def _build(
        self,
        text: str,
        open_start: int,
        open_end: int,
        kind: SpanKind,
        **extra: int,
    ) -> MarkupSpan:
        span = MarkupSpan(
            tag=text[open_start],
            angle_count=open_end - open_start - 1,
            open_start=open_start,
            open_end=open_end,
            kind=kind,
            **extra,
        )
        logger.debug(
            "resolved %s%s span at %d (%s)",
            span.tag,
            "<" * span.angle_count,
            span.open_start,
            span.kind.value,
        )
        return span


__all__ = ["MarkupSpan", "MarkupSpanScanner", "SpanKind", "consume_closing_run"]
