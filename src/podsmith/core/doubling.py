"""Rewrite a single-angle markup span into its doubled-angle form.

``C<$a E<gt> $b>`` becomes ``C<< $a > $b >>``: inside doubled angles a lone
``>`` no longer closes the span, so single ``E<gt>`` escapes are turned back into
plain ``>``. Runs of two or more escapes are kept as they are, since
``C<< a >> b >>`` would read as a closing delimiter.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re

from .exceptions import NotInSingleAngleForm
from .spans import MarkupSpanScanner, consume_closing_run
from .text import TextEdit, clamp_offset, paragraph_end


logger = logging.getLogger(__name__)

_ESCAPE = "gt"


@dataclass(frozen=True, slots=True)
class ModifiedSpan:
    """Outcome of a span rewrite."""

    edit: TextEdit
    text: str
    start: int
    end: int
    tag: str
    unescaped: int = 0
    kept: int = 0

    @property
    def replacement(self) -> str:
        return self.edit.replacement


class AngleDoubler:
    """Convert ``TAG<...>`` into ``TAG<< ... >>`` one span at a time."""

    def __init__(self, scanner: MarkupSpanScanner | None = None) -> None:
        self.scanner = scanner or MarkupSpanScanner()
        self.config = self.scanner.config
        self._single_opener = re.compile(rf"{self.config.tag_class}<(?!<)")
        entity = re.escape(self.config.entity_tag)
        self._payload_token = re.compile(
            rf"(?P<escapes>(?:{entity}<{_ESCAPE}>)+)"
            rf"|(?P<entity>{entity}<[^>]*>)"
            rf"|(?P<open>{self.config.tag_class}<+)"
            r"|(?P<close>>+)"
        )
        self._escape_width = len(f"{self.config.entity_tag}<{_ESCAPE}>")

    def locate(self, text: str, anchor: int) -> int:
        """Return the offset of the single-angle ``TAG<`` targeted from ``anchor``."""
        anchor = clamp_offset(text, anchor)
        span = self.scanner.find_enclosing_span(text, None, anchor)
        if span is not None:
            if span.is_doubled:
                raise NotInSingleAngleForm(
                    f"{span.tag}{'<' * span.angle_count} span at offset {span.open_start} "
                    "already uses doubled angles."
                )
            return span.open_start

        for candidate in (anchor, anchor - 1):
            if candidate >= 0 and self._single_opener.match(text, candidate):
                return candidate
        raise NotInSingleAngleForm(f"No single-angle markup at offset {anchor}.")

    def double_span(self, text: str, anchor: int) -> ModifiedSpan:
        """Rewrite the span found from ``anchor``; nothing changes on failure."""
        open_start = self.locate(text, anchor)
        tag = text[open_start]
        position = open_start + 2
        limit = paragraph_end(text, position, self.config)

        pieces = [f"{tag}<< "]
        unescaped = kept = 0
        open_forms = [1]
        while True:
            match = self._payload_token.search(text, position, limit)
            if match is None:
                raise NotInSingleAngleForm(
                    f"{tag}< span at offset {open_start} has no closing '>' in its paragraph."
                )
            pieces.append(text[position : match.start()])
            position = match.end()
            kind = match.lastgroup
            if kind == "open":
                open_forms.append(len(match.group()) - 1)
                pieces.append(match.group())
            elif kind == "close":
                close_end = consume_closing_run(open_forms, match.start(), match.end())
                if close_end is None:
                    pieces.append(match.group())
                    continue
                pieces.append(text[match.start() : close_end - 1])
                pieces.append(" >>")
                position = close_end
                break
            elif kind == "escapes" and len(open_forms) == 1:
                escapes = match.group()
                if len(escapes) == self._escape_width:
                    pieces.append(">")
                    unescaped += 1
                else:
                    pieces.append(escapes)
                    kept += len(escapes) // self._escape_width
            else:
                # Entities, and escapes inside nested forms, stay as written.
                pieces.append(match.group())

        replacement = "".join(pieces)
        edit = TextEdit(open_start, position, replacement)
        result = ModifiedSpan(
            edit=edit,
            text=edit.apply(text),
            start=open_start,
            end=open_start + len(replacement),
            tag=tag,
            unescaped=unescaped,
            kept=kept,
        )
        logger.debug(
            "doubled %s< span [%d, %d) -> [%d, %d)",
            tag,
            open_start,
            position,
            result.start,
            result.end,
        )
        return result


__all__ = ["AngleDoubler", "ModifiedSpan"]
