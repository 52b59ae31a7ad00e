"""Offset arithmetic and paragraph helpers over plain text buffers."""

from __future__ import annotations

from dataclasses import dataclass

from .config import DEFAULT_CONFIG, ScannerConfig


@dataclass(frozen=True, slots=True)
class TextEdit:
    """Replacement of ``text[start:end]`` to be spliced in by the host."""

    start: int
    end: int
    replacement: str

    def apply(self, text: str) -> str:
        return f"{text[: self.start]}{self.replacement}{text[self.end :]}"


def clamp_offset(text: str, offset: int) -> int:
    return max(0, min(offset, len(text)))


def paragraph_start(text: str, offset: int, config: ScannerConfig = DEFAULT_CONFIG) -> int:
    """Return the offset where the paragraph holding ``offset`` begins.

    A separator only counts when it ends at or before ``offset``; an offset sitting
    inside a blank gap belongs to the preceding paragraph.
    """
    offset = clamp_offset(text, offset)
    start = 0
    for match in config.paragraph_pattern().finditer(text, 0, offset):
        start = match.end()
    return start


def paragraph_end(text: str, offset: int, config: ScannerConfig = DEFAULT_CONFIG) -> int:
    """Return the offset where the paragraph holding ``offset`` ends."""
    offset = clamp_offset(text, offset)
    match = config.paragraph_pattern().search(text, offset)
    return match.start() if match else len(text)


def offset_to_position(text: str, offset: int) -> tuple[int, int]:
    """Convert ``offset`` into a 1-based ``(line, column)`` pair."""
    offset = clamp_offset(text, offset)
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return line, column


def position_to_offset(text: str, line: int, column: int) -> int:
    """Convert a 1-based ``(line, column)`` pair into an offset.

    Columns past the end of the line clamp to the line end.
    """
    if line < 1 or column < 1:
        raise ValueError("line and column are 1-based")
    start = 0
    for _ in range(line - 1):
        newline = text.find("\n", start)
        if newline < 0:
            raise ValueError(f"line {line} is past the end of the text")
        start = newline + 1
    line_end = text.find("\n", start)
    if line_end < 0:
        line_end = len(text)
    return min(start + column - 1, line_end)


def widen_to_lines(text: str, start: int, end: int) -> tuple[int, int]:
    """Extend ``[start, end)`` outwards to whole lines."""
    start = clamp_offset(text, start)
    end = clamp_offset(text, max(start, end))
    line_start = text.rfind("\n", 0, start) + 1
    newline = text.find("\n", end)
    line_end = len(text) if newline < 0 else newline
    return line_start, line_end


def skip_trailing_blanks(text: str, offset: int) -> int:
    """Return ``offset`` moved back over horizontal whitespace."""
    offset = clamp_offset(text, offset)
    while offset > 0 and text[offset - 1] in " \t":
        offset -= 1
    return offset


__all__ = [
    "TextEdit",
    "clamp_offset",
    "offset_to_position",
    "paragraph_end",
    "paragraph_start",
    "position_to_offset",
    "skip_trailing_blanks",
    "widen_to_lines",
]
