from __future__ import annotations

import pytest

from podsmith.core.config import ScannerConfig
from podsmith.core.text import (
    TextEdit,
    offset_to_position,
    paragraph_end,
    paragraph_start,
    position_to_offset,
    skip_trailing_blanks,
    widen_to_lines,
)


TEXT = "first para\nstill first\n\nsecond para\n  \nthird"


def test_paragraph_boundaries() -> None:
    second = TEXT.index("second")
    third = TEXT.index("third")

    assert paragraph_start(TEXT, 5) == 0
    assert paragraph_start(TEXT, second + 3) == second
    assert paragraph_start(TEXT, third) == third
    assert paragraph_end(TEXT, 5) == TEXT.index("\n\n")
    assert paragraph_end(TEXT, second) == TEXT.index("\n  \n")
    assert paragraph_end(TEXT, third) == len(TEXT)


def test_custom_paragraph_separator() -> None:
    config = ScannerConfig(paragraph_separator=r"\n=cut\n")
    text = "one\n=cut\ntwo"

    assert paragraph_start(text, len(text), config) == text.index("two")
    assert paragraph_end(text, 0, config) == 3


def test_offsets_are_clamped() -> None:
    assert paragraph_start("abc", 99) == 0
    assert paragraph_end("abc", -4) == 3


def test_position_round_trip() -> None:
    text = "ab\ncde\n\nf"
    for offset in range(len(text) + 1):
        line, column = offset_to_position(text, offset)
        assert position_to_offset(text, line, column) == offset


def test_position_to_offset_clamps_columns() -> None:
    assert position_to_offset("ab\ncd", 1, 40) == 2


@pytest.mark.parametrize(("line", "column"), [(0, 1), (1, 0), (5, 1)])
def test_position_to_offset_rejects_bad_positions(line: int, column: int) -> None:
    with pytest.raises(ValueError):
        position_to_offset("ab\ncd", line, column)


def test_widen_to_lines() -> None:
    text = "one\ntwo three\nfour"
    assert widen_to_lines(text, text.index("three"), text.index("three") + 2) == (4, 13)
    assert widen_to_lines(text, 0, len(text)) == (0, len(text))


def test_skip_trailing_blanks() -> None:
    assert skip_trailing_blanks("C<!> \t ", 7) == 4
    assert skip_trailing_blanks("word\n ", 6) == 5


def test_text_edit_apply() -> None:
    assert TextEdit(2, 5, "XY").apply("abcdefg") == "abXYfg"
    assert TextEdit(3, 3, "-").apply("abc") == "abc-"
