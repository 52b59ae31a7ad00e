from __future__ import annotations

import pytest

from podsmith.core.config import ScannerConfig
from podsmith.core.spans import MarkupSpan, MarkupSpanScanner, SpanKind


SCANNER = MarkupSpanScanner()


def _find(text: str, offset: int, paragraph_start: int | None = None) -> MarkupSpan | None:
    return SCANNER.find_enclosing_span(text, paragraph_start, offset)


def test_every_payload_offset_resolves_to_the_span() -> None:
    text = "Call C<frobnicate> now."
    open_start = text.index("C<")
    close_start = text.index(">")

    for offset in range(open_start + 2, close_start + 1):
        span = _find(text, offset)
        assert span is not None, offset
        assert span.tag == "C"
        assert span.angle_count == 1
        assert span.kind is SpanKind.PLAIN
        assert (span.open_start, span.open_end) == (open_start, open_start + 2)
        assert (span.close_start, span.close_end) == (close_start, close_start + 1)


def test_text_without_markup_has_no_span() -> None:
    assert _find("nothing to see here", 8) is None
    assert _find("", 0) is None


def test_offset_after_a_closed_span_is_outside() -> None:
    text = "Use C<a> and then more words."
    assert _find(text, text.index("more")) is None


def test_nested_markup_resolves_to_outer_span() -> None:
    text = "C<< B<inner> >>"
    span = _find(text, text.index("inner") + 2)

    assert span is not None
    assert span.tag == "C"
    assert span.angle_count == 2
    assert span.open_start == 0
    assert span.close_start == text.rindex(">>")


def test_offset_after_inner_form_still_resolves_to_outer_span() -> None:
    text = "C<< B<inner> tail >>"
    span = _find(text, text.index("tail"))

    assert span is not None
    assert span.tag == "C"
    assert span.kind is SpanKind.PLAIN


def test_single_gt_does_not_close_a_doubled_span() -> None:
    text = "C<< $obj->method >>"
    span = _find(text, text.index("method"))

    assert span is not None
    assert span.is_doubled
    assert span.close_start == text.rindex(">>")


def test_later_span_is_found_after_earlier_one_closes() -> None:
    text = "I<first> and B<second>"
    span = _find(text, text.index("second"))

    assert span is not None
    assert span.tag == "B"
    assert span.open_start == text.index("B<")


def test_unterminated_span() -> None:
    text = "C<a> B<still typing"
    span = _find(text, len(text))

    assert span is not None
    assert span.tag == "B"
    assert span.kind is SpanKind.UNTERMINATED
    assert span.close_start is None
    assert not span.is_closed


def test_entities_are_transparent_to_delimiter_matching() -> None:
    text = "C<x E<gt> y>"
    span = _find(text, text.index("y"))

    assert span is not None
    assert span.kind is SpanKind.PLAIN
    assert span.close_start == len(text) - 1


@pytest.mark.parametrize("typed", ["C<x E<", "C<x E<g", "C<x E<gt"])
def test_offset_inside_open_entity(typed: str) -> None:
    span = _find(typed + "> y>", len(typed))

    assert span is not None
    assert span.kind is SpanKind.INSIDE_ENTITY
    assert span.tag == "C"
    assert (span.open_start, span.open_end) == (0, 2)
    assert span.entity_start == typed.index("E<")


def test_offset_within_opening_run_counts_the_whole_run() -> None:
    text = "C<< x >>"
    span = _find(text, 2)

    assert span is not None
    assert span.angle_count == 2
    assert span.open_end == 3
    assert span.kind is SpanKind.PLAIN


def test_offset_right_after_closing_run_resolves_to_the_span() -> None:
    text = "C<x> tail"
    span = _find(text, text.index(">") + 1)

    assert span is not None
    assert span.tag == "C"
    assert span.close_end == text.index(">") + 1


def test_scan_starts_at_the_paragraph() -> None:
    text = "C<open\n\nclosed> text"
    assert _find(text, text.index("closed") + 2) is None


def test_closing_run_is_not_searched_in_the_next_paragraph() -> None:
    text = "C<open\n\nnext>"
    span = _find(text, 4)

    assert span is not None
    assert span.kind is SpanKind.UNTERMINATED


def test_explicit_paragraph_start_bounds_the_scan() -> None:
    text = "C<payload>"
    assert _find(text, 5, paragraph_start=3) is None
    span = _find(text, 5, paragraph_start=0)
    assert span is not None


def test_unrecognized_letters_do_not_open_spans() -> None:
    assert _find("A<b> and $x<$y", 2) is None


def test_custom_tag_set() -> None:
    scanner = MarkupSpanScanner(ScannerConfig(tags="Q"))

    span = scanner.find_enclosing_span("Q<x>", None, 2)
    assert span is not None
    assert span.tag == "Q"
    assert scanner.find_enclosing_span("C<x>", None, 2) is None


def test_span_serialises_to_dict() -> None:
    span = _find("B<x>", 2)

    assert span is not None
    assert span.as_dict() == {
        "tag": "B",
        "angle_count": 1,
        "open_start": 0,
        "open_end": 2,
        "kind": "plain",
        "close_start": 3,
        "close_end": 4,
        "entity_start": None,
    }


def test_inner_single_closer_does_not_close_the_outer_span() -> None:
    text = "B<C<foo> bar> tail"
    span = _find(text, text.index("foo") + 1)

    assert span is not None
    assert span.tag == "B"
    assert span.kind is SpanKind.PLAIN
    assert (span.close_start, span.close_end) == (12, 13)


def test_offset_after_nested_form_is_still_in_the_outer_span() -> None:
    text = "B<C<foo> bar> tail"

    span = _find(text, text.index("bar"))
    assert span is not None
    assert span.tag == "B"
    assert span.close_start == 12

    assert _find(text, text.index("tail")) is None


def test_adjacent_closers_end_inner_and_outer_forms() -> None:
    text = "L<C<foo>> x"
    span = _find(text, text.index("foo"))

    assert span is not None
    assert span.tag == "L"
    assert (span.close_start, span.close_end) == (8, 9)
    assert _find(text, text.index("x")) is None


def test_nested_form_left_open_leaves_the_outer_span_unterminated() -> None:
    text = "B<C<foo bar>"
    span = _find(text, text.index("bar"))

    assert span is not None
    assert span.tag == "B"
    assert span.kind is SpanKind.UNTERMINATED
