from __future__ import annotations

import logging

import pytest

from podsmith.core.diagnostics import (
    LoggingEmitter,
    NullEmitter,
    ensure_emitter,
    format_event_message,
    format_failure,
    report_failure,
)
from podsmith.core.exceptions import (
    NotInSingleAngleForm,
    PodsmithError,
    exception_hint,
    exception_messages,
)
from podsmith.ui.cli.utils import CliEmitter
from podsmith.ui.cli.state import emit_error, set_cli_state


def _raise_nested_error() -> None:
    try:
        raise ValueError("no closing '>' before the paragraph ends")
    except ValueError as exc:
        raise NotInSingleAngleForm("cannot double span") from exc


def test_null_emitter_is_noop(caplog: pytest.LogCaptureFixture) -> None:
    emitter = NullEmitter()
    with caplog.at_level(logging.WARNING):
        emitter.warning("nothing to see")
        emitter.error("still quiet")
    assert not caplog.records
    emitter.event("ignored", {"value": 1})
    assert emitter.debug_enabled is False


def test_ensure_emitter_defaults_to_null() -> None:
    assert isinstance(ensure_emitter(None), NullEmitter)
    emitter = LoggingEmitter()
    assert ensure_emitter(emitter) is emitter


def test_logging_emitter_logs_messages(caplog: pytest.LogCaptureFixture) -> None:
    emitter = LoggingEmitter(debug_enabled=True)
    with caplog.at_level(logging.INFO):
        emitter.error("boom")
        emitter.event("span_doubled", {"tag": "C", "start": 4, "unescaped": 1})
    messages = [record.message for record in caplog.records]
    assert "boom" in messages
    assert "Doubled C<> span at offset 4 (1 unescaped)" in messages
    assert emitter.debug_enabled is True


def test_format_event_message() -> None:
    assert (
        format_event_message("warnings_flagged", {"count": 2, "source": "doc.pod"})
        == "Flagged 2 suspicious constructs in doc.pod"
    )
    assert format_event_message("warnings_flagged", {"count": 0}) is None
    assert format_event_message("unknown", {}) is None


def test_exception_chain_helpers() -> None:
    with pytest.raises(PodsmithError) as excinfo:
        _raise_nested_error()

    assert exception_messages(excinfo.value) == [
        "cannot double span",
        "no closing '>' before the paragraph ends",
    ]
    assert exception_hint(excinfo.value) == "no closing '>' before the paragraph ends"


def test_cli_emitter_bridges_state(capsys: pytest.CaptureFixture[str]) -> None:
    state = set_cli_state(verbosity=1, debug=False)
    emitter = CliEmitter(state=state)

    emitter.warning("Heads up", exc=None)
    emitter.error("Boom", exc=None)
    emitter.event("custom", {"flag": True})

    captured = capsys.readouterr()
    combined_output = f"{captured.out}\n{captured.err}"
    assert "Heads up" in combined_output
    assert "Boom" in combined_output
    assert state.consume_events("custom") == [{"flag": True}]


def test_format_failure_appends_the_innermost_cause() -> None:
    with pytest.raises(PodsmithError) as excinfo:
        _raise_nested_error()

    assert (
        format_failure("Rewrite failed", excinfo.value)
        == "Rewrite failed: no closing '>' before the paragraph ends."
    )
    plain = NotInSingleAngleForm("No single-angle markup at offset 3.")
    assert format_failure("No single-angle markup at offset 3.", plain) == (
        "No single-angle markup at offset 3."
    )


def test_reported_failures_are_not_rendered_twice(capsys: pytest.CaptureFixture[str]) -> None:
    set_cli_state(verbosity=0, debug=False)
    errors: list[str] = []

    class Recorder(NullEmitter):
        def error(self, message: str, exc: BaseException | None = None) -> None:
            errors.append(message)

    exc = NotInSingleAngleForm("No single-angle markup at offset 3.")
    report_failure(Recorder(), "Cannot double the span", exc)
    emit_error("Cannot double the span", exception=exc)

    assert errors == ["Cannot double the span"]
    assert getattr(exc, "_podsmith_logged", False) is True
    assert "Cannot double the span" not in capsys.readouterr().err
