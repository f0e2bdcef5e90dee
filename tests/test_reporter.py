from __future__ import annotations

import sys
from typing import Any
from unittest.mock import Mock

import pytest

from st_reset_boundary import ErrorBoundary, ErrorReporter, use_error_handler


def test_report_returns_setter_when_nothing_stored() -> None:
    reporter = ErrorReporter({})
    set_error = reporter.report()
    assert callable(set_error)


def test_setter_causes_next_evaluation_to_raise() -> None:
    store: dict[str, Any] = {}
    reporter = ErrorReporter(store, key="upload")
    error = ValueError("bad file")

    reporter.report()(error)

    assert store["upload"] is error
    with pytest.raises(ValueError, match="bad file") as exc_info:
        reporter.report()
    assert exc_info.value is error


def test_stored_error_is_cleared_once_raised() -> None:
    reporter = ErrorReporter({})
    reporter.set_error(ValueError("once"))
    with pytest.raises(ValueError, match="once"):
        reporter.report()
    assert callable(reporter.report())


def test_given_error_bypasses_stored_state() -> None:
    store: dict[str, Any] = {}
    reporter = ErrorReporter(store)
    reporter.set_error(ValueError("stored"))

    with pytest.raises(KeyError):
        reporter.report(KeyError("given"))
    assert isinstance(store["error_handler"], ValueError)


def test_setter_with_none_clears_stored_error() -> None:
    reporter = ErrorReporter({})
    set_error = reporter.report()
    set_error(ValueError("stored"))
    set_error(None)
    assert callable(reporter.report())


def test_use_error_handler_with_explicit_state() -> None:
    state: dict[str, Any] = {}
    use_error_handler(key="h", state=state)(RuntimeError("later"))
    with pytest.raises(RuntimeError, match="later"):
        use_error_handler(key="h", state=state)


def test_reported_error_is_captured_by_enclosing_boundary(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys.modules["st_reset_boundary.error_boundary"], "render_output", Mock())
    state: dict[str, Any] = {}
    on_error = Mock()
    boundary = ErrorBoundary(fallback="error", on_error=on_error, state=state)

    def uploader() -> str:
        use_error_handler(key="upload", state=state)
        return "ready"

    assert boundary.render(uploader) == "ready"
    ErrorReporter(state, key="upload").set_error(ValueError("bad file"))

    assert boundary.render(uploader) == "error"
    assert str(on_error.call_args.args[0]) == "bad file"

    boundary.reset()
    assert boundary.render(uploader) == "ready"
