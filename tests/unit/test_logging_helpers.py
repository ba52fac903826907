"""Unit tests for femtologging integration helpers.

Run with:
    pytest tests/unit/test_logging_helpers.py
"""

from __future__ import annotations

import pytest

from harbourmaster.logging import (
    LOG_LEVEL_ENV_VAR,
    configure_logging,
    log_debug,
    log_exception,
    log_info,
    log_warning,
    resolve_log_level,
)


class _FakeLogger:
    """Collects log calls for assertions."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, object | None, bool]] = []

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str:
        self.calls.append((level, message, exc_info, stack_info))
        return message


@pytest.mark.parametrize(
    ("input_level", "expected_level", "expected_invalid"),
    [
        ("warning", "WARNING", False),
        ("  debug ", "DEBUG", False),
        (None, "INFO", True),
        ("", "INFO", True),
        ("verbose", "INFO", True),
        ("warn", "WARN", False),
    ],
)
def test_resolve_log_level(
    input_level: str | None,
    expected_level: str,
    *,
    expected_invalid: bool,
) -> None:
    """Levels are upper-cased and unknown values fall back to INFO."""
    level, invalid = resolve_log_level(input_level)
    assert level == expected_level, (
        f"Expected {input_level!r} to normalize to {expected_level}."
    )
    assert invalid is expected_invalid


def test_template_without_args_is_verbatim() -> None:
    """A template with no arguments is not interpolated."""
    logger = _FakeLogger()

    log_info(logger, "100% reloaded")

    assert logger.calls == [("INFO", "100% reloaded", None, False)]


@pytest.mark.parametrize(
    ("helper", "level"),
    [
        (log_debug, "DEBUG"),
        (log_info, "INFO"),
        (log_warning, "WARNING"),
    ],
)
def test_level_helpers_format_and_pass_level(helper: object, level: str) -> None:
    """Each helper formats its template and emits the matching level."""
    logger = _FakeLogger()

    helper(logger, "dispatching %s", "HideImage")  # type: ignore[operator]

    assert logger.calls == [(level, "dispatching HideImage", None, False)]


def test_log_warning_forwards_exc_info() -> None:
    """log_warning forwards exc_info to the logger."""
    logger = _FakeLogger()
    exc = ValueError("boom")

    log_warning(logger, "warning: %s", "oops", exc_info=exc)

    assert logger.calls == [("WARNING", "warning: oops", exc, False)]


def test_log_exception_does_not_interpolate() -> None:
    """log_exception passes the message through verbatim with exc_info."""
    logger = _FakeLogger()
    exc = RuntimeError("boom")

    log_exception(logger, "100% failed", exc)

    assert logger.calls == [("ERROR", "100% failed", exc, False)]


def test_configure_logging_uses_explicit_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """An explicit level wins over the environment."""
    captured: dict[str, object] = {}
    monkeypatch.setattr(
        "harbourmaster.logging.basicConfig", lambda **kw: captured.update(kw)
    )
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "ERROR")

    assert configure_logging("debug") == ("DEBUG", False)
    assert captured == {"level": "DEBUG", "force": False}


def test_configure_logging_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without an explicit level the environment variable is used."""
    captured: dict[str, object] = {}
    monkeypatch.setattr(
        "harbourmaster.logging.basicConfig", lambda **kw: captured.update(kw)
    )
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "warning")

    assert configure_logging() == ("WARNING", False)
    assert captured.get("level") == "WARNING"


def test_configure_logging_flags_missing_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """No level anywhere falls back to INFO and reports it."""
    monkeypatch.setattr("harbourmaster.logging.basicConfig", lambda **_: None)
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)

    assert configure_logging() == ("INFO", True)
