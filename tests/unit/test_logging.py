"""Unit tests for the femtologging helpers."""

from __future__ import annotations

import pytest

from ghactivity.config import EngineConfig
from ghactivity.logging import (
    configure_engine_logging,
    configure_logging,
    log_info,
    log_warning,
    normalize_log_level,
)
from tests.helpers.femtologging_capture import capture_femto_logs


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
    ("raw", "expected", "invalid"),
    [
        ("debug", "DEBUG", False),
        ("  Warn ", "WARN", False),
        ("trace", "TRACE", False),
        (None, "INFO", True),
        ("", "INFO", True),
        ("verbose", "INFO", True),
    ],
)
def test_normalize_log_level(raw: str | None, expected: str, *, invalid: bool) -> None:
    """Known levels are upper-cased; anything else falls back to INFO."""
    level, flagged = normalize_log_level(raw)

    assert level == expected, f"Expected {raw!r} to normalize to {expected}."
    assert flagged is invalid, f"Expected invalid flag {invalid} for {raw!r}."


@pytest.mark.parametrize(
    ("helper", "level"),
    [(log_info, "INFO"), (log_warning, "WARNING")],
)
def test_level_helpers_format_before_logging(
    helper: object, level: str
) -> None:
    """Each helper applies percent formatting and emits its own level."""
    logger = _FakeLogger()

    helper(logger, "skipped %s (%d)", "event-1", 2)  # type: ignore[operator]

    assert logger.calls == [(level, "skipped event-1 (2)", None, False)], (
        f"Expected one {level} call with a pre-formatted message."
    )


def test_configure_logging_passes_normalized_level(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """configure_logging hands the normalized level to basicConfig."""
    captured: dict[str, object] = {}

    def fake_basic_config(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr("ghactivity.logging.basicConfig", fake_basic_config)

    normalized, invalid = configure_logging("error", force=True)

    assert (normalized, invalid) == ("ERROR", False), "Expected ERROR to be valid."
    assert captured == {"level": "ERROR", "force": True}, (
        "Expected basicConfig to receive the normalized level and force flag."
    )


def test_configure_logging_warns_about_unknown_level(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Unknown levels configure INFO and are reported once."""
    captured: dict[str, object] = {}
    monkeypatch.setattr(
        "ghactivity.logging.basicConfig", lambda **kwargs: captured.update(kwargs)
    )

    with capture_femto_logs("ghactivity.logging") as capture:
        normalized, invalid = configure_logging("loud")
        capture.wait_for_count(1)
        assert "'loud'" in capture.records[0].message

    assert normalized == "INFO", "Expected fallback to INFO."
    assert invalid is True, "Expected unknown level to be flagged."
    assert captured.get("force") is False, "Expected existing handlers to be kept."


def test_configure_engine_logging_uses_config_level(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """The engine configuration's level reaches basicConfig."""
    captured: dict[str, object] = {}
    monkeypatch.setattr(
        "ghactivity.logging.basicConfig", lambda **kwargs: captured.update(kwargs)
    )

    result = configure_engine_logging(EngineConfig(log_level="DEBUG"))

    assert result == ("DEBUG", False)
    assert captured == {"level": "DEBUG", "force": False}


def test_templates_without_arguments_are_not_formatted() -> None:
    """A literal percent sign survives when no arguments are given."""
    logger = _FakeLogger()

    log_info(logger, "100% of events classified")

    assert logger.calls == [("INFO", "100% of events classified", None, False)]
