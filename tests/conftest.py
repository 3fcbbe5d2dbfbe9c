"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import typing as typ

import pytest

from ghactivity.items.window import DateWindow
from ghactivity.observability import ActivityEventLogger

if typ.TYPE_CHECKING:
    from ghactivity.diagnostics import Diagnostic


class RecordingEventLogger(ActivityEventLogger):
    """Event logger that records calls instead of emitting log lines."""

    def __init__(self) -> None:
        """Initialise empty call lists."""
        self.skipped: list[Diagnostic] = []
        self.assembled: list[dict[str, typ.Any]] = []

    def log_item_skipped(self, diagnostic: Diagnostic) -> None:
        """Record a skip diagnostic."""
        self.skipped.append(diagnostic)

    def log_view_assembled(self, **fields: typ.Any) -> None:  # noqa: ANN401
        """Record view assembly counts."""
        self.assembled.append(fields)


@pytest.fixture
def event_logger() -> RecordingEventLogger:
    """Return an event logger that records instead of logging."""
    return RecordingEventLogger()


@pytest.fixture
def january_window() -> DateWindow:
    """Return a window covering 2024-01-10 through 2024-01-20."""
    return DateWindow.from_strings("2024-01-10", "2024-01-20")
