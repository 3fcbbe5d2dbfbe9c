"""Unit tests for activity observability logging."""

from __future__ import annotations

import pytest

from ghactivity.diagnostics import Diagnostic, DiagnosticCollector, SkipReason
from ghactivity.observability import ActivityEventLogger, ActivityEventType
from tests.helpers.femtologging_capture import capture_femto_logs

_WARNING_LEVELS = {"WARN", "WARNING"}


class TestActivityEventLogger:
    """Tests for ``ActivityEventLogger`` structured log events."""

    @pytest.fixture
    def logger_instance(self) -> ActivityEventLogger:
        """Return a fresh activity event logger."""
        return ActivityEventLogger()

    def test_item_skipped_emits_warning(
        self, logger_instance: ActivityEventLogger
    ) -> None:
        """Skip events carry the reason, reference and detail."""
        diagnostic = Diagnostic(
            reason=SkipReason.UNKNOWN_EVENT_TYPE, reference="42", detail="MemberEvent"
        )

        with capture_femto_logs("ghactivity.observability") as capture:
            logger_instance.log_item_skipped(diagnostic)
            capture.wait_for_count(1)
            record = capture.records[0]
            assert record.level in _WARNING_LEVELS
            assert ActivityEventType.ITEM_SKIPPED in record.message
            assert "reason=unknown_event_type" in record.message
            assert "reference=42" in record.message
            assert "detail=MemberEvent" in record.message

    def test_view_assembled_emits_info(
        self, logger_instance: ActivityEventLogger
    ) -> None:
        """Assembly events carry the mode and every count."""
        with capture_femto_logs("ghactivity.observability") as capture:
            logger_instance.log_view_assembled(
                mode="summary", input_count=12, output_count=9, skipped_count=1
            )
            capture.wait_for_count(1)
            record = capture.records[0]
            assert record.level == "INFO"
            assert ActivityEventType.VIEW_ASSEMBLED in record.message
            assert "mode=summary" in record.message
            assert "input_count=12" in record.message
            assert "output_count=9" in record.message
            assert "skipped_count=1" in record.message


class TestDiagnosticCollector:
    """Tests for DiagnosticCollector."""

    def test_skip_records_and_logs(self) -> None:
        """Each skip is kept in order and logged once."""
        collector = DiagnosticCollector()

        with capture_femto_logs("ghactivity.observability") as capture:
            collector.skip(SkipReason.MISSING_TITLE, "https://x/1")
            collector.skip(SkipReason.INVALID_TIMESTAMP, "https://x/2", "soon")
            capture.wait_for_count(2)
            assert len(capture.messages_containing("activity.item.skipped")) == 2

        assert [d.reference for d in collector.diagnostics] == [
            "https://x/1",
            "https://x/2",
        ]

    def test_extend_does_not_log_again(self) -> None:
        """Adopted diagnostics are stored without a second log line."""
        source = Diagnostic(reason=SkipReason.MISSING_TITLE, reference="r")
        collector = DiagnosticCollector()

        collector.extend((source,))

        assert collector.diagnostics == (source,)
