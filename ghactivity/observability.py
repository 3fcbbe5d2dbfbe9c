"""Emit structured observability events for categorization and views.

Usage
-----
>>> event_logger = ActivityEventLogger()
>>> event_logger.log_view_assembled(
...     mode="summary", input_count=12, output_count=9, skipped_count=1
... )

"""

from __future__ import annotations

import enum
import typing as typ

from ghactivity.logging import get_logger, log_info, log_warning

if typ.TYPE_CHECKING:
    from ghactivity.diagnostics import Diagnostic

logger = get_logger(__name__)


class ActivityEventType(enum.StrEnum):
    """Structured log event types for the activity engine."""

    ITEM_SKIPPED = "activity.item.skipped"
    VIEW_ASSEMBLED = "activity.view.assembled"


class ActivityEventLogger:
    """Emit structured activity events via femtologging."""

    def log_item_skipped(self, diagnostic: Diagnostic) -> None:
        """Log a dropped record at WARNING with its skip reason."""
        log_warning(
            logger,
            "[%s] reason=%s reference=%s detail=%s",
            ActivityEventType.ITEM_SKIPPED,
            diagnostic.reason,
            diagnostic.reference,
            diagnostic.detail,
        )

    def log_view_assembled(
        self,
        *,
        mode: str,
        input_count: int,
        output_count: int,
        skipped_count: int,
    ) -> None:
        """Log view assembly with record counts.

        Parameters
        ----------
        mode
            View mode (``events``, ``search`` or ``summary``).
        input_count
            Raw records handed to the view.
        output_count
            Items remaining after windowing, merging and filtering.
        skipped_count
            Records dropped with a diagnostic.

        """
        log_info(
            logger,
            "[%s] mode=%s input_count=%d output_count=%d skipped_count=%d",
            ActivityEventType.VIEW_ASSEMBLED,
            mode,
            input_count,
            output_count,
            skipped_count,
        )
