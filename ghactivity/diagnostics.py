"""Structured skip diagnostics returned alongside categorized results.

Records the engine cannot use are never raised as errors. Each one is
described by a :class:`Diagnostic` so callers can surface or assert on skip
reasons without depending on a log sink; every diagnostic is also emitted as
an ``activity.item.skipped`` warning.
"""

from __future__ import annotations

import enum

import msgspec

from ghactivity.observability import ActivityEventLogger


class SkipReason(enum.StrEnum):
    """Machine-readable reasons for dropping a record."""

    UNKNOWN_EVENT_TYPE = "unknown_event_type"
    INVALID_PAYLOAD = "invalid_payload"
    MISSING_REQUIRED_RECORD = "missing_required_record"
    MISSING_TITLE = "missing_title"
    INVALID_SEARCH_ITEM = "invalid_search_item"
    INVALID_TIMESTAMP = "invalid_timestamp"


class Diagnostic(msgspec.Struct, kw_only=True, frozen=True):
    """One skipped record.

    Attributes
    ----------
    reason
        Why the record was dropped.
    reference
        Best available identity for the record (URL, event id or ``?``).
    detail
        Free-form context, e.g. the decoder message or offending value.

    """

    reason: SkipReason
    reference: str
    detail: str = ""


class DiagnosticCollector:
    """Accumulate diagnostics for one categorization pass."""

    def __init__(self, event_logger: ActivityEventLogger | None = None) -> None:
        """Initialise an empty collector using the given event logger."""
        self._diagnostics: list[Diagnostic] = []
        self._event_logger = event_logger or ActivityEventLogger()

    def skip(self, reason: SkipReason, reference: str, detail: str = "") -> None:
        """Record and log a skipped record."""
        diagnostic = Diagnostic(reason=reason, reference=reference, detail=detail)
        self._diagnostics.append(diagnostic)
        self._event_logger.log_item_skipped(diagnostic)

    def extend(self, diagnostics: tuple[Diagnostic, ...]) -> None:
        """Adopt diagnostics already logged by another pass."""
        self._diagnostics.extend(diagnostics)

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        """Return the diagnostics collected so far."""
        return tuple(self._diagnostics)
