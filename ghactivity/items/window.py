"""Date-window categorization for feed events and search items.

Windows are calendar-day ranges: the start bound is midnight UTC on the
start date (inclusive) and the end bound is midnight UTC on the day after the
end date (exclusive), so the whole end day is admitted.

Usage
-----
>>> window = DateWindow.from_strings("2024-01-01", "2024-01-31")
>>> result = categorize_events(raw_events, window)
>>> result.items, result.diagnostics

"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import typing as typ

import msgspec

from ghactivity.common.time import parse_timestamp, start_of_day
from ghactivity.diagnostics import Diagnostic, DiagnosticCollector, SkipReason
from ghactivity.errors import WindowError
from ghactivity.events.classifier import classify_event
from ghactivity.events.models import ClassifiedEvent, UnknownEvent
from ghactivity.events.normalizer import normalize_event
from ghactivity.items.models import Item

if typ.TYPE_CHECKING:
    from ghactivity.config import EngineConfig
    from ghactivity.events.models import Event
    from ghactivity.observability import ActivityEventLogger

_ONE_DAY = dt.timedelta(days=1)


@dc.dataclass(frozen=True, slots=True)
class DateWindow:
    """Inclusive calendar-date window; a missing bound disables that side.

    Attributes
    ----------
    start
        First admitted day, or ``None`` for no lower bound.
    end
        Last admitted day, or ``None`` for no upper bound.

    """

    start: dt.date | None = None
    end: dt.date | None = None

    def __post_init__(self) -> None:
        """Reject windows whose start falls after their end."""
        if self.start is not None and self.end is not None and self.start > self.end:
            raise WindowError.inverted(self.start.isoformat(), self.end.isoformat())

    @classmethod
    def from_strings(cls, start: str | None, end: str | None) -> DateWindow:
        """Build a window from ``YYYY-MM-DD`` strings; blanks mean unbounded.

        Raises
        ------
        WindowError
            If a bound is not a calendar date or the bounds are inverted.

        """
        return cls(start=_parse_day("start", start), end=_parse_day("end", end))

    @property
    def is_bounded(self) -> bool:
        """Return True when at least one side is bounded."""
        return self.start is not None or self.end is not None

    @property
    def start_instant(self) -> dt.datetime | None:
        """Return midnight UTC on ``start``."""
        return None if self.start is None else start_of_day(self.start)

    @property
    def end_instant(self) -> dt.datetime | None:
        """Return midnight UTC on the day after ``end`` (exclusive)."""
        return None if self.end is None else start_of_day(self.end) + _ONE_DAY

    def contains(self, instant: dt.datetime) -> bool:
        """Return True when ``instant`` falls inside the window."""
        start, end = self.start_instant, self.end_instant
        if start is not None and instant < start:
            return False
        return end is None or instant < end

    def contains_timestamp(self, value: str | None) -> bool | None:
        """Return window membership for an ISO-8601 string.

        Returns ``None`` when the window is bounded and ``value`` cannot be
        parsed, letting callers report the record instead of guessing.
        """
        if not self.is_bounded:
            return True
        instant = parse_timestamp(value)
        if instant is None:
            return None
        return self.contains(instant)


def _parse_day(field: str, raw: str | None) -> dt.date | None:
    if raw is None or not raw.strip():
        return None
    try:
        return dt.date.fromisoformat(raw.strip())
    except ValueError as exc:
        raise WindowError.invalid_date(field, raw) from exc


class CategorizedItems(msgspec.Struct, kw_only=True, frozen=True):
    """Items admitted by a categorization pass and the records it dropped."""

    items: tuple[Item, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()


def _event_reference(event: Event) -> str:
    return event.id if isinstance(event, UnknownEvent) else event.event_id


def categorize_events(
    events: typ.Iterable[Event | typ.Mapping[str, typ.Any]],
    window: DateWindow | None = None,
    *,
    config: EngineConfig | None = None,
    event_logger: ActivityEventLogger | None = None,
) -> CategorizedItems:
    """Window feed events on ``created_at`` and normalize the survivors.

    Parameters
    ----------
    events
        Raw envelopes or already-classified events.
    window
        Date window; ``None`` admits everything.
    config
        Passed through to :func:`normalize_event`.
    event_logger
        Receives one ``activity.item.skipped`` event per diagnostic.

    Returns
    -------
    CategorizedItems
        Items in input order plus a diagnostic for every dropped record
        other than those simply outside the window.

    """
    window = window or DateWindow()
    collector = DiagnosticCollector(event_logger)
    items: list[Item] = []
    for raw in events:
        event = raw if isinstance(raw, ClassifiedEvent) else classify_event(raw)
        if isinstance(event, UnknownEvent):
            collector.skip(event.reason, event.id, event.detail)
            continue
        inside = window.contains_timestamp(event.created_at)
        if inside is None:
            collector.skip(
                SkipReason.INVALID_TIMESTAMP, event.event_id, event.created_at
            )
            continue
        if not inside:
            continue
        item = normalize_event(event, config)
        if item is None:
            collector.skip(
                SkipReason.MISSING_REQUIRED_RECORD,
                _event_reference(event),
                event.kind.value,
            )
            continue
        items.append(item)
    return CategorizedItems(items=tuple(items), diagnostics=collector.diagnostics)


def _search_reference(raw: typ.Mapping[str, typ.Any]) -> str:
    for key in ("html_url", "id"):
        value = raw.get(key)
        if value:
            return str(value)
    return "?"


def _window_timestamp(item: Item) -> str:
    return item.reviewed_at or item.updated_at


def window_items(
    items: typ.Iterable[Item],
    window: DateWindow | None = None,
    *,
    event_logger: ActivityEventLogger | None = None,
) -> CategorizedItems:
    """Keep canonical items whose ``reviewed_at`` or ``updated_at`` is inside.

    Review items are windowed on when the review happened rather than when
    the pull request last changed. Re-running on the output with the same
    window returns the same items.
    """
    window = window or DateWindow()
    collector = DiagnosticCollector(event_logger)
    kept: list[Item] = []
    for item in items:
        timestamp = _window_timestamp(item)
        inside = window.contains_timestamp(timestamp)
        if inside is None:
            collector.skip(SkipReason.INVALID_TIMESTAMP, item.html_url, timestamp)
        elif inside:
            kept.append(item)
    return CategorizedItems(items=tuple(kept), diagnostics=collector.diagnostics)


def _to_item(
    raw: Item | typ.Mapping[str, typ.Any], collector: DiagnosticCollector
) -> Item | None:
    if isinstance(raw, Item):
        if not raw.title:
            collector.skip(SkipReason.MISSING_TITLE, raw.html_url or str(raw.id))
            return None
        return raw
    if not isinstance(raw, typ.Mapping):
        collector.skip(
            SkipReason.INVALID_SEARCH_ITEM, "?", f"expected a mapping: {raw!r}"
        )
        return None
    title = raw.get("title")
    if not isinstance(title, str) or not title:
        collector.skip(SkipReason.MISSING_TITLE, _search_reference(raw))
        return None
    try:
        return msgspec.convert(dict(raw), type=Item)
    except msgspec.ValidationError as exc:
        collector.skip(
            SkipReason.INVALID_SEARCH_ITEM, _search_reference(raw), str(exc)
        )
        return None


def categorize_search_items(
    items: typ.Iterable[Item | typ.Mapping[str, typ.Any]],
    window: DateWindow | None = None,
    *,
    event_logger: ActivityEventLogger | None = None,
) -> CategorizedItems:
    """Validate search results and window them.

    Records without a title are dropped before windowing so title-based
    classification downstream never sees them. Mappings are converted to
    :class:`Item`; ones that do not fit the item shape are dropped with an
    ``invalid_search_item`` diagnostic.
    """
    collector = DiagnosticCollector(event_logger)
    valid = [
        item for raw in items if (item := _to_item(raw, collector)) is not None
    ]
    windowed = window_items(valid, window, event_logger=event_logger)
    collector.extend(windowed.diagnostics)
    return CategorizedItems(items=windowed.items, diagnostics=collector.diagnostics)


def decode_search_items(data: bytes | str) -> list[dict[str, typ.Any]]:
    """Decode search results from JSON.

    Accepts either a bare array of items or a search response object with an
    ``items`` array.

    Raises
    ------
    msgspec.DecodeError
        If ``data`` is not valid JSON.
    msgspec.ValidationError
        If the document has neither shape.

    """
    document = msgspec.json.decode(data)
    if isinstance(document, dict) and "items" in document:
        document = document["items"]
    return msgspec.convert(document, type=list[dict[str, typ.Any]])
