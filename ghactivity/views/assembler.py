"""Compose categorization, deduplication, filtering and sorting into views.

This is the only module that sees both activity sources at once. The single
source views hand back categorized items untouched by the query; the summary
view merges both streams. :func:`assemble_view` runs a view and then the
filter and sort stages, logging one ``activity.view.assembled`` event.
"""

from __future__ import annotations

import enum
import typing as typ

import msgspec

from ghactivity.diagnostics import Diagnostic
from ghactivity.events.models import Event
from ghactivity.items.dedupe import deduplicate_items, merge_by_precedence
from ghactivity.items.models import Item
from ghactivity.items.window import (
    CategorizedItems,
    DateWindow,
    categorize_events,
    categorize_search_items,
)
from ghactivity.observability import ActivityEventLogger
from ghactivity.query.config import FilterConfig, SortOrder
from ghactivity.query.filters import apply_filters
from ghactivity.query.sorting import sort_items

if typ.TYPE_CHECKING:
    from ghactivity.config import EngineConfig

RawEvents = typ.Iterable[Event | typ.Mapping[str, typ.Any]]
RawSearchItems = typ.Iterable[Item | typ.Mapping[str, typ.Any]]


class ViewMode(enum.StrEnum):
    """Views offered over the two activity sources."""

    EVENTS = "events"
    SEARCH = "search"
    SUMMARY = "summary"


class ViewResult(msgspec.Struct, kw_only=True, frozen=True):
    """Filtered, sorted view plus what was dropped on the way.

    Attributes
    ----------
    mode
        View that produced the result.
    items
        Items after windowing, merging, filtering and sorting.
    diagnostics
        Records dropped during categorization.
    input_count
        Raw records handed to the view across both sources.
    categorized_count
        Items present before the filter stage ran.

    """

    mode: ViewMode
    items: tuple[Item, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()
    input_count: int = 0
    categorized_count: int = 0

    @property
    def output_count(self) -> int:
        """Return the number of items in the view."""
        return len(self.items)


def build_events_view(
    events: RawEvents,
    window: DateWindow | None = None,
    *,
    config: EngineConfig | None = None,
    event_logger: ActivityEventLogger | None = None,
) -> CategorizedItems:
    """Return the event timeline; events are not collapsed."""
    return categorize_events(events, window, config=config, event_logger=event_logger)


def build_search_view(
    items: RawSearchItems,
    window: DateWindow | None = None,
    *,
    event_logger: ActivityEventLogger | None = None,
) -> CategorizedItems:
    """Return categorized and deduplicated search results."""
    categorized = categorize_search_items(items, window, event_logger=event_logger)
    return CategorizedItems(
        items=tuple(deduplicate_items(categorized.items)),
        diagnostics=categorized.diagnostics,
    )


def build_summary_view(
    events: RawEvents,
    items: RawSearchItems,
    window: DateWindow | None = None,
    *,
    config: EngineConfig | None = None,
    event_logger: ActivityEventLogger | None = None,
) -> CategorizedItems:
    """Merge both sources, newest first by ``updated_at``.

    Each stream is categorized and deduplicated on its own. The merge then
    keeps one item per URL, taking the search copy first because it is
    considered more complete.
    """
    from_events = build_events_view(
        events, window, config=config, event_logger=event_logger
    )
    from_search = build_search_view(items, window, event_logger=event_logger)
    merged = merge_by_precedence(
        from_search.items, deduplicate_items(from_events.items)
    )
    return CategorizedItems(
        items=tuple(sort_items(merged, SortOrder.UPDATED)),
        diagnostics=from_search.diagnostics + from_events.diagnostics,
    )


def assemble_view(  # noqa: PLR0913
    mode: ViewMode,
    events: RawEvents = (),
    items: RawSearchItems = (),
    window: DateWindow | None = None,
    filters: FilterConfig | None = None,
    *,
    config: EngineConfig | None = None,
    event_logger: ActivityEventLogger | None = None,
) -> ViewResult:
    """Build a view, then filter and sort it.

    Parameters
    ----------
    mode
        Which view to build; ``events`` ignores ``items`` and ``search``
        ignores ``events``.
    events, items
        Raw feed envelopes and raw search results.
    window
        Date window applied during categorization.
    filters
        Query to apply; defaults to the permissive :class:`FilterConfig`.
    config
        Hosts and preview sizes for normalization and repository matching.
    event_logger
        Receives skip diagnostics and the assembled-view event.

    Returns
    -------
    ViewResult
        The sorted items with diagnostics and counts.

    """
    filters = filters or FilterConfig()
    event_logger = event_logger or ActivityEventLogger()
    event_list = list(events) if mode != ViewMode.SEARCH else []
    item_list = list(items) if mode != ViewMode.EVENTS else []

    match mode:
        case ViewMode.EVENTS:
            view = build_events_view(
                event_list, window, config=config, event_logger=event_logger
            )
        case ViewMode.SEARCH:
            view = build_search_view(item_list, window, event_logger=event_logger)
        case _:
            view = build_summary_view(
                event_list,
                item_list,
                window,
                config=config,
                event_logger=event_logger,
            )

    filtered = apply_filters(view.items, filters, config)
    result = ViewResult(
        mode=ViewMode(mode),
        items=tuple(sort_items(filtered, filters.sort_order)),
        diagnostics=view.diagnostics,
        input_count=len(event_list) + len(item_list),
        categorized_count=len(view.items),
    )
    event_logger.log_view_assembled(
        mode=result.mode.value,
        input_count=result.input_count,
        output_count=result.output_count,
        skipped_count=len(result.diagnostics),
    )
    return result
