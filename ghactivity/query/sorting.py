"""Newest-first ordering of items."""

from __future__ import annotations

import datetime as dt
import typing as typ

from ghactivity.common.time import parse_timestamp
from ghactivity.query.config import SortOrder

if typ.TYPE_CHECKING:
    from ghactivity.items.models import Item

_OLDEST = dt.datetime.min.replace(tzinfo=dt.UTC)


def _sort_key(item: Item, order: SortOrder) -> tuple[bool, dt.datetime]:
    raw = item.created_at if order == SortOrder.CREATED else item.updated_at
    parsed = parse_timestamp(raw)
    return (parsed is not None, parsed or _OLDEST)


def sort_items(
    items: typ.Iterable[Item], order: SortOrder = SortOrder.UPDATED
) -> list[Item]:
    """Return items sorted newest first by ``updated_at`` or ``created_at``.

    The sort is stable: items with equal timestamps keep their input order.
    Items whose timestamp cannot be parsed sort after all others.
    """
    return sorted(items, key=lambda item: _sort_key(item, order), reverse=True)
