"""Kind-aware deduplication of canonical items."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from ghactivity.items.models import Item


def dedupe_key(item: Item) -> str:
    """Return the identity used to collapse duplicates.

    Review items are keyed per reviewer so several people reviewing the same
    pull request stay distinct; everything else is keyed by URL.

    Examples
    --------
    >>> from ghactivity.items.models import Actor, Item
    >>> review = Item(
    ...     id=1,
    ...     html_url="https://github.com/o/r/pull/1",
    ...     title="Review on: Fix",
    ...     created_at="2024-01-01T00:00:00Z",
    ...     updated_at="2024-01-01T00:00:00Z",
    ...     user=Actor(login="author"),
    ...     reviewed_by=Actor(login="alice"),
    ... )
    >>> dedupe_key(review)
    'alice:https://github.com/o/r/pull/1'

    """
    if item.reviewed_by is not None:
        return f"{item.reviewed_by.login}:{item.html_url}"
    return item.html_url


def deduplicate_items(items: typ.Iterable[Item]) -> list[Item]:
    """Keep the first item per :func:`dedupe_key`, preserving order."""
    seen: set[str] = set()
    unique: list[Item] = []
    for item in items:
        key = dedupe_key(item)
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


def merge_by_precedence(
    preferred: typ.Iterable[Item], fallback: typ.Iterable[Item]
) -> list[Item]:
    """Union two streams, dropping every repeat of an ``html_url``.

    Each stream is expected to be deduplicated already. The merge itself is
    keyed on the URL alone, so an event-derived review of a pull request the
    preferred stream already carries is dropped even though its reviewer
    differs.
    """
    seen: set[str] = set()
    merged: list[Item] = []
    for item in (*preferred, *fallback):
        if item.html_url in seen:
            continue
        seen.add(item.html_url)
        merged.append(item)
    return merged
