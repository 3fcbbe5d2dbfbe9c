"""Canonical items and their deduplication.

Windowing lives in :mod:`ghactivity.items.window`, which depends on the event
normalizer and is therefore not re-exported here.
"""

from __future__ import annotations

from .dedupe import dedupe_key, deduplicate_items, merge_by_precedence
from .models import Actor, Item, Label, PullRequestRef, RepositoryRef

__all__ = [
    "Actor",
    "Item",
    "Label",
    "PullRequestRef",
    "RepositoryRef",
    "dedupe_key",
    "deduplicate_items",
    "merge_by_precedence",
]
