"""Filter configuration for item queries.

A :class:`FilterConfig` is created with permissive defaults and replaced
wholesale on every edit:

>>> import msgspec
>>> config = FilterConfig()
>>> prs_only = msgspec.structs.replace(config, type_filter=TypeFilter.PR)

"""

from __future__ import annotations

import enum

import msgspec


class TypeFilter(enum.StrEnum):
    """Item kinds selectable by the type filter."""

    ALL = "all"
    ISSUE = "issue"
    PR = "pr"
    COMMENT = "comment"


class StatusFilter(enum.StrEnum):
    """Item states selectable by the status filter."""

    ALL = "all"
    OPEN = "open"
    CLOSED = "closed"
    MERGED = "merged"


class SortOrder(enum.StrEnum):
    """Timestamp field used for newest-first ordering."""

    UPDATED = "updated"
    CREATED = "created"


class FilterAxis(enum.StrEnum):
    """Single axis counted by ``count_items_matching_filter``."""

    TYPE = "type"
    STATUS = "status"
    LABEL = "label"
    REPO = "repo"


class FilterConfig(msgspec.Struct, kw_only=True, frozen=True):
    """Immutable set of independent filter axes plus a sort key.

    Attributes
    ----------
    type_filter
        Item kind to keep.
    status_filter
        State to keep; merged pull requests only match ``merged``.
    included_labels
        Labels an item must all carry.
    excluded_labels
        Labels of which an item may carry none.
    repo_filters
        ``owner/name`` slugs to keep; empty keeps every repository.
    user_filter
        Login to keep, compared case-insensitively; blank disables.
    search_text
        Case-insensitive substring over title and body; blank disables.
    sort_order
        Timestamp used by the sort stage.

    """

    type_filter: TypeFilter = TypeFilter.ALL
    status_filter: StatusFilter = StatusFilter.ALL
    included_labels: tuple[str, ...] = ()
    excluded_labels: tuple[str, ...] = ()
    repo_filters: tuple[str, ...] = ()
    user_filter: str = ""
    search_text: str = ""
    sort_order: SortOrder = SortOrder.UPDATED
