"""Composable item filters.

Each ``filter_by_*`` function handles one axis and returns a new list; the
axes are independent, so applying them in any order yields the same result.
:func:`apply_filters` intersects all of them for a :class:`FilterConfig`.
"""

from __future__ import annotations

import typing as typ

from ghactivity.common.slug import slug_from_api_url
from ghactivity.config import DEFAULT_CONFIG
from ghactivity.query.config import FilterAxis, FilterConfig, StatusFilter, TypeFilter

if typ.TYPE_CHECKING:
    from ghactivity.config import EngineConfig
    from ghactivity.items.models import Item

_REVIEW_PREFIXES = ("Review on:", "Reviewed:")
_COMMENT_PREFIX = "Comment on:"
_REVIEW_EVENT_TYPE = "PullRequestReviewEvent"


def item_type(item: Item) -> TypeFilter:
    """Classify an item as an issue, pull request or comment.

    Review markers win over the comment prefix, which wins over the presence
    of a ``pull_request`` record.
    """
    if (
        item.title.startswith(_REVIEW_PREFIXES)
        or item.original_event_type == _REVIEW_EVENT_TYPE
    ):
        return TypeFilter.PR
    if item.title.startswith(_COMMENT_PREFIX):
        return TypeFilter.COMMENT
    if item.pull_request is not None:
        return TypeFilter.PR
    return TypeFilter.ISSUE


def is_merged(item: Item) -> bool:
    """Return True for pull requests with a merge timestamp or flag."""
    return item.is_merged


def repository_name(item: Item, config: EngineConfig | None = None) -> str | None:
    """Return ``owner/name`` for an item.

    The API repository URL is preferred; ``repository.full_name`` is used
    when the URL is absent or points at a different host.
    """
    prefix = (config or DEFAULT_CONFIG).api_repos_prefix
    slug = slug_from_api_url(item.repository_url, prefix)
    if slug is not None:
        return slug
    if item.repository is not None and item.repository.full_name:
        return item.repository.full_name
    return None


def filter_by_type(items: typ.Iterable[Item], type_filter: TypeFilter) -> list[Item]:
    """Keep items of the selected kind."""
    if type_filter == TypeFilter.ALL:
        return list(items)
    return [item for item in items if item_type(item) == type_filter]


def _matches_status(item: Item, status_filter: StatusFilter) -> bool:
    if status_filter == StatusFilter.MERGED:
        return is_merged(item)
    if is_merged(item):
        return False
    return item.state == status_filter


def filter_by_status(
    items: typ.Iterable[Item], status_filter: StatusFilter
) -> list[Item]:
    """Keep items in the selected state; merged PRs only match ``merged``."""
    if status_filter == StatusFilter.ALL:
        return list(items)
    return [item for item in items if _matches_status(item, status_filter)]


def _matches_labels(
    item: Item, included: typ.Collection[str], excluded: typ.Collection[str]
) -> bool:
    names = set(item.label_names)
    if any(label in names for label in excluded):
        return False
    return all(label in names for label in included)


def filter_by_labels(
    items: typ.Iterable[Item],
    included_labels: typ.Collection[str] = (),
    excluded_labels: typ.Collection[str] = (),
) -> list[Item]:
    """Keep items carrying every included label and no excluded label."""
    return [
        item
        for item in items
        if _matches_labels(item, included_labels, excluded_labels)
    ]


def filter_by_repository(
    items: typ.Iterable[Item],
    repo_filters: typ.Collection[str],
    config: EngineConfig | None = None,
) -> list[Item]:
    """Keep items whose repository slug is in ``repo_filters``."""
    if not repo_filters:
        return list(items)
    return [item for item in items if repository_name(item, config) in repo_filters]


def parse_usernames(text: str | None) -> list[str]:
    """Split a comma-separated list of logins into casefolded names.

    Blank entries are dropped, so ``"alice, ,Bob"`` yields
    ``["alice", "bob"]``.
    """
    if not text:
        return []
    return [name.casefold() for part in text.split(",") if (name := part.strip())]


def is_authored_by(item: Item, usernames: typ.Iterable[str]) -> bool:
    """Return whether ``item.user.login`` is one of ``usernames``, ignoring case."""
    login = item.user.login.casefold()
    return any(login == name.casefold() for name in usernames)


def filter_by_user(items: typ.Iterable[Item], user_filter: str | None) -> list[Item]:
    """Keep items authored by any login in the comma-separated ``user_filter``."""
    usernames = parse_usernames(user_filter)
    if not usernames:
        return list(items)
    return [item for item in items if is_authored_by(item, usernames)]


def filter_by_text(items: typ.Iterable[Item], search_text: str | None) -> list[Item]:
    """Keep items whose title or body contains ``search_text``, ignoring case."""
    if not search_text or not search_text.strip():
        return list(items)
    needle = search_text.strip().casefold()
    return [
        item
        for item in items
        if needle in item.title.casefold() or needle in (item.body or "").casefold()
    ]


def apply_filters(
    items: typ.Iterable[Item],
    filters: FilterConfig,
    config: EngineConfig | None = None,
) -> list[Item]:
    """Intersect every axis of ``filters``; ordering is preserved."""
    result = filter_by_type(items, filters.type_filter)
    result = filter_by_status(result, filters.status_filter)
    result = filter_by_labels(result, filters.included_labels, filters.excluded_labels)
    result = filter_by_repository(result, filters.repo_filters, config)
    result = filter_by_user(result, filters.user_filter)
    return filter_by_text(result, filters.search_text)


def count_items_matching_filter(
    items: typ.Iterable[Item],
    axis: FilterAxis,
    value: str,
    excluded_labels: typ.Collection[str] = (),
    config: EngineConfig | None = None,
) -> int:
    """Count items matching a single axis value.

    Used to annotate filter choices with counts. The label axis takes one
    label name and still honours ``excluded_labels``.

    Examples
    --------
    >>> count_items_matching_filter([], FilterAxis.TYPE, "pr")
    0

    """
    items = list(items)
    match axis:
        case FilterAxis.TYPE:
            return len(filter_by_type(items, TypeFilter(value)))
        case FilterAxis.STATUS:
            return len(filter_by_status(items, StatusFilter(value)))
        case FilterAxis.LABEL:
            return len(filter_by_labels(items, (value,), excluded_labels))
        case FilterAxis.REPO:
            return len(filter_by_repository(items, (value,), config))
    return 0


def extract_available_labels(items: typ.Iterable[Item]) -> list[str]:
    """Return distinct label names sorted case-insensitively."""
    names = {label.name for item in items for label in item.labels}
    return sorted(names, key=lambda name: (name.casefold(), name))


def extract_available_repositories(
    items: typ.Iterable[Item], config: EngineConfig | None = None
) -> list[str]:
    """Return distinct repository slugs in sorted order."""
    slugs = {repository_name(item, config) for item in items}
    return sorted(slug for slug in slugs if slug)


def extract_available_users(items: typ.Iterable[Item]) -> list[str]:
    """Return distinct ``user.login`` values in sorted order."""
    return sorted({item.user.login for item in items if item.user.login})


def has_active_filters(filters: FilterConfig) -> bool:
    """Return True when any axis differs from its permissive default."""
    return (
        filters.type_filter != TypeFilter.ALL
        or filters.status_filter != StatusFilter.ALL
        or bool(filters.included_labels)
        or bool(filters.excluded_labels)
        or bool(filters.repo_filters)
        or bool(filters.user_filter.strip())
        or filters.search_text != ""
    )


def filter_summary(filters: FilterConfig) -> list[str]:
    """Describe the active axes as short human-readable phrases.

    Examples
    --------
    >>> filter_summary(FilterConfig(status_filter=StatusFilter.OPEN))
    ['Status: open']

    """
    parts: list[str] = []
    if filters.type_filter != TypeFilter.ALL:
        type_names = {TypeFilter.PR: "PRs", TypeFilter.COMMENT: "Comments"}
        parts.append(f"Type: {type_names.get(filters.type_filter, 'Issues')}")
    if filters.status_filter != StatusFilter.ALL:
        parts.append(f"Status: {filters.status_filter}")
    if filters.user_filter.strip():
        parts.append(f"User: {filters.user_filter}")
    if filters.included_labels:
        parts.append(f"Include: {', '.join(filters.included_labels)}")
    if filters.excluded_labels:
        parts.append(f"Excluded labels: {', '.join(filters.excluded_labels)}")
    if filters.search_text:
        parts.append(f'Search: "{filters.search_text}"')
    if filters.repo_filters:
        parts.append(f"Repos: {', '.join(filters.repo_filters)}")
    return parts
