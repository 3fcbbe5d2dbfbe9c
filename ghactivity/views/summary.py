"""Bucket items into the sections of the activity summary.

Each item lands in at most one :class:`SummaryGroup`. Pull requests and
issues are placed by which of their timestamps fall inside the window;
reviews are counted once per reviewer and pull request.
"""

from __future__ import annotations

import enum
import typing as typ

from ghactivity.common.slug import base_url
from ghactivity.items.window import DateWindow

if typ.TYPE_CHECKING:
    from ghactivity.items.models import Item


class SummaryGroup(enum.StrEnum):
    """Summary sections in display order."""

    PRS_OPENED = "PRs - opened"
    PRS_UPDATED = "PRs - updated"
    PRS_REVIEWED = "PRs - reviewed"
    PRS_MERGED = "PRs - merged"
    PRS_CLOSED = "PRs - closed"
    ISSUES_OPENED = "Issues - opened"
    ISSUES_UPDATED = "Issues - updated"
    ISSUES_CLOSED = "Issues - closed"
    COMMENTS = "Comments"
    COMMITS = "Commits"
    OTHER_EVENTS = "Other Events"


class ActivityKind(enum.StrEnum):
    """Coarse kind used to route an item to a summary section."""

    PULL_REQUEST = "pull_request"
    ISSUE = "issue"
    COMMENT = "comment"
    COMMIT = "commit"
    OTHER = "other"


_KIND_BY_EVENT_TYPE = {
    "PullRequestReviewEvent": ActivityKind.PULL_REQUEST,
    "PullRequestReviewCommentEvent": ActivityKind.COMMENT,
    "PullRequestEvent": ActivityKind.PULL_REQUEST,
    "IssuesEvent": ActivityKind.ISSUE,
    "IssueCommentEvent": ActivityKind.COMMENT,
    "PushEvent": ActivityKind.COMMIT,
    "CreateEvent": ActivityKind.OTHER,
    "DeleteEvent": ActivityKind.OTHER,
    "ForkEvent": ActivityKind.OTHER,
    "WatchEvent": ActivityKind.OTHER,
    "PublicEvent": ActivityKind.OTHER,
    "GollumEvent": ActivityKind.OTHER,
}

_OTHER_TITLE_PREFIXES = (
    "Created branch",
    "Created tag",
    "Created repository",
    "Deleted branch",
    "Deleted tag",
    "Forked repository",
    "Starred",
    "Unstarred",
    "Made repository public",
)


def event_kind_for_item(item: Item) -> ActivityKind:
    """Classify an item, preferring its feed event type over its title."""
    if item.original_event_type in _KIND_BY_EVENT_TYPE:
        return _KIND_BY_EVENT_TYPE[item.original_event_type]
    title = item.title
    if title.startswith("Review on:"):
        return ActivityKind.PULL_REQUEST
    if title.startswith(("Review comment on:", "Comment on:")):
        return ActivityKind.COMMENT
    if title.startswith("Committed"):
        return ActivityKind.COMMIT
    if title.startswith(_OTHER_TITLE_PREFIXES) or "wiki page" in title:
        return ActivityKind.OTHER
    return ActivityKind.PULL_REQUEST if item.pull_request else ActivityKind.ISSUE


def _in_window(window: DateWindow, value: str | None) -> bool:
    return bool(value) and window.contains_timestamp(value) is True


def _pull_request_group(item: Item, window: DateWindow) -> SummaryGroup | None:
    merged_at = item.merged_at or (
        item.pull_request.merged_at if item.pull_request else None
    )
    created = _in_window(window, item.created_at)
    merged = _in_window(window, merged_at)
    closed = _in_window(window, item.closed_at)
    if merged:
        return SummaryGroup.PRS_MERGED
    if item.state == "closed" and closed and not merged_at:
        return SummaryGroup.PRS_CLOSED
    if created:
        return SummaryGroup.PRS_OPENED
    if _in_window(window, item.updated_at) and not closed:
        return SummaryGroup.PRS_UPDATED
    return None


def _issue_group(item: Item, window: DateWindow) -> SummaryGroup | None:
    created = _in_window(window, item.created_at)
    closed = _in_window(window, item.closed_at)
    if item.state == "closed" and closed:
        return SummaryGroup.ISSUES_CLOSED
    if created:
        return SummaryGroup.ISSUES_OPENED
    if _in_window(window, item.updated_at) and not closed:
        return SummaryGroup.ISSUES_UPDATED
    return None


def _review_key(item: Item) -> str:
    reviewer = item.reviewed_by or item.user
    return f"{reviewer.login}:{base_url(item.html_url)}"


def group_summary(
    items: typ.Iterable[Item], window: DateWindow | None = None
) -> dict[SummaryGroup, list[Item]]:
    """Place each item in its summary section.

    Parameters
    ----------
    items
        Already windowed and deduplicated items.
    window
        Window used to decide whether a pull request or issue was opened,
        closed, merged or merely updated; ``None`` treats every timestamp as
        inside.

    Returns
    -------
    dict[SummaryGroup, list[Item]]
        Every section in display order, possibly empty. Review comments and
        items matching no section are left out.

    """
    window = window or DateWindow()
    groups: dict[SummaryGroup, list[Item]] = {group: [] for group in SummaryGroup}
    seen_reviews: set[str] = set()
    for item in items:
        group = _group_for(item, window, seen_reviews)
        if group is not None:
            groups[group].append(item)
    return groups


def _group_for(
    item: Item, window: DateWindow, seen_reviews: set[str]
) -> SummaryGroup | None:
    kind = event_kind_for_item(item)
    if kind == ActivityKind.PULL_REQUEST and item.title.startswith("Review on:"):
        key = _review_key(item)
        if key in seen_reviews:
            return None
        seen_reviews.add(key)
        return SummaryGroup.PRS_REVIEWED
    match kind:
        case ActivityKind.COMMENT:
            if item.title.startswith("Review comment on:"):
                return None
            return SummaryGroup.COMMENTS
        case ActivityKind.COMMIT:
            return SummaryGroup.COMMITS
        case ActivityKind.OTHER:
            return SummaryGroup.OTHER_EVENTS
        case ActivityKind.PULL_REQUEST:
            return _pull_request_group(item, window)
    return _issue_group(item, window)
