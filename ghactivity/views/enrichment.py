"""Merge separately fetched pull request data back into items.

The activity feed often reduces pull request sub-records to a URL, leaving
items with synthesised titles. Callers fetch the full record themselves; the
helpers here decide which items need it, where to fetch it from and how to
fold the result back in. Nothing here performs I/O.
"""

from __future__ import annotations

import re
import typing as typ

import msgspec

from ghactivity.common.time import parse_timestamp
from ghactivity.config import DEFAULT_CONFIG
from ghactivity.items.models import Item, Label, PullRequestRef

if typ.TYPE_CHECKING:
    from ghactivity.config import EngineConfig

_GENERIC_PR_TITLE = re.compile(
    r"^Pull Request #\d+ (opened|closed|merged|labeled|unlabeled|synchronized"
    r"|reopened|edited|assigned|unassigned|review_requested"
    r"|review_request_removed)$"
)
_GENERIC_ACTION = re.compile(r"^Pull Request #\d+ (.+)$")
_REVIEW_PREFIX = "Review on: "
_REVIEW_COMMENT_PREFIX = "Review comment on: "
_GENERIC_PREFIXES = (
    f"{_REVIEW_PREFIX}Pull Request #",
    f"{_REVIEW_COMMENT_PREFIX}Pull Request #",
)


class PullRequestDetails(msgspec.Struct, kw_only=True, frozen=True):
    """Subset of the REST pull request resource used for enrichment."""

    title: str
    state: str | None = None
    body: str | None = None
    html_url: str | None = None
    labels: tuple[Label, ...] = ()
    updated_at: str | None = None
    closed_at: str | None = None
    merged_at: str | None = None
    merged: bool | None = None


def _is_pull_request_event(item: Item) -> bool:
    return "PullRequest" in (item.original_event_type or "")


def needs_pr_enrichment(item: Item) -> bool:
    """Return True for feed PR items whose title had to be synthesised."""
    if not _is_pull_request_event(item):
        return False
    return bool(_GENERIC_PR_TITLE.match(item.title)) or item.title.startswith(
        _GENERIC_PREFIXES
    )


def pr_api_url(item: Item, config: EngineConfig | None = None) -> str | None:
    """Return the REST URL for the pull request an item refers to.

    Examples
    --------
    >>> from ghactivity.items.models import Actor
    >>> item = Item(
    ...     id=1,
    ...     html_url="https://github.com/o/r/pull/42",
    ...     title="Pull Request #42 labeled",
    ...     created_at="2024-01-01T00:00:00Z",
    ...     updated_at="2024-01-01T00:00:00Z",
    ...     user=Actor(login="alice"),
    ...     original_event_type="PullRequestEvent",
    ... )
    >>> pr_api_url(item)
    'https://api.github.com/repos/o/r/pulls/42'

    """
    if not _is_pull_request_event(item):
        return None
    config = config or DEFAULT_CONFIG
    pattern = re.compile(
        rf"^{re.escape(config.html_base_url)}/([^/]+/[^/]+)/pull/(\d+)"
    )
    match = pattern.match(item.html_url)
    if match is None:
        return None
    slug, number = match.groups()
    return f"{config.repo_api_url(slug)}/pulls/{number}"


def _retitle(item: Item, details: PullRequestDetails) -> str:
    if item.original_event_type == "PullRequestReviewEvent":
        return f"{_REVIEW_PREFIX}{details.title}"
    if item.original_event_type == "PullRequestReviewCommentEvent":
        return f"{_REVIEW_COMMENT_PREFIX}{details.title}"
    match = _GENERIC_ACTION.match(item.title)
    if match is None:
        return item.title
    return f"{details.title} ({match.group(1)})"


def apply_pr_details(item: Item, details: PullRequestDetails) -> Item:
    """Return ``item`` with fetched PR data folded in.

    Fetched values win where present; labels are only replaced by a
    non-empty list. The title is rebuilt around the real PR title.
    """
    merged_at = details.merged_at or item.merged_at
    pull_request = item.pull_request
    if pull_request is not None and merged_at:
        pull_request = PullRequestRef(merged_at=merged_at, url=pull_request.url)
    return msgspec.structs.replace(
        item,
        title=_retitle(item, details),
        labels=details.labels or item.labels,
        updated_at=details.updated_at or item.updated_at,
        closed_at=details.closed_at or item.closed_at,
        merged_at=merged_at,
        merged=item.merged if details.merged is None else details.merged,
        state=details.state or item.state,
        pull_request=pull_request,
    )


def newest_review_dates(
    reviews: typ.Iterable[tuple[str, str, str]],
) -> dict[str, dict[str, str]]:
    """Index review submissions by PR URL and lower-cased reviewer login.

    ``reviews`` yields ``(pr_html_url, reviewer_login, submitted_at)``
    triples; when a reviewer submitted several reviews the newest wins.
    """
    index: dict[str, dict[str, str]] = {}
    for url, login, submitted_at in reviews:
        submitted = parse_timestamp(submitted_at)
        if submitted is None:
            continue
        per_reviewer = index.setdefault(url, {})
        key = login.casefold()
        current = parse_timestamp(per_reviewer.get(key))
        if current is None or submitted > current:
            per_reviewer[key] = submitted_at
    return index


def apply_review_dates(
    items: typ.Iterable[Item], dates: typ.Mapping[str, typ.Mapping[str, str]]
) -> list[Item]:
    """Copy review submission dates into ``reviewed_at``.

    ``dates`` maps a PR web URL to reviewer logins (lower-cased) and their
    newest submission time. Items without ``reviewed_by`` or without a
    matching entry are returned unchanged.
    """
    enriched: list[Item] = []
    for item in items:
        reviewer = item.reviewed_by
        per_reviewer = dates.get(item.html_url) if reviewer else None
        reviewed_at = (
            per_reviewer.get(reviewer.login.casefold())
            if per_reviewer and reviewer
            else None
        )
        if reviewed_at:
            item = msgspec.structs.replace(item, reviewed_at=reviewed_at)
        enriched.append(item)
    return enriched
