"""Canonical item structures shared by both activity sources."""

from __future__ import annotations

import typing as typ

import msgspec


class Label(msgspec.Struct, kw_only=True, frozen=True, omit_defaults=True):
    """Issue or pull request label.

    Attributes
    ----------
    name
        Label name as shown on GitHub.
    color
        Hex colour without the leading ``#``.
    description
        Optional label description.

    """

    name: str
    color: str | None = None
    description: str | None = None


class Actor(msgspec.Struct, kw_only=True, frozen=True, omit_defaults=True):
    """GitHub account that authored or triggered an activity."""

    login: str
    avatar_url: str = ""
    html_url: str = ""


class RepositoryRef(msgspec.Struct, kw_only=True, frozen=True, omit_defaults=True):
    """Repository an item belongs to."""

    full_name: str
    html_url: str = ""


class PullRequestRef(msgspec.Struct, kw_only=True, frozen=True, omit_defaults=True):
    """Marker sub-record present only on pull-request-derived items."""

    merged_at: str | None = None
    url: str | None = None


class Item(msgspec.Struct, kw_only=True, frozen=True, omit_defaults=True):
    """Source-agnostic representation of one unit of activity.

    Items are produced by the event normalizer from activity-feed events and
    converted directly from search results. ``user`` is the actor the item is
    attributed to; for review items the reviewer lives in ``reviewed_by`` and
    ``user`` holds the pull request author when known.

    Attributes
    ----------
    id
        Numeric identity of the issue, pull request or comment; synthesised
        items use the numeric event id.
    html_url
        Web URL; also the deduplication identity.
    title
        Display title; never empty on a materialised item.
    created_at, updated_at
        ISO-8601 timestamps.
    event_id
        Originating feed event id, when the item came from an event.
    action
        Semantic verb such as ``opened``, ``merged`` or ``pushed``.
    reviewed_at
        Review submission time written by review-date enrichment.
    pull_request
        Present iff the item is a pull request or a review on one.
    original
        Untouched payload (or full event, for pushes) that produced the item.
    original_event_type
        Feed discriminator, serialised as ``originalEventType``.
    reviewed_by
        Reviewer on review items, serialised as ``reviewedBy``.

    """

    id: int
    html_url: str
    title: str
    created_at: str
    updated_at: str
    user: Actor
    state: str = "open"
    event_id: str | None = None
    action: str | None = None
    closed_at: str | None = None
    merged_at: str | None = None
    reviewed_at: str | None = None
    merged: bool | None = None
    body: str | None = None
    labels: tuple[Label, ...] = ()
    repository_url: str | None = None
    repository: RepositoryRef | None = None
    number: int | None = None
    assignee: Actor | None = None
    assignees: tuple[Actor, ...] = ()
    pull_request: PullRequestRef | None = None
    original: typ.Any = None
    original_event_type: str | None = msgspec.field(
        default=None, name="originalEventType"
    )
    reviewed_by: Actor | None = msgspec.field(default=None, name="reviewedBy")

    @property
    def label_names(self) -> tuple[str, ...]:
        """Return label names in their stored order."""
        return tuple(label.name for label in self.labels)

    @property
    def is_merged(self) -> bool:
        """Return True for pull requests with a merge timestamp or flag."""
        if self.pull_request is None:
            return False
        return bool(self.pull_request.merged_at or self.merged)
