"""Typed activity-feed event variants.

Every recognised feed discriminator has one envelope struct carrying a
payload struct with only the fields that kind actually sends. Payload fields
are optional throughout because the feed routinely reduces sub-records to a
bare URL; the normalizer decides which fields are required per kind.
"""

from __future__ import annotations

import enum
import typing as typ

import msgspec

from ghactivity.diagnostics import SkipReason
from ghactivity.items.models import Actor, Label, PullRequestRef


class EventKind(enum.StrEnum):
    """Feed discriminators understood by the normalizer."""

    ISSUES = "IssuesEvent"
    PULL_REQUEST = "PullRequestEvent"
    PULL_REQUEST_REVIEW = "PullRequestReviewEvent"
    ISSUE_COMMENT = "IssueCommentEvent"
    PULL_REQUEST_REVIEW_COMMENT = "PullRequestReviewCommentEvent"
    PUSH = "PushEvent"
    CREATE = "CreateEvent"
    DELETE = "DeleteEvent"
    FORK = "ForkEvent"
    WATCH = "WatchEvent"
    PUBLIC = "PublicEvent"
    GOLLUM = "GollumEvent"
    UNKNOWN = "unknown"


class EventActor(msgspec.Struct, kw_only=True, frozen=True):
    """Account that triggered a feed event."""

    login: str
    avatar_url: str = ""


class EventRepo(msgspec.Struct, kw_only=True, frozen=True):
    """Repository a feed event targets."""

    name: str
    url: str = ""


class IssueRecord(msgspec.Struct, kw_only=True, frozen=True, omit_defaults=True):
    """Issue sub-record carried by issue and issue-comment events."""

    id: int | None = None
    number: int | None = None
    title: str | None = None
    html_url: str | None = None
    state: str | None = None
    body: str | None = None
    labels: tuple[Label, ...] = ()
    created_at: str | None = None
    updated_at: str | None = None
    closed_at: str | None = None
    user: Actor | None = None
    assignee: Actor | None = None
    assignees: tuple[Actor, ...] = ()
    pull_request: PullRequestRef | None = None


class PullRequestRecord(msgspec.Struct, kw_only=True, frozen=True, omit_defaults=True):
    """Pull request sub-record; frequently reduced to ``url`` alone."""

    id: int | None = None
    number: int | None = None
    title: str | None = None
    html_url: str | None = None
    url: str | None = None
    state: str | None = None
    body: str | None = None
    labels: tuple[Label, ...] | None = None
    created_at: str | None = None
    updated_at: str | None = None
    closed_at: str | None = None
    merged_at: str | None = None
    merged: bool | None = None
    user: Actor | None = None
    assignee: Actor | None = None
    assignees: tuple[Actor, ...] = ()


class ReviewRecord(msgspec.Struct, kw_only=True, frozen=True, omit_defaults=True):
    """Review sub-record of a pull-request-review event."""

    id: int | None = None
    state: str | None = None
    body: str | None = None
    html_url: str | None = None
    submitted_at: str | None = None


class CommentRecord(msgspec.Struct, kw_only=True, frozen=True, omit_defaults=True):
    """Issue or review comment sub-record."""

    id: int | None = None
    html_url: str | None = None
    body: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class CommitRecord(msgspec.Struct, kw_only=True, frozen=True, omit_defaults=True):
    """One commit listed in a push payload."""

    sha: str | None = None
    message: str | None = None
    distinct: bool | None = None


class ForkeeRecord(msgspec.Struct, kw_only=True, frozen=True, omit_defaults=True):
    """Destination repository of a fork."""

    full_name: str | None = None
    html_url: str | None = None


class WikiPage(msgspec.Struct, kw_only=True, frozen=True, omit_defaults=True):
    """One wiki page touched by a Gollum event."""

    page_name: str | None = None
    title: str | None = None
    action: str | None = None
    html_url: str | None = None


class IssuesPayload(msgspec.Struct, kw_only=True, frozen=True):
    """Payload of ``IssuesEvent``."""

    action: str | None = None
    issue: IssueRecord | None = None


class PullRequestPayload(msgspec.Struct, kw_only=True, frozen=True):
    """Payload of ``PullRequestEvent``."""

    action: str | None = None
    number: int | None = None
    pull_request: PullRequestRecord | None = None
    labels: tuple[Label, ...] | None = None


class PullRequestReviewPayload(msgspec.Struct, kw_only=True, frozen=True):
    """Payload of ``PullRequestReviewEvent``."""

    action: str | None = None
    number: int | None = None
    pull_request: PullRequestRecord | None = None
    review: ReviewRecord | None = None


class IssueCommentPayload(msgspec.Struct, kw_only=True, frozen=True):
    """Payload of ``IssueCommentEvent``."""

    action: str | None = None
    issue: IssueRecord | None = None
    comment: CommentRecord | None = None


class PullRequestReviewCommentPayload(msgspec.Struct, kw_only=True, frozen=True):
    """Payload of ``PullRequestReviewCommentEvent``."""

    action: str | None = None
    number: int | None = None
    pull_request: PullRequestRecord | None = None
    comment: CommentRecord | None = None


class PushPayload(msgspec.Struct, kw_only=True, frozen=True):
    """Payload of ``PushEvent``."""

    ref: str | None = None
    head: str | None = None
    before: str | None = None
    size: int | None = None
    distinct_size: int | None = None
    commits: tuple[CommitRecord, ...] | None = None


class RefPayload(msgspec.Struct, kw_only=True, frozen=True):
    """Payload of ``CreateEvent`` and ``DeleteEvent``."""

    ref: str | None = None
    ref_type: str | None = None
    master_branch: str | None = None
    description: str | None = None


class ForkPayload(msgspec.Struct, kw_only=True, frozen=True):
    """Payload of ``ForkEvent``."""

    forkee: ForkeeRecord | None = None


class WatchPayload(msgspec.Struct, kw_only=True, frozen=True):
    """Payload of ``WatchEvent``."""

    action: str | None = None


class PublicPayload(msgspec.Struct, kw_only=True, frozen=True):
    """Payload of ``PublicEvent``; GitHub sends an empty object."""


class GollumPayload(msgspec.Struct, kw_only=True, frozen=True):
    """Payload of ``GollumEvent``."""

    pages: tuple[WikiPage, ...] = ()


class EventEnvelope(msgspec.Struct, kw_only=True, frozen=True, tag_field="type"):
    """Fields shared by every recognised feed event.

    ``raw`` is not part of the feed schema: the classifier stores a deep copy
    of the undecoded envelope there so items can expose the untouched input.
    """

    id: str | int
    actor: EventActor
    repo: EventRepo
    created_at: str
    public: bool = True
    raw: dict[str, typ.Any] = msgspec.field(default_factory=dict)

    @property
    def kind(self) -> EventKind:
        """Return the discriminator this envelope was decoded from."""
        return EventKind(self.__struct_config__.tag)

    @property
    def event_id(self) -> str:
        """Return the event id as a string."""
        return str(self.id)

    @property
    def raw_payload(self) -> typ.Any:  # noqa: ANN401
        """Return the undecoded payload from ``raw``."""
        return self.raw.get("payload")


class IssuesEvent(EventEnvelope, tag=EventKind.ISSUES.value):
    """Issue opened, closed, labelled or otherwise changed."""

    payload: IssuesPayload = msgspec.field(default_factory=IssuesPayload)


class PullRequestEvent(EventEnvelope, tag=EventKind.PULL_REQUEST.value):
    """Pull request lifecycle change."""

    payload: PullRequestPayload = msgspec.field(default_factory=PullRequestPayload)


class PullRequestReviewEvent(EventEnvelope, tag=EventKind.PULL_REQUEST_REVIEW.value):
    """Review submitted on a pull request."""

    payload: PullRequestReviewPayload = msgspec.field(
        default_factory=PullRequestReviewPayload
    )


class IssueCommentEvent(EventEnvelope, tag=EventKind.ISSUE_COMMENT.value):
    """Comment on an issue or pull request conversation."""

    payload: IssueCommentPayload = msgspec.field(default_factory=IssueCommentPayload)


class PullRequestReviewCommentEvent(
    EventEnvelope, tag=EventKind.PULL_REQUEST_REVIEW_COMMENT.value
):
    """Inline comment on a pull request diff."""

    payload: PullRequestReviewCommentPayload = msgspec.field(
        default_factory=PullRequestReviewCommentPayload
    )


class PushEvent(EventEnvelope, tag=EventKind.PUSH.value):
    """Commits pushed to a branch."""

    payload: PushPayload = msgspec.field(default_factory=PushPayload)


class CreateEvent(EventEnvelope, tag=EventKind.CREATE.value):
    """Branch, tag or repository created."""

    payload: RefPayload = msgspec.field(default_factory=RefPayload)


class DeleteEvent(EventEnvelope, tag=EventKind.DELETE.value):
    """Branch or tag deleted."""

    payload: RefPayload = msgspec.field(default_factory=RefPayload)


class ForkEvent(EventEnvelope, tag=EventKind.FORK.value):
    """Repository forked."""

    payload: ForkPayload = msgspec.field(default_factory=ForkPayload)


class WatchEvent(EventEnvelope, tag=EventKind.WATCH.value):
    """Repository starred."""

    payload: WatchPayload = msgspec.field(default_factory=WatchPayload)


class PublicEvent(EventEnvelope, tag=EventKind.PUBLIC.value):
    """Private repository made public."""

    payload: PublicPayload = msgspec.field(default_factory=PublicPayload)


class GollumEvent(EventEnvelope, tag=EventKind.GOLLUM.value):
    """Wiki pages created or edited."""

    payload: GollumPayload = msgspec.field(default_factory=GollumPayload)


class UnknownEvent(msgspec.Struct, kw_only=True, frozen=True):
    """Envelope the classifier could not decode into a known variant.

    Attributes
    ----------
    type
        Discriminator as sent, or an empty string when absent.
    id
        Event id as sent, or ``?`` when absent.
    reason
        Why no variant applied.
    detail
        Decoder message or the unrecognised discriminator.
    raw
        The envelope as received.

    """

    type: str
    id: str
    reason: SkipReason
    detail: str = ""
    raw: typ.Any = None

    @property
    def kind(self) -> EventKind:
        """Return :attr:`EventKind.UNKNOWN`."""
        return EventKind.UNKNOWN


KnownEvent = (
    IssuesEvent
    | PullRequestEvent
    | PullRequestReviewEvent
    | IssueCommentEvent
    | PullRequestReviewCommentEvent
    | PushEvent
    | CreateEvent
    | DeleteEvent
    | ForkEvent
    | WatchEvent
    | PublicEvent
    | GollumEvent
)
Event = KnownEvent | UnknownEvent

ClassifiedEvent = (EventEnvelope, UnknownEvent)
"""Types already produced by the classifier, for ``isinstance`` checks."""
