"""Per-kind rules turning typed feed events into canonical items.

Rules are registered against an :class:`EventKind` and looked up by
:func:`normalize_event`. A rule returns ``None`` when the event lacks the
sub-record it needs; rules never raise.
"""

from __future__ import annotations

import copy
import typing as typ

from ghactivity.common.slug import repo_owner
from ghactivity.config import DEFAULT_CONFIG, EngineConfig
from ghactivity.events import recovery
from ghactivity.events.classifier import classify_event
from ghactivity.events.models import ClassifiedEvent, EventKind, UnknownEvent
from ghactivity.items.models import Actor, Item, PullRequestRef, RepositoryRef

if typ.TYPE_CHECKING:
    from ghactivity.events.models import (
        CreateEvent,
        DeleteEvent,
        Event,
        EventEnvelope,
        ForkEvent,
        GollumEvent,
        IssueCommentEvent,
        IssuesEvent,
        PublicEvent,
        PullRequestEvent,
        PullRequestRecord,
        PullRequestReviewCommentEvent,
        PullRequestReviewEvent,
        PushEvent,
        WatchEvent,
    )

EventRule = typ.Callable[[typ.Any, EngineConfig], Item | None]
_registry: dict[EventKind, EventRule] = {}

_GOLLUM_VERBS = {
    "created": "Created",
    "edited": "Updated",
    "updated": "Updated",
    "deleted": "Deleted",
}


def register(kind: EventKind) -> typ.Callable[[EventRule], EventRule]:
    """Register a normalization rule for an event kind."""

    def _inner(func: EventRule) -> EventRule:
        _registry[kind] = func
        return func

    return _inner


def get_rule(kind: EventKind) -> EventRule | None:
    """Return the registered rule for ``kind`` if present."""
    return _registry.get(kind)


def normalize_event(
    event: Event | typ.Mapping[str, typ.Any],
    config: EngineConfig | None = None,
) -> Item | None:
    """Build the canonical item for one feed event.

    Parameters
    ----------
    event
        A classified event, or a raw envelope mapping to classify first.
    config
        Hosts and preview sizes; defaults to :data:`DEFAULT_CONFIG`.

    Returns
    -------
    Item | None
        The item, or ``None`` for unknown kinds and events missing the
        sub-record their kind requires.

    """
    if not isinstance(event, ClassifiedEvent):
        event = classify_event(event)
    if isinstance(event, UnknownEvent):
        return None
    rule = get_rule(event.kind)
    if rule is None:
        return None
    return rule(event, config or DEFAULT_CONFIG)


def _numeric_event_id(event: EventEnvelope) -> int:
    try:
        return int(event.event_id)
    except ValueError:
        return 0


def _actor(event: EventEnvelope, config: EngineConfig) -> Actor:
    login = event.actor.login
    return Actor(
        login=login,
        avatar_url=event.actor.avatar_url,
        html_url=config.user_html_url(login),
    )


def _with_profile(actor: Actor, config: EngineConfig) -> Actor:
    if actor.html_url:
        return actor
    return Actor(
        login=actor.login,
        avatar_url=actor.avatar_url,
        html_url=config.user_html_url(actor.login),
    )


def _envelope_fields(
    event: EventEnvelope, config: EngineConfig
) -> dict[str, typ.Any]:
    """Return the fields every event-derived item shares."""
    repo_name = event.repo.name
    return {
        "event_id": event.event_id,
        "created_at": event.created_at,
        "repository_url": config.repo_api_url(repo_name),
        "repository": RepositoryRef(
            full_name=repo_name, html_url=config.repo_html_url(repo_name)
        ),
        "user": _actor(event, config),
        "original_event_type": event.kind.value,
    }


def _repository_fact(
    event: EventEnvelope,
    config: EngineConfig,
    *,
    title: str,
    body: str,
    action: str,
    html_url: str | None = None,
    state: str = "open",
) -> Item:
    """Build an item for repository-level activity with no natural identity."""
    return Item(
        id=_numeric_event_id(event),
        html_url=html_url or config.repo_html_url(event.repo.name),
        title=title,
        updated_at=event.created_at,
        state=state,
        body=body,
        action=action,
        original=copy.deepcopy(event.raw_payload),
        **_envelope_fields(event, config),
    )


def _pr_html_url(
    pr: PullRequestRecord,
    number: int | None,
    event: EventEnvelope,
    config: EngineConfig,
) -> str:
    if pr.html_url:
        return pr.html_url
    repo_url = config.repo_html_url(event.repo.name)
    if number is None:
        return f"{repo_url}/pulls"
    return f"{repo_url}/pull/{number}"


def _pr_state(pr: PullRequestRecord, action: str) -> str:
    if pr.state:
        return pr.state
    return "closed" if action in {"closed", "merged"} else "open"


@register(EventKind.ISSUES)
def normalize_issue(event: IssuesEvent, config: EngineConfig) -> Item | None:
    """Copy the issue record, keeping the event time and actor."""
    issue = event.payload.issue
    if issue is None:
        return None
    repo_url = config.repo_html_url(event.repo.name)
    if issue.html_url:
        html_url = issue.html_url
    elif issue.number is not None:
        html_url = f"{repo_url}/issues/{issue.number}"
    else:
        html_url = f"{repo_url}/issues"
    action = event.payload.action or "updated"
    number_suffix = f" #{issue.number}" if issue.number is not None else ""
    return Item(
        id=recovery.first_present([issue.id, _numeric_event_id(event)]),
        html_url=html_url,
        title=recovery.usable_title(issue.title) or f"Issue{number_suffix} {action}",
        updated_at=issue.updated_at or event.created_at,
        state=issue.state or "open",
        body=issue.body,
        labels=issue.labels,
        closed_at=issue.closed_at,
        number=issue.number,
        assignee=issue.assignee,
        assignees=issue.assignees,
        pull_request=issue.pull_request,
        action=action,
        original=copy.deepcopy(event.raw_payload),
        **_envelope_fields(event, config),
    )


@register(EventKind.PULL_REQUEST)
def normalize_pull_request(
    event: PullRequestEvent, config: EngineConfig
) -> Item | None:
    """Build a PR item, recovering number, title and body when reduced."""
    payload = event.payload
    pr = payload.pull_request
    if pr is None:
        return None
    action = payload.action or "updated"
    if action == "closed" and (pr.merged or pr.merged_at):
        action = "merged"
    number = recovery.recover_pr_number(pr, payload.number)
    html_url = _pr_html_url(pr, number, event, config)
    return Item(
        id=recovery.first_present([pr.id, _numeric_event_id(event)]),
        html_url=html_url,
        title=recovery.recover_pr_title(pr, number, action),
        updated_at=pr.updated_at or event.created_at,
        state=_pr_state(pr, action),
        body=recovery.recover_body(
            pr.body, f"Pull request {action} by {event.actor.login}"
        ),
        labels=recovery.recover_labels(payload.labels, pr.labels),
        closed_at=pr.closed_at,
        merged_at=pr.merged_at,
        merged=pr.merged,
        number=number,
        assignee=pr.assignee,
        assignees=pr.assignees,
        pull_request=PullRequestRef(merged_at=pr.merged_at, url=html_url),
        action=action,
        original=copy.deepcopy(event.raw_payload),
        **_envelope_fields(event, config),
    )


@register(EventKind.PULL_REQUEST_REVIEW)
def normalize_pull_request_review(
    event: PullRequestReviewEvent, config: EngineConfig
) -> Item | None:
    """Build a review item attributed to the PR author when known."""
    payload = event.payload
    pr = payload.pull_request
    if pr is None:
        return None
    review = payload.review
    number = recovery.recover_pr_number(pr, payload.number)
    html_url = _pr_html_url(pr, number, event, config)
    fields = _envelope_fields(event, config)
    reviewer: Actor = fields.pop("user")
    author = pr.user
    if author is not None and author.login.casefold() != reviewer.login.casefold():
        user = _with_profile(author, config)
    else:
        user = reviewer
    return Item(
        id=recovery.first_present(
            [review.id if review else None, pr.id, _numeric_event_id(event)]
        ),
        html_url=html_url,
        title=f"Review on: {recovery.recover_pr_title(pr, number)}",
        updated_at=pr.updated_at or event.created_at,
        reviewed_at=review.submitted_at if review else None,
        state=pr.state or "open",
        body=recovery.recover_body(
            review.body if review else None, f"Review by {reviewer.login}"
        ),
        labels=pr.labels or (),
        closed_at=pr.closed_at,
        merged_at=pr.merged_at,
        merged=pr.merged,
        number=number,
        pull_request=PullRequestRef(merged_at=pr.merged_at, url=html_url),
        action=payload.action or "reviewed",
        user=user,
        reviewed_by=reviewer,
        original=copy.deepcopy(event.raw_payload),
        **fields,
    )


@register(EventKind.ISSUE_COMMENT)
def normalize_issue_comment(
    event: IssueCommentEvent, config: EngineConfig
) -> Item | None:
    """Build a comment item; identity comes from the comment."""
    comment = event.payload.comment
    issue = event.payload.issue
    if comment is None or issue is None:
        return None
    issue_title = recovery.usable_title(issue.title)
    if issue_title is None:
        issue_title = f"#{issue.number}" if issue.number is not None else "issue"
    return Item(
        id=recovery.first_present([comment.id, _numeric_event_id(event)]),
        html_url=comment.html_url
        or issue.html_url
        or config.repo_html_url(event.repo.name),
        title=f"Comment on: {issue_title}",
        updated_at=comment.updated_at or event.created_at,
        state=issue.state or "open",
        body=comment.body,
        labels=issue.labels,
        closed_at=issue.closed_at,
        number=issue.number,
        pull_request=issue.pull_request,
        action=event.payload.action or "created",
        original=copy.deepcopy(event.raw_payload),
        **_envelope_fields(event, config),
    )


@register(EventKind.PULL_REQUEST_REVIEW_COMMENT)
def normalize_pull_request_review_comment(
    event: PullRequestReviewCommentEvent, config: EngineConfig
) -> Item | None:
    """Build a review-comment item linked to its pull request."""
    payload = event.payload
    comment = payload.comment
    pr = payload.pull_request
    if comment is None or pr is None:
        return None
    number = recovery.recover_pr_number(pr, payload.number)
    pr_url = _pr_html_url(pr, number, event, config)
    return Item(
        id=recovery.first_present([comment.id, _numeric_event_id(event)]),
        html_url=comment.html_url or pr_url,
        title=f"Review comment on: {recovery.recover_pr_title(pr, number)}",
        updated_at=comment.updated_at or event.created_at,
        state=pr.state or "open",
        body=comment.body,
        labels=pr.labels or (),
        closed_at=pr.closed_at,
        merged_at=pr.merged_at,
        merged=pr.merged,
        number=number,
        pull_request=PullRequestRef(merged_at=pr.merged_at, url=pr_url),
        action=payload.action or "created",
        original=copy.deepcopy(event.raw_payload),
        **_envelope_fields(event, config),
    )


def _push_title(event: PushEvent, branch: str) -> str:
    target = f"{repo_owner(event.repo.name)}/{branch}"
    count = recovery.commit_count(event.payload)
    if not count:
        head, before = event.payload.head, event.payload.before
        if head and before and head != before:
            return f"Committed to {target}"
        count = 0
    noun = "commit" if count == 1 else "commits"
    title = f"Committed {count} {noun} to {target}"
    distinct = recovery.distinct_count(event.payload, count)
    if distinct and distinct != count:
        title += f" ({distinct} distinct)"
    return title


def _push_body(event: PushEvent, limit: int) -> str:
    lines = [f"Repository: {event.repo.name}"]
    commits = event.payload.commits or ()
    if commits:
        shown = commits[:limit]
        lines.extend(f"- {recovery.commit_headline(commit)}" for commit in shown)
        total = max(recovery.commit_count(event.payload) or 0, len(commits))
        if total > len(shown):
            lines.append(f"... and {total - len(shown)} more commits")
    elif (commit_range := recovery.abbreviated_range(event.payload)) is not None:
        lines.append(f"- {commit_range}")
    return "\n".join(lines)


@register(EventKind.PUSH)
def normalize_push(event: PushEvent, config: EngineConfig) -> Item:
    """Summarise a push; ``original`` is the whole envelope."""
    branch = recovery.branch_name(event.payload.ref)
    return Item(
        id=_numeric_event_id(event),
        html_url=f"{config.repo_html_url(event.repo.name)}/commits/{branch}",
        title=_push_title(event, branch),
        updated_at=event.created_at,
        body=_push_body(event, config.body_preview_limit),
        action="pushed",
        original=copy.deepcopy(event.raw),
        **_envelope_fields(event, config),
    )


@register(EventKind.CREATE)
def normalize_create(event: CreateEvent, config: EngineConfig) -> Item:
    """Describe a branch, tag or repository creation."""
    payload = event.payload
    ref_type = payload.ref_type or "repository"
    ref = payload.ref or ""
    repo_url = config.repo_html_url(event.repo.name)
    if ref_type == "branch":
        title, html_url = f"Created branch {ref}", f"{repo_url}/tree/{ref}"
    elif ref_type == "tag":
        title, html_url = f"Created tag {ref}", f"{repo_url}/releases/tag/{ref}"
    else:
        title, html_url = "Created repository", repo_url
        if payload.description:
            title = f"{title}: {payload.description}"
    return _repository_fact(
        event,
        config,
        title=title,
        body=payload.description or "",
        action="created",
        html_url=html_url,
    )


@register(EventKind.FORK)
def normalize_fork(event: ForkEvent, config: EngineConfig) -> Item:
    """Describe a fork, linking to the new repository when known."""
    forkee = event.payload.forkee
    name = (forkee.full_name if forkee else None) or "unknown repository"
    return _repository_fact(
        event,
        config,
        title=f"Forked repository to {name}",
        body=f"Repository forked from {event.repo.name} to {name}",
        action="forked",
        html_url=forkee.html_url if forkee else None,
    )


@register(EventKind.WATCH)
def normalize_watch(event: WatchEvent, config: EngineConfig) -> Item:
    """Describe a star; any action other than ``started`` is an unstar."""
    action = event.payload.action or "unstarred"
    verb = "Starred" if action == "started" else "Unstarred"
    return _repository_fact(
        event,
        config,
        title=f"{verb} repository",
        body=f"{event.actor.login} {action} the repository {event.repo.name}",
        action=action,
    )


@register(EventKind.PUBLIC)
def normalize_public(event: PublicEvent, config: EngineConfig) -> Item:
    """Describe a repository being made public."""
    return _repository_fact(
        event,
        config,
        title="Made repository public",
        body=f"{event.actor.login} made the repository {event.repo.name} public",
        action="publicized",
    )


@register(EventKind.DELETE)
def normalize_delete(event: DeleteEvent, config: EngineConfig) -> Item:
    """Describe a branch or tag deletion; the item is always closed."""
    ref_type = event.payload.ref_type or "branch"
    ref = event.payload.ref or ""
    if ref_type in {"branch", "tag"}:
        title = f"Deleted {ref_type} {ref}"
    else:
        title = f"Deleted {ref_type}"
    return _repository_fact(
        event,
        config,
        title=title,
        body=f"{event.actor.login} deleted {ref_type} {ref} from {event.repo.name}",
        action="deleted",
        state="closed",
    )


@register(EventKind.GOLLUM)
def normalize_gollum(event: GollumEvent, config: EngineConfig) -> Item | None:
    """Summarise wiki edits; events without pages produce no item."""
    pages = event.payload.pages
    if not pages:
        return None
    first = pages[0]
    action = first.action or "updated"
    verb = _GOLLUM_VERBS.get(action, action.capitalize())
    if len(pages) == 1:
        title = f"{verb} wiki page: {first.title or first.page_name or ''}".rstrip()
    else:
        title = f"{verb} {len(pages)} wiki pages"
    limit = config.body_preview_limit
    lines = [
        f"- {page.title or page.page_name or ''} ({page.action or 'updated'})"
        for page in pages[:limit]
    ]
    if len(pages) > limit:
        lines.append(f"... and {len(pages) - limit} more pages")
    return _repository_fact(
        event,
        config,
        title=title,
        body="\n".join(lines),
        action=action,
        html_url=first.html_url or f"{config.repo_html_url(event.repo.name)}/wiki",
    )
