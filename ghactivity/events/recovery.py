"""Fallback chains for fields the activity feed omits.

Each step is a small function returning ``None`` when it cannot supply a
value, and :func:`first_present` walks the steps in order. Keeping the steps
separate lets each one be exercised on its own.
"""

from __future__ import annotations

import re
import typing as typ

if typ.TYPE_CHECKING:
    from ghactivity.events.models import (
        CommitRecord,
        PullRequestRecord,
        PushPayload,
    )
    from ghactivity.items.models import Label

_HTML_PULL_NUMBER = re.compile(r"/pull/(\d+)")
_API_PULLS_NUMBER = re.compile(r"/pulls/(\d+)")
_PLACEHOLDER_TITLE = "undefined"

T = typ.TypeVar("T")


def first_present(candidates: typ.Iterable[T | None]) -> T | None:
    """Return the first candidate that is not ``None``.

    Examples
    --------
    >>> first_present([None, 0, 3])
    0
    >>> first_present([]) is None
    True

    """
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None


def _number_from_url(pattern: re.Pattern[str], url: str | None) -> int | None:
    if not url:
        return None
    match = pattern.search(url)
    return int(match.group(1)) if match else None


def number_from_record(pr: PullRequestRecord) -> int | None:
    """Return the explicit number on the pull request sub-record."""
    return pr.number


def number_from_html_url(pr: PullRequestRecord) -> int | None:
    """Extract ``<n>`` from a ``/pull/<n>`` web URL."""
    return first_present(
        _number_from_url(_HTML_PULL_NUMBER, url) for url in (pr.html_url, pr.url)
    )


def number_from_api_url(pr: PullRequestRecord) -> int | None:
    """Extract ``<n>`` from a ``/pulls/<n>`` API URL."""
    return first_present(
        _number_from_url(_API_PULLS_NUMBER, url) for url in (pr.url, pr.html_url)
    )


def recover_pr_number(pr: PullRequestRecord, payload_number: int | None) -> int | None:
    """Recover a pull request number from a possibly reduced sub-record.

    The record's own ``number`` wins, then the payload-level ``number``, then
    the web URL, then the API URL.
    """
    return first_present(
        step()
        for step in (
            lambda: number_from_record(pr),
            lambda: payload_number,
            lambda: number_from_html_url(pr),
            lambda: number_from_api_url(pr),
        )
    )


def usable_title(title: str | None) -> str | None:
    """Return ``title`` unless it is blank or the ``undefined`` placeholder."""
    if not isinstance(title, str):
        return None
    stripped = title.strip()
    if not stripped or stripped == _PLACEHOLDER_TITLE:
        return None
    return title


def synthesized_pr_title(number: int | None, action: str | None = None) -> str:
    """Build the generic title used when the feed dropped the PR title.

    Examples
    --------
    >>> synthesized_pr_title(42, "labeled")
    'Pull Request #42 labeled'
    >>> synthesized_pr_title(None, "opened")
    'Pull Request opened'
    >>> synthesized_pr_title(7)
    'Pull Request #7'

    """
    parts = ["Pull Request"]
    if number is not None:
        parts.append(f"#{number}")
    if action:
        parts.append(action)
    return " ".join(parts)


def recover_pr_title(
    pr: PullRequestRecord, number: int | None, action: str | None = None
) -> str:
    """Return the PR title, or a synthesised one when it is unusable."""
    return usable_title(pr.title) or synthesized_pr_title(number, action)


def recover_body(body: str | None, fallback: str) -> str:
    """Return ``body`` when it has content, otherwise ``fallback``."""
    if isinstance(body, str) and body.strip():
        return body
    return fallback


def recover_labels(
    payload_labels: tuple[Label, ...] | None,
    pr_labels: tuple[Label, ...] | None,
) -> tuple[Label, ...]:
    """Prefer payload-level labels, then PR labels, then none."""
    return first_present([payload_labels, pr_labels]) or ()


def commit_count(payload: PushPayload) -> int | None:
    """Recover how many commits a push carried.

    The length of a non-empty ``commits`` list wins, then ``size``. Returns
    ``None`` when neither is available so callers can tell "unknown" apart
    from an explicit zero.
    """
    if payload.commits:
        return len(payload.commits)
    return payload.size


def distinct_count(payload: PushPayload, count: int | None) -> int | None:
    """Return ``distinct_size``, defaulting to the recovered commit count."""
    return first_present([payload.distinct_size, count])


def commit_headline(commit: CommitRecord) -> str:
    """Return the first line of a commit message."""
    message = (commit.message or "").strip()
    if not message:
        return "No commit message"
    return message.splitlines()[0]


def abbreviated_range(payload: PushPayload) -> str | None:
    """Return ``before...head`` with 7-character hashes, if both are known."""
    if not payload.before or not payload.head:
        return None
    return f"{payload.before[:7]}...{payload.head[:7]}"


def branch_name(ref: str | None) -> str:
    """Strip ``refs/heads/`` from a push ref, defaulting to ``main``."""
    if not ref:
        return "main"
    return ref.removeprefix("refs/heads/") or "main"
