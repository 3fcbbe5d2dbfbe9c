"""Unit tests for summary grouping."""

from __future__ import annotations

import pytest

from ghactivity.items.models import Item
from ghactivity.items.window import DateWindow
from ghactivity.views import (
    ActivityKind,
    SummaryGroup,
    event_kind_for_item,
    group_summary,
)
from tests.helpers.event_builders import build_item

_OLD = "2023-06-01T00:00:00Z"


@pytest.fixture
def window() -> DateWindow:
    """Return the window used throughout this module."""
    return DateWindow.from_strings("2024-01-10", "2024-01-20")


def _pr(number: int, **fields: object) -> Item:
    return build_item(
        f"https://github.com/octo/widgets/pull/{number}",
        title=f"PR {number}",
        pull_request=True,
        **fields,
    )


def _issue(number: int, **fields: object) -> Item:
    return build_item(
        f"https://github.com/octo/widgets/issues/{number}",
        title=f"Issue {number}",
        **fields,
    )


class TestEventKindForItem:
    """Tests for event_kind_for_item."""

    @pytest.mark.parametrize(
        ("title", "event_type", "expected"),
        [
            ("Anything", "PushEvent", ActivityKind.COMMIT),
            ("Anything", "PullRequestReviewCommentEvent", ActivityKind.COMMENT),
            ("Review on: Fix", None, ActivityKind.PULL_REQUEST),
            ("Comment on: Fix", None, ActivityKind.COMMENT),
            ("Committed 2 commits to octo/main", None, ActivityKind.COMMIT),
            ("Created tag v1", None, ActivityKind.OTHER),
            ("Updated wiki page: Home", None, ActivityKind.OTHER),
            ("Widget is broken", None, ActivityKind.ISSUE),
        ],
    )
    def test_classification(
        self, title: str, event_type: str | None, expected: ActivityKind
    ) -> None:
        """The feed event type wins; titles decide otherwise."""
        item = build_item(title=title, original_event_type=event_type)

        assert event_kind_for_item(item) == expected


class TestGroupSummary:
    """Tests for group_summary."""

    def test_every_group_is_present(self, window: DateWindow) -> None:
        """Empty input still yields every section, in display order."""
        groups = group_summary([], window)

        assert list(groups) == list(SummaryGroup)
        assert all(items == [] for items in groups.values())

    def test_pull_requests(self, window: DateWindow) -> None:
        """Merged beats closed, which beats opened, which beats updated."""
        merged = _pr(1, state="closed", merged_at="2024-01-14T00:00:00Z")
        closed = _pr(
            2, state="closed", created_at=_OLD, closed_at="2024-01-15T00:00:00Z"
        )
        opened = _pr(3)
        updated = _pr(4, created_at=_OLD)
        stale = _pr(5, created_at=_OLD, updated_at=_OLD)

        groups = group_summary([merged, closed, opened, updated, stale], window)

        assert groups[SummaryGroup.PRS_MERGED] == [merged]
        assert groups[SummaryGroup.PRS_CLOSED] == [closed]
        assert groups[SummaryGroup.PRS_OPENED] == [opened]
        assert groups[SummaryGroup.PRS_UPDATED] == [updated]

    def test_issues(self, window: DateWindow) -> None:
        """Issues are closed, opened or updated."""
        closed = _issue(1, state="closed", closed_at="2024-01-16T00:00:00Z")
        opened = _issue(2)
        updated = _issue(3, created_at=_OLD)

        groups = group_summary([closed, opened, updated], window)

        assert groups[SummaryGroup.ISSUES_CLOSED] == [closed]
        assert groups[SummaryGroup.ISSUES_OPENED] == [opened]
        assert groups[SummaryGroup.ISSUES_UPDATED] == [updated]

    def test_reviews_count_once_per_reviewer_and_pr(self, window: DateWindow) -> None:
        """Repeat reviews by one person on one PR collapse, ignoring fragments."""
        url = "https://github.com/octo/widgets/pull/7"
        first = build_item(url, title="Review on: Fix", reviewer="alice")
        again = build_item(
            f"{url}#pullrequestreview-2", title="Review on: Fix", reviewer="alice"
        )
        other = build_item(url, title="Review on: Fix", reviewer="bob")

        groups = group_summary([first, again, other], window)

        assert groups[SummaryGroup.PRS_REVIEWED] == [first, other]

    def test_comments_commits_and_other(self, window: DateWindow) -> None:
        """Review comments are left out; other kinds have their own sections."""
        comment = build_item(title="Comment on: Widget is broken")
        review_comment = build_item(title="Review comment on: Fix")
        push = build_item(title="Committed 1 commit to octo/main")
        star = build_item(title="Starred repository")

        groups = group_summary([comment, review_comment, push, star], window)

        assert groups[SummaryGroup.COMMENTS] == [comment]
        assert groups[SummaryGroup.COMMITS] == [push]
        assert groups[SummaryGroup.OTHER_EVENTS] == [star]
        placed = [item for items in groups.values() for item in items]
        assert review_comment not in placed

    def test_no_window_treats_everything_as_inside(self) -> None:
        """Without a window an item with a creation time is opened."""
        issue = _issue(1, created_at=_OLD)

        assert group_summary([issue])[SummaryGroup.ISSUES_OPENED] == [issue]
