"""Unit tests for the composable item filters."""

from __future__ import annotations

import itertools

import msgspec
import pytest

from ghactivity.items.models import RepositoryRef
from ghactivity.query import (
    FilterAxis,
    FilterConfig,
    StatusFilter,
    TypeFilter,
    apply_filters,
    count_items_matching_filter,
    extract_available_labels,
    extract_available_repositories,
    extract_available_users,
    filter_by_labels,
    filter_by_repository,
    filter_by_status,
    filter_by_text,
    filter_by_type,
    filter_by_user,
    filter_summary,
    has_active_filters,
    is_authored_by,
    item_type,
    parse_usernames,
)
from tests.helpers.event_builders import build_item

_MERGED_PR = build_item(
    "https://github.com/octo/widgets/pull/1",
    title="Add widget",
    state="closed",
    merged_at="2024-01-14T00:00:00Z",
    labels=("feature",),
)
_CLOSED_PR = build_item(
    "https://github.com/octo/widgets/pull/2",
    title="Abandoned idea",
    state="closed",
    pull_request=True,
)
_OPEN_ISSUE = build_item(
    "https://github.com/octo/widgets/issues/3",
    title="Crash on start",
    login="Bob",
    labels=("bug", "P1"),
    body="Stack trace attached",
)
_COMMENT = build_item(
    "https://github.com/other/repo/issues/4#c1",
    title="Comment on: Crash on start",
    repository_url="https://api.github.com/repos/other/repo",
    labels=("bug",),
)
_REVIEW = build_item(
    "https://github.com/octo/widgets/pull/5",
    title="Review on: Tidy",
    reviewer="carol",
)
_ALL = [_MERGED_PR, _CLOSED_PR, _OPEN_ISSUE, _COMMENT, _REVIEW]


class TestItemType:
    """Tests for item_type."""

    @pytest.mark.parametrize(
        ("item", "expected"),
        [
            (_MERGED_PR, TypeFilter.PR),
            (_OPEN_ISSUE, TypeFilter.ISSUE),
            (_COMMENT, TypeFilter.COMMENT),
            (_REVIEW, TypeFilter.PR),
        ],
    )
    def test_classification(self, item: object, expected: TypeFilter) -> None:
        """Reviews are PRs; comment titles beat everything but reviews."""
        assert item_type(item) == expected  # type: ignore[arg-type]

    def test_review_event_type_marks_a_pr(self) -> None:
        """The feed event type identifies reviews with synthesised titles."""
        item = build_item(original_event_type="PullRequestReviewEvent")

        assert item_type(item) == TypeFilter.PR


class TestSingleAxes:
    """Tests for each filter axis on its own."""

    def test_type(self) -> None:
        """Only items of the selected kind remain."""
        assert filter_by_type(_ALL, TypeFilter.COMMENT) == [_COMMENT]
        assert filter_by_type(_ALL, TypeFilter.ALL) == _ALL

    def test_merged_prs_only_match_merged(self) -> None:
        """A merged PR is never closed, even though its state says so."""
        config = FilterConfig(
            type_filter=TypeFilter.PR, status_filter=StatusFilter.CLOSED
        )

        assert _MERGED_PR not in apply_filters(_ALL, config)
        assert filter_by_status([_MERGED_PR], StatusFilter.MERGED) == [_MERGED_PR]
        assert filter_by_status(_ALL, StatusFilter.CLOSED) == [_CLOSED_PR]

    def test_open(self) -> None:
        """Open status keeps open items only."""
        assert filter_by_status(_ALL, StatusFilter.OPEN) == [
            _OPEN_ISSUE,
            _COMMENT,
            _REVIEW,
        ]

    def test_exclusion_beats_inclusion(self) -> None:
        """An excluded label drops an item even when every include matches."""
        item = build_item(labels=("bug", "P1", "wontfix"))

        assert filter_by_labels([item], ("bug", "P1"), ("wontfix",)) == []
        assert filter_by_labels([item], ("bug", "P1")) == [item]

    def test_included_labels_must_all_match(self) -> None:
        """Every included label is required."""
        assert filter_by_labels(_ALL, ("bug", "P1")) == [_OPEN_ISSUE]

    def test_repository(self) -> None:
        """Repository filters match the slug from the API URL."""
        assert filter_by_repository(_ALL, ("other/repo",)) == [_COMMENT]
        assert filter_by_repository(_ALL, ()) == _ALL

    def test_repository_falls_back_to_full_name(self) -> None:
        """Items without a usable API URL match on repository.full_name."""
        item = build_item(
            repository_url=None, repository=RepositoryRef(full_name="octo/gadgets")
        )

        assert filter_by_repository([item], ("octo/gadgets",)) == [item]

    def test_user_ignores_case(self) -> None:
        """Logins are compared case-insensitively; blank disables."""
        assert filter_by_user(_ALL, "bob") == [_OPEN_ISSUE]
        assert filter_by_user(_ALL, "  ") == _ALL

    def test_user_accepts_several_logins(self) -> None:
        """Any of the comma-separated logins matches."""
        assert filter_by_user(_ALL, "BOB, nobody") == [_OPEN_ISSUE]
        assert filter_by_user(_ALL, "bob,alice") == _ALL
        assert filter_by_user(_ALL, " , ") == _ALL

    def test_text_searches_title_and_body(self) -> None:
        """Free text matches titles and bodies ignoring case."""
        assert filter_by_text(_ALL, "STACK") == [_OPEN_ISSUE]
        assert filter_by_text(_ALL, "crash") == [_OPEN_ISSUE, _COMMENT]


class TestUsernames:
    """Tests for parse_usernames and is_authored_by."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("alice", ["alice"]),
            (" Alice , BOB ", ["alice", "bob"]),
            ("alice,,bob,", ["alice", "bob"]),
            ("", []),
            (None, []),
        ],
    )
    def test_parse(self, text: str | None, expected: list[str]) -> None:
        """Names are trimmed and casefolded; blanks are dropped."""
        assert parse_usernames(text) == expected

    def test_authorship_ignores_case(self) -> None:
        """The item author is compared against every searched login."""
        assert is_authored_by(_OPEN_ISSUE, ["alice", "bob"])
        assert is_authored_by(_OPEN_ISSUE, ["BOB"])
        assert not is_authored_by(_OPEN_ISSUE, ["alice"])
        assert not is_authored_by(_OPEN_ISSUE, [])

    def test_reviews_belong_to_their_author(self) -> None:
        """A review item is authored by the PR author, not the reviewer."""
        assert is_authored_by(_REVIEW, ["alice"])
        assert not is_authored_by(_REVIEW, ["carol"])


class TestApplyFilters:
    """Tests for apply_filters."""

    def test_default_config_keeps_everything(self) -> None:
        """The permissive default is a no-op."""
        assert apply_filters(_ALL, FilterConfig()) == _ALL

    def test_axes_commute(self) -> None:
        """Applying the axes in any order gives the same result."""
        steps = [
            lambda items: filter_by_type(items, TypeFilter.ISSUE),
            lambda items: filter_by_status(items, StatusFilter.OPEN),
            lambda items: filter_by_labels(items, ("bug",)),
            lambda items: filter_by_text(items, "crash"),
        ]
        results = set()
        for order in itertools.permutations(steps):
            items = list(_ALL)
            for step in order:
                items = step(items)
            results.add(tuple(item.html_url for item in items))

        assert results == {(_OPEN_ISSUE.html_url,)}

    def test_filter_edits_replace_the_config(self) -> None:
        """Configs are immutable; edits produce a new value."""
        config = FilterConfig()
        updated = msgspec.structs.replace(config, user_filter="bob")

        assert config.user_filter == ""
        assert apply_filters(_ALL, updated) == [_OPEN_ISSUE]


class TestCountsAndFacets:
    """Tests for counts, facet extraction and summaries."""

    @pytest.mark.parametrize(
        ("axis", "value", "expected"),
        [
            (FilterAxis.TYPE, "pr", 3),
            (FilterAxis.STATUS, "merged", 1),
            (FilterAxis.LABEL, "bug", 2),
            (FilterAxis.REPO, "octo/widgets", 4),
        ],
    )
    def test_counts(self, axis: FilterAxis, value: str, expected: int) -> None:
        """Counts are taken per single axis."""
        assert count_items_matching_filter(_ALL, axis, value) == expected

    def test_label_count_honours_exclusions(self) -> None:
        """Excluded labels still apply to label counts."""
        count = count_items_matching_filter(
            _ALL, FilterAxis.LABEL, "bug", excluded_labels=("P1",)
        )

        assert count == 1

    def test_facets(self) -> None:
        """Distinct labels, repositories and users are sorted."""
        items = [*_ALL, build_item(labels=("Docs", "alpha"))]

        assert extract_available_labels(items) == [
            "alpha",
            "bug",
            "Docs",
            "feature",
            "P1",
        ]
        assert extract_available_repositories(_ALL) == ["octo/widgets", "other/repo"]
        assert extract_available_users(_ALL) == ["Bob", "alice"]

    def test_has_active_filters(self) -> None:
        """Only non-default axes count as active."""
        assert not has_active_filters(FilterConfig())
        assert not has_active_filters(FilterConfig(user_filter="  "))
        assert has_active_filters(FilterConfig(excluded_labels=("wontfix",)))

    def test_summary(self) -> None:
        """Each active axis is described once, in a fixed order."""
        config = FilterConfig(
            type_filter=TypeFilter.PR,
            status_filter=StatusFilter.MERGED,
            included_labels=("bug", "P1"),
            excluded_labels=("wontfix",),
            search_text="crash",
            repo_filters=("octo/widgets",),
            user_filter="alice",
        )

        assert filter_summary(config) == [
            "Type: PRs",
            "Status: merged",
            "User: alice",
            "Include: bug, P1",
            "Excluded labels: wontfix",
            'Search: "crash"',
            "Repos: octo/widgets",
        ]
        assert filter_summary(FilterConfig()) == []
