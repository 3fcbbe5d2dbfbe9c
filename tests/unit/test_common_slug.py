"""Unit tests for slug and timestamp helpers."""

from __future__ import annotations

import datetime as dt

import pytest

from ghactivity.common.slug import base_url, repo_owner, slug_from_api_url
from ghactivity.common.time import parse_timestamp, start_of_day

_PREFIX = "https://api.github.com/repos/"


def test_repo_owner_drops_name() -> None:
    """repo_owner returns the part before the first slash."""
    assert repo_owner("octo/widgets") == "octo"
    assert repo_owner("widgets") == "widgets"


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://api.github.com/repos/octo/widgets", "octo/widgets"),
        ("https://api.github.com/repos/octo/widgets/", "octo/widgets"),
        ("https://ghe.example.com/api/v3/repos/octo/widgets", None),
        ("https://api.github.com/repos/", None),
        ("", None),
        (None, None),
    ],
)
def test_slug_from_api_url(url: str | None, expected: str | None) -> None:
    """Only URLs carrying the prefix yield a slug."""
    assert slug_from_api_url(url, _PREFIX) == expected


def test_base_url_strips_fragment() -> None:
    """Review fragments are removed from PR URLs."""
    url = "https://github.com/o/r/pull/5#pullrequestreview-9"

    assert base_url(url) == "https://github.com/o/r/pull/5"
    assert base_url("https://github.com/o/r/pull/5") == "https://github.com/o/r/pull/5"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2024-01-15T10:00:00Z", dt.datetime(2024, 1, 15, 10, tzinfo=dt.UTC)),
        ("2024-01-15T10:00:00", dt.datetime(2024, 1, 15, 10, tzinfo=dt.UTC)),
        ("2024-01-15T12:00:00+02:00", dt.datetime(2024, 1, 15, 10, tzinfo=dt.UTC)),
        (
            "2024-01-15T23:59:59.999Z",
            dt.datetime(2024, 1, 15, 23, 59, 59, 999000, tzinfo=dt.UTC),
        ),
        ("yesterday", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_timestamp(raw: str | None, expected: dt.datetime | None) -> None:
    """Timestamps are returned as aware UTC values or None."""
    assert parse_timestamp(raw) == expected


def test_start_of_day_is_utc_midnight() -> None:
    """start_of_day anchors a date at 00:00 UTC."""
    assert start_of_day(dt.date(2024, 1, 15)) == dt.datetime(
        2024, 1, 15, tzinfo=dt.UTC
    )
