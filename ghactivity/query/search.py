"""Advanced search syntax for the free-text box.

Supported tokens, matched case-insensitively against items:

- ``label:<name>`` keeps items carrying the label (all must match)
- ``-label:<name>`` drops items carrying the label
- ``user:<login>`` keeps items by any listed user
- ``repo:<owner/name>`` keeps items from any listed repository
- ``-repo:<owner/name>`` drops items from the repository

Whatever remains is matched as a substring of the title, body or login.
"""

from __future__ import annotations

import functools
import typing as typ

import msgspec

from ghactivity.query.filters import is_authored_by, repository_name

if typ.TYPE_CHECKING:
    from ghactivity.config import EngineConfig
    from ghactivity.items.models import Item

# Extraction order matters: "-label:" must be consumed before "label:".
_TOKEN_FIELDS = (
    ("-label:", "excluded_labels"),
    ("label:", "included_labels"),
    ("user:", "user_filters"),
    ("-repo:", "excluded_repos"),
    ("repo:", "included_repos"),
)


class ParsedSearchText(msgspec.Struct, kw_only=True, frozen=True):
    """Tokens extracted from a search string."""

    included_labels: tuple[str, ...] = ()
    excluded_labels: tuple[str, ...] = ()
    user_filters: tuple[str, ...] = ()
    included_repos: tuple[str, ...] = ()
    excluded_repos: tuple[str, ...] = ()
    clean_text: str = ""


@functools.lru_cache(maxsize=100)
def parse_search_text(text: str) -> ParsedSearchText:
    """Split ``text`` into structured tokens and leftover free text.

    Examples
    --------
    >>> parsed = parse_search_text("label:bug -label:wontfix crash user:alice")
    >>> parsed.included_labels, parsed.excluded_labels, parsed.user_filters
    (('bug',), ('wontfix',), ('alice',))
    >>> parsed.clean_text
    'crash'

    """
    words = text.split()
    if not words:
        return ParsedSearchText()
    found: dict[str, list[str]] = {field: [] for _, field in _TOKEN_FIELDS}
    for prefix, field in _TOKEN_FIELDS:
        remaining: list[str] = []
        for word in words:
            value = word.removeprefix(prefix)
            if word.startswith(prefix) and value:
                found[field].append(value)
            else:
                remaining.append(word)
        words = remaining
    return ParsedSearchText(
        **{field: tuple(values) for field, values in found.items()},
        clean_text=" ".join(words),
    )


def _folded(values: typ.Iterable[str]) -> set[str]:
    return {value.casefold() for value in values}


def _matches(
    item: Item, parsed: ParsedSearchText, config: EngineConfig | None
) -> bool:
    labels = _folded(item.label_names)
    if not _folded(parsed.included_labels) <= labels:
        return False
    if labels & _folded(parsed.excluded_labels):
        return False
    login = item.user.login.casefold()
    if parsed.user_filters and not is_authored_by(item, parsed.user_filters):
        return False
    if parsed.included_repos or parsed.excluded_repos:
        repo = repository_name(item, config)
        if repo is None:
            if parsed.included_repos:
                return False
        else:
            folded_repo = repo.casefold()
            if parsed.included_repos and folded_repo not in _folded(
                parsed.included_repos
            ):
                return False
            if folded_repo in _folded(parsed.excluded_repos):
                return False
    if not parsed.clean_text:
        return True
    needle = parsed.clean_text.casefold()
    return (
        needle in item.title.casefold()
        or needle in (item.body or "").casefold()
        or needle in login
    )


def filter_by_advanced_search(
    items: typ.Iterable[Item],
    text: str | None,
    config: EngineConfig | None = None,
) -> list[Item]:
    """Keep items matching every token in ``text``; blank keeps everything."""
    if not text or not text.strip():
        return list(items)
    parsed = parse_search_text(text)
    return [item for item in items if _matches(item, parsed, config)]
