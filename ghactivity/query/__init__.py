"""Filtering, advanced search and sorting over canonical items."""

from __future__ import annotations

from .config import FilterAxis, FilterConfig, SortOrder, StatusFilter, TypeFilter
from .filters import (
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
from .search import ParsedSearchText, filter_by_advanced_search, parse_search_text
from .sorting import sort_items

__all__ = [
    "FilterAxis",
    "FilterConfig",
    "ParsedSearchText",
    "SortOrder",
    "StatusFilter",
    "TypeFilter",
    "apply_filters",
    "count_items_matching_filter",
    "extract_available_labels",
    "extract_available_repositories",
    "extract_available_users",
    "filter_by_advanced_search",
    "filter_by_labels",
    "filter_by_repository",
    "filter_by_status",
    "filter_by_text",
    "filter_by_type",
    "filter_by_user",
    "filter_summary",
    "has_active_filters",
    "is_authored_by",
    "item_type",
    "parse_search_text",
    "parse_usernames",
    "sort_items",
]
