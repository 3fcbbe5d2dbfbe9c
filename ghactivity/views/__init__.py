"""View assembly, summary grouping and enrichment merge helpers."""

from __future__ import annotations

from .assembler import (
    ViewMode,
    ViewResult,
    assemble_view,
    build_events_view,
    build_search_view,
    build_summary_view,
)
from .enrichment import (
    PullRequestDetails,
    apply_pr_details,
    apply_review_dates,
    needs_pr_enrichment,
    newest_review_dates,
    pr_api_url,
)
from .summary import ActivityKind, SummaryGroup, event_kind_for_item, group_summary

__all__ = [
    "ActivityKind",
    "PullRequestDetails",
    "SummaryGroup",
    "ViewMode",
    "ViewResult",
    "apply_pr_details",
    "apply_review_dates",
    "assemble_view",
    "build_events_view",
    "build_search_view",
    "build_summary_view",
    "event_kind_for_item",
    "group_summary",
    "needs_pr_enrichment",
    "newest_review_dates",
    "pr_api_url",
]
