"""
Detection history views: category table, fetch-sort-filter controller
and record list renderer.
"""

from teadoc.services.history.categories import CATEGORIES, CategoryConfig, feature_list
from teadoc.services.history.controller import (
    HistoryController,
    filter_by_feature,
    sort_by_recency,
)
from teadoc.services.history.renderer import (
    FormattedTimestamp,
    HistoryRow,
    HistoryView,
    RowKind,
    format_timestamp,
    render,
    render_rows,
)

__all__ = [
    "CATEGORIES",
    "CategoryConfig",
    "feature_list",
    "HistoryController",
    "filter_by_feature",
    "sort_by_recency",
    "FormattedTimestamp",
    "HistoryRow",
    "HistoryView",
    "RowKind",
    "format_timestamp",
    "render",
    "render_rows",
]
