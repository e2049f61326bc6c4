from app.query.filters import (
    FilterConfig,
    Filters,
    RangeBounds,
    build_filters,
    filter_criteria,
)
from app.query.pagination import Page, PageRequest, load_options, paginate

__all__ = [
    "FilterConfig",
    "Filters",
    "RangeBounds",
    "build_filters",
    "filter_criteria",
    "Page",
    "PageRequest",
    "load_options",
    "paginate",
]
