from deliverect_connector.pagination.aggregator import (
    MAX_RESULTS_PER_PAGE,
    CursorState,
    PageFetch,
    PageRequestTemplate,
    aggregate,
    split_page,
)

__all__ = [
    "MAX_RESULTS_PER_PAGE",
    "CursorState",
    "PageFetch",
    "PageRequestTemplate",
    "aggregate",
    "split_page",
]
