"""Cursor/page pagination for Deliverect list endpoints.

Deliverect list endpoints answer either with a flat JSON array or with a
single wrapper object::

    {"_items": [...], "_meta": {"max_results": 500, "page": 1,
                                "cursor": "...", "total": 1234}}

``aggregate`` walks the pages one request at a time and returns the items of
every page as one ordered list.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

logger = logging.getLogger(__name__)

MAX_RESULTS_PER_PAGE = 500
NEW_CURSOR = "new"

JsonRecord = dict[str, Any]


def _frozen(mapping: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class PageRequestTemplate:
    """Request descriptor for one list endpoint.

    Templates are never mutated: ``with_query`` returns a copy carrying the
    overlaid query parameters.
    """

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    query: Mapping[str, Any] = field(default_factory=dict)
    body: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _frozen(self.headers))
        object.__setattr__(self, "query", _frozen(self.query))

    def with_query(self, **overlay: Any) -> PageRequestTemplate:
        """Return a copy with ``overlay`` merged into the query; ``None`` values drop the key."""
        query = dict(self.query)
        for key, value in overlay.items():
            if value is None:
                query.pop(key, None)
            else:
                query[key] = value
        return replace(self, query=query)


@dataclass(frozen=True)
class CursorState:
    cursor_token: str | None = NEW_CURSOR
    current_page: int = 1
    total_known: int | None = None


PageFetch = Callable[[PageRequestTemplate], list[JsonRecord]]


def _as_int(value: Any) -> int | None:
    # bool is an int subclass but never a page number or count
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return int(value)


def split_page(records: list[JsonRecord]) -> tuple[list[JsonRecord], Mapping[str, Any]]:
    """Return the logical items of one page and its ``_meta`` block.

    A first record with a list-valued ``_items`` wraps the page; anything
    else is a flat page where every record is an item and there is no meta.
    """
    first = records[0] if records else None
    if isinstance(first, Mapping) and isinstance(first.get("_items"), list):
        meta = first.get("_meta")
        return list(first["_items"]), meta if isinstance(meta, Mapping) else {}
    return [record if record is not None else {} for record in records], {}


def _advance(
    state: CursorState, meta: Mapping[str, Any], returned_count: int,
) -> CursorState | None:
    """Compute the state for the next page, or ``None`` when the listing is complete."""
    total = _as_int(meta.get("total"))
    total_known = total if total is not None else state.total_known

    meta_cursor = meta.get("cursor")
    cursor = state.cursor_token
    if isinstance(meta_cursor, str) and meta_cursor:
        cursor = meta_cursor
    elif cursor == NEW_CURSOR:
        cursor = None

    if not returned_count or not cursor:
        return None

    page_size = _as_int(meta.get("max_results")) or MAX_RESULTS_PER_PAGE
    meta_page = _as_int(meta.get("page"))
    page = meta_page if meta_page is not None else state.current_page

    if total_known is not None and page * page_size >= total_known:
        return None
    # Short page without an authoritative total is taken as the last one
    if total_known is None and returned_count < MAX_RESULTS_PER_PAGE:
        return None

    return CursorState(
        cursor_token=cursor,
        current_page=max(page, state.current_page) + 1,
        total_known=total_known,
    )


def aggregate(template: PageRequestTemplate, page_fetch: PageFetch) -> list[JsonRecord]:
    """Fetch every page of a list endpoint and return all items in page order.

    ``page_fetch`` performs exactly one HTTP call per invocation; its errors
    propagate unchanged. There is no iteration cap: the loop ends on an empty
    page, an exhausted cursor, a reached ``total`` or a short page.
    """
    results: list[JsonRecord] = []
    state: CursorState | None = CursorState()

    while state is not None:
        request = template.with_query(
            max_results=MAX_RESULTS_PER_PAGE,
            cursor=state.cursor_token,
            page=state.current_page,
        )
        records = page_fetch(request)
        if not records:
            logger.debug("Page %d returned no records", state.current_page)
            break

        items, meta = split_page(records)
        results.extend(items)
        logger.debug(
            "Page %d: %d item(s), cursor=%s, total=%s",
            state.current_page, len(items),
            "yes" if meta.get("cursor") else "no", meta.get("total"),
        )
        state = _advance(state, meta, len(items))

    logger.info("Aggregated %d item(s) from %s %s", len(results), template.method, template.url)
    return results
