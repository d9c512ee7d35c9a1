"""MRT file listing search.

Files are selected by time overlap: a file spanning ``[ts_start, ts_end]``
matches when it overlaps the requested window, so a request for 12:00-12:30
still returns the 15-minute update file starting at 11:55.
"""

from __future__ import annotations

from typing import Dict, Optional

from app.deps import AppState
from app.services.store_access import fetch_rows
from app.utils.envelope import assemble
from app.utils.pagination import normalize_page
from app.utils.time_windows import resolve_window, window_predicates
from core.query.predicates import StoreQuery
from core.query.tables import BROKER_FIELDS, BROKER_RELATION
from core.query.vocab import project_for_collector
from storage.postgrest import BrokerItemRecord


def to_broker_entry(item: BrokerItemRecord) -> Dict:
    return {
        "ts_start": item.ts_start,
        "ts_end": item.ts_end,
        "project": project_for_collector(item.collector_id),
        "collector": item.collector_id,
        "data_type": item.data_type,
        "url": item.url,
        "size": item.rough_size,
    }


async def search_broker(
    state: AppState,
    *,
    ts_start: Optional[str] = None,
    ts_end: Optional[str] = None,
    duration: Optional[str] = None,
    duration_days: Optional[int] = None,
    duration_hours: Optional[int] = None,
    duration_minutes: Optional[int] = None,
    project: Optional[str] = None,
    collectors: Optional[str] = None,
    data_type: Optional[str] = None,
    page: Optional[int] = None,
    page_size: Optional[int] = None,
) -> Dict:
    window = resolve_window(
        ts_start,
        ts_end,
        duration,
        duration_days=duration_days,
        duration_hours=duration_hours,
        duration_minutes=duration_minutes,
    )
    params = {"project": project, "collectors": collectors, "data_type": data_type}
    default_size, max_size = state.page_bounds("broker")
    page_request = normalize_page(page, page_size, default_size, max_size)

    query = StoreQuery(BROKER_RELATION)
    query.where(*window_predicates(window))
    query.where(*BROKER_FIELDS.build(params, state.field_policy))
    query.order_asc("ts_start")
    query.range(page_request.offset, page_request.high)

    items = await fetch_rows(state.store, query, BrokerItemRecord.from_dict)
    return assemble(page_request, [to_broker_entry(item) for item in items])
