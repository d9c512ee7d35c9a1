from __future__ import annotations

from dataclasses import asdict
from typing import Dict, Optional

from app.deps import AppState
from app.services.store_access import fetch_rows
from app.utils.envelope import assemble
from app.utils.pagination import normalize_page, snapshot_page
from core.query.predicates import StoreQuery
from core.query.tables import PEERS_FIELDS, PEERS_HISTORY_RELATION, PEERS_LATEST_RELATION
from storage.postgrest import PeerStatsRecord


async def search_peers(
    state: AppState,
    *,
    ip: Optional[str] = None,
    asn: Optional[int] = None,
    date: Optional[str] = None,
    collector: Optional[str] = None,
    min_v4: Optional[int] = None,
    min_v6: Optional[int] = None,
    min_connected: Optional[int] = None,
    latest: Optional[bool] = None,
    page: Optional[int] = None,
    page_size: Optional[int] = None,
) -> Dict:
    """Search route collector peer statistics.

    The latest snapshot is the default and is returned whole, ignoring the
    caller's pagination and ``date``.  History is only searched when
    ``latest=false`` is given explicitly.
    """
    is_latest = latest is None or latest
    params = {
        "asn": asn,
        "collector": collector,
        "ip": ip,
        "date": None if is_latest else date,
        "min_v4": min_v4,
        "min_v6": min_v6,
        "min_connected": min_connected,
    }
    if is_latest:
        relation = PEERS_LATEST_RELATION
        page_request = snapshot_page(state.snapshot_size("peers"))
    else:
        relation = PEERS_HISTORY_RELATION
        default_size, max_size = state.page_bounds("peers")
        page_request = normalize_page(page, page_size, default_size, max_size)

    query = StoreQuery(relation).where(*PEERS_FIELDS.build(params, state.field_policy))
    query.range(page_request.offset, page_request.high)

    records = await fetch_rows(state.store, query, PeerStatsRecord.from_dict)
    return assemble(page_request, [asdict(record) for record in records])
