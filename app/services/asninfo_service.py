from __future__ import annotations

from dataclasses import asdict
from typing import Dict, Optional

from app.deps import AppState
from app.services.store_access import fetch_rows
from app.utils.envelope import assemble
from app.utils.pagination import normalize_page
from core.query.predicates import StoreQuery
from core.query.tables import ASNINFO_FIELDS, ASNINFO_RELATION
from storage.postgrest import AsnInfoRecord


async def search_asninfo(
    state: AppState,
    *,
    asn: Optional[int] = None,
    asns: Optional[str] = None,
    name: Optional[str] = None,
    country: Optional[str] = None,
    page: Optional[int] = None,
    page_size: Optional[int] = None,
) -> Dict:
    """Look up AS registry records by number, name/org name, or country."""
    params = {"asn": asn, "asns": asns, "country": country, "name": name}
    default_size, max_size = state.page_bounds("asninfo")
    page_request = normalize_page(page, page_size, default_size, max_size)

    query = StoreQuery(ASNINFO_RELATION).where(*ASNINFO_FIELDS.build(params, state.field_policy))
    query.range(page_request.offset, page_request.high)

    records = await fetch_rows(state.store, query, AsnInfoRecord.from_dict)
    return assemble(page_request, [asdict(record) for record in records])
