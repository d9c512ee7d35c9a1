"""ROA history search backed by the ``query_history`` stored procedure.

The procedure takes a flat JSON payload where absent filters are sent as
sentinels: ``""`` for text fields and ``-1`` for numeric ones.  Each returned
row carries raw ``daterange`` literals that are closed, gap-merged and flagged
as current before they leave the service.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Dict, List, Optional

from app.deps import AppState
from app.errors import ApiError
from app.services.store_access import call_procedure
from app.utils.envelope import assemble
from app.utils.pagination import PageRequest, normalize_page
from app.utils.roa_intervals import normalize_intervals, parse_range_literals
from core.query.fields import FieldPolicy, InvalidFieldValue, parse_calendar_date
from core.query.tables import ROAS_PROCEDURE
from core.query.vocab import TRUST_ANCHORS
from storage.postgrest import RoaHistoryRecord

logger = logging.getLogger(__name__)


def build_history_payload(
    page_request: PageRequest,
    *,
    asn: Optional[int] = None,
    prefix: Optional[str] = None,
    tal: Optional[str] = None,
    date: Optional[str] = None,
    current: Optional[bool] = None,
    max_len: Optional[int] = None,
    today: Optional[dt.date] = None,
    policy: FieldPolicy = FieldPolicy.LENIENT,
) -> Dict:
    """Translate ROA search parameters into the stored-procedure payload."""
    nic = ""
    if tal is not None:
        nic = tal.strip().lower()
        if policy is FieldPolicy.STRICT and nic not in TRUST_ANCHORS:
            raise InvalidFieldValue(
                "tal", tal, f"unrecognized tal value: {tal} (accepted: {', '.join(TRUST_ANCHORS)})"
            )

    payload = {
        "res_limit": page_request.page_size,
        "res_offset": page_request.offset,
        "prefix": prefix or "",
        "asn": -1 if asn is None else asn,
        "max_len": -1 if max_len is None else max_len,
        "nic": nic,
        "date": "",
        "not_date": "",
    }
    if current is None:
        if date is not None:
            payload["date"] = parse_calendar_date("date", date).isoformat()
    else:
        today = today or dt.datetime.now(dt.timezone.utc).date()
        yesterday = (today - dt.timedelta(days=1)).isoformat()
        payload["date" if current else "not_date"] = yesterday
    return payload


def to_roas_entry(record: RoaHistoryRecord, today: Optional[dt.date] = None) -> Dict:
    try:
        raw = parse_range_literals(record.date_ranges)
    except ValueError as exc:
        logger.warning("malformed date ranges for %s AS%s: %s", record.prefix, record.asn, exc)
        raise ApiError.internal("decoding database response failed") from exc
    normalized = normalize_intervals(raw, fix_gaps=True, today=today)
    return {
        "asn": record.asn,
        "max_len": record.max_len,
        "prefix": record.prefix,
        "tal": record.tal,
        "current": normalized.current,
        "date_ranges": normalized.as_strings(),
    }


async def search_roas(
    state: AppState,
    *,
    asn: Optional[int] = None,
    prefix: Optional[str] = None,
    tal: Optional[str] = None,
    date: Optional[str] = None,
    current: Optional[bool] = None,
    max_len: Optional[int] = None,
    page: Optional[int] = None,
    page_size: Optional[int] = None,
    today: Optional[dt.date] = None,
) -> Dict:
    default_size, max_size = state.page_bounds("roas")
    page_request = normalize_page(page, page_size, default_size, max_size)
    payload = build_history_payload(
        page_request,
        asn=asn,
        prefix=prefix,
        tal=tal,
        date=date,
        current=current,
        max_len=max_len,
        today=today,
        policy=state.field_policy,
    )
    logger.info("roas history query %s", payload)

    records = await call_procedure(state.store, ROAS_PROCEDURE, payload, RoaHistoryRecord.from_dict)
    data: List[Dict] = [to_roas_entry(record, today=today) for record in records]
    return assemble(page_request, data)
