from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.deps import AppState, get_app_state
from app.schemas.common import ERROR_RESPONSES
from app.schemas.roas import RoasResponse
from app.services.roas_service import search_roas

router = APIRouter(tags=["bgp"])


@router.get("/roas", response_model=RoasResponse, responses=ERROR_RESPONSES)
async def roas_endpoint(
    asn: Optional[int] = Query(None, description="filter results by ASN exact match"),
    prefix: Optional[str] = Query(None, description="IP prefix to search ROAs for, e.g. 1.1.1.0/24"),
    tal: Optional[str] = Query(
        None, description="filter by trust anchor: apnic, afrinic, lacnic, ripencc or arin"
    ),
    date: Optional[str] = Query(None, description="limit the date of the ROAs, format YYYY-MM-DD"),
    current: Optional[bool] = Query(None, description="filter results to whether the ROA is still current"),
    max_len: Optional[int] = Query(None, description="filter results by the max_len value"),
    page: Optional[int] = Query(None, description="page number, starting from 0"),
    page_size: Optional[int] = Query(None, description="page size, default 100, at most 1000"),
    state: AppState = Depends(get_app_state),
) -> dict:
    """Search ROA history.

    Only valid prefix matches are returned: the prefix must be contained within
    (or equal to) the ROA prefix and be no longer than the ROA's max length.
    """
    return await search_roas(
        state,
        asn=asn,
        prefix=prefix,
        tal=tal,
        date=date,
        current=current,
        max_len=max_len,
        page=page,
        page_size=page_size,
    )
