from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.deps import AppState, get_app_state
from app.schemas.asninfo import AsninfoResponse
from app.schemas.common import ERROR_RESPONSES
from app.services.asninfo_service import search_asninfo

router = APIRouter(tags=["meta"])


@router.get("/asninfo", response_model=AsninfoResponse, responses=ERROR_RESPONSES)
async def asninfo_endpoint(
    asn: Optional[int] = Query(None, description="filter results by ASN exact match"),
    asns: Optional[str] = Query(None, description="filter results by a ','-separated list of ASNs"),
    name: Optional[str] = Query(None, description="filter results by AS name or organization name"),
    country: Optional[str] = Query(None, description="filter by two-letter country code or country name"),
    page: Optional[int] = Query(None, description="page number, starting from 0"),
    page_size: Optional[int] = Query(None, description="page size, default 10, at most 1000"),
    state: AppState = Depends(get_app_state),
) -> dict:
    """Search for information regarding autonomous systems."""
    return await search_asninfo(
        state,
        asn=asn,
        asns=asns,
        name=name,
        country=country,
        page=page,
        page_size=page_size,
    )
