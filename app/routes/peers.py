from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.deps import AppState, get_app_state
from app.schemas.common import ERROR_RESPONSES
from app.schemas.peers import PeerStatsResponse
from app.services.peers_service import search_peers

router = APIRouter(tags=["meta"])


@router.get("/peers", response_model=PeerStatsResponse, responses=ERROR_RESPONSES)
async def peers_endpoint(
    ip: Optional[str] = Query(None, description="filter results by peer IP exact match"),
    asn: Optional[int] = Query(None, description="filter results by peer ASN exact match"),
    date: Optional[str] = Query(None, description="filter by date, only applied with latest=false"),
    collector: Optional[str] = Query(None, description="filter by collector ID, e.g. rrc00"),
    min_v4: Optional[int] = Query(None, description="minimum number of IPv4 prefixes"),
    min_v6: Optional[int] = Query(None, description="minimum number of IPv6 prefixes"),
    min_connected: Optional[int] = Query(None, description="minimum number of connected ASNs"),
    latest: Optional[bool] = Query(None, description="show latest information, default true"),
    page: Optional[int] = Query(None, description="page number, ignored for the latest snapshot"),
    page_size: Optional[int] = Query(None, description="page size, ignored for the latest snapshot"),
    state: AppState = Depends(get_app_state),
) -> dict:
    """Public route collector peers information."""
    return await search_peers(
        state,
        ip=ip,
        asn=asn,
        date=date,
        collector=collector,
        min_v4=min_v4,
        min_v6=min_v6,
        min_connected=min_connected,
        latest=latest,
        page=page,
        page_size=page_size,
    )
