from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.deps import AppState, get_app_state
from app.schemas.broker import BrokerResponse
from app.schemas.common import ERROR_RESPONSES
from app.services.broker_service import search_broker

router = APIRouter(tags=["bgp"])


@router.get("/broker", response_model=BrokerResponse, responses=ERROR_RESPONSES)
async def broker_endpoint(
    ts_start: Optional[str] = Query(None, description="window start, Unix timestamp or ISO-8601"),
    ts_end: Optional[str] = Query(None, description="window end, Unix timestamp or ISO-8601"),
    duration: Optional[str] = Query(None, description="duration before ts_end or after ts_start, e.g. 2h30m"),
    duration_days: Optional[int] = Query(None, ge=0),
    duration_hours: Optional[int] = Query(None, ge=0),
    duration_minutes: Optional[int] = Query(None, ge=0),
    project: Optional[str] = Query(None, description="route collector project, route-views or riperis"),
    collectors: Optional[str] = Query(None, description="','-separated collector IDs, e.g. rrc00,route-views2"),
    data_type: Optional[str] = Query(None, description="rib or update"),
    page: Optional[int] = Query(None, description="page number, starting from 0"),
    page_size: Optional[int] = Query(None, description="page size, default 10, at most 1000"),
    state: AppState = Depends(get_app_state),
) -> dict:
    """Search public MRT files from RouteViews and RIPE RIS collectors."""
    return await search_broker(
        state,
        ts_start=ts_start,
        ts_end=ts_end,
        duration=duration,
        duration_days=duration_days,
        duration_hours=duration_hours,
        duration_minutes=duration_minutes,
        project=project,
        collectors=collectors,
        data_type=data_type,
        page=page,
        page_size=page_size,
    )
