from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from app.schemas.common import PagedResponse


class RoasEntry(BaseModel):
    asn: int = Field(..., description="Autonomous system (AS) number")
    max_len: int = Field(..., description="maximum prefix length for this ROA")
    prefix: str
    tal: str = Field(..., description="trust anchor locator")
    current: bool = Field(..., description="the ROA is still valid at least on previous day UTC")
    date_ranges: List[List[str]] = Field(..., description="closed validity date ranges, single-day gaps merged")


class RoasResponse(PagedResponse):
    data: List[RoasEntry]
