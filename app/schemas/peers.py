from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from app.schemas.common import PagedResponse


class PeerStats(BaseModel):
    date: str = Field(..., description="Date of the snapshot")
    collector: str = Field(..., description="Route collector ID")
    ip: str = Field(..., description="Route collector peer IP address")
    asn: int = Field(..., description="Peer's AS number")
    num_v4_pfxs: int = Field(..., description="Number of unique IPv4 prefixes this peer receives")
    num_v6_pfxs: int = Field(..., description="Number of unique IPv6 prefixes this peer receives")
    num_connected_asns: int = Field(..., description="Number of connected ASes")


class PeerStatsResponse(PagedResponse):
    data: List[PeerStats]
