from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from app.schemas.common import PagedResponse


class AsnInfo(BaseModel):
    asn: int = Field(..., description="Autonomous system (AS) number")
    as_name: Optional[str] = Field(None, description="AS name")
    org_id: Optional[str] = Field(None, description="Organization ID based on CAIDA's as2org dataset")
    org_name: Optional[str] = Field(None, description="Organization name based on CAIDA's as2org dataset")
    country_code: Optional[str] = Field(None, description="Registration country in two-letter code format")
    country_name: Optional[str] = Field(None, description="Registration country full name")
    data_source: Optional[str] = Field(None, description="RIR source")


class AsninfoResponse(PagedResponse):
    data: List[AsnInfo]
