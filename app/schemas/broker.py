from __future__ import annotations

from typing import List

from pydantic import BaseModel

from app.schemas.common import PagedResponse


class BrokerEntry(BaseModel):
    ts_start: str
    ts_end: str
    project: str
    collector: str
    data_type: str
    url: str
    size: int


class BrokerResponse(PagedResponse):
    data: List[BrokerEntry]
