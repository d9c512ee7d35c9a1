from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class PagedResponse(BaseModel):
    page: int = Field(..., description="page number, starting from 0")
    page_size: int = Field(..., description="page size after clamping to the endpoint maximum")
    count: int = Field(..., description="count of items returned in current query")


class ErrorResponse(BaseModel):
    status_code: int
    errors: List[str]


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "invalid query parameter"},
    500: {"model": ErrorResponse, "description": "database request failed"},
}
