"""Bounded pagination shared by every list endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from app.errors import ApiError

# Peer statistics in "latest" mode always return the whole snapshot.
SNAPSHOT_PAGE_SIZE = 10000


@dataclass(frozen=True)
class PageRequest:
    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return self.page * self.page_size

    @property
    def high(self) -> int:
        """Inclusive index of the last row on this page."""
        return self.offset + self.page_size - 1


def normalize_page(
    page: Optional[int],
    page_size: Optional[int],
    default_size: int,
    max_size: int,
) -> PageRequest:
    """Fill in defaults and clamp the page size to the endpoint ceiling."""
    page = 0 if page is None else page
    page_size = default_size if page_size is None else page_size
    if page < 0:
        raise ApiError.bad_request(f"page must be 0 or greater, got {page}")
    if page_size < 1:
        raise ApiError.bad_request(f"page_size must be 1 or greater, got {page_size}")
    return PageRequest(page=page, page_size=min(page_size, max_size))


def snapshot_page(size: int = SNAPSHOT_PAGE_SIZE) -> PageRequest:
    return PageRequest(page=0, page_size=size)
