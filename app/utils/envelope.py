from __future__ import annotations

from typing import Any, Dict, List, Sequence

from app.utils.pagination import PageRequest


def assemble(page: PageRequest, records: Sequence[Any]) -> Dict[str, Any]:
    """Wrap one page of normalized records with its paging metadata."""
    data: List[Any] = list(records)
    return {
        "page": page.page,
        "page_size": page.page_size,
        "count": len(data),
        "data": data,
    }
