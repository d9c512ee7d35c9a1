"""Single-shot store access shared by every query service.

Store failures surface as a generic internal error; transport details are
logged by the storage layer and never reach the caller.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, TypeVar

from app.errors import ApiError
from core.query.predicates import StoreQuery
from storage.postgrest import RemoteQueryable, StoreError, decode_rows

T = TypeVar("T")


async def fetch_rows(
    store: RemoteQueryable,
    query: StoreQuery,
    factory: Callable[[Dict[str, Any]], T],
) -> List[T]:
    try:
        rows = await store.select(query)
    except StoreError as exc:
        raise ApiError.internal(str(exc)) from exc
    return _decode(rows, factory)


async def call_procedure(
    store: RemoteQueryable,
    procedure: str,
    payload: Dict[str, Any],
    factory: Callable[[Dict[str, Any]], T],
) -> List[T]:
    try:
        rows = await store.call(procedure, payload)
    except StoreError as exc:
        raise ApiError.internal(str(exc)) from exc
    return _decode(rows, factory)


def _decode(rows: List[Dict[str, Any]], factory: Callable[[Dict[str, Any]], T]) -> List[T]:
    try:
        return decode_rows(rows, factory)
    except ValueError as exc:
        raise ApiError.internal("decoding database response failed") from exc
