"""Read-only access to the hosted PostgREST store."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol

import httpx
from postgrest import AsyncPostgrestClient
from postgrest.exceptions import APIError

from core.query.predicates import Op, StoreQuery, or_filter

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class StoreError(RuntimeError):
    """The store could not be reached or returned an unusable response."""


class RemoteQueryable(Protocol):
    async def select(self, query: StoreQuery) -> List[Dict[str, Any]]:
        ...

    async def call(self, procedure: str, payload: Dict[str, Any]) -> List[Dict[str, Any]]:
        ...


def apply_query(builder: Any, query: StoreQuery) -> Any:
    """Replay a StoreQuery onto a postgrest filter builder and return the builder."""
    for predicate in query.predicates:
        if predicate.op is Op.EQ:
            builder = builder.eq(predicate.field, predicate.value)
        elif predicate.op is Op.GTE:
            builder = builder.gte(predicate.field, predicate.value)
        elif predicate.op is Op.LTE:
            builder = builder.lte(predicate.field, predicate.value)
        elif predicate.op is Op.ILIKE:
            builder = builder.ilike(predicate.field, predicate.value)
        elif predicate.op is Op.IN:
            builder = builder.in_(predicate.field, list(predicate.value))
        elif predicate.op is Op.OR:
            builder = builder.or_(or_filter(predicate.value))
        else:
            raise ValueError(f"unsupported predicate operator: {predicate.op}")
    for column in query.order:
        builder = builder.order(column, desc=False)
    if query.row_range is not None:
        low, high = query.row_range
        builder = builder.range(low, high)
    return builder


class PostgrestStore:
    """Shared, read-only PostgREST client; one outbound call per request."""

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[AsyncPostgrestClient] = None,
    ):
        self.endpoint = endpoint
        self.client = client or AsyncPostgrestClient(
            endpoint,
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
                "apikey": api_key,
            },
            timeout=timeout,
        )

    async def select(self, query: StoreQuery) -> List[Dict[str, Any]]:
        logger.debug("store select %s", query.describe())
        builder = apply_query(self.client.from_(query.relation).select("*"), query)
        return await self._execute(builder, query.relation)

    async def call(self, procedure: str, payload: Dict[str, Any]) -> List[Dict[str, Any]]:
        logger.debug("store rpc %s %s", procedure, payload)
        return await self._execute(self.client.rpc(procedure, payload), procedure)

    async def _execute(self, builder: Any, target: str) -> List[Dict[str, Any]]:
        try:
            response = await builder.execute()
        except APIError as exc:
            logger.warning("store rejected request to %s: %s", target, exc)
            raise StoreError("database request failed") from exc
        except httpx.HTTPError as exc:
            logger.warning("store request to %s failed: %s", target, exc)
            raise StoreError("database request failed") from exc
        except ValueError as exc:
            logger.warning("store response from %s could not be decoded: %s", target, exc)
            raise StoreError("decoding database response failed") from exc
        data = response.data
        if not isinstance(data, list):
            logger.warning("store response from %s is not a list: %r", target, type(data))
            raise StoreError("decoding database response failed")
        return data

    async def aclose(self) -> None:
        await self.client.aclose()
