from __future__ import annotations

import asyncio
from types import SimpleNamespace

import httpx
import pytest
from postgrest.exceptions import APIError

from core.query.predicates import StoreQuery, any_of, eq, gte, ilike, in_, lte
from storage.postgrest import PostgrestStore, StoreError, apply_query


class RecordingBuilder:
    """Mimics the chained postgrest builder and records every call."""

    def __init__(self, data=None, error=None):
        self.calls = []
        self.data = [] if data is None else data
        self.error = error

    def __getattr__(self, name):
        def method(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self

        return method

    async def execute(self):
        if self.error is not None:
            raise self.error
        return SimpleNamespace(data=self.data)


class StubClient:
    def __init__(self, builder):
        self.builder = builder
        self.closed = False

    def from_(self, relation):
        self.builder.calls.append(("from_", (relation,), {}))
        return self.builder

    def rpc(self, procedure, payload):
        self.builder.calls.append(("rpc", (procedure, payload), {}))
        return self.builder

    async def aclose(self):
        self.closed = True


def test_apply_query_replays_every_clause():
    query = (
        StoreQuery("items")
        .where(
            lte("ts_start", "2022-01-01T01:00:00"),
            gte("ts_end", "2022-01-01T00:00:00"),
            ilike("collector_id", "rrc*"),
            in_("collector_id", ["rrc00", "rrc01"]),
            eq("data_type", "rib"),
            any_of(ilike("as_name", "*x*"), ilike("org_name", "*x*")),
        )
        .order_asc("ts_start")
        .range(0, 9)
    )
    builder = apply_query(RecordingBuilder(), query)
    assert builder.calls == [
        ("lte", ("ts_start", "2022-01-01T01:00:00"), {}),
        ("gte", ("ts_end", "2022-01-01T00:00:00"), {}),
        ("ilike", ("collector_id", "rrc*"), {}),
        ("in_", ("collector_id", ["rrc00", "rrc01"]), {}),
        ("eq", ("data_type", "rib"), {}),
        ("or_", ('as_name.ilike."*x*",org_name.ilike."*x*"',), {}),
        ("order", ("ts_start",), {"desc": False}),
        ("range", (0, 9), {}),
    ]


def test_select_returns_rows():
    builder = RecordingBuilder(data=[{"asn": 1}])
    store = PostgrestStore("http://store.invalid", "key", client=StubClient(builder))
    rows = asyncio.run(store.select(StoreQuery("asn_view").where(eq("asn", 1))))
    assert rows == [{"asn": 1}]
    assert builder.calls[:2] == [("from_", ("asn_view",), {}), ("select", ("*",), {})]


def test_call_passes_payload_to_procedure():
    builder = RecordingBuilder(data=[])
    store = PostgrestStore("http://store.invalid", "key", client=StubClient(builder))
    asyncio.run(store.call("query_history", {"asn": -1}))
    assert builder.calls == [("rpc", ("query_history", {"asn": -1}), {})]


@pytest.mark.parametrize(
    "error",
    [
        httpx.ConnectError("refused"),
        httpx.ReadTimeout("slow"),
        APIError({"message": "boom", "code": "500"}),
        ValueError("bad json"),
    ],
)
def test_failures_become_store_errors(error):
    store = PostgrestStore("http://store.invalid", "key", client=StubClient(RecordingBuilder(error=error)))
    with pytest.raises(StoreError):
        asyncio.run(store.select(StoreQuery("items")))


def test_non_list_payload_is_rejected():
    store = PostgrestStore("http://store.invalid", "key", client=StubClient(RecordingBuilder(data={"oops": 1})))
    with pytest.raises(StoreError):
        asyncio.run(store.call("query_history", {}))


def test_aclose_releases_client():
    client = StubClient(RecordingBuilder())
    store = PostgrestStore("http://store.invalid", "key", client=client)
    asyncio.run(store.aclose())
    assert client.closed
