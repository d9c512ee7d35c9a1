"""Dataclasses representing raw rows returned by the PostgREST store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

T = TypeVar("T")


@dataclass
class AsnInfoRecord:
    asn: int
    as_name: Optional[str] = None
    org_id: Optional[str] = None
    org_name: Optional[str] = None
    country_code: Optional[str] = None
    country_name: Optional[str] = None
    data_source: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "AsnInfoRecord":
        return cls(
            asn=int(payload["asn"]),
            as_name=payload.get("as_name"),
            org_id=payload.get("org_id"),
            org_name=payload.get("org_name"),
            country_code=payload.get("country_code"),
            country_name=payload.get("country_name"),
            data_source=payload.get("data_source"),
        )


@dataclass
class RoaHistoryRecord:
    """ROA row with its raw ``daterange`` literals."""

    asn: int
    max_len: int
    prefix: str
    tal: str
    date_ranges: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "RoaHistoryRecord":
        date_ranges = payload.get("date_ranges") or []
        if not isinstance(date_ranges, list) or not all(isinstance(item, str) for item in date_ranges):
            raise ValueError(f"date_ranges must be a list of range literals, got {date_ranges!r}")
        return cls(
            asn=int(payload["asn"]),
            max_len=int(payload["max_len"]),
            prefix=payload["prefix"],
            tal=payload["tal"],
            date_ranges=list(date_ranges),
        )


@dataclass
class BrokerItemRecord:
    ts_start: str
    ts_end: str
    collector_id: str
    data_type: str
    url: str
    rough_size: int
    exact_size: int

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "BrokerItemRecord":
        return cls(
            ts_start=payload["ts_start"],
            ts_end=payload["ts_end"],
            collector_id=payload["collector_id"],
            data_type=payload["data_type"],
            url=payload["url"],
            rough_size=int(payload["rough_size"]),
            exact_size=int(payload.get("exact_size") or 0),
        )


@dataclass
class PeerStatsRecord:
    date: str
    collector: str
    ip: str
    asn: int
    num_v4_pfxs: int
    num_v6_pfxs: int
    num_connected_asns: int

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "PeerStatsRecord":
        return cls(
            date=str(payload["date"]),
            collector=payload["collector"],
            ip=payload["ip"],
            asn=int(payload["asn"]),
            num_v4_pfxs=int(payload["num_v4_pfxs"]),
            num_v6_pfxs=int(payload["num_v6_pfxs"]),
            num_connected_asns=int(payload["num_connected_asns"]),
        )


def decode_rows(rows: Iterable[Dict[str, Any]], factory: Callable[[Dict[str, Any]], T]) -> List[T]:
    """Decode store rows, raising ValueError when any row is malformed."""
    try:
        return [factory(row) for row in rows]
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"unexpected row shape: {exc}") from exc
