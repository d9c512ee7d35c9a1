"""PostgREST-backed store used by the query services."""

from .dao import PostgrestStore, RemoteQueryable, StoreError, apply_query
from .models import AsnInfoRecord, BrokerItemRecord, PeerStatsRecord, RoaHistoryRecord, decode_rows

__all__ = [
    "AsnInfoRecord",
    "BrokerItemRecord",
    "PeerStatsRecord",
    "PostgrestStore",
    "RemoteQueryable",
    "RoaHistoryRecord",
    "StoreError",
    "apply_query",
    "decode_rows",
]
