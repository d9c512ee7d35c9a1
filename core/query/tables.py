"""Per-endpoint field tables: the only part of filtering that differs by endpoint."""

from __future__ import annotations

from core.query.fields import Date, Exact, FieldTable, Members, Pattern, Search, Threshold, Vocabulary
from core.query.predicates import eq, ilike
from core.query.vocab import DATA_TYPE_SYNONYMS, PROJECT_COLLECTOR_PATTERNS, PROJECT_SYNONYMS

ASNINFO_RELATION = "asn_view"
BROKER_RELATION = "items"
PEERS_LATEST_RELATION = "peer_stats_latest"
PEERS_HISTORY_RELATION = "peer_stats"
ROAS_PROCEDURE = "query_history"

ASNINFO_FIELDS = FieldTable(
    {
        "asn": Exact("asn"),
        "asns": Members("asn"),
        "country": Search((("country_code", "{}"), ("country_name", "*{}*"))),
        "name": Search((("as_name", "*{}*"), ("org_name", "*{}*"))),
    }
)

BROKER_FIELDS = FieldTable(
    {
        "project": Vocabulary(
            PROJECT_SYNONYMS,
            lambda project: ilike("collector_id", PROJECT_COLLECTOR_PATTERNS[project]),
        ),
        "collectors": Members("collector_id"),
        "data_type": Vocabulary(DATA_TYPE_SYNONYMS, lambda data_type: eq("data_type", data_type)),
    }
)

PEERS_FIELDS = FieldTable(
    {
        "asn": Exact("asn"),
        "collector": Pattern("collector"),
        "ip": Exact("ip"),
        "date": Date("date"),
        "min_v4": Threshold("num_v4_pfxs"),
        "min_v6": Threshold("num_v6_pfxs"),
        "min_connected": Threshold("num_connected_asns"),
    }
)
