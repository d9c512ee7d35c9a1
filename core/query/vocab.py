"""Controlled vocabularies accepted by the query endpoints."""

from __future__ import annotations

from typing import Dict, Tuple

# user-facing synonym -> canonical value
PROJECT_SYNONYMS: Dict[str, str] = {
    "route-views": "route-views",
    "routeviews": "route-views",
    "rv": "route-views",
    "ripe": "riperis",
    "ripencc": "riperis",
    "riperis": "riperis",
    "ris": "riperis",
}

# canonical project -> collector_id pattern
PROJECT_COLLECTOR_PATTERNS: Dict[str, str] = {
    "route-views": "route-views*",
    "riperis": "rrc*",
}

DATA_TYPE_SYNONYMS: Dict[str, str] = {
    "update": "update",
    "updates": "update",
    "u": "update",
    "rib": "rib",
    "ribs": "rib",
    "r": "rib",
}

TRUST_ANCHORS: Tuple[str, ...] = ("afrinic", "apnic", "arin", "lacnic", "ripencc")


def project_for_collector(collector_id: str) -> str:
    """Infer the route collector project from a collector id such as ``rrc00``."""
    return "riperis" if "rrc" in collector_id else "route-views"
