from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Tuple

import yaml
from dotenv import load_dotenv

from app.field_policy import field_policy_from_env
from app.utils.pagination import SNAPSHOT_PAGE_SIZE
from core.query.fields import FieldPolicy
from storage.postgrest import PostgrestStore, RemoteQueryable
from storage.postgrest.dao import DEFAULT_TIMEOUT_SECONDS

ROOT = Path(__file__).resolve().parent.parent

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 1000


def _load_yaml(path: Path) -> Dict:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"required environment variable {name} not set")
    return value


@dataclass
class AppState:
    store: RemoteQueryable
    api_cfg: Dict
    field_policy: FieldPolicy = FieldPolicy.LENIENT

    def page_bounds(self, endpoint: str) -> Tuple[int, int]:
        """Return ``(default_page_size, max_page_size)`` for an endpoint."""
        cfg = self.api_cfg.get("pagination", {}).get(endpoint, {})
        return (
            int(cfg.get("default_page_size", DEFAULT_PAGE_SIZE)),
            int(cfg.get("max_page_size", MAX_PAGE_SIZE)),
        )

    def snapshot_size(self, endpoint: str) -> int:
        cfg = self.api_cfg.get("pagination", {}).get(endpoint, {})
        return int(cfg.get("snapshot_page_size", SNAPSHOT_PAGE_SIZE))


@lru_cache(maxsize=1)
def get_api_cfg() -> Dict:
    load_dotenv(ROOT / ".env")
    return _load_yaml(ROOT / "config" / "api.yaml")


def build_store(api_cfg: Dict) -> PostgrestStore:
    timeout = os.getenv("BGPKIT_STORE_TIMEOUT") or api_cfg.get("store", {}).get(
        "timeout_seconds", DEFAULT_TIMEOUT_SECONDS
    )
    return PostgrestStore(
        endpoint=_require_env("POSTGREST_ENDPOINT"),
        api_key=_require_env("POSTGREST_API_KEY"),
        timeout=float(timeout),
    )


@lru_cache(maxsize=1)
def get_app_state() -> AppState:
    api_cfg = get_api_cfg()
    return AppState(
        store=build_store(api_cfg),
        api_cfg=api_cfg,
        field_policy=field_policy_from_env(api_cfg.get("field_policy", FieldPolicy.LENIENT.value)),
    )


async def close_app_state() -> None:
    """Release the shared store client if it was ever created."""
    if get_app_state.cache_info().currsize == 0:
        return
    store = get_app_state().store
    if isinstance(store, PostgrestStore):
        await store.aclose()
    get_app_state.cache_clear()
