from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.deps import AppState, get_api_cfg, get_app_state
from app.main import create_app
from core.query.fields import FieldPolicy
from tests.fakes import FakeStore


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def make_state():
    def _make(store: FakeStore, policy: FieldPolicy = FieldPolicy.LENIENT) -> AppState:
        return AppState(store=store, api_cfg=get_api_cfg(), field_policy=policy)

    return _make


@pytest.fixture
def make_client(make_state):
    def _make(
        store: FakeStore,
        policy: FieldPolicy = FieldPolicy.LENIENT,
        raise_server_exceptions: bool = True,
    ) -> TestClient:
        app = create_app()
        state = make_state(store, policy)
        app.dependency_overrides[get_app_state] = lambda: state
        return TestClient(app, raise_server_exceptions=raise_server_exceptions)

    return _make
