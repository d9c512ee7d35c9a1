from __future__ import annotations

import argparse
import json

import pytest

from app.deps import AppState
from app.field_policy import field_policy_from_env
from cli import bgpkit_cli
from core.query.fields import FieldPolicy
from storage.postgrest import StoreError
from tests.fakes import FakeStore


def test_parser_maps_dashed_options():
    args = bgpkit_cli.build_parser().parse_args(
        ["broker", "--ts-start", "1640995200", "--duration", "1h", "--data-type", "rib", "--page-size", "5"]
    )
    assert args.func is bgpkit_cli.cmd_broker
    assert (args.ts_start, args.duration, args.data_type, args.page_size) == ("1640995200", "1h", "rib", 5)


def test_tristate_flags():
    args = bgpkit_cli.build_parser().parse_args(["peers", "--latest", "false"])
    assert args.latest is False
    assert bgpkit_cli.build_parser().parse_args(["peers"]).latest is None
    with pytest.raises(argparse.ArgumentTypeError):
        bgpkit_cli._tristate("maybe")


def _patch_state(monkeypatch, store):
    state = AppState(store=store, api_cfg={})

    async def _close():
        return None

    monkeypatch.setattr(bgpkit_cli, "get_app_state", lambda: state)
    monkeypatch.setattr(bgpkit_cli, "close_app_state", _close)


def test_command_prints_envelope(monkeypatch, capsys):
    store = FakeStore(rows=[{"asn": 64496, "as_name": "EXAMPLE"}])
    _patch_state(monkeypatch, store)
    args = bgpkit_cli.build_parser().parse_args(["asninfo", "--asn", "64496"])
    args.func(args)
    payload = json.loads(capsys.readouterr().out)
    assert payload["count"] == 1
    assert payload["data"][0]["as_name"] == "EXAMPLE"


def test_command_errors_exit_non_zero(monkeypatch, capsys):
    _patch_state(monkeypatch, FakeStore(error=StoreError("database request failed")))
    args = bgpkit_cli.build_parser().parse_args(["broker"])
    with pytest.raises(SystemExit) as ctx:
        args.func(args)
    assert ctx.value.code == 1
    assert json.loads(capsys.readouterr().out) == {"status_code": 500, "errors": ["database request failed"]}


@pytest.mark.parametrize(
    ("env", "default", "expected"),
    [
        ("strict", "lenient", FieldPolicy.STRICT),
        ("LENIENT", "strict", FieldPolicy.LENIENT),
        ("", "strict", FieldPolicy.STRICT),
        ("", "garbage", FieldPolicy.LENIENT),
    ],
)
def test_field_policy_from_env(monkeypatch, env, default, expected):
    monkeypatch.setenv("BGPKIT_FIELD_POLICY", env)
    assert field_policy_from_env(default) is expected


def test_broker_duration_fields_reach_the_window(monkeypatch, capsys):
    store = FakeStore()
    _patch_state(monkeypatch, store)
    args = bgpkit_cli.build_parser().parse_args(
        ["broker", "--ts-start", "2022-01-01T00:00:00", "--duration-hours", "2", "--duration-minutes", "30"]
    )
    args.func(args)
    assert json.loads(capsys.readouterr().out)["count"] == 0
    (query,) = store.queries
    assert [(p.field, p.value) for p in query.predicates] == [
        ("ts_start", "2022-01-01T02:30:00"),
        ("ts_end", "2022-01-01T00:00:00"),
    ]
