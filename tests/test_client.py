"""Tests for the address resolver and balance fetcher."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from tap_mch_users.client import (
    MchApiClient,
    OasysRpcClient,
    encode_balance_of,
    parse_balance,
)

ADDRESS = "0xAbCdEf0123456789aBcDeF0123456789AbCdEf01"


def _response(payload=None, status_code=200, json_error=None):
    response = MagicMock()
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"HTTP {status_code}")
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


# --- Address resolver ---

def test_resolve_address_returns_eth_field():
    session = MagicMock()
    session.get.return_value = _response({"user_data": {"eth": ADDRESS, "name": "x"}})
    api = MchApiClient(base_url="https://example.test/api/", session=session)

    assert api.resolve_address("1001") == ADDRESS
    url = session.get.call_args[0][0]
    assert url == "https://example.test/api/users/1001"


@pytest.mark.parametrize("payload", [
    {},
    {"user_data": None},
    {"user_data": {}},
    {"user_data": {"eth": None}},
    {"user_data": {"eth": ""}},
    [],
])
def test_resolve_address_missing_field_returns_empty(payload):
    session = MagicMock()
    session.get.return_value = _response(payload)
    api = MchApiClient(session=session)
    assert api.resolve_address("1001") == ""


def test_resolve_address_http_error_returns_empty(caplog):
    session = MagicMock()
    session.get.return_value = _response(status_code=404)
    api = MchApiClient(session=session)

    assert api.resolve_address("1001") == ""
    assert "Address lookup failed (user 1001)" in caplog.text


def test_resolve_address_network_error_returns_empty():
    session = MagicMock()
    session.get.side_effect = requests.ConnectionError("boom")
    api = MchApiClient(session=session)
    assert api.resolve_address("1001") == ""


def test_resolve_address_invalid_json_returns_empty():
    session = MagicMock()
    session.get.return_value = _response(json_error=ValueError("not json"))
    api = MchApiClient(session=session)
    assert api.resolve_address("1001") == ""


# --- balanceOf encoding ---

def test_encode_balance_of_pads_address_to_32_bytes():
    data = encode_balance_of(ADDRESS)
    assert data.startswith("0x70a08231")
    arg = data[len("0x70a08231"):]
    assert len(arg) == 64
    assert arg == "0" * 24 + ADDRESS[2:]


# --- Balance parsing ---

@pytest.mark.parametrize("result,expected", [
    ("0x", "0"),
    ("0x0", "0"),
    ("", "0"),
    (None, "0"),
    ("0x5", "5"),
    ("0x64", "100"),
    ("0x" + "0" * 62 + "2a", "42"),
])
def test_parse_balance(result, expected):
    assert parse_balance(result) == expected


def test_parse_balance_keeps_full_precision():
    """Values beyond float precision must survive unchanged."""
    big = 2**200 + 1
    assert parse_balance(hex(big)) == str(big)


# --- Balance fetcher ---

def test_fetch_balance_posts_eth_call_envelope():
    session = MagicMock()
    session.post.return_value = _response({"jsonrpc": "2.0", "id": 1, "result": "0x5"})
    rpc = OasysRpcClient(rpc_url="https://rpc.test", token_contract="0xToken", session=session)

    assert rpc.fetch_balance(ADDRESS, "1001") == "5"

    args, kwargs = session.post.call_args
    assert args[0] == "https://rpc.test"
    payload = kwargs["json"]
    assert payload["jsonrpc"] == "2.0"
    assert payload["method"] == "eth_call"
    assert payload["id"] == 1
    assert payload["params"][1] == "latest"
    assert payload["params"][0] == {"to": "0xToken", "data": encode_balance_of(ADDRESS)}


@pytest.mark.parametrize("result", ["0x", "0x0"])
def test_fetch_balance_zero_results(result):
    session = MagicMock()
    session.post.return_value = _response({"result": result})
    rpc = OasysRpcClient(session=session)
    assert rpc.fetch_balance(ADDRESS) == "0"


def test_fetch_balance_network_error_returns_zero(caplog):
    session = MagicMock()
    session.post.side_effect = requests.Timeout("slow")
    rpc = OasysRpcClient(session=session)

    assert rpc.fetch_balance(ADDRESS, "1001") == "0"
    assert "Balance lookup failed (user 1001)" in caplog.text


def test_fetch_balance_http_error_returns_zero():
    session = MagicMock()
    session.post.return_value = _response(status_code=502)
    rpc = OasysRpcClient(session=session)
    assert rpc.fetch_balance(ADDRESS) == "0"


def test_fetch_balance_rpc_error_returns_zero():
    session = MagicMock()
    session.post.return_value = _response(
        {"jsonrpc": "2.0", "id": 1, "error": {"code": -32000, "message": "execution reverted"}}
    )
    rpc = OasysRpcClient(session=session)
    assert rpc.fetch_balance(ADDRESS) == "0"


def test_fetch_balance_malformed_hex_returns_zero():
    session = MagicMock()
    session.post.return_value = _response({"result": "0xzz"})
    rpc = OasysRpcClient(session=session)
    assert rpc.fetch_balance(ADDRESS) == "0"
