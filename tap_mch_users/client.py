"""HTTP clients for the MCH user API and the Oasys JSON-RPC endpoint.

Both lookups are best-effort: a failed call is logged and replaced by a
sentinel value so one bad user never aborts the batch. Nothing is retried.
"""

from __future__ import annotations

import logging

import requests

from tap_mch_users import config
from tap_mch_users.models import RpcResponse, UserProfile

logger = logging.getLogger(__name__)


def _new_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({"Accept": "application/json"})
    return session


class MchApiClient:
    """Resolves MCH user ids to wallet addresses."""

    def __init__(
        self,
        base_url: str = config.MCH_API_BASE_URL,
        session: requests.Session | None = None,
        timeout: float = config.REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or _new_session()
        self.timeout = timeout

    def fetch_profile(self, user_id: str) -> UserProfile:
        """GET the user's profile. Raises on transport or HTTP errors."""
        response = self.session.get(
            f"{self.base_url}/users/{user_id}", timeout=self.timeout
        )
        response.raise_for_status()
        return UserProfile.from_payload(response.json())

    def resolve_address(self, user_id: str) -> str:
        """Return the user's wallet address, or "" if it cannot be resolved."""
        try:
            profile = self.fetch_profile(user_id)
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Address lookup failed (user %s): %s", user_id, exc)
            return ""
        return profile.eth or ""


def encode_balance_of(address: str) -> str:
    """Build the eth_call data for ``balanceOf(address)``."""
    return config.BALANCE_OF_SELECTOR + address[2:].rjust(64, "0")


def parse_balance(result: str | None) -> str:
    """Convert an eth_call hex result to a base-10 string; empty/zero -> "0"."""
    if not result or result in ("0x", "0x0"):
        return "0"
    return str(int(result, 16))


class OasysRpcClient:
    """Reads MCHINU balances through ``eth_call``."""

    def __init__(
        self,
        rpc_url: str = config.OASYS_RPC_URL,
        token_contract: str = config.MCHINU_CONTRACT,
        session: requests.Session | None = None,
        timeout: float = config.REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        self.rpc_url = rpc_url
        self.token_contract = token_contract
        self.session = session or _new_session()
        self.timeout = timeout

    def eth_call(self, to: str, data: str) -> RpcResponse:
        """POST a single eth_call at the latest block. Raises on HTTP errors."""
        payload = {
            "jsonrpc": "2.0",
            "method": "eth_call",
            "params": [{"to": to, "data": data}, "latest"],
            "id": 1,
        }
        response = self.session.post(self.rpc_url, json=payload, timeout=self.timeout)
        response.raise_for_status()
        return RpcResponse.from_payload(response.json())

    def fetch_balance(self, address: str, user_id: str | None = None) -> str:
        """Return the token balance of ``address`` as a decimal string.

        Any failure (transport, HTTP status, RPC error, malformed result)
        yields "0" and a warning.
        """
        try:
            reply = self.eth_call(self.token_contract, encode_balance_of(address))
            if reply.error is not None:
                logger.warning(
                    "Balance lookup returned RPC error (user %s): %s",
                    user_id, reply.error,
                )
                return "0"
            return parse_balance(reply.result)
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Balance lookup failed (user %s): %s", user_id, exc)
            return "0"
