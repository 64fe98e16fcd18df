"""Record types for roster entries, exported users and API responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class UserRef:
    """A roster entry as shown on the page."""

    user_name: str
    user_id: str


@dataclass(frozen=True)
class UserRecord:
    """One exported row.

    Missing data is carried as sentinels rather than by dropping the user:
    ``address`` is ``""`` when the profile lookup failed and ``inu_balance``
    is ``"0"`` when there is no address or the balance call failed.
    """

    user_id: str
    user_name: str
    address: str = ""
    yukichi_coin: str = ""
    inu_balance: str = "0"

    def to_record(self) -> dict[str, str]:
        """Return the Singer / CSV wire form."""
        return {
            "userId": self.user_id,
            "userName": self.user_name,
            "address": self.address,
            "yukichiCoin": self.yukichi_coin,
            "inuBalance": self.inu_balance,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> UserRecord:
        return cls(
            user_id=str(record.get("userId") or ""),
            user_name=str(record.get("userName") or ""),
            address=str(record.get("address") or ""),
            yukichi_coin=str(record.get("yukichiCoin") or ""),
            inu_balance=str(record.get("inuBalance") or "0"),
        )


@dataclass(frozen=True)
class UserProfile:
    """Decoded body of ``GET /users/{user_id}``.

    Only the wallet address is read; any missing or non-object level of
    ``user_data.eth`` decodes to ``None``.
    """

    eth: str | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> UserProfile:
        if not isinstance(payload, dict):
            return cls()
        user_data = payload.get("user_data")
        if not isinstance(user_data, dict):
            return cls()
        eth = user_data.get("eth")
        return cls(eth=eth if isinstance(eth, str) and eth else None)


@dataclass(frozen=True)
class RpcResponse:
    """Decoded JSON-RPC 2.0 reply."""

    result: str | None = None
    error: dict[str, Any] | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> RpcResponse:
        if not isinstance(payload, dict):
            return cls()
        result = payload.get("result")
        error = payload.get("error")
        return cls(
            result=result if isinstance(result, str) else None,
            error=error if isinstance(error, dict) else None,
        )
