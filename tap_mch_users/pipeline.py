"""Sequential per-user lookup: address, then issued coins and balance."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Iterator

from tap_mch_users import config
from tap_mch_users.client import MchApiClient, OasysRpcClient
from tap_mch_users.models import UserRecord, UserRef

logger = logging.getLogger(__name__)


def fetch_issued_coins(address: str, user_id: str) -> str:
    """Coins issued by the user. The column is exported empty."""
    return ""


def iter_user_records(
    users: Iterable[UserRef],
    api: MchApiClient,
    rpc: OasysRpcClient,
    delay_seconds: float = config.REQUEST_DELAY_SECONDS,
) -> Iterator[UserRecord]:
    """Yield one record per roster entry, in roster order.

    Users are processed one at a time with a pause after each, so the
    upstream API never sees concurrent requests from this process.
    """
    users = list(users)
    total = len(users)

    for i, user in enumerate(users, start=1):
        logger.info("%d/%d - processing user %s", i, total, user.user_id)

        address = api.resolve_address(user.user_id)
        yukichi_coin = ""
        inu_balance = "0"
        if address:
            yukichi_coin = fetch_issued_coins(address, user.user_id)
            inu_balance = rpc.fetch_balance(address, user.user_id)

        yield UserRecord(
            user_id=user.user_id,
            user_name=user.user_name,
            address=address,
            yukichi_coin=yukichi_coin,
            inu_balance=inu_balance,
        )

        time.sleep(delay_seconds)


def collect_user_records(
    users: Iterable[UserRef],
    api: MchApiClient,
    rpc: OasysRpcClient,
    delay_seconds: float = config.REQUEST_DELAY_SECONDS,
) -> list[UserRecord]:
    return list(iter_user_records(users, api, rpc, delay_seconds))
