"""Stream definitions for tap-mch-users."""

from __future__ import annotations

from collections.abc import Iterable

from singer_sdk.streams import Stream

from tap_mch_users import config
from tap_mch_users.client import MchApiClient, OasysRpcClient
from tap_mch_users.layouts import RosterNotFoundError, extract_roster
from tap_mch_users.pipeline import iter_user_records
from tap_mch_users.schema import USERS_SCHEMA
from tap_mch_users.scraper import load_page_html


class UsersStream(Stream):
    """Stream of roster users with their wallet address and MCHINU balance."""

    name = "users"
    primary_keys = ["userId"]
    replication_key = None

    schema = USERS_SCHEMA

    def get_records(self, context: dict | None) -> Iterable[dict]:
        """Extract the roster, then look up each user in order.

        The roster is read before any API call; an empty roster aborts the
        sync with :class:`RosterNotFoundError`.
        """
        page_url = self.config.get("page_url")
        html_file = self.config.get("html_file")
        if not page_url and not html_file:
            raise ValueError("Config must set either 'page_url' or 'html_file'")

        html = load_page_html(
            page_url=page_url,
            html_file=html_file,
            headless=self.config.get("headless", True),
            wait_timeout_ms=self.config.get("wait_timeout_ms", config.PAGE_WAIT_TIMEOUT_MS),
        )
        users = extract_roster(html)
        if not users:
            raise RosterNotFoundError(
                f"No user list found on {html_file or page_url}; "
                "open an arena or tournament page."
            )

        timeout = self.config.get("request_timeout_seconds", config.REQUEST_TIMEOUT_SECONDS)
        api = MchApiClient(
            base_url=self.config.get("api_base_url", config.MCH_API_BASE_URL),
            timeout=timeout,
        )
        rpc = OasysRpcClient(
            rpc_url=self.config.get("rpc_url", config.OASYS_RPC_URL),
            token_contract=self.config.get("token_contract", config.MCHINU_CONTRACT),
            timeout=timeout,
        )

        self.logger.info("Fetching data for %d users", len(users))
        count = 0
        for record in iter_user_records(
            users,
            api,
            rpc,
            delay_seconds=self.config.get("request_delay_seconds", config.REQUEST_DELAY_SECONDS),
        ):
            count += 1
            yield record.to_record()

        self.logger.info("Emitted %d user records", count)
