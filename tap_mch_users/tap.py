"""TapMchUsers - Meltano SDK tap for My Crypto Heroes user rosters."""

from __future__ import annotations

from singer_sdk import Stream, Tap
from singer_sdk.typing import (
    BooleanType,
    IntegerType,
    NumberType,
    PropertiesList,
    Property,
    StringType,
)

from tap_mch_users import config
from tap_mch_users.streams import UsersStream


class TapMchUsers(Tap):
    """MCH arena/tournament roster tap built with the Meltano Singer SDK."""

    name = "tap-mch-users"

    config_jsonschema = PropertiesList(
        Property(
            "page_url",
            StringType,
            description="Arena (league) or tournament page URL to render.",
        ),
        Property(
            "html_file",
            StringType,
            description="Saved HTML of the page; used instead of page_url when set.",
        ),
        Property(
            "headless",
            BooleanType,
            default=True,
            description="Run Playwright browser in headless mode.",
        ),
        Property(
            "wait_timeout_ms",
            IntegerType,
            default=config.PAGE_WAIT_TIMEOUT_MS,
            description="How long to wait for the roster to render.",
        ),
        Property(
            "api_base_url",
            StringType,
            default=config.MCH_API_BASE_URL,
            description="Base URL of the MCH user API proxy.",
        ),
        Property(
            "rpc_url",
            StringType,
            default=config.OASYS_RPC_URL,
            description="JSON-RPC endpoint used for balanceOf calls.",
        ),
        Property(
            "token_contract",
            StringType,
            default=config.MCHINU_CONTRACT,
            description="Token contract whose balance is exported.",
        ),
        Property(
            "request_delay_seconds",
            NumberType,
            default=config.REQUEST_DELAY_SECONDS,
            description="Seconds to wait after each user.",
        ),
        Property(
            "request_timeout_seconds",
            NumberType,
            default=config.REQUEST_TIMEOUT_SECONDS,
            description="Timeout for each HTTP request.",
        ),
    ).to_dict()

    def discover_streams(self) -> list[Stream]:
        """Return a list of discovered streams."""
        return [UsersStream(tap=self)]


if __name__ == "__main__":
    TapMchUsers.cli()
