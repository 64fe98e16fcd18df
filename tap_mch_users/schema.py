"""JSON schema definitions for the users stream."""

from singer_sdk.typing import (
    PropertiesList,
    Property,
    StringType,
)

USERS_SCHEMA = PropertiesList(
    Property("userId", StringType, required=True, description="MCH user id, without '#'"),
    Property("userName", StringType, required=True, description="Display name on the page"),
    Property("address", StringType, description="Wallet address, empty if unresolved"),
    Property("yukichiCoin", StringType, description="Issued coins (always empty)"),
    Property("inuBalance", StringType, required=True, description="MCHINU balance, base-10 integer"),
).to_dict()
