"""
Endpoints, contract constants and defaults for the MCH roster export.

Values that differ between environments can be overridden with environment
variables; everything else is fixed by the game site and the chain.
"""

import os

# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------
# User profiles are served through the game site's API proxy:
#   GET {MCH_API_BASE_URL}/users/{user_id} -> {"user_data": {"eth": "0x..."}}
MCH_API_BASE_URL = os.getenv(
    "MCH_API_BASE_URL", "https://www.mycryptoheroes.net/api/proxy/mch"
)

# Oasys mainnet JSON-RPC endpoint used for eth_call.
OASYS_RPC_URL = os.getenv("OASYS_RPC_URL", "https://rpc.mainnet.oasys.games")

# ---------------------------------------------------------------------------
# Token
# ---------------------------------------------------------------------------
# MCHINU has zero decimals, so balances are exported as raw integers.
MCHINU_CONTRACT = os.getenv(
    "MCHINU_CONTRACT", "0x6b7b5F6D7411F374694595d05719ad2f060aAC61"
)

# keccak256("balanceOf(address)")[:4]
BALANCE_OF_SELECTOR = "0x70a08231"

# ---------------------------------------------------------------------------
# Pacing
# ---------------------------------------------------------------------------
# The user API has an informal rate limit; one user is processed at a time
# and the pipeline sleeps this long after each one.
REQUEST_DELAY_SECONDS = 0.1

REQUEST_TIMEOUT_SECONDS = 30

# Playwright wait for either roster container to render.
PAGE_WAIT_TIMEOUT_MS = 30000

# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------
CSV_HEADER = ["ユーザID", "ユーザ名", "アドレス", "yukichi発行コイン", "InuBalance"]
EXPORT_FILENAME_TEMPLATE = "mch_users_{date}.csv"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
