"""Run the roster export CLI with ``python -m tap_mch_users``."""

import sys

from tap_mch_users.cli import main

sys.exit(main())
