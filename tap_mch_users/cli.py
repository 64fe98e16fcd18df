"""
Command-line entrypoint for exporting MCH rosters to CSV.

Usage:
    mch-users-export export --url https://www.mycryptoheroes.net/arena/...
    mch-users-export export --html-file saved_page.html --output-dir exports
    mch-users-export convert output.jsonl --output users.csv

`export` runs the whole flow in-process:
    1. Render (or read) the page and extract the roster
    2. For each user, in order: address lookup, then balance lookup
    3. Write mch_users_<date>.csv

`convert` turns the JSONL written by `tap-mch-users | target-jsonl` into the
same CSV layout.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from tap_mch_users import config
from tap_mch_users.client import MchApiClient, OasysRpcClient
from tap_mch_users.exporter import default_export_filename, write_csv
from tap_mch_users.layouts import RosterNotFoundError, extract_roster
from tap_mch_users.models import UserRecord
from tap_mch_users.pipeline import collect_user_records
from tap_mch_users.scraper import load_page_html

logger = logging.getLogger("tap_mch_users")


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure and return the package logger."""
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not logger.handlers:
        handler = logging.StreamHandler()
        fmt = logging.Formatter(
            "%(asctime)s | %(levelname)-7s | %(message)s",
            datefmt="%H:%M:%S",
        )
        handler.setFormatter(fmt)
        logger.addHandler(handler)
    return logger


def _output_path(args: argparse.Namespace) -> str:
    if args.output:
        return args.output
    return os.path.join(args.output_dir, default_export_filename())


def run_export(args: argparse.Namespace) -> int:
    html = load_page_html(
        page_url=args.url,
        html_file=args.html_file,
        headless=not args.headed,
        wait_timeout_ms=args.wait_timeout_ms,
    )
    users = extract_roster(html)
    if not users:
        raise RosterNotFoundError(
            "User list not found. Run this on an arena or tournament page."
        )

    api = MchApiClient(base_url=args.api_base_url, timeout=args.timeout)
    rpc = OasysRpcClient(
        rpc_url=args.rpc_url,
        token_contract=args.token_contract,
        timeout=args.timeout,
    )
    records = collect_user_records(users, api, rpc, delay_seconds=args.delay)

    path = write_csv(records, _output_path(args))
    logger.info("Exported %d users to %s", len(records), path)
    return 0


def load_singer_records(input_path: str, stream: str = "users") -> list[UserRecord]:
    """Read RECORD messages of ``stream`` from a Singer JSONL file."""
    records = []
    with open(input_path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            message = json.loads(line)

            # Only process Singer RECORD messages
            if message.get("type") != "RECORD" or message.get("stream") != stream:
                continue

            records.append(UserRecord.from_record(message.get("record") or {}))
    return records


def run_convert(args: argparse.Namespace) -> int:
    records = load_singer_records(args.input)
    if not records:
        logger.warning("No records found in %s. CSV not created.", args.input)
        return 1

    path = write_csv(records, _output_path(args))
    logger.info("Converted %d records -> %s", len(records), path)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Export MCH user rosters to CSV")
    parser.add_argument("--log-level", default=config.LOG_LEVEL,
                        help="Logging level (default: %(default)s)")
    sub = parser.add_subparsers(dest="command", required=True)

    export = sub.add_parser("export", help="Scrape a page and export its users")
    source = export.add_mutually_exclusive_group(required=True)
    source.add_argument("--url", help="Arena or tournament page URL")
    source.add_argument("--html-file", help="Saved HTML of the page")
    export.add_argument("--headed", action="store_true",
                        help="Show the browser window")
    export.add_argument("--wait-timeout-ms", type=int, default=config.PAGE_WAIT_TIMEOUT_MS)
    export.add_argument("--api-base-url", default=config.MCH_API_BASE_URL)
    export.add_argument("--rpc-url", default=config.OASYS_RPC_URL)
    export.add_argument("--token-contract", default=config.MCHINU_CONTRACT,
                        help="Token contract whose balance is exported")
    export.add_argument("--delay", type=float, default=config.REQUEST_DELAY_SECONDS,
                        help="Seconds to wait after each user (default: %(default)s)")
    export.add_argument("--timeout", type=float, default=config.REQUEST_TIMEOUT_SECONDS,
                        help="HTTP timeout in seconds (default: %(default)s)")
    export.add_argument("--output", help="CSV path (overrides --output-dir)")
    export.add_argument("--output-dir", default=".",
                        help="Directory for mch_users_<date>.csv")
    export.set_defaults(func=run_export)

    convert = sub.add_parser("convert", help="Convert Singer JSONL output to CSV")
    convert.add_argument("input", help="JSONL file written by target-jsonl")
    convert.add_argument("--output", help="CSV path (overrides --output-dir)")
    convert.add_argument("--output-dir", default=".",
                         help="Directory for mch_users_<date>.csv")
    convert.set_defaults(func=run_convert)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        return args.func(args)
    except RosterNotFoundError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
