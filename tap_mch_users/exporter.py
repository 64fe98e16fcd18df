"""
CSV export of user records.

The file is written as UTF-8 with a byte-order mark so that Excel opens the
Japanese header correctly. The header is plain; in every row the user name,
address and issued-coin columns are always quoted while the id and balance
are written bare.
"""

import csv
import os
from datetime import date, datetime, timezone

from tap_mch_users import config
from tap_mch_users.models import UserRecord

_WIRE_FIELDS = ["userId", "userName", "address", "yukichiCoin", "inuBalance"]


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def format_row(record: UserRecord) -> str:
    """Format one record as a CSV line (without line terminator)."""
    return ",".join([
        record.user_id,
        _quote(record.user_name),
        _quote(record.address),
        _quote(record.yukichi_coin),
        record.inu_balance,
    ])


def render_csv(records: list[UserRecord]) -> str:
    """Return the CSV document (header + one line per record), BOM excluded."""
    lines = [",".join(config.CSV_HEADER)]
    lines.extend(format_row(r) for r in records)
    return "\n".join(lines) + "\n"


def default_export_filename(today: date | None = None) -> str:
    """``mch_users_<YYYY-MM-DD>.csv``, dated in UTC when ``today`` is omitted."""
    if today is None:
        today = datetime.now(timezone.utc).date()
    return config.EXPORT_FILENAME_TEMPLATE.format(date=today.isoformat())


def write_csv(records: list[UserRecord], filepath: str) -> str:
    """Write records to ``filepath`` with a UTF-8 BOM and return the path."""
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)
    # utf-8-sig emits the BOM as the first bytes of the file
    with open(filepath, "w", encoding="utf-8-sig", newline="") as f:
        f.write(render_csv(records))
    return filepath


def read_csv(filepath: str) -> list[UserRecord]:
    """
    Load an export back into records.

    Columns are read by position because the header is localised; a BOM,
    if present, is skipped.
    """
    records = []
    with open(filepath, encoding="utf-8-sig", newline="") as f:
        reader = csv.reader(f)
        next(reader, None)
        for row in reader:
            if not row:
                continue
            records.append(UserRecord.from_record(dict(zip(_WIRE_FIELDS, row))))
    return records
