"""CSV read/write with upsert by rikishi id."""

import csv
import logging
from pathlib import Path

from rikishidata.models import RikishiRecord

logger = logging.getLogger(__name__)

RIKISHI_COLUMNS = [
    "rid", "shikona", "highest_rank", "real_name", "birth_date", "origin",
    "height_cm", "weight_kg", "university", "heya", "first_basho",
]

RIKISHI_KEY_COLUMNS = ["rid"]
RIKISHI_SORT_COLUMNS = ["rid"]


def _records_to_dicts(records: list[RikishiRecord]) -> list[dict]:
    return [r.as_row() for r in records]


def _read_csv(path: Path) -> list[dict]:
    """Read existing CSV file, return list of dicts. Empty list if missing."""
    if not path.exists():
        return []
    with open(path, "r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        return list(reader)


def _write_csv(path: Path, rows: list[dict], fieldnames: list[str]) -> None:
    """Write rows to CSV with LF line endings."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(
            f, fieldnames=fieldnames, quoting=csv.QUOTE_MINIMAL,
            lineterminator="\n", extrasaction="ignore",
        )
        writer.writeheader()
        writer.writerows(rows)


def _sort_rows(rows: list[dict], sort_columns: list[str]) -> list[dict]:
    """Sort rows by sort_columns. Numeric columns sorted as numbers."""
    numeric_cols = {"rid", "height_cm", "weight_kg"}

    def sort_key(row: dict) -> tuple:
        parts = []
        for col in sort_columns:
            val = row.get(col, "")
            if col in numeric_cols:
                try:
                    parts.append(int(val))
                except (ValueError, TypeError):
                    parts.append(0)
            else:
                parts.append(val)
        return tuple(parts)

    return sorted(rows, key=sort_key)


def upsert(
    csv_path: Path,
    new_records: list[dict],
    key_columns: list[str],
    sort_columns: list[str],
    fieldnames: list[str],
) -> None:
    """Read existing CSV, upsert new records by key, write sorted output."""
    existing = _read_csv(csv_path)

    indexed: dict[tuple, dict] = {}
    for row in existing:
        key = tuple(str(row.get(k, "")) for k in key_columns)
        indexed[key] = row

    for row in new_records:
        key = tuple(str(row.get(k, "")) for k in key_columns)
        indexed[key] = row

    rows = _sort_rows(list(indexed.values()), sort_columns)
    _write_csv(csv_path, rows, fieldnames)
    logger.info("Upserted %d new records -> %d total rows in %s",
                len(new_records), len(rows), csv_path)


def write_rikishi_csv(records: list[RikishiRecord], path: Path) -> None:
    """Write the rikishi profile CSV from scratch."""
    rows = _sort_rows(_records_to_dicts(records), RIKISHI_SORT_COLUMNS)
    _write_csv(path, rows, RIKISHI_COLUMNS)
    logger.info("Wrote %d rikishi rows to %s", len(rows), path)


def update_rikishi_csv(records: list[RikishiRecord], path: Path) -> None:
    """Upsert rikishi profiles into an existing CSV keyed by rid."""
    upsert(
        path, _records_to_dicts(records),
        RIKISHI_KEY_COLUMNS, RIKISHI_SORT_COLUMNS, RIKISHI_COLUMNS,
    )
