"""
diskview.read
AUTHOR: carter-vin

CSV export reader utilities
"""

from __future__ import annotations

import csv
from pathlib import Path

from diskcheck.export import CSV_COLUMNS
from diskcheck.model import Status, VolumeReportRow


def _parse_row(record: dict[str, str | None]) -> VolumeReportRow | None:
    """
    Parse a single export line into a row or return None if invalid
    """
    try:
        return VolumeReportRow(
            host_name=(record["ComputerName"] or "").strip(),
            device_id=record["Drive"] or "",
            label=record["Label"] or "",
            filesystem=record["FileSystem"] or "",
            drive_type=record["Type"] or "Unknown",
            total_gb=float(record["Total(GB)"] or ""),
            free_gb=float(record["Free(GB)"] or ""),
            used_gb=float(record["Used(GB)"] or ""),
            free_percent=float(record["Free(%)"] or ""),
            used_percent=float(record["Used(%)"] or ""),
            status=Status((record["Status"] or "").strip().upper()),
        )
    except (KeyError, TypeError, ValueError):
        return None


def read_csv_report(path: Path) -> tuple[list[VolumeReportRow], int]:
    """
    Read rows from a CSV export

    Returns:
    - list of parsed rows in file order
    - count of invalid lines

    Raises ValueError when the header does not match the export columns
    """
    # Missing export means nothing to report yet
    if not path.exists():
        return [], 0

    rows: list[VolumeReportRow] = []
    invalid = 0

    with path.open(newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        if reader.fieldnames is None:
            return [], 0
        missing = [column for column in CSV_COLUMNS if column not in reader.fieldnames]
        if missing:
            raise ValueError(f"missing columns: {', '.join(missing)}")

        for record in reader:
            row = _parse_row(record)
            if row is None or not row.host_name:
                invalid += 1
                continue
            rows.append(row)

    return rows, invalid
