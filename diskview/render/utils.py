"""
diskview.render.utils
AUTHOR: carter-vin

Formatting helpers for renderers
"""

from __future__ import annotations

from typing import Sequence

from diskcheck.evaluate import BYTES_PER_GB
from diskcheck.model import VolumeReportRow

ROW_HEADERS = [
    "DRIVE",
    "LABEL",
    "FILESYSTEM",
    "TYPE",
    "TOTAL(GB)",
    "FREE(GB)",
    "USED(GB)",
    "FREE(%)",
    "STATUS",
]


def format_gb(bytes_value: int | None) -> str:
    if bytes_value is None:
        return "n/a"
    return f"{bytes_value / BYTES_PER_GB:.2f} GB"


def format_num(value: float) -> str:
    return f"{value:.2f}"


def row_cells(row: VolumeReportRow) -> list[str]:
    return [
        row.device_id,
        row.label or "-",
        row.filesystem or "-",
        row.drive_type,
        format_num(row.total_gb),
        format_num(row.free_gb),
        format_num(row.used_gb),
        format_num(row.free_percent),
        row.status.value,
    ]


def format_table(headers: Sequence[str], body: Sequence[Sequence[str]]) -> list[str]:
    """
    Left-aligned columns separated by two spaces
    """
    rows = [list(headers)] + [list(cells) for cells in body]
    widths = [max(len(row[i]) for row in rows) for i in range(len(headers))]

    lines: list[str] = []
    for row in rows:
        padded = [row[i].ljust(widths[i]) for i in range(len(headers))]
        lines.append("  ".join(padded).rstrip())
    return lines
