"""
diskcheck.export

AUTHOR: carter-vin

OUTPUT:
- CSV file, one line per volume row across all successful hosts
- sibling "<stem>_Summary.txt" with per-host counts and totals

Design goals:
- Column names and order stay fixed for downstream consumers
- Create export directory if missing
- Provide explicit error surfaces (do not silently drop data)
"""

from __future__ import annotations

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from diskcheck.evaluate import BYTES_PER_GB, round2
from diskcheck.model import HostReport, HostSuccess, Status, VolumeReportRow

CSV_COLUMNS = [
    "ComputerName",
    "Drive",
    "Label",
    "FileSystem",
    "Type",
    "Total(GB)",
    "Free(GB)",
    "Used(GB)",
    "Free(%)",
    "Used(%)",
    "Status",
]

SUMMARY_RULE = "-" * 40


@dataclass(frozen=True)
class ExportPaths:
    csv_path: Path
    summary_path: Path


def _num(value: float) -> str:
    return f"{value:.2f}"


def row_to_csv(row: VolumeReportRow) -> list[str]:
    return [
        row.host_name,
        row.device_id,
        row.label,
        row.filesystem,
        row.drive_type,
        _num(row.total_gb),
        _num(row.free_gb),
        _num(row.used_gb),
        _num(row.free_percent),
        _num(row.used_percent),
        row.status.value,
    ]


def _successes(reports: Sequence[HostReport]) -> list[HostSuccess]:
    return [report for report in reports if isinstance(report, HostSuccess)]


def summary_path_for(csv_path: Path) -> Path:
    """
    Sibling summary path: report.csv -> report_Summary.txt
    """
    return csv_path.with_name(f"{csv_path.stem}_Summary.txt")


def write_csv_report(reports: Sequence[HostReport], csv_path: Path) -> None:
    """
    Write every row of every successful host

    Failure semantics:
    - raises on IO errors; caller decides how to surface them
    """
    csv_path.parent.mkdir(parents=True, exist_ok=True)

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_COLUMNS)
        for report in _successes(reports):
            for row in report.rows:
                writer.writerow(row_to_csv(row))


def render_summary(reports: Sequence[HostReport], *, generated_at: str) -> str:
    lines: list[str] = [f"Disk Space Summary - {generated_at}", SUMMARY_RULE]

    for report in _successes(reports):
        lines.append(f"Computer: {report.host_name}")
        lines.append(f"Total Drives: {report.volume_count}")
        lines.append(f"Total Size (GB): {_num(round2(report.total_bytes / BYTES_PER_GB))}")
        lines.append(f"Total Free (GB): {_num(round2(report.total_free_bytes / BYTES_PER_GB))}")
        lines.append(f"Critical Drives: {report.count(Status.CRITICAL)}")
        lines.append(f"Warning Drives: {report.count(Status.WARNING)}")
        lines.append(SUMMARY_RULE)

    return "\n".join(lines) + "\n"


def write_summary(reports: Sequence[HostReport], summary_path: Path, *, generated_at: str) -> None:
    summary_path.parent.mkdir(parents=True, exist_ok=True)
    summary_path.write_text(render_summary(reports, generated_at=generated_at), encoding="utf-8")


def export_reports(
    reports: Sequence[HostReport],
    csv_path: Path,
    *,
    generated_at: str,
) -> ExportPaths:
    """
    Write the CSV export and its summary sibling
    """
    summary_path = summary_path_for(csv_path)
    write_csv_report(reports, csv_path)
    write_summary(reports, summary_path, generated_at=generated_at)
    return ExportPaths(csv_path=csv_path, summary_path=summary_path)
