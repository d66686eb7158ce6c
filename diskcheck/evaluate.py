"""
diskcheck.evaluate
AUTHOR: carter-vin

Volume classification and report assembly

Pure functions only: no I/O, no logging, no clock. Thresholds are always
passed in by the caller.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from diskcheck.model import (
    HostReport,
    HostSuccess,
    RunSummary,
    Status,
    SystemInfo,
    Thresholds,
    VolumeRecord,
    VolumeReportRow,
)

BYTES_PER_GB = 1024 ** 3

DRIVE_TYPES = {
    0: "Unknown",
    1: "No Root Directory",
    2: "Removable",
    3: "Local Disk",
    4: "Network Drive",
    5: "CD/DVD",
    6: "RAM Disk",
}

_TWO_PLACES = Decimal("0.01")


def round2(value: float) -> float:
    """
    Round half away from zero to 2 decimals
    """
    return float(Decimal(repr(value)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def _gb(bytes_value: int) -> float:
    return bytes_value / BYTES_PER_GB


def classify(free_percent: float, thresholds: Thresholds) -> Status:
    """
    Map free percent to a status

    Comparisons are strict: a value equal to a threshold lands in the
    less severe bucket.
    """
    if free_percent < thresholds.critical_percent:
        return Status.CRITICAL
    if free_percent < thresholds.warning_percent:
        return Status.WARNING
    return Status.OK


def describe_drive_type(code: int) -> str:
    return DRIVE_TYPES.get(code, "Unknown")


def build_row(record: VolumeRecord, thresholds: Thresholds, host_name: str) -> VolumeReportRow:
    """
    Compute one report row from a raw record
    """
    if record.total_bytes > 0:
        free_percent = record.free_bytes * 100.0 / record.total_bytes
    else:
        free_percent = 0.0

    return VolumeReportRow(
        host_name=host_name,
        device_id=record.device_id,
        label=record.label,
        filesystem=record.filesystem,
        drive_type=describe_drive_type(record.drive_type_code),
        total_gb=round2(_gb(record.total_bytes)),
        free_gb=round2(_gb(record.free_bytes)),
        # Derived from raw bytes, not from the rounded GB values
        used_gb=round2(_gb(record.total_bytes - record.free_bytes)),
        free_percent=round2(free_percent),
        used_percent=round2(100.0 - free_percent),
        status=classify(free_percent, thresholds),
    )


def build_host_report(
    records: Iterable[VolumeRecord],
    thresholds: Thresholds,
    host_name: str,
    system_info: SystemInfo | None = None,
) -> HostSuccess:
    """
    Build a successful host report

    Every record yields one row in input order; filtering is left to the
    presenter. An empty record list is a valid, empty report.
    """
    records_list = list(records)

    rows = tuple(build_row(record, thresholds, host_name) for record in records_list)

    return HostSuccess(
        host_name=host_name,
        rows=rows,
        system_info=system_info,
        total_bytes=sum(record.total_bytes for record in records_list),
        total_free_bytes=sum(record.free_bytes for record in records_list),
        volume_count=len(records_list),
    )


def build_run_summary(reports: Sequence[HostReport]) -> RunSummary:
    """
    Reduce completed host reports into run totals
    """
    successes = [report for report in reports if report.ok]

    critical = sum(report.count(Status.CRITICAL) for report in successes)
    warning = sum(report.count(Status.WARNING) for report in successes)

    return RunSummary(
        hosts_checked=len(reports),
        succeeded=len(successes),
        failed=len(reports) - len(successes),
        critical_count=critical,
        warning_count=warning,
    )
