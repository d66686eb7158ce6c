"""
diskview.summarize
AUTHOR: carter-vin

Deterministic per-host rollups of an exported report
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from diskcheck.evaluate import round2
from diskcheck.model import Status, VolumeReportRow

VIEW_SCHEMA_VERSION = "1"


@dataclass(frozen=True)
class HostRollup:
    host_name: str
    drives: int
    total_gb: float
    free_gb: float
    critical_count: int
    warning_count: int
    problem_drives: list[str]

    @property
    def worst_status(self) -> Status:
        if self.critical_count:
            return Status.CRITICAL
        if self.warning_count:
            return Status.WARNING
        return Status.OK

    def to_dict(self) -> dict:
        return {
            "host_name": self.host_name,
            "drives": self.drives,
            "total_gb": self.total_gb,
            "free_gb": self.free_gb,
            "critical_count": self.critical_count,
            "warning_count": self.warning_count,
            "problem_drives": list(self.problem_drives),
            "worst_status": self.worst_status.value,
        }


def summarize_by_host(rows: Iterable[VolumeReportRow]) -> list[HostRollup]:
    """
    Roll exported rows up per host

    GB totals are sums of already-rounded export values
    """
    accumulators: dict[str, dict] = {}

    for row in rows:
        acc = accumulators.setdefault(
            row.host_name,
            {"drives": 0, "total": 0.0, "free": 0.0, "critical": 0, "warning": 0, "problems": []},
        )
        acc["drives"] += 1
        acc["total"] += row.total_gb
        acc["free"] += row.free_gb
        if row.status is Status.CRITICAL:
            acc["critical"] += 1
        elif row.status is Status.WARNING:
            acc["warning"] += 1
        if row.status is not Status.OK:
            acc["problems"].append(row.device_id)

    rollups = [
        HostRollup(
            host_name=host,
            drives=acc["drives"],
            total_gb=round2(acc["total"]),
            free_gb=round2(acc["free"]),
            critical_count=acc["critical"],
            warning_count=acc["warning"],
            problem_drives=list(acc["problems"]),
        )
        for host, acc in accumulators.items()
    ]
    return sorted(rollups, key=lambda rollup: rollup.host_name)


def render_text(rollups: Iterable[HostRollup], *, meta: dict) -> str:
    """
    Render per-host rollups into deterministic text
    """
    ordered = sorted(list(rollups), key=lambda rollup: rollup.host_name)
    # Header comes first for quick operator scan
    lines: list[str] = [f"hosts_seen: {meta.get('hosts_seen', 0)}"]
    if "hosts_emitted" in meta:
        lines.append(f"hosts_emitted: {meta.get('hosts_emitted', 0)}")
    if meta.get("rows_invalid"):
        lines.append(f"rows_invalid: {meta.get('rows_invalid')}")

    for rollup in ordered:
        lines.append("")
        lines.append(f"host: {rollup.host_name}")
        lines.append(f"status: {rollup.worst_status.value}")
        lines.append(f"drives: {rollup.drives}")
        lines.append(f"total_gb: {rollup.total_gb:.2f}")
        lines.append(f"free_gb: {rollup.free_gb:.2f}")
        lines.append(f"critical_drives: {rollup.critical_count}")
        lines.append(f"warning_drives: {rollup.warning_count}")
        problems = ", ".join(rollup.problem_drives) if rollup.problem_drives else "none"
        lines.append(f"problem_drives: {problems}")

    return "\n".join(lines)


def render_json(rollups: Iterable[HostRollup], *, meta: dict) -> dict:
    """
    Render per-host rollups into a deterministic JSON payload
    """
    ordered = sorted(list(rollups), key=lambda rollup: rollup.host_name)

    meta_payload = {
        "schema_version": VIEW_SCHEMA_VERSION,
        "csv_path": meta.get("csv_path"),
        "hosts_seen": meta.get("hosts_seen", 0),
        "hosts_emitted": meta.get("hosts_emitted", 0),
        "rows_parsed": meta.get("rows_parsed", 0),
        "rows_invalid": meta.get("rows_invalid", 0),
        "computed_at": meta.get("computed_at"),
    }

    return {
        "meta": meta_payload,
        "hosts": [rollup.to_dict() for rollup in ordered],
    }
