"""
diskcheck.model
AUTHOR: carter-vin

Disk report schema + deterministic serialization primitives.

Design goals:
- Immutable records in, immutable rows/reports out
- Tagged host result (HostSuccess | HostFailure), no optional-field probing
- Explicit structure (no accidental serialization via __dict__)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Sequence, Union

import json

DEFAULT_WARNING_PCT = 20
DEFAULT_CRITICAL_PCT = 10


class Status(str, Enum):
    OK = "OK"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


# Inputs
@dataclass(frozen=True)
class VolumeRecord:
    """
    Raw volume as reported by a collector
    - free_bytes > total_bytes is tolerated and passed through
    """

    device_id: str
    label: str
    filesystem: str
    drive_type_code: int
    total_bytes: int
    free_bytes: int


@dataclass(frozen=True)
class Thresholds:
    """
    Free-space percentage boundaries
    - critical_percent < warning_percent expected, not enforced
    """

    warning_percent: int = DEFAULT_WARNING_PCT
    critical_percent: int = DEFAULT_CRITICAL_PCT

    @property
    def is_inverted(self) -> bool:
        return self.critical_percent >= self.warning_percent


@dataclass(frozen=True)
class SystemInfo:
    os_caption: str
    architecture: str
    last_boot: datetime | None
    total_memory: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "os_caption": self.os_caption,
            "architecture": self.architecture,
            "last_boot": self.last_boot.isoformat() if self.last_boot else None,
            "total_memory": self.total_memory,
        }


# Outputs
@dataclass(frozen=True)
class VolumeReportRow:
    host_name: str
    device_id: str
    label: str
    filesystem: str
    drive_type: str
    total_gb: float
    free_gb: float
    used_gb: float
    free_percent: float
    used_percent: float
    status: Status

    def to_dict(self) -> dict[str, Any]:
        # Explicit key mapping for stability
        return {
            "host_name": self.host_name,
            "device_id": self.device_id,
            "label": self.label,
            "filesystem": self.filesystem,
            "drive_type": self.drive_type,
            "total_gb": self.total_gb,
            "free_gb": self.free_gb,
            "used_gb": self.used_gb,
            "free_percent": self.free_percent,
            "used_percent": self.used_percent,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class HostSuccess:
    """
    Successful host inventory
    - rows keep collector order
    - byte totals are sums over raw records, not rounded GB
    """

    host_name: str
    rows: tuple[VolumeReportRow, ...]
    system_info: SystemInfo | None
    total_bytes: int
    total_free_bytes: int
    volume_count: int
    ok: bool = field(default=True, init=False)

    def count(self, status: Status) -> int:
        return sum(1 for row in self.rows if row.status is status)

    def to_dict(self) -> dict[str, Any]:
        return {
            "host_name": self.host_name,
            "ok": True,
            "rows": [row.to_dict() for row in self.rows],
            "system_info": self.system_info.to_dict() if self.system_info else None,
            "total_bytes": self.total_bytes,
            "total_free_bytes": self.total_free_bytes,
            "volume_count": self.volume_count,
        }


@dataclass(frozen=True)
class HostFailure:
    host_name: str
    message: str
    ok: bool = field(default=False, init=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "host_name": self.host_name,
            "ok": False,
            "message": self.message,
        }


HostReport = Union[HostSuccess, HostFailure]


@dataclass(frozen=True)
class RunSummary:
    hosts_checked: int
    succeeded: int
    failed: int
    critical_count: int
    warning_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "hosts_checked": self.hosts_checked,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "critical_count": self.critical_count,
            "warning_count": self.warning_count,
        }


def run_to_dict(reports: Sequence[HostReport], summary: RunSummary) -> dict[str, Any]:
    return {
        "hosts": [report.to_dict() for report in reports],
        "summary": summary.to_dict(),
    }


def run_to_json(reports: Sequence[HostReport], summary: RunSummary) -> str:
    """
    Serialize a full run

    Rules:
    - sort_keys=True ensures stable key order
    - separators remove whitespace to avoid formatting drift
    - ensure_ascii=False keeps volume labels readable
    """
    return json.dumps(
        run_to_dict(reports, summary),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
