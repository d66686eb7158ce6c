"""
diskcheck.collectors.sysinfo
AUTHOR: carter-vin

Optional host metadata (OS, architecture, last boot, memory)
- local: platform + psutil
- remote: os-release, uname, uptime, /proc/meminfo via executor
- each probe degrades to "unknown" instead of failing the host
"""

from __future__ import annotations

import platform
from datetime import datetime, timezone
from typing import Optional

import psutil

from diskcheck.collectors.executor import Executor
from diskcheck.model import SystemInfo

UNKNOWN = "unknown"


def human_size(num_bytes: int | None) -> str:
    """
    Convert bytes to a readable size (e.g., 15.6 GB)
    """
    if num_bytes is None:
        return UNKNOWN
    units = ["B", "KB", "MB", "GB", "TB", "PB"]
    value = float(num_bytes)
    for unit in units:
        if value < 1024.0 or unit == units[-1]:
            return f"{value:.1f} {unit}"
        value /= 1024.0
    return f"{num_bytes} B"


def _parse_meminfo(contents: str) -> dict[str, int]:
    """
    Parse /proc/meminfo into a dict of values in bytes
    """
    values: dict[str, int] = {}
    for line in contents.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        key = parts[0].rstrip(":")
        try:
            value_kb = int(parts[1])
        except ValueError:
            continue
        values[key] = value_kb * 1024
    return values


def _parse_os_release(contents: str) -> Optional[str]:
    for line in contents.splitlines():
        if line.startswith("PRETTY_NAME="):
            return line.split("=", 1)[1].strip().strip('"') or None
    return None


def _parse_boot(contents: str) -> Optional[datetime]:
    # `uptime -s` prints local time: "2026-10-01 08:12:33"
    try:
        return datetime.strptime(contents.strip(), "%Y-%m-%d %H:%M:%S")
    except ValueError:
        return None


def collect_local_system_info() -> SystemInfo:
    """
    Collect metadata for this machine
    """
    last_boot: Optional[datetime]
    try:
        last_boot = datetime.fromtimestamp(psutil.boot_time(), tz=timezone.utc)
    except Exception:
        last_boot = None

    try:
        total_memory = human_size(psutil.virtual_memory().total)
    except Exception:
        total_memory = UNKNOWN

    os_caption = f"{platform.system()} {platform.release()}".strip() or UNKNOWN

    return SystemInfo(
        os_caption=os_caption,
        architecture=platform.machine() or UNKNOWN,
        last_boot=last_boot,
        total_memory=total_memory,
    )


def _probe(executor: Executor, cmd: list[str]) -> Optional[str]:
    result = executor(cmd)
    if result.returncode != 0:
        return None
    return result.stdout


def collect_remote_system_info(executor: Executor) -> SystemInfo:
    """
    Collect metadata for a remote POSIX host
    """
    os_release = _probe(executor, ["cat", "/etc/os-release"])
    arch = _probe(executor, ["uname", "-m"])
    boot = _probe(executor, ["uptime", "-s"])
    meminfo = _probe(executor, ["cat", "/proc/meminfo"])

    os_caption = _parse_os_release(os_release) if os_release else None
    mem_total = _parse_meminfo(meminfo).get("MemTotal") if meminfo else None

    return SystemInfo(
        os_caption=os_caption or UNKNOWN,
        architecture=(arch or "").strip() or UNKNOWN,
        last_boot=_parse_boot(boot) if boot else None,
        total_memory=human_size(mem_total),
    )
