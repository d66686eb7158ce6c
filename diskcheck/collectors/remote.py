"""
diskcheck.collectors.remote
AUTHOR: carter-vin

Remote volume collector
- runs POSIX `df` through an injected executor (ssh by default)
- transport, credentials, and timeouts belong to the executor
"""

from __future__ import annotations

from diskcheck.collectors.base import CollectionError, drive_type_for
from diskcheck.collectors.executor import Executor
from diskcheck.model import VolumeRecord

# Force the C locale so column headers and number formats stay predictable
DF_COMMAND = ["env", "LC_ALL=C", "df", "-PT", "-B1"]


def parse_df_output(contents: str) -> tuple[VolumeRecord, ...]:
    """
    Parse `df -PT -B1` output into volume records

    Columns: Filesystem Type 1-blocks Used Available Capacity Mounted-on
    """
    volumes: list[VolumeRecord] = []
    for line in contents.splitlines():
        parts = line.split()
        if len(parts) < 7 or parts[0] == "Filesystem":
            continue
        try:
            total = int(parts[2])
            available = int(parts[4])
        except ValueError:
            continue

        volumes.append(
            VolumeRecord(
                # Mount points may contain spaces
                device_id=" ".join(parts[6:]),
                label=parts[0],
                filesystem=parts[1],
                drive_type_code=drive_type_for(parts[1]),
                total_bytes=total,
                free_bytes=available,
            )
        )
    return tuple(volumes)


def collect_remote_volumes(host: str, executor: Executor) -> tuple[VolumeRecord, ...]:
    """
    Collect volumes from a remote host
    """
    result = executor(list(DF_COMMAND))
    if result.returncode != 0:
        detail = result.stderr.strip() or f"exit code {result.returncode}"
        raise CollectionError(host, detail)

    return parse_df_output(result.stdout)
