"""
diskcheck.collectors.local
AUTHOR: carter-vin

Local volume collector
- psutil partitions + usage, cross-platform
- unreadable mounts (permission, stale network share) are skipped
"""

from __future__ import annotations

import psutil

from diskcheck.collectors.base import CollectionError, drive_type_for
from diskcheck.model import VolumeRecord


def _device_id(mountpoint: str) -> str:
    # Windows mounts look like "C:\\"; report them as "C:"
    if len(mountpoint) == 3 and mountpoint[1:] in (":\\", ":/"):
        return mountpoint[:2]
    return mountpoint


def collect_local_volumes(host: str = "localhost") -> tuple[VolumeRecord, ...]:
    """
    Collect every mounted physical volume on this machine
    """
    try:
        partitions = psutil.disk_partitions(all=False)
    except Exception as e:
        raise CollectionError(host, f"partition query failed: {e}") from e

    volumes: list[VolumeRecord] = []
    for part in partitions:
        try:
            usage = psutil.disk_usage(part.mountpoint)
        except Exception:
            # Empty CD drives and dead shares raise here
            continue

        volumes.append(
            VolumeRecord(
                device_id=_device_id(str(part.mountpoint)),
                label=str(part.device),
                filesystem=str(part.fstype),
                drive_type_code=drive_type_for(part.fstype, part.opts),
                total_bytes=int(usage.total),
                free_bytes=int(usage.free),
            )
        )

    return tuple(volumes)
