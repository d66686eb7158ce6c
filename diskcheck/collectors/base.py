"""
diskcheck.collectors.base
AUTHOR: carter-vin

Collector contract + light result wrapper -> one host failure never stops the run
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from diskcheck.model import SystemInfo, VolumeRecord


class CollectionError(Exception):
    """
    Host could not be inventoried (unreachable, access denied, bad query output)
    """

    def __init__(self, host: str, message: str) -> None:
        super().__init__(f"{host}: {message}")
        self.host = host
        self.message = message


@dataclass(frozen=True)
class HostCollection:
    volumes: tuple[VolumeRecord, ...]
    system_info: Optional[SystemInfo] = None


@dataclass(frozen=True)
class CollectorOutcome:
    """
    Normalized collector result
    - ok: false=failure, error details in error fields
    - value: HostCollection if ok=true
    """

    host: str
    ok: bool
    value: Optional[HostCollection] = None
    error_type: Optional[str] = None
    error_message: Optional[str] = None


def run_collector(host: str, fn, *args, **kwargs) -> CollectorOutcome:
    """
    Run collector & capture failure as data
    """
    try:
        v = fn(*args, **kwargs)
        return CollectorOutcome(host=host, ok=True, value=v)
    except CollectionError as e:
        return CollectorOutcome(
            host=host,
            ok=False,
            error_type=type(e).__name__,
            error_message=e.message,
        )
    except Exception as e:
        return CollectorOutcome(
            host=host,
            ok=False,
            error_type=type(e).__name__,
            error_message=str(e) or type(e).__name__,
        )


# Filesystem type hints for drive-type inference
NETWORK_FSTYPES = {
    "nfs",
    "nfs4",
    "cifs",
    "smbfs",
    "smb3",
    "sshfs",
    "fuse.sshfs",
    "afs",
    "9p",
    "ncpfs",
    "davfs",
}
RAM_FSTYPES = {"tmpfs", "ramfs", "devtmpfs"}
OPTICAL_FSTYPES = {"iso9660", "udf", "cdfs"}


def drive_type_for(fstype: str, opts: str = "") -> int:
    """
    Infer a drive-type code from filesystem type and mount options

    Codes follow the usual inventory table (3 = local disk)
    """
    fstype = (fstype or "").lower()
    options = {opt.strip().lower() for opt in (opts or "").split(",") if opt.strip()}

    if "cdrom" in options or fstype in OPTICAL_FSTYPES:
        return 5
    if "removable" in options:
        return 2
    if fstype in NETWORK_FSTYPES or "remote" in options:
        return 4
    if fstype in RAM_FSTYPES:
        return 6
    return 3
