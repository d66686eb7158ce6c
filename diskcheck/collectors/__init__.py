"""diskcheck.collectors package exports + host dispatch."""

from __future__ import annotations

import socket

from diskcheck.collectors.base import (
    CollectionError,
    CollectorOutcome,
    HostCollection,
    run_collector,
)
from diskcheck.collectors.executor import ExecutorFactory, make_ssh_executor
from diskcheck.collectors.local import collect_local_volumes
from diskcheck.collectors.remote import collect_remote_volumes
from diskcheck.collectors.sysinfo import collect_local_system_info, collect_remote_system_info

LOCAL_ALIASES = {"localhost", "127.0.0.1", "::1", "."}


def is_local_host(host: str) -> bool:
    name = host.strip().lower()
    if name in LOCAL_ALIASES:
        return True
    local = socket.gethostname().lower()
    return name == local or name == local.split(".")[0]


def collect_host(
    host: str,
    *,
    include_system_info: bool = False,
    executor_factory: ExecutorFactory | None = None,
) -> HostCollection:
    """
    Collect volumes (and optional metadata) for one host

    Raises CollectionError when the host cannot be inventoried
    """
    if is_local_host(host):
        volumes = collect_local_volumes(host)
        info = collect_local_system_info() if include_system_info else None
        return HostCollection(volumes=volumes, system_info=info)

    factory = executor_factory or make_ssh_executor
    executor = factory(host)
    volumes = collect_remote_volumes(host, executor)
    info = collect_remote_system_info(executor) if include_system_info else None
    return HostCollection(volumes=volumes, system_info=info)


__all__ = [
    "CollectionError",
    "CollectorOutcome",
    "HostCollection",
    "collect_host",
    "collect_local_volumes",
    "collect_remote_volumes",
    "is_local_host",
    "run_collector",
]
