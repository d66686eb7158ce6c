"""
Contract tests for run orchestration
"""

import time

from diskcheck.collectors.base import CollectionError, HostCollection
from diskcheck.main import run_checks
from diskcheck.model import Thresholds, VolumeRecord


def _collect(host: str) -> HostCollection:
    if host.startswith("bad"):
        raise CollectionError(host, "access denied")
    # Later hosts finish first when run concurrently
    time.sleep(0.01 * (5 - int(host[-1])))
    return HostCollection(volumes=(VolumeRecord("/", host, "ext4", 3, 100, 5),))


def test_parallel_collection_keeps_host_order() -> None:
    hosts = ["h1", "bad2", "h3", "h4"]

    result = run_checks(hosts, Thresholds(), _collect, workers=4)

    assert [report.host_name for report in result.reports] == hosts
    assert [report.ok for report in result.reports] == [True, False, True, True]
    assert result.summary.critical_count == 3
    assert result.summary.failed == 1


def test_unexpected_exception_is_captured_as_failure() -> None:
    def explode(host: str) -> HostCollection:
        raise RuntimeError("socket closed")

    result = run_checks(["x1"], Thresholds(), explode)

    assert not result.reports[0].ok
    assert result.reports[0].message == "socket closed"
    assert result.outcomes[0].error_type == "RuntimeError"


def test_sequential_and_parallel_agree() -> None:
    hosts = ["h1", "h2", "h3"]

    sequential = run_checks(hosts, Thresholds(), _collect, workers=1)
    parallel = run_checks(hosts, Thresholds(), _collect, workers=3)

    assert sequential.reports == parallel.reports
    assert sequential.summary == parallel.summary
