"""
Contract tests for host report assembly and run summary
"""

from datetime import datetime, timezone

from diskcheck.evaluate import build_host_report, build_run_summary
from diskcheck.model import HostFailure, Status, SystemInfo, Thresholds, VolumeRecord

THRESHOLDS = Thresholds(warning_percent=20, critical_percent=10)

RECORDS = [
    VolumeRecord("C:", "System", "NTFS", 3, 1_000, 500),
    VolumeRecord("D:", "Data", "NTFS", 3, 1_000, 50),
    VolumeRecord("E:", "", "", 5, 0, 0),
    VolumeRecord("Z:", "Share", "NTFS", 4, 2_000, 300),
]


def test_rows_keep_order_and_totals_use_raw_bytes() -> None:
    report = build_host_report(RECORDS, THRESHOLDS, "pc-01")

    assert report.ok
    assert [row.device_id for row in report.rows] == ["C:", "D:", "E:", "Z:"]
    assert report.volume_count == len(RECORDS)
    assert report.total_bytes == 4_000
    assert report.total_free_bytes == 850
    assert report.system_info is None
    assert [row.status for row in report.rows] == [
        Status.OK,
        Status.CRITICAL,
        Status.CRITICAL,
        Status.WARNING,
    ]


def test_empty_host_is_valid() -> None:
    report = build_host_report([], THRESHOLDS, "empty")

    assert report.ok
    assert report.rows == ()
    assert report.volume_count == 0
    assert report.total_bytes == 0
    assert report.total_free_bytes == 0


def test_build_is_idempotent() -> None:
    """
    No hidden timestamp or counter inside the builder
    """
    info = SystemInfo("Linux 6.1", "x86_64", datetime(2026, 1, 1, tzinfo=timezone.utc), "16.0 GB")

    first = build_host_report(RECORDS, THRESHOLDS, "pc-01", info)
    second = build_host_report(RECORDS, THRESHOLDS, "pc-01", info)

    assert first == second
    assert first.to_dict() == second.to_dict()


def test_run_summary_counts_successful_hosts_only() -> None:
    ok_a = build_host_report([VolumeRecord("C:", "", "", 3, 100, 5)], THRESHOLDS, "a")
    ok_b = build_host_report(
        [VolumeRecord("C:", "", "", 3, 100, 15), VolumeRecord("D:", "", "", 3, 100, 90)],
        THRESHOLDS,
        "b",
    )
    failed = HostFailure(host_name="c", message="access denied")

    summary = build_run_summary([ok_a, ok_b, failed])

    assert summary.hosts_checked == 3
    assert summary.succeeded == 2
    assert summary.failed == 1
    assert summary.critical_count == 1
    assert summary.warning_count == 1


def test_run_summary_of_nothing() -> None:
    summary = build_run_summary([])

    assert summary.to_dict() == {
        "hosts_checked": 0,
        "succeeded": 0,
        "failed": 0,
        "critical_count": 0,
        "warning_count": 0,
    }
