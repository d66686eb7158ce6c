"""
Contract tests for CSV export and the summary sibling file
"""

import csv
from pathlib import Path

from diskcheck.evaluate import build_host_report
from diskcheck.export import CSV_COLUMNS, export_reports, summary_path_for
from diskcheck.model import HostFailure, Thresholds, VolumeRecord

THRESHOLDS = Thresholds()
GIB = 1024 ** 3


def _reports():
    web = build_host_report(
        [
            VolumeRecord("/", "/dev/sda1", "ext4", 3, 100 * GIB, 50 * GIB),
            VolumeRecord("/var", "/dev/sda2", "xfs", 3, 200 * GIB, 10 * GIB),
        ],
        THRESHOLDS,
        "web-01",
    )
    db = build_host_report(
        [VolumeRecord("/", "/dev/nvme0n1p1", "ext4", 3, 100 * GIB, 15 * GIB)],
        THRESHOLDS,
        "db-01",
    )
    return [web, HostFailure(host_name="gone-01", message="host unreachable"), db]


def test_csv_header_and_rows(tmp_path: Path) -> None:
    """
    Column names/order are fixed; failed hosts contribute no rows
    """
    csv_path = tmp_path / "out" / "report.csv"

    export_reports(_reports(), csv_path, generated_at="2026-01-01T00:00:00+00:00")

    with csv_path.open(newline="", encoding="utf-8") as f:
        lines = list(csv.reader(f))

    assert lines[0] == [
        "ComputerName",
        "Drive",
        "Label",
        "FileSystem",
        "Type",
        "Total(GB)",
        "Free(GB)",
        "Used(GB)",
        "Free(%)",
        "Used(%)",
        "Status",
    ]
    assert lines[0] == CSV_COLUMNS
    assert len(lines) == 4
    assert lines[2] == [
        "web-01",
        "/var",
        "/dev/sda2",
        "xfs",
        "Local Disk",
        "200.00",
        "10.00",
        "190.00",
        "5.00",
        "95.00",
        "CRITICAL",
    ]
    assert [line[0] for line in lines[1:]] == ["web-01", "web-01", "db-01"]


def test_summary_sibling_lists_each_successful_host(tmp_path: Path) -> None:
    csv_path = tmp_path / "report.csv"

    paths = export_reports(_reports(), csv_path, generated_at="2026-01-01T00:00:00+00:00")

    assert paths.summary_path == tmp_path / "report_Summary.txt"
    assert summary_path_for(csv_path) == paths.summary_path

    text = paths.summary_path.read_text(encoding="utf-8")
    blocks = text.split("-" * 40)

    assert "Disk Space Summary - 2026-01-01T00:00:00+00:00" in blocks[0]
    assert "Computer: web-01" in blocks[1]
    assert "Total Drives: 2" in blocks[1]
    assert "Total Size (GB): 300.00" in blocks[1]
    assert "Total Free (GB): 60.00" in blocks[1]
    assert "Critical Drives: 1" in blocks[1]
    assert "Warning Drives: 0" in blocks[1]
    assert "Computer: db-01" in blocks[2]
    assert "Warning Drives: 1" in blocks[2]
    assert "gone-01" not in text
