"""
Contract tests for the remote collector using an injected executor
"""

from datetime import datetime
from pathlib import Path

import subprocess
import pytest

from diskcheck.collectors import collect_host
from diskcheck.collectors.base import CollectionError
from diskcheck.collectors.executor import RunResult, SshOptions, ssh_command, subprocess_executor
from diskcheck.collectors.remote import collect_remote_volumes, parse_df_output
from diskcheck.collectors.sysinfo import collect_remote_system_info

FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"

MEMINFO = "MemTotal:       16384000 kB\nMemAvailable:    8000000 kB\n"
OS_RELEASE = 'NAME="Ubuntu"\nPRETTY_NAME="Ubuntu 24.04.1 LTS"\n'


def _fake_executor(responses: dict[tuple[str, ...], RunResult]):
    calls: list[list[str]] = []

    def run(cmd: list[str]) -> RunResult:
        calls.append(cmd)
        return responses.get(tuple(cmd), RunResult(stdout="", stderr="not found", returncode=127))

    run.calls = calls
    return run


def test_parse_df_output_maps_columns() -> None:
    """
    Mount point is the device id; malformed lines are skipped
    """
    volumes = parse_df_output((FIXTURES / "df_output.txt").read_text(encoding="utf-8"))

    assert [volume.device_id for volume in volumes] == ["/", "/run/user/1000", "/mnt/shared data"]

    root = volumes[0]
    assert root.label == "/dev/sda1"
    assert root.filesystem == "ext4"
    assert root.drive_type_code == 3
    assert root.total_bytes == 100_000_000_000
    assert root.free_bytes == 5_000_000_000

    assert volumes[1].drive_type_code == 6
    assert volumes[2].drive_type_code == 4


def test_remote_failure_raises_collection_error() -> None:
    executor = _fake_executor(
        {("env", "LC_ALL=C", "df", "-PT", "-B1"): RunResult(stdout="", stderr="Permission denied (publickey).", returncode=255)}
    )

    with pytest.raises(CollectionError) as excinfo:
        collect_remote_volumes("db-01", executor)

    assert excinfo.value.host == "db-01"
    assert "Permission denied" in excinfo.value.message


def test_remote_system_info_degrades_per_probe() -> None:
    """
    Missing probes become unknown instead of failing the host
    """
    executor = _fake_executor(
        {
            ("cat", "/etc/os-release"): RunResult(OS_RELEASE, "", 0),
            ("uptime", "-s"): RunResult("2026-10-01 08:12:33\n", "", 0),
            ("cat", "/proc/meminfo"): RunResult(MEMINFO, "", 0),
        }
    )

    info = collect_remote_system_info(executor)

    assert info.os_caption == "Ubuntu 24.04.1 LTS"
    assert info.architecture == "unknown"
    assert info.last_boot == datetime(2026, 10, 1, 8, 12, 33)
    assert info.total_memory == "15.6 GB"


def test_collect_host_uses_executor_for_remote_hosts() -> None:
    df = (FIXTURES / "df_output.txt").read_text(encoding="utf-8")
    executor = _fake_executor({("env", "LC_ALL=C", "df", "-PT", "-B1"): RunResult(df, "", 0)})
    seen: list[str] = []

    def factory(host: str):
        seen.append(host)
        return executor

    collection = collect_host("far-away.example", executor_factory=factory)

    assert seen == ["far-away.example"]
    assert len(collection.volumes) == 3
    assert collection.system_info is None
    assert executor.calls == [["env", "LC_ALL=C", "df", "-PT", "-B1"]]


def test_ssh_command_carries_operator_options() -> None:
    argv = ssh_command(
        "db-01",
        ["df", "-PT", "-B1"],
        SshOptions(user="ops", identity_file="/keys/id", port=2222, timeout_s=5),
    )

    assert argv[0] == "ssh"
    assert "BatchMode=yes" in argv
    assert argv[argv.index("-l") + 1] == "ops"
    assert argv[argv.index("-i") + 1] == "/keys/id"
    assert argv[argv.index("-p") + 1] == "2222"
    assert argv[-5:] == ["db-01", "--", "df", "-PT", "-B1"]


def test_localized_df_header_is_not_a_failure() -> None:
    """
    A translated header line is skipped like the English one
    """
    df = "\n".join(
        [
            "Dateisystem    Typ  1B-Blöcke      Benutzt    Verfügbar Kapazität Eingehängt auf",
            "/dev/sda1      ext4 100000000000 95000000000 5000000000       95% /",
        ]
    )
    executor = _fake_executor({("env", "LC_ALL=C", "df", "-PT", "-B1"): RunResult(df, "", 0)})

    volumes = collect_remote_volumes("de-01", executor)

    assert len(volumes) == 1
    assert volumes[0].device_id == "/"
    assert volumes[0].free_bytes == 5_000_000_000


def test_unstartable_command_becomes_failed_result(monkeypatch) -> None:
    """
    OS errors while starting ssh are returned, not raised
    """
    def denied(*args, **kwargs):
        raise PermissionError(13, "Permission denied", "ssh")

    monkeypatch.setattr(subprocess, "run", denied)

    result = subprocess_executor(["ssh", "db-01", "--", "uname", "-m"])

    assert result.returncode == 126
    assert "Permission denied" in result.stderr


def test_system_info_survives_unstartable_transport(monkeypatch) -> None:
    def denied(*args, **kwargs):
        raise PermissionError(13, "Permission denied", "ssh")

    monkeypatch.setattr(subprocess, "run", denied)

    info = collect_remote_system_info(lambda cmd: subprocess_executor(["ssh", "db-01", "--", *cmd]))

    assert info.os_caption == "unknown"
    assert info.architecture == "unknown"
    assert info.last_boot is None
    assert info.total_memory == "unknown"
