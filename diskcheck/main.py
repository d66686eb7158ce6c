"""
diskcheck.main
------------
AUTHOR: carter-vin

PURPOSE:
- Check free disk space on one or more hosts
- Classify every volume against warning/critical thresholds
- Print an operator report and optionally export CSV + summary

Key contract:
- one host failure never stops the run
- run summary is computed once, after every host is done
- stdout carries the report; structured events go to stderr
"""

from __future__ import annotations

import platform
import socket
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import typer

from diskcheck.collectors import CollectorOutcome, HostCollection, collect_host, run_collector
from diskcheck.collectors.executor import DEFAULT_TIMEOUT_S, SshOptions, make_ssh_executor
from diskcheck.evaluate import build_host_report, build_run_summary
from diskcheck.export import export_reports
from diskcheck.logging import configure_events, emit_event, utc_now_iso
from diskcheck.model import (
    DEFAULT_CRITICAL_PCT,
    DEFAULT_WARNING_PCT,
    HostFailure,
    HostReport,
    RunSummary,
    Status,
    Thresholds,
)
from diskview.render import RENDERER_NAMES, get_renderer

# Explicit multi-command CLI
app = typer.Typer(
    add_completion=False,
    help="disk-space-check: free disk space report across hosts",
)

TOOL_VERSION = "0.1.0"

WARNING_ENV = "DISKCHECK_WARNING_PCT"
CRITICAL_ENV = "DISKCHECK_CRITICAL_PCT"
EXPORT_ENV = "DISKCHECK_EXPORT_PATH"
SSH_USER_ENV = "DISKCHECK_SSH_USER"
SSH_IDENTITY_ENV = "DISKCHECK_SSH_IDENTITY"

Collect = Callable[[str], HostCollection]


@dataclass(frozen=True)
class CheckRun:
    outcomes: list[CollectorOutcome]
    reports: list[HostReport]
    summary: RunSummary


# -----------------------------
# ORCHESTRATION
# -----------------------------
def collect_all(hosts: Sequence[str], collect: Collect, *, workers: int = 1) -> list[CollectorOutcome]:
    """
    Collect every host; outcomes keep host input order

    Hosts share no state, so workers > 1 collects them concurrently
    """
    if workers <= 1 or len(hosts) <= 1:
        return [run_collector(host, collect, host) for host in hosts]

    with ThreadPoolExecutor(max_workers=workers) as ex:
        return list(ex.map(lambda host: run_collector(host, collect, host), hosts))


def build_reports(outcomes: Sequence[CollectorOutcome], thresholds: Thresholds) -> list[HostReport]:
    reports: list[HostReport] = []
    for outcome in outcomes:
        if outcome.ok and outcome.value is not None:
            reports.append(
                build_host_report(
                    outcome.value.volumes,
                    thresholds,
                    outcome.host,
                    outcome.value.system_info,
                )
            )
        else:
            reports.append(HostFailure(host_name=outcome.host, message=outcome.error_message or "unknown error"))
    return reports


def run_checks(
    hosts: Sequence[str],
    thresholds: Thresholds,
    collect: Collect,
    *,
    workers: int = 1,
) -> CheckRun:
    outcomes = collect_all(hosts, collect, workers=workers)
    reports = build_reports(outcomes, thresholds)
    # Reduction over the completed list only
    return CheckRun(outcomes=outcomes, reports=reports, summary=build_run_summary(reports))


def _emit_host_events(result: CheckRun) -> None:
    for outcome, report in zip(result.outcomes, result.reports):
        if not outcome.ok:
            emit_event(
                "collector_failed",
                tool_version=TOOL_VERSION,
                host=outcome.host,
                error_type=outcome.error_type,
                message=outcome.error_message,
            )
            continue
        emit_event(
            "host_checked",
            tool_version=TOOL_VERSION,
            host=report.host_name,
            volumes=report.volume_count,
            critical=report.count(Status.CRITICAL),
            warning=report.count(Status.WARNING),
        )


def _maybe_exit_by_status(summary: RunSummary, *, only_problems: bool) -> None:
    if summary.hosts_checked and summary.succeeded == 0:
        raise typer.Exit(code=1)
    if not only_problems:
        return
    if summary.critical_count:
        raise typer.Exit(code=3)
    if summary.warning_count:
        raise typer.Exit(code=2)


# -----------------------------
# ROOT COMMAND BEHAVIOR
# -----------------------------
@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """
    Root command behavior: print a hint when no subcommand is given
    """
    if ctx.invoked_subcommand is None:
        typer.echo("No command provided. Try: disk-space-check --help")


# -----------------------------
# CLI COMMANDS
# -----------------------------
@app.command()
def version() -> None:
    """
    Print tool version & runtime env
    """
    typer.echo(f"disk-space-check v{TOOL_VERSION}")
    typer.echo(f"python={sys.version.split()[0]}")
    typer.echo(f"os={platform.system()} {platform.release()}")
    typer.echo(f"machine={platform.machine()}")


@app.command("check")
def check(
    hosts: Optional[List[str]] = typer.Option(
        None,
        "--host",
        "-H",
        help="Host to check (repeatable). Defaults to this machine.",
    ),
    warning: int = typer.Option(
        DEFAULT_WARNING_PCT,
        "--warning",
        envvar=WARNING_ENV,
        min=1,
        max=99,
        help="Free-space percent below which a drive is WARNING.",
    ),
    critical: int = typer.Option(
        DEFAULT_CRITICAL_PCT,
        "--critical",
        envvar=CRITICAL_ENV,
        min=1,
        max=99,
        help="Free-space percent below which a drive is CRITICAL.",
    ),
    only_problems: bool = typer.Option(
        False,
        "--only-problems",
        help="Show only WARNING and CRITICAL drives; exit 3/2 when found.",
    ),
    system_info: bool = typer.Option(
        False,
        "--system-info",
        help="Include OS, architecture, last boot and memory per host.",
    ),
    export: Optional[str] = typer.Option(
        None,
        "--export",
        envvar=EXPORT_ENV,
        help="Write a CSV export here (plus a _Summary.txt sibling).",
    ),
    output_format: str = typer.Option(
        "text",
        "--format",
        help="Output format: " + ", ".join(RENDERER_NAMES) + ".",
    ),
    workers: int = typer.Option(
        1,
        "--workers",
        min=1,
        help="Hosts collected concurrently.",
    ),
    user: Optional[str] = typer.Option(
        None,
        "--user",
        envvar=SSH_USER_ENV,
        help="ssh login name for remote hosts.",
    ),
    identity_file: Optional[str] = typer.Option(
        None,
        "--identity-file",
        envvar=SSH_IDENTITY_ENV,
        help="ssh identity file for remote hosts.",
    ),
    port: Optional[int] = typer.Option(
        None,
        "--port",
        min=1,
        max=65535,
        help="ssh port for remote hosts.",
    ),
    timeout: int = typer.Option(
        DEFAULT_TIMEOUT_S,
        "--timeout",
        min=1,
        help="Per-command timeout for remote hosts (seconds).",
    ),
    log_events: bool = typer.Option(
        True,
        "--log-events/--no-log-events",
        help="Emit JSON event lines on stderr.",
    ),
) -> None:
    """
    Check disk space and print a report

    Failure semantics:
    - unreachable hosts are reported, the run continues
    - exit 1 when every host failed
    - export I/O errors exit non-zero
    """
    try:
        renderer = get_renderer(output_format)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e

    previous_events = configure_events(enabled=log_events)
    try:
        host_list = list(hosts) if hosts else [socket.gethostname()]
        thresholds = Thresholds(warning_percent=warning, critical_percent=critical)

        emit_event(
            "run_start",
            tool_version=TOOL_VERSION,
            hosts=len(host_list),
            warning_pct=warning,
            critical_pct=critical,
            workers=workers,
        )

        if thresholds.is_inverted:
            # Kept as configured; classification still uses the same < chain
            emit_event(
                "thresholds_inverted",
                tool_version=TOOL_VERSION,
                warning_pct=warning,
                critical_pct=critical,
            )

        ssh_options = SshOptions(user=user, identity_file=identity_file, port=port, timeout_s=timeout)
        collect = partial(
            collect_host,
            include_system_info=system_info,
            executor_factory=partial(make_ssh_executor, options=ssh_options),
        )

        result = run_checks(host_list, thresholds, collect, workers=workers)
        _emit_host_events(result)

        typer.echo(renderer.render(result.reports, summary=result.summary, only_problems=only_problems))

        if export:
            csv_path = Path(export)
            try:
                paths = export_reports(result.reports, csv_path, generated_at=utc_now_iso())
            except OSError as e:
                emit_event(
                    "export_failed",
                    tool_version=TOOL_VERSION,
                    path=str(csv_path),
                    error_type=type(e).__name__,
                    message=str(e),
                )
                raise
            emit_event(
                "export_written",
                tool_version=TOOL_VERSION,
                path=str(paths.csv_path),
                summary_path=str(paths.summary_path),
            )

        emit_event(
            "run_finished",
            tool_version=TOOL_VERSION,
            **result.summary.to_dict(),
        )

        _maybe_exit_by_status(result.summary, only_problems=only_problems)
    finally:
        configure_events(enabled=previous_events)


if __name__ == "__main__":
    app()
