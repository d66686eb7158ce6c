"""
diskview.cli
AUTHOR: carter-vin

Operator CLI for reviewing a CSV export
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import json
import typer

from diskview.filters import visible_rows
from diskview.read import read_csv_report
from diskview.render.utils import ROW_HEADERS, format_table, row_cells
from diskview.summarize import render_json, render_text, summarize_by_host


app = typer.Typer(add_completion=False, help="disk-space-view: review disk report exports")


def _load(csv_path: str):
    try:
        return read_csv_report(Path(csv_path))
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def _apply_filters(rollups, *, host: str | None, only_problems: bool):
    filtered = list(rollups)

    if host:
        filtered = [rollup for rollup in filtered if rollup.host_name == host]

    if only_problems:
        filtered = [
            rollup
            for rollup in filtered
            if rollup.critical_count or rollup.warning_count
        ]

    return filtered


def _maybe_exit_by_status(*, critical: bool, warning: bool, only_problems: bool) -> None:
    if not only_problems:
        return
    if critical:
        raise typer.Exit(code=3)
    if warning:
        raise typer.Exit(code=2)
    raise typer.Exit(code=0)


@app.command("summarize")
def summarize(
    csv_path: str = typer.Option(
        "disk_report.csv",
        "--csv",
        help="Path to a CSV export written by disk-space-check.",
    ),
    output_format: str = typer.Option(
        "text",
        "--format",
        help="Output format: text or json.",
    ),
    host: str | None = typer.Option(
        None,
        "--host",
        help="Filter to a specific computer name.",
    ),
    only_problems: bool = typer.Option(
        False,
        "--only-problems",
        help="Show only hosts with WARNING or CRITICAL drives.",
    ),
) -> None:
    """
    Summarize an export per host
    """
    if output_format not in {"text", "json"}:
        raise typer.BadParameter("--format must be 'text' or 'json'")

    rows, invalid_count = _load(csv_path)

    all_rollups = summarize_by_host(rows)
    rollups = _apply_filters(all_rollups, host=host, only_problems=only_problems)

    meta = {
        "csv_path": str(Path(csv_path)),
        "hosts_seen": len(all_rollups),
        "hosts_emitted": len(rollups),
        "rows_parsed": len(rows),
        "rows_invalid": invalid_count,
        "computed_at": datetime.now(timezone.utc).isoformat(),
    }

    if output_format == "json":
        payload = render_json(rollups, meta=meta)
        typer.echo(json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False))
    else:
        typer.echo(render_text(rollups, meta=meta))

    _maybe_exit_by_status(
        critical=any(rollup.critical_count for rollup in rollups),
        warning=any(rollup.warning_count for rollup in rollups),
        only_problems=only_problems,
    )


@app.command("show")
def show(
    csv_path: str = typer.Option(
        "disk_report.csv",
        "--csv",
        help="Path to a CSV export written by disk-space-check.",
    ),
    only_problems: bool = typer.Option(
        False,
        "--only-problems",
        help="Show only WARNING and CRITICAL drives.",
    ),
) -> None:
    """
    Print exported rows as a table
    """
    rows, _ = _load(csv_path)
    shown = visible_rows(rows, only_problems=only_problems)

    if not shown:
        typer.echo("All drives healthy" if only_problems and rows else "No rows")
        return

    body = [[row.host_name] + row_cells(row) for row in shown]
    typer.echo("\n".join(format_table(["HOST"] + ROW_HEADERS, body)))


if __name__ == "__main__":
    app()
