"""
diskview.render.text
AUTHOR: carter-vin

Per-host block renderer (default console output)
"""

from __future__ import annotations

from diskcheck.model import HostSuccess, RunSummary
from diskview.filters import visible_rows
from diskview.render.base import Renderer
from diskview.render.utils import ROW_HEADERS, format_gb, format_table, row_cells


def _host_block(report, *, only_problems: bool) -> list[str]:
    header = f"==== {report.host_name} ===="
    lines = [header]

    if not isinstance(report, HostSuccess):
        lines.append(f"ERROR: {report.message}")
        return lines

    info = report.system_info
    if info is not None:
        boot = info.last_boot.isoformat(sep=" ", timespec="seconds") if info.last_boot else "unknown"
        lines.append(f"OS: {info.os_caption} ({info.architecture})")
        lines.append(f"Last boot: {boot}")
        lines.append(f"Memory: {info.total_memory}")
        lines.append("")

    rows = visible_rows(report.rows, only_problems=only_problems)
    if rows:
        lines.extend(format_table(ROW_HEADERS, [row_cells(row) for row in rows]))
    elif only_problems and report.volume_count:
        # Distinct outcome, not an error
        lines.append(f"All drives healthy ({report.volume_count} checked)")
    else:
        lines.append("No volumes reported")

    lines.append(
        f"Total: {report.volume_count} drives, {format_gb(report.total_bytes)} size, "
        f"{format_gb(report.total_free_bytes)} free"
    )
    return lines


def render_summary_block(summary: RunSummary) -> list[str]:
    return [
        "==== Summary ====",
        f"Hosts checked: {summary.hosts_checked}",
        f"Succeeded: {summary.succeeded}",
        f"Failed: {summary.failed}",
        f"Critical drives: {summary.critical_count}",
        f"Warning drives: {summary.warning_count}",
    ]


class TextRenderer(Renderer):
    name = "text"

    def render(self, reports, *, summary, only_problems: bool = False) -> str:
        blocks: list[str] = []
        for report in reports:
            blocks.extend(_host_block(report, only_problems=only_problems))
            blocks.append("")

        if summary.hosts_checked > 1:
            blocks.extend(render_summary_block(summary))

        return "\n".join(blocks).rstrip()
