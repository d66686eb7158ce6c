"""
diskview.render.table
AUTHOR: carter-vin

Compact table renderer
"""

from __future__ import annotations

from diskcheck.model import HostFailure, HostSuccess
from diskview.filters import visible_rows
from diskview.render.base import Renderer
from diskview.render.utils import ROW_HEADERS, format_table, row_cells


class TableRenderer(Renderer):
    name = "table"

    def render(self, reports, *, summary, only_problems: bool = False) -> str:
        headers = ["HOST"] + ROW_HEADERS

        body: list[list[str]] = []
        for report in reports:
            if not isinstance(report, HostSuccess):
                continue
            for row in visible_rows(report.rows, only_problems=only_problems):
                body.append([report.host_name] + row_cells(row))

        has_success = any(isinstance(report, HostSuccess) for report in reports)
        if not body and not has_success:
            lines = ["No volumes reported"]
        elif not body and only_problems:
            lines = ["All drives healthy"]
        else:
            lines = format_table(headers, body)

        failures = [report for report in reports if isinstance(report, HostFailure)]
        if failures:
            lines.append("")
            for failure in failures:
                lines.append(f"FAILED {failure.host_name}: {failure.message}")

        return "\n".join(lines)
