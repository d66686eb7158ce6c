"""
diskview.render.json
AUTHOR: carter-vin

JSON renderer wrapper
"""

from __future__ import annotations

import json

from diskcheck.model import HostSuccess, run_to_dict
from diskview.filters import visible_rows
from diskview.render.base import Renderer


class JsonRenderer(Renderer):
    name = "json"

    def render(self, reports, *, summary, only_problems: bool = False) -> str:
        payload = run_to_dict(reports, summary)
        if only_problems:
            # Totals stay over all volumes; only the row list is filtered
            for host, report in zip(payload["hosts"], reports):
                if isinstance(report, HostSuccess):
                    host["rows"] = [
                        row.to_dict() for row in visible_rows(report.rows, only_problems=True)
                    ]
        return json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
