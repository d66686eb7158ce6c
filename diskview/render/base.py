"""
diskview.render.base
AUTHOR: carter-vin

Renderer interface
"""

from __future__ import annotations

from typing import Sequence

from diskcheck.model import HostReport, RunSummary


class Renderer:
    name: str = "base"

    def render(
        self,
        reports: Sequence[HostReport],
        *,
        summary: RunSummary,
        only_problems: bool = False,
    ) -> str:
        raise NotImplementedError
