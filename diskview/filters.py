"""
diskview.filters
AUTHOR: carter-vin

Row filtering for operator views
"""

from __future__ import annotations

from typing import Iterable

from diskcheck.model import Status, VolumeReportRow


def is_problem(row: VolumeReportRow) -> bool:
    return row.status is not Status.OK


def filter_problem_rows(rows: Iterable[VolumeReportRow]) -> list[VolumeReportRow]:
    """
    Keep WARNING and CRITICAL rows, preserving order
    """
    return [row for row in rows if is_problem(row)]


def visible_rows(rows: Iterable[VolumeReportRow], *, only_problems: bool) -> list[VolumeReportRow]:
    if only_problems:
        return filter_problem_rows(rows)
    return list(rows)
