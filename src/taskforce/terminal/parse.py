# SPDX-License-Identifier: MIT

from typing import Optional, cast, get_args

import typer

from taskforce.model.status import OVERALL_STATUSES, OverallStatus
from taskforce.service.export import ExportFormat, ExportKind
from taskforce.view.view.views.timeline_grid import RowAxis


def _parse_choice(value: str, choices: tuple[str, ...], name: str) -> str:
    normalized = value.strip().lower().replace(" ", "_").replace("-", "_")
    if normalized not in choices:
        raise typer.BadParameter(
            f"Unknown {name} '{value}', expected one of: {', '.join(choices)}"
        )
    return normalized


def parse_overall_status(value: Optional[str]) -> Optional[OverallStatus]:
    if value is None:
        return None
    return cast(OverallStatus, _parse_choice(value, OVERALL_STATUSES, "status"))


def parse_row_axis(value: str) -> RowAxis:
    return cast(RowAxis, _parse_choice(value, get_args(RowAxis), "row axis"))


def parse_export_kind(value: str) -> ExportKind:
    return cast(ExportKind, _parse_choice(value, get_args(ExportKind), "export kind"))


def parse_export_format(value: str) -> ExportFormat:
    return cast(
        ExportFormat, _parse_choice(value, get_args(ExportFormat), "export format")
    )


def recommendation_code_candidates(value: str) -> list[str]:
    """
    Spellings a recommendation reference may take in the dataset.

    Accepts codes like "R07" or "r7" as well as bare numbers like "7".
    """
    code = value.strip().upper()
    number = code[1:] if code.startswith("R") else code
    if not number.isdigit():
        return [code]
    candidates = [f"R{int(number)}", f"R{int(number):02d}"]
    if code not in candidates:
        candidates.insert(0, code)
    return candidates
