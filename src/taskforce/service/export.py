# SPDX-License-Identifier: MIT

import csv
import io
from typing import Literal, Optional, Union

import pendulum
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from taskforce.model.dataset import Chapter
from taskforce.model.recommendation import Recommendation, effective_target_date
from taskforce.model.status import (
    OVERALL_STATUS_LABELS,
    UPDATE_STATUS_LABELS,
    is_terminal_status,
)
from taskforce.model.timeline_item import TimelineItem
from taskforce.service.recommendation import (
    RecentUpdate,
    get_owners_with_stats,
)
from taskforce.time import (
    datetime_to_local_date_str,
    datetime_to_local_date_str_optional,
    days_until,
    today_local,
)

ExportKind = Literal["recommendations", "updates", "timeline", "departments"]
ExportFormat = Literal["csv", "xlsx"]

Row = dict[str, Union[str, int]]

# Header colors used by the XLSX exports
HEADER_FILL_COLOR = "FF0B4938"
HEADER_FONT_COLOR = "FFFDF9E9"

OWNER_FULL_NAMES: dict[str, str] = {
    "DESNZ": "Department for Energy Security and Net Zero",
    "MOD": "Ministry of Defence",
    "ONR": "Office for Nuclear Regulation",
    "EA": "Environment Agency",
    "MHCLG": "Ministry of Housing, Communities and Local Government",
    "DEFRA": "Department for Environment, Food & Rural Affairs",
    "NDA": "Nuclear Decommissioning Authority",
    "HSE": "Health and Safety Executive",
    "DWP": "Department for Work and Pensions",
    "HM Treasury": "HM Treasury",
    "UKHSA": "UK Health Security Agency",
    "UKRI": "UK Research and Innovation",
    "DBT": "Department for Business and Trade",
    "FCDO": "Foreign, Commonwealth & Development Office",
    "MOJ": "Ministry of Justice",
    "EDF": "EDF Energy",
}


def format_recommendation_reference(id: int) -> str:
    return f"R{id:02d}"


def get_recommendation_rows(
    recommendations: list[Recommendation],
    chapters: list[Chapter],
    today: Optional[pendulum.DateTime] = None,
) -> list[Row]:
    chapter_titles = {chapter["id"]: chapter["title"] for chapter in chapters}
    rows: list[Row] = []

    for recommendation in recommendations:
        chapter_number = recommendation["chapter"]["number"]
        timeline = recommendation["delivery_timeline"]
        status_info = recommendation["overall_status"]
        target_date = effective_target_date(recommendation)
        days = days_until(target_date, today) if target_date is not None else 0
        latest_update = (
            max(recommendation["updates"], key=lambda u: u["date"])
            if recommendation["updates"]
            else None
        )

        rows.append(
            {
                "Code": recommendation["code"],
                "Short Title": recommendation["titles"]["short"],
                "Long Title": recommendation["titles"]["long"],
                "Chapter ID": chapter_number,
                "Chapter Title": chapter_titles.get(
                    chapter_number,
                    recommendation["chapter"]["title"] or f"Chapter {chapter_number}",
                ),
                "Overall Status": OVERALL_STATUS_LABELS[status_info["status"]],
                "Status Last Updated": datetime_to_local_date_str_optional(
                    status_info["last_updated"]
                )
                or "",
                "Status Confidence": status_info["confidence"] or "",
                "Status Summary": status_info["summary"] or "",
                "Primary Owner": recommendation["ownership"]["primary_owner"],
                "Co-Owners": ", ".join(recommendation["ownership"]["co_owners"]),
                "Key Regulators": ", ".join(
                    recommendation["ownership"]["key_regulators"]
                ),
                "Target Date": datetime_to_local_date_str_optional(
                    timeline["target_date"]
                )
                or "",
                "Revised Target Date": datetime_to_local_date_str_optional(
                    timeline["revised_target_date"]
                )
                or "",
                "Days Until Deadline": days,
                "Is Overdue": "Yes" if target_date is not None and days < 0 else "No",
                "Sectors": ", ".join(recommendation["scope"]["sectors"]),
                "Domains": ", ".join(recommendation["scope"]["domains"]),
                "Implementation Types": ", ".join(
                    recommendation["implementation_type"]
                ),
                "Depends On": ", ".join(
                    format_recommendation_reference(id)
                    for id in recommendation["dependencies"]["depends_on"]
                ),
                "Enables": ", ".join(
                    format_recommendation_reference(id)
                    for id in recommendation["dependencies"]["enables"]
                ),
                "Update Count": len(recommendation["updates"]),
                "Latest Update Date": (
                    datetime_to_local_date_str(latest_update["date"])
                    if latest_update
                    else ""
                ),
                "Latest Update Status": (
                    UPDATE_STATUS_LABELS[latest_update["status"]]
                    if latest_update
                    else ""
                ),
                "Full Recommendation Text": recommendation["text"],
            }
        )

    return rows


def _update_columns(update_item: RecentUpdate) -> Row:
    update = update_item["update"]
    impact = update["impact_on_overall"]
    source = update["source"]
    impact_status = impact["changes_overall_status_to"] if impact else None
    return {
        "Update Status": UPDATE_STATUS_LABELS[update["status"]],
        "Update Title": update["title"],
        "Update Description": update["description"],
        "Tags": ", ".join(update["tags"]),
        "Links": "; ".join(f"{link['title']}|{link['url']}" for link in update["links"]),
        "Source Type": source["type"] if source else "",
        "Source Reference": (source["reference"] or "") if source else "",
        "Impact on Overall Status": (
            OVERALL_STATUS_LABELS[impact_status] if impact_status else ""
        ),
        "Impact on Confidence": (
            (impact["changes_confidence_to"] or "") if impact else ""
        ),
        "Impact Notes": (impact["notes"] or "") if impact else "",
    }


def get_update_rows(updates: list[RecentUpdate]) -> list[Row]:
    rows: list[Row] = []
    for update_item in updates:
        recommendation = update_item["recommendation"]
        rows.append(
            {
                "Date": datetime_to_local_date_str(update_item["update"]["date"]),
                "Recommendation Code": recommendation["code"],
                "Recommendation Title": recommendation["titles"]["short"],
                **_update_columns(update_item),
            }
        )
    return rows


def get_timeline_rows(items: list[TimelineItem]) -> list[Row]:
    rows: list[Row] = []
    empty_update_columns: Row = {
        "Update Status": "",
        "Update Title": "",
        "Update Description": "",
        "Tags": "",
        "Links": "",
        "Source Type": "",
        "Source Reference": "",
        "Impact on Overall Status": "",
        "Impact on Confidence": "",
        "Impact Notes": "",
    }

    for item in items:
        recommendation = item["recommendation"]
        row: Row = {
            "Date": datetime_to_local_date_str(item["date"]),
            "Type": "Update" if item["type"] == "update" else "Deadline",
            "Recommendation Code": recommendation["code"],
            "Recommendation Title": recommendation["titles"]["short"],
        }
        if item["type"] == "update":
            row.update(
                _update_columns(
                    {"update": item["update"], "recommendation": recommendation}
                )
            )
            row.update(
                {
                    "Deadline Target Date": "",
                    "Deadline Revised Date": "",
                    "Days Until Deadline": "",
                    "Is Overdue": "",
                }
            )
        else:
            deadline = item["deadline"]
            row.update(empty_update_columns)
            row["Update Title"] = f"Deadline: {recommendation['titles']['short']}"
            row.update(
                {
                    "Deadline Target Date": datetime_to_local_date_str_optional(
                        deadline["target_date"]
                    )
                    or "",
                    "Deadline Revised Date": datetime_to_local_date_str_optional(
                        deadline["revised_date"]
                    )
                    or "",
                    "Days Until Deadline": str(deadline["days_until"]),
                    "Is Overdue": "Yes" if deadline["is_overdue"] else "No",
                }
            )
        rows.append(row)

    return rows


def get_department_rows(
    recommendations: list[Recommendation],
    today: Optional[pendulum.DateTime] = None,
) -> list[Row]:
    """One row per owner, sorted by owner name."""
    if today is None:
        today = today_local()

    rows: list[Row] = []
    owners = get_owners_with_stats(recommendations)
    for owner_stats in sorted(owners, key=lambda o: o["owner"]):
        total_days = 0
        deadline_count = 0
        overdue_count = 0
        for recommendation in owner_stats["recommendations"]:
            if is_terminal_status(recommendation["overall_status"]["status"]):
                continue
            target_date = effective_target_date(recommendation)
            if target_date is None:
                continue
            days = days_until(target_date, today)
            total_days += days
            deadline_count += 1
            if days < 0:
                overdue_count += 1

        counts = owner_stats["status_counts"]
        total = owner_stats["total"]
        completion = counts["completed"] / total * 100 if total > 0 else 0.0
        rows.append(
            {
                "Owner/Department": owner_stats["owner"],
                "Full Name": OWNER_FULL_NAMES.get(
                    owner_stats["owner"], owner_stats["owner"]
                ),
                "Total Recommendations": total,
                "Not Started": counts["not_started"],
                "On Track": counts["on_track"],
                "Off Track": counts["off_track"],
                "Completed": counts["completed"],
                "Abandoned": counts["abandoned"],
                "Completion Percentage": f"{completion:.1f}%",
                "Average Days Until Deadline": (
                    f"{total_days / deadline_count:.1f}" if deadline_count > 0 else ""
                ),
                "Overdue Count": overdue_count,
            }
        )

    return rows


def rows_to_csv(rows: list[Row]) -> str:
    """Render rows as CSV with a BOM for spreadsheet compatibility; empty when there are no rows."""
    if not rows:
        return ""

    buffer = io.StringIO()
    writer = csv.DictWriter(
        buffer, fieldnames=list(rows[0].keys()), lineterminator="\n"
    )
    writer.writeheader()
    writer.writerows(rows)
    return "\ufeff" + buffer.getvalue().rstrip("\n")


def rows_to_xlsx(
    rows: list[Row], sheet_title: str, column_widths: Optional[list[int]] = None
) -> bytes:
    """Render rows as a single-sheet workbook with a styled, frozen header row."""
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = sheet_title

    headers = list(rows[0].keys()) if rows else []
    worksheet.append(headers)
    for cell in worksheet[1]:
        cell.font = Font(bold=True, color=HEADER_FONT_COLOR)
        cell.fill = PatternFill(
            fill_type="solid",
            start_color=HEADER_FILL_COLOR,
            end_color=HEADER_FILL_COLOR,
        )

    for row in rows:
        worksheet.append([row[header] for header in headers])

    for index, header in enumerate(headers):
        if column_widths is not None and index < len(column_widths):
            width = column_widths[index]
        else:
            width = max(10, min(60, len(header) + 4))
        worksheet.column_dimensions[get_column_letter(index + 1)].width = width

    worksheet.freeze_panes = "A2"

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


RECOMMENDATION_COLUMN_WIDTHS = [
    8, 30, 50, 10, 40, 15, 18, 12, 50, 20, 30, 30, 12,
    18, 18, 10, 15, 30, 30, 30, 30, 12, 18, 15, 100,
]  # fmt: skip
UPDATE_COLUMN_WIDTHS = [12, 10, 40, 15, 50, 80, 30, 60, 15, 20, 20, 15, 50]
TIMELINE_COLUMN_WIDTHS = [
    12, 10, 10, 40, 15, 50, 80, 30, 60, 15, 20, 20, 15, 50, 18, 18, 18, 10,
]  # fmt: skip
DEPARTMENT_COLUMN_WIDTHS = [20, 50, 20, 12, 12, 12, 12, 12, 20, 25, 15]

SHEET_TITLES: dict[ExportKind, str] = {
    "recommendations": "Recommendations",
    "updates": "Updates",
    "timeline": "Timeline",
    "departments": "Departments",
}

COLUMN_WIDTHS: dict[ExportKind, list[int]] = {
    "recommendations": RECOMMENDATION_COLUMN_WIDTHS,
    "updates": UPDATE_COLUMN_WIDTHS,
    "timeline": TIMELINE_COLUMN_WIDTHS,
    "departments": DEPARTMENT_COLUMN_WIDTHS,
}


def render_export(
    kind: ExportKind, rows: list[Row], export_format: ExportFormat
) -> bytes:
    if export_format == "csv":
        return rows_to_csv(rows).encode("utf-8")
    return rows_to_xlsx(rows, SHEET_TITLES[kind], COLUMN_WIDTHS[kind])


def get_export_filename(
    kind: ExportKind,
    export_format: ExportFormat,
    today: Optional[pendulum.DateTime] = None,
) -> str:
    if today is None:
        today = today_local()
    return f"taskforce-{kind}-{today.format('YYYY-MM-DD')}.{export_format}"
