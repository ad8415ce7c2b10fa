"""
Monthly spreadsheet export.

Joins the current calendar month's shifts with their users and renders one
worksheet: header row first, then one row per shift, newest date first. The
whole workbook is built in memory before it is returned.
"""
from __future__ import annotations

import io
import logging
from datetime import date
from typing import Any, Iterable, Optional

from openpyxl import Workbook

from shifttrack.core.errors import NotFoundError
from shifttrack.db.store import ShiftStore
from shifttrack.models.shift import ShiftSchema

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "schichten_export.xlsx"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
SHEET_TITLE = "Schichten"


def month_bounds(today: date) -> tuple[date, date]:
    """Return ``[first day of month, first day of next month)`` for ``today``."""
    start = today.replace(day=1)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def build_workbook(schema: ShiftSchema, rows: Iterable[dict[str, Any]]) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE
    ws.append(list(schema.export_headers))
    for row in rows:
        ws.append([row.get(field) for field in schema.export_fields])

    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()


async def export_monthly(store: ShiftStore, schema: ShiftSchema, today: Optional[date] = None) -> bytes:
    if today is None:
        today = date.today()
    start, end = month_bounds(today)

    rows = await store.monthly_rows(schema, start, end)
    if not rows:
        logger.info("No shifts between %s and %s, nothing to export", start, end)
        raise NotFoundError("Keine Schichten für diesen Monat gefunden!")

    logger.info("Exporting %d shifts for %s", len(rows), start.strftime("%Y-%m"))
    return build_workbook(schema, rows)
