from __future__ import annotations

from decimal import Decimal
from io import BytesIO
from typing import Iterable, List, Sequence

from django.http import HttpResponse
from django.utils import timezone

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.table import Table, TableStyleInfo

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def sanitize_value(raw: object) -> object:
    """
    Prepare a value for XLSX cells while preserving numeric types.

    - Keep ints/floats/Decimals numeric so Excel treats them as numbers.
    - Strip illegal control chars from text.
    - Booleans render as Thai yes/no for readability.
    """
    if raw is None:
        return ""
    if isinstance(raw, bool):
        return "ใช่" if raw else "ไม่ใช่"
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else raw
    if isinstance(raw, Decimal):
        if raw == raw.to_integral_value():
            return int(raw)
        return float(raw)
    return ILLEGAL_CHARACTERS_RE.sub("", str(raw))


def base_styles():
    """Return the shared style objects used across XLSX exports."""
    thin_side = Side(style="thin", color="FFE5E7EB")
    return {
        "title_font": Font(name="Tahoma", bold=True, size=14),
        "header_font": Font(name="Tahoma", bold=True, size=11),
        "cell_font": Font(name="Tahoma", size=11),
        "center_header": Alignment(horizontal="center", vertical="center", wrap_text=True),
        "left_cell": Alignment(horizontal="left", vertical="center", wrap_text=True),
        "center_cell": Alignment(horizontal="center", vertical="center", wrap_text=True),
        "header_fill": PatternFill("solid", fgColor="FFF9FAFB"),
        "border": Border(left=thin_side, right=thin_side, top=thin_side, bottom=thin_side),
    }


def write_table(
    ws,
    headers: Sequence[str],
    rows: Iterable[Sequence[object]],
    *,
    start_row: int = 1,
    column_widths: Sequence[int] | None = None,
    table_name: str = "Table1",
):
    """Write a styled table (header + rows) with a banded Excel table style."""
    styles = base_styles()
    header_row_idx = start_row

    for col_idx, label in enumerate(headers, start=1):
        c = ws.cell(row=header_row_idx, column=col_idx, value=label)
        c.font = styles["header_font"]
        c.alignment = styles["center_header"]
        c.fill = styles["header_fill"]
        c.border = styles["border"]

    row_idx = header_row_idx + 1
    for data_row in rows:
        for col_idx, raw_value in enumerate(data_row, start=1):
            value = sanitize_value(raw_value)
            c = ws.cell(row=row_idx, column=col_idx, value=value)
            c.font = styles["cell_font"]
            # Numbers centered, text left-aligned
            c.alignment = styles["center_cell"] if isinstance(value, (int, float)) else styles["left_cell"]
            c.border = styles["border"]
        row_idx += 1

    widths = column_widths or []
    for col_idx in range(1, len(headers) + 1):
        letter = get_column_letter(col_idx)
        ws.column_dimensions[letter].width = widths[col_idx - 1] if col_idx - 1 < len(widths) else 24

    data_end = row_idx - 1
    # Excel rejects a table without data rows.
    if data_end > header_row_idx:
        ref = f"A{header_row_idx}:{get_column_letter(len(headers))}{data_end}"
        table = Table(displayName=table_name, ref=ref)
        table.tableStyleInfo = TableStyleInfo(
            name="TableStyleMedium9",
            showFirstColumn=False,
            showLastColumn=False,
            showRowStripes=True,
            showColumnStripes=False,
        )
        ws.add_table(table)

    return header_row_idx, data_end


def build_table_response(
    *,
    sheet_title: str,
    report_title: str | None,
    headers: List[str],
    rows: Iterable[Sequence[object]],
    filename: str,
    column_widths: Sequence[int] | None = None,
    table_name: str = "Table1",
):
    """
    Build a single-sheet XLSX response with a styled data table.

    Adds a merged title row and a timestamp row above the table.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title or "รายงาน"

    styles = base_styles()
    row_idx = 1

    if report_title:
        ws.merge_cells(start_row=row_idx, start_column=1, end_row=row_idx, end_column=len(headers))
        c = ws.cell(row=row_idx, column=1, value=report_title)
        c.font = styles["title_font"]
        c.alignment = styles["center_header"]
        row_idx += 1

    stamp = timezone.localtime(timezone.now()).strftime("%Y-%m-%d %H:%M")
    ws.merge_cells(start_row=row_idx, start_column=1, end_row=row_idx, end_column=len(headers))
    c = ws.cell(row=row_idx, column=1, value=f"วันที่ออกรายงาน: {stamp}")
    c.font = styles["cell_font"]
    c.alignment = styles["left_cell"]
    row_idx += 1

    write_table(
        ws,
        headers=headers,
        rows=rows,
        start_row=row_idx,
        column_widths=column_widths,
        table_name=table_name,
    )

    bio = BytesIO()
    wb.save(bio)
    resp = HttpResponse(bio.getvalue(), content_type=XLSX_CONTENT_TYPE)
    resp["Content-Disposition"] = f"attachment; filename={filename}"
    return resp
