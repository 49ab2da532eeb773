from __future__ import annotations
from typing import List
from io import BytesIO
from datetime import datetime

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.styles import Alignment, Font, PatternFill

from app.schemas.class_session import DAYS, ClassSessionOut
from app.utils.sessions import minutes_or_max

CATEGORY_FILLS = {
    "PERSONAL": PatternFill("solid", fgColor="DCFCE7"),   # green, personal tuition
    "EXTERNAL": PatternFill("solid", fgColor="E2E8F0"),   # grey, fixed institute class
}


def _cell_text(s: ClassSessionOut) -> str:
    name = " ".join(x for x in (s.label, s.subject or s.title) if x)
    lines = [name, f"{s.start_time}-{s.end_time}"]
    if s.class_type:
        lines.append(s.class_type)
    if s.location:
        lines.append(s.location)
    return "\n".join(lines)


def timetable_to_xlsx_bytes(sessions: List[ClassSessionOut], sheet_name: str = "Week") -> bytes:
    """
    Weekly grid: one column per weekday (Sunday first), one row per start time.
    Sessions starting at the same time on the same day share a cell.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name[:31]

    ws.append(["Time", *DAYS])
    header_font = Font(bold=True)
    for col_idx in range(1, len(DAYS) + 2):
        cell = ws.cell(row=1, column=col_idx)
        cell.font = header_font
        cell.alignment = Alignment(horizontal="center", vertical="center")

    if not sessions:
        ws.cell(row=2, column=1, value="No classes")
    else:
        starts = sorted({s.start_time for s in sessions}, key=minutes_or_max)
        row_of = {start: idx for idx, start in enumerate(starts, start=2)}

        for start, row_idx in row_of.items():
            ws.cell(row=row_idx, column=1, value=start).font = header_font

        grid: dict[tuple[int, int], List[ClassSessionOut]] = {}
        for s in sessions:
            if s.day not in DAYS:
                continue
            col_idx = DAYS.index(s.day) + 2
            grid.setdefault((row_of[s.start_time], col_idx), []).append(s)

        for (row_idx, col_idx), cell_sessions in grid.items():
            cell = ws.cell(row=row_idx, column=col_idx, value="\n\n".join(_cell_text(s) for s in cell_sessions))
            cell.alignment = Alignment(wrap_text=True, vertical="top")
            fill = CATEGORY_FILLS.get(cell_sessions[0].category or "")
            if fill is not None:
                cell.fill = fill

    ws.column_dimensions["A"].width = 10
    for col_idx in range(2, len(DAYS) + 2):
        ws.column_dimensions[get_column_letter(col_idx)].width = 26

    ws.freeze_panes = "B2"

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def make_filename(prefix: str = "timetable") -> str:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{ts}.xlsx"
