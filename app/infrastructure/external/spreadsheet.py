"""Excel workbook rendering with openpyxl (implements ISpreadsheetWriter).

Cell text comes from users, so control characters that the xlsx format
cannot hold are dropped and text starting with "=" is stored as a string,
never as a formula.
"""

from __future__ import annotations

from io import BytesIO
from typing import Any

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _clean(value: Any) -> Any:
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


class XlsxSpreadsheetWriter:
    """Render one worksheet with a bold header row to .xlsx bytes."""

    def render(
        self,
        sheet_title: str,
        headers: list[str],
        rows: list[list[Any]],
        column_widths: list[int] | None = None,
    ) -> bytes:
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = sheet_title[:31]  # Excel sheet name limit
        sheet.append(headers)
        for cell in sheet[1]:
            cell.font = Font(bold=True)
        for row in rows:
            sheet.append([_clean(value) for value in row])
            for cell in sheet[sheet.max_row]:
                if cell.data_type == "f":
                    cell.data_type = "s"
        for index, width in enumerate(column_widths or [], start=1):
            sheet.column_dimensions[get_column_letter(index)].width = width
        buffer = BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()
