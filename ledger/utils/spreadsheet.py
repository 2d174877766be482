from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill

XLSX_CONTENT_TYPE = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
)

LIGHT_GREEN = "C6EFCE"
COLUMN_WIDTH = 25


def render_ledger_as_spreadsheet(
    rows, *, title, headers, header_color=LIGHT_GREEN, total_column=None
) -> bytes:
    """
    Render ``rows`` as a single-sheet .xlsx workbook.

    Each row is a sequence matching ``headers``. When ``total_column`` is
    given, a bold TOTAL row summing that column is appended after one blank
    row.
    """
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = title[:31]

    header_font = Font(bold=True, size=12)
    header_fill = PatternFill(
        start_color=header_color, end_color=header_color, fill_type="solid"
    )
    for index, header in enumerate(headers, start=1):
        cell = sheet.cell(row=1, column=index, value=header)
        cell.font = header_font
        cell.fill = header_fill
        sheet.column_dimensions[cell.column_letter].width = COLUMN_WIDTH

    total = 0
    for row in rows:
        sheet.append(list(row))
        if total_column is not None:
            total += row[total_column]

    if total_column is not None:
        total_row = sheet.max_row + 2
        bold = Font(bold=True)
        label = sheet.cell(row=total_row, column=1, value="TOTAL")
        label.font = bold
        amount = sheet.cell(row=total_row, column=total_column + 1, value=total)
        amount.font = bold

    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
