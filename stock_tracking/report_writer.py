"""
Renders variation reports into their own sheets.

Report sheets are derived views: each run deletes the previous sheet and
writes a new one from scratch, so nothing from an older run survives.
"""

import logging

from openpyxl import Workbook
from openpyxl.styles import Alignment, PatternFill
from openpyxl.worksheet.worksheet import Worksheet

from . import settings
from .schemas import VariationRecord
from .utils import adjust_column_widths, find_sheets_by_prefix, style_header_cell
from .variations import Tier, classify_tier

logger = logging.getLogger(__name__)

REPORT_HEADERS = [field.alias or name for name, field in VariationRecord.model_fields.items()]
REPORT_WIDTH = len(REPORT_HEADERS)
LAST_COLUMN = "F"

TIER_FILLS = {
    Tier.CRITICAL: settings.CRITICAL_FILL_COLOR,
    Tier.LOW: settings.LOW_FILL_COLOR,
}


def recreate_report_sheet(workbook: Workbook, sheet_name: str) -> Worksheet:
    """
    Drops every sheet whose name starts with `sheet_name` (case-insensitive)
    and creates an empty one where the first of them was.
    """
    existing = find_sheets_by_prefix(workbook, sheet_name)
    if not existing:
        logger.warning(f'⚠️ Sheet "{sheet_name}" not found, creating it...')
        return workbook.create_sheet(title=sheet_name)

    index = workbook.worksheets.index(existing[0])
    for worksheet in existing:
        workbook.remove(worksheet)
    return workbook.create_sheet(title=sheet_name, index=index)


def _write_banner(worksheet: Worksheet, row: int, text: str) -> None:
    worksheet.merge_cells(f"A{row}:{LAST_COLUMN}{row}")
    cell = worksheet.cell(row=row, column=1, value=text)
    cell.alignment = Alignment(horizontal="center")
    cell.fill = PatternFill(fill_type="solid", fgColor=settings.TITLE_FILL_COLOR)


def write_no_data_message(worksheet: Worksheet, message: str) -> None:
    _write_banner(worksheet, 1, message)


def write_variation_report(worksheet: Worksheet, records: list[VariationRecord], title: str) -> None:
    _write_banner(worksheet, 1, title)

    for column, header in enumerate(REPORT_HEADERS, start=1):
        style_header_cell(worksheet.cell(row=2, column=column, value=header))

    if not records:
        _write_banner(worksheet, 3, settings.NO_VARIATION_MESSAGE)
    else:
        for row, record in enumerate(records, start=3):
            values = list(record.model_dump().values())
            for column, value in enumerate(values, start=1):
                worksheet.cell(row=row, column=column, value=value)

            fill_color = TIER_FILLS.get(classify_tier(record.current_quantity))
            if fill_color:
                worksheet.cell(row=row, column=REPORT_WIDTH).fill = PatternFill(
                    fill_type="solid", fgColor=fill_color
                )

    adjust_column_widths(worksheet)
