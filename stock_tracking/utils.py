import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl import Workbook, load_workbook
from openpyxl.cell.cell import Cell
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from . import settings
from .dates import format_label
from .exceptions import MissingSheet

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ["article_code", "location", "description", "location_description"]


def cell_text(value: Any) -> str:
    """
    Normalizes a cell to the text used for keys and descriptions.
    Empty cells become "", integral floats lose their ".0" (1234.0 -> "1234").
    """
    if value is None:
        return ""
    if isinstance(value, float):
        if pd.isna(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value).strip()


def header_label(value: Any) -> str:
    """Header cells typed as real dates in Excel are read as their DD/MM/YYYY label."""
    if isinstance(value, (datetime, date)):
        return format_label(value)
    return cell_text(value)


def make_key(article_code: Any, location: Any) -> str:
    return f"{cell_text(article_code)}|{cell_text(location)}"


def load_tracking_workbook(file_path: Path) -> Workbook:
    """Loads the tracking workbook in full (styles, formulas and all sheets are kept)."""
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Tracking file not found: {file_path}")
    return load_workbook(file_path)


def get_stock_sheet(workbook: Workbook) -> Worksheet:
    if settings.STOCK_SHEET_NAME not in workbook.sheetnames:
        raise MissingSheet(settings.STOCK_SHEET_NAME)
    return workbook[settings.STOCK_SHEET_NAME]


def find_sheets_by_prefix(workbook: Workbook, prefix: str) -> list[Worksheet]:
    """Case-insensitive "starts with" lookup, in workbook order."""
    lower_prefix = prefix.lower()
    return [ws for ws in workbook.worksheets if ws.title.lower().startswith(lower_prefix)]


def load_export_frame(file_path: Path) -> pd.DataFrame:
    """
    Reads the first sheet of an export workbook, by position.
    The header row is dropped and only the first four columns are kept:
    article code, location code, description, location description.
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Export file not found: {file_path}")

    raw = pd.read_excel(
        file_path, sheet_name=0, header=None, dtype=object, engine="openpyxl"
    )
    body = raw.iloc[1:].reindex(columns=range(len(EXPORT_COLUMNS)))
    body.columns = EXPORT_COLUMNS
    logger.info(f"  > Read {len(body)} export rows from {file_path.name}")
    return body.reset_index(drop=True)


def excel_value(value: Any) -> Any:
    """Converts a frame value back to something openpyxl can store (NaN -> empty cell)."""
    if value is None:
        return None
    if isinstance(value, (int, float)) or hasattr(value, "item"):
        if pd.isna(value):
            return None
        value = value.item() if hasattr(value, "item") else value
        if isinstance(value, float) and value.is_integer():
            return int(value)
    return value


def style_header_cell(cell: Cell) -> None:
    border_side = Side(style="thin", color=settings.HEADER_FONT_COLOR)
    cell.fill = PatternFill(fill_type="solid", fgColor=settings.HEADER_FILL_COLOR)
    cell.font = Font(color=settings.HEADER_FONT_COLOR, bold=True)
    cell.alignment = Alignment(horizontal="center")
    cell.border = Border(top=border_side, left=border_side, bottom=border_side, right=border_side)


def adjust_column_widths(worksheet: Worksheet) -> None:
    """Sizes each column to its longest value, between MIN and MAX_COLUMN_WIDTH."""
    lengths: dict[int, int] = {}
    for row in worksheet.iter_rows():
        for cell in row:
            if cell.value is None:
                continue
            length = len(str(cell.value))
            lengths[cell.column] = max(lengths.get(cell.column, settings.MIN_COLUMN_WIDTH), length)

    for column, length in lengths.items():
        worksheet.column_dimensions[get_column_letter(column)].width = min(
            length + 2, settings.MAX_COLUMN_WIDTH
        )
