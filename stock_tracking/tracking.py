"""
The "Liste de Stock" sheet as a typed table, and the merge of an aggregated
export into it as a new date column.

Sheet layout: columns 1-4 hold the item metadata (settings.METADATA_COLUMNS),
every later column is a date column labelled DD/MM/YYYY. Row 1 is the header.
"""

import logging
from dataclasses import dataclass, field

import pandas as pd
from openpyxl.worksheet.worksheet import Worksheet

from . import settings
from .exceptions import DuplicateImport
from .utils import adjust_column_widths, cell_text, excel_value, header_label, style_header_cell

logger = logging.getLogger(__name__)

METADATA_WIDTH = len(settings.METADATA_COLUMNS)


def _unique_labels(raw_labels: list[str], offset: int) -> list[str]:
    """Blank headers get a positional name and repeated ones a suffix, so frame columns stay unique."""
    labels: list[str] = []
    seen: dict[str, int] = {}
    for idx, value in enumerate(raw_labels):
        base = value if value else f"column_{offset + idx + 1}"
        count = seen.get(base, 0)
        labels.append(base if count == 0 else f"{base}_{count + 1}")
        seen[base] = count + 1
    return labels


@dataclass
class MergeResult:
    label: str
    updated: int
    zeroed: int
    inserted: int


@dataclass
class TrackingTable:
    """
    In-memory copy of the stock sheet.
    `frame` holds the metadata columns followed by one column per date label;
    a cell that is empty in the sheet is NaN. `row_numbers[i]` is the sheet row
    of frame row i for the rows that were read; rows appended by a merge have
    no sheet row until `write_to_sheet` runs.
    """

    date_columns: list[str]
    frame: pd.DataFrame
    row_numbers: list[int] = field(default_factory=list)

    @classmethod
    def from_sheet(cls, worksheet: Worksheet) -> "TrackingTable":
        header_values = [cell.value for cell in worksheet[1]] if worksheet.max_row >= 1 else []
        while header_values and header_values[-1] in (None, ""):
            header_values.pop()

        date_columns = _unique_labels(
            [header_label(v) for v in header_values[METADATA_WIDTH:]], METADATA_WIDTH
        )
        width = METADATA_WIDTH + len(date_columns)

        records = []
        row_numbers = []
        for row_number, values in enumerate(
            worksheet.iter_rows(min_row=2, max_col=width, values_only=True), start=2
        ):
            if all(value in (None, "") for value in values):
                continue
            values = list(values) + [None] * (width - len(values))
            metadata = [cell_text(v) for v in values[:METADATA_WIDTH]]
            records.append(metadata + values[METADATA_WIDTH:])
            row_numbers.append(row_number)

        frame = pd.DataFrame(records, columns=settings.METADATA_COLUMNS + date_columns, dtype=object)
        logger.info(f"📖 {len(frame)} tracked rows, {len(date_columns)} date columns")
        return cls(date_columns, frame, row_numbers)

    def keys(self) -> pd.Series:
        return self.frame["article_code"] + "|" + self.frame["location"]

    def quantities(self, label: str) -> pd.Series:
        """Quantities of a date column; empty or non-numeric cells read as 0."""
        return pd.to_numeric(self.frame[label], errors="coerce").fillna(0).astype(int)

    def sheet_column(self, label: str) -> int:
        """1-based sheet column of a date label."""
        return METADATA_WIDTH + self.date_columns.index(label) + 1

    def write_to_sheet(self, worksheet: Worksheet, label: str) -> None:
        """
        Writes a merged column back: the header cell, the column value of every
        row that was read, then the appended rows at the bottom of the sheet.
        Cells of older columns are left untouched; blank metadata headers
        (a brand-new sheet) are filled in.
        """
        for position, header in enumerate(settings.METADATA_HEADERS, start=1):
            if worksheet.cell(row=1, column=position).value in (None, ""):
                style_header_cell(worksheet.cell(row=1, column=position, value=header))

        column = self.sheet_column(label)
        style_header_cell(worksheet.cell(row=1, column=column, value=label))

        for position, row_number in enumerate(self.row_numbers):
            worksheet.cell(row=row_number, column=column, value=excel_value(self.frame.at[position, label]))

        first_new = len(self.row_numbers)
        for position in range(first_new, len(self.frame)):
            values = [excel_value(v) for v in self.frame.iloc[position].tolist()]
            worksheet.append(values)
            self.row_numbers.append(worksheet.max_row)

        logger.info("📐 Adjusting column widths...")
        adjust_column_widths(worksheet)


def _append_rows(frame: pd.DataFrame, batch: pd.DataFrame) -> pd.DataFrame:
    batch = batch.reindex(columns=frame.columns)
    if frame.empty:
        return batch.reset_index(drop=True)
    return pd.concat([frame, batch], ignore_index=True)


def merge_export(
    table: TrackingTable,
    export: pd.DataFrame,
    label: str,
    batch_size: int = settings.NEW_ROWS_BATCH_SIZE,
) -> MergeResult:
    """
    Adds `label` as a new date column filled from the aggregated export.
    Existing rows get their export quantity or 0. Keys absent from the sheet
    become new rows carrying only the new column, appended in export order.
    Raises DuplicateImport, without touching the table, if the label exists.
    """
    if label in table.date_columns:
        raise DuplicateImport(label)
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")

    keys = table.keys()
    matched = keys.isin(export.index)

    table.date_columns.append(label)
    table.frame[label] = keys.map(export["quantity"]).fillna(0).astype(int)
    updated = int(matched.sum())
    logger.info(f"✏️ {updated} rows updated")

    new_rows = (
        export[~export.index.isin(set(keys))]
        .reset_index(drop=True)
        .rename(columns={"quantity": label})
    )
    total = len(new_rows)
    logger.info(f"➕ Adding {total} new rows in batches of {batch_size}...")

    for start in range(0, total, batch_size):
        table.frame = _append_rows(table.frame, new_rows.iloc[start:start + batch_size])
        logger.info(f"  ✓ {min(start + batch_size, total)}/{total} rows added...")

    return MergeResult(label=label, updated=updated, zeroed=len(keys) - updated, inserted=total)
