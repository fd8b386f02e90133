from pathlib import Path

import pytest
from openpyxl import Workbook, load_workbook

from stock_tracking import settings

EXPORT_HEADER = ["Code article", "Emplacement", "Description", "Desc. emplacement"]


@pytest.fixture(autouse=True)
def no_webhook(monkeypatch):
    monkeypatch.setattr(settings, "WEBHOOK_URL", None)


def build_tracking_workbook(path: Path, date_labels, rows, extra_sheets=None) -> Path:
    """
    rows: (article_code, description, location, location_description, *quantities)
    extra_sheets: {sheet name: list of rows} added after the stock sheet.
    """
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = settings.STOCK_SHEET_NAME
    sheet.append(settings.METADATA_HEADERS + list(date_labels))
    for row in rows:
        sheet.append(list(row))
    for name, extra_rows in (extra_sheets or {}).items():
        extra = workbook.create_sheet(title=name)
        for row in extra_rows:
            extra.append(list(row))
    workbook.save(path)
    return path


def build_export_workbook(path: Path, rows) -> Path:
    """rows: (article_code, location, description, location_description)"""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Export"
    sheet.append(EXPORT_HEADER)
    for row in rows:
        sheet.append(list(row))
    workbook.save(path)
    return path


def sheet_rows(path: Path, sheet_name: str) -> list[tuple]:
    workbook = load_workbook(path)
    return [tuple(row) for row in workbook[sheet_name].iter_rows(values_only=True)]
