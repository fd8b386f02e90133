import re
from datetime import date, datetime

from .exceptions import InvalidDateFormat

ISO_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")  # 2024-01-15
FR_PATTERN = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")  # 15/01/2024
LABEL_FORMAT = "%d/%m/%Y"


def parse_export_date(value: str) -> date:
    """
    Parses a date in YYYY-MM-DD or DD/MM/YYYY.
    Out-of-range days or months (e.g. 2024-02-30) are rejected, not rolled over.
    """
    if not isinstance(value, str):
        raise InvalidDateFormat(value)

    text = value.strip()
    match = ISO_PATTERN.match(text)
    if match:
        year, month, day = match.groups()
    else:
        match = FR_PATTERN.match(text)
        if not match:
            raise InvalidDateFormat(value)
        day, month, year = match.groups()

    try:
        return date(int(year), int(month), int(day))
    except ValueError as exc:
        raise InvalidDateFormat(value) from exc


def format_label(value: date | datetime) -> str:
    """Returns the canonical DD/MM/YYYY column label."""
    return value.strftime(LABEL_FORMAT)


def normalize_export_date(value: str) -> str:
    return format_label(parse_export_date(value))


def is_valid_date(label: object) -> bool:
    """True if the label parses as an export date. Never raises."""
    try:
        parse_export_date(label)  # type: ignore[arg-type]
    except InvalidDateFormat:
        return False
    return True
