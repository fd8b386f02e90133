from dataclasses import dataclass

from .dates import is_valid_date


@dataclass(frozen=True)
class LookbackWindow:
    current_label: str
    previous_label: str
    current_position: int
    previous_position: int


def position_of(date_columns: list[str], label: str) -> int:
    """0-based position of a label in the date-column sequence."""
    try:
        return date_columns.index(label)
    except ValueError:
        raise ValueError(f"Date column {label!r} not found") from None


def resolve_lookback(date_columns: list[str], label: str, periods: int) -> LookbackWindow | None:
    """
    Finds the column `periods` positions before `label`.
    Returns None when the history is too short or the column found there is
    not a date, which the reports render as "no data" rather than an error.
    """
    if periods < 1:
        raise ValueError(f"periods must be >= 1, got {periods}")

    current = position_of(date_columns, label)
    previous = current - periods
    if previous < 0:
        return None

    previous_label = date_columns[previous]
    if not is_valid_date(previous_label):
        return None

    return LookbackWindow(
        current_label=label,
        previous_label=previous_label,
        current_position=current,
        previous_position=previous,
    )
