import pytest

from stock_tracking.timeseries import position_of, resolve_lookback

MONTHS = ["01/01/2024", "01/02/2024", "01/03/2024", "01/04/2024", "01/05/2024", "01/06/2024", "01/07/2024"]


def test_monthly_window_is_the_previous_column():
    window = resolve_lookback(MONTHS, "01/07/2024", 1)

    assert window.previous_label == "01/06/2024"
    assert (window.current_position, window.previous_position) == (6, 5)


def test_semestrial_window_goes_six_columns_back():
    window = resolve_lookback(MONTHS, "01/07/2024", 6)

    assert window.previous_label == "01/01/2024"
    assert window.previous_position == 0


def test_short_history_has_no_window():
    assert resolve_lookback(MONTHS, "01/06/2024", 6) is None
    assert resolve_lookback(["15/01/2024"], "15/01/2024", 1) is None


def test_non_date_column_at_the_lookback_position_has_no_window():
    columns = ["Notes", "01/02/2024", "01/03/2024"]

    assert resolve_lookback(columns, "01/02/2024", 1) is None
    assert resolve_lookback(columns, "01/03/2024", 1).previous_label == "01/02/2024"


def test_unknown_label_and_bad_periods_raise():
    with pytest.raises(ValueError):
        position_of(MONTHS, "01/08/2024")
    with pytest.raises(ValueError):
        resolve_lookback(MONTHS, "01/07/2024", 0)
