import pandas as pd

from stock_tracking.parsers import AGGREGATE_COLUMNS, aggregate_export
from stock_tracking.utils import EXPORT_COLUMNS


def _frame(rows):
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS, dtype=object)


def test_quantity_is_the_row_count():
    result = aggregate_export(
        _frame(
            [
                ("X1", "A", "Vis", "Magasin A"),
                ("X1", "A", "Vis inox", "Magasin A bis"),
                ("X1", "A", None, None),
                ("X2", "A", "Ecrou", "Magasin A"),
            ]
        )
    )

    assert list(result.index) == ["X1|A", "X2|A"]
    assert result.loc["X1|A", "quantity"] == 3
    assert result.loc["X2|A", "quantity"] == 1


def test_first_row_wins_for_descriptions():
    result = aggregate_export(
        _frame([("X1", "A", None, None), ("X1", "A", "Vis", "Magasin A")])
    )

    assert result.loc["X1|A", "description"] == ""
    assert result.loc["X1|A", "location_description"] == ""


def test_rows_without_codes_are_skipped():
    result = aggregate_export(
        _frame(
            [
                ("X1", "A", "Vis", "Magasin A"),
                ("X1", None, "Vis", "Magasin ?"),
                ("", "A", "Sans code", "Magasin A"),
                ("   ", "B", "Blanc", "Magasin B"),
            ]
        )
    )

    assert list(result.index) == ["X1|A"]
    assert result.loc["X1|A", "quantity"] == 1


def test_numeric_codes_are_keyed_as_text():
    result = aggregate_export(_frame([(1234.0, 7, "Joint", "Quai"), ("1234", "7", "Joint", "Quai")]))

    assert list(result.index) == ["1234|7"]
    assert result.loc["1234|7", "article_code"] == "1234"
    assert result.loc["1234|7", "quantity"] == 2


def test_keys_follow_first_appearance():
    result = aggregate_export(
        _frame([("B", "1", "", ""), ("A", "1", "", ""), ("B", "1", "", ""), ("C", "1", "", "")])
    )

    assert list(result.index) == ["B|1", "A|1", "C|1"]


def test_empty_export():
    result = aggregate_export(_frame([]))

    assert result.empty
    assert list(result.columns) == AGGREGATE_COLUMNS
