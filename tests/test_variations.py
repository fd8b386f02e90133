import pytest
from openpyxl import Workbook

from stock_tracking import settings
from stock_tracking.timeseries import resolve_lookback
from stock_tracking.tracking import TrackingTable
from stock_tracking.variations import Tier, classify_tier, compute_variations


def _table(date_labels, rows):
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(settings.METADATA_HEADERS + list(date_labels))
    for row in rows:
        sheet.append(list(row))
    return TrackingTable.from_sheet(sheet)


@pytest.mark.parametrize(
    "quantity, tier",
    [(0, Tier.CRITICAL), (5, Tier.CRITICAL), (6, Tier.LOW), (10, Tier.LOW), (11, Tier.NORMAL), (250, Tier.NORMAL)],
)
def test_tier_boundaries(quantity, tier):
    assert classify_tier(quantity) == tier


def test_only_moving_rows_are_reported_in_row_order():
    table = _table(
        ["01/01/2024", "01/02/2024"],
        [
            ("X1", "Vis", "A", "Magasin A", 10, 3),
            ("X2", "Ecrou", "A", "Magasin A", 4, 4),
            ("X3", "Joint", "B", "Magasin B", 1, 9),
        ],
    )

    records = compute_variations(table, resolve_lookback(table.date_columns, "01/02/2024", 1))

    assert [(r.article_code, r.variation, r.current_quantity) for r in records] == [("X1", -7, 3), ("X3", 8, 9)]
    assert records[0].description == "Vis"
    assert records[1].location_description == "Magasin B"


def test_empty_cells_count_as_zero():
    table = _table(
        ["01/01/2024", "01/02/2024"],
        [("X1", "Vis", "A", "", None, 2), ("X2", "Ecrou", "A", "", 3, None), ("X3", "Joint", "A", "", None, 0)],
    )

    records = compute_variations(table, resolve_lookback(table.date_columns, "01/02/2024", 1))

    assert [(r.article_code, r.variation, r.current_quantity) for r in records] == [("X1", 2, 2), ("X2", -3, 0)]


def test_swapping_columns_negates_every_variation():
    table = _table(
        ["01/01/2024", "01/02/2024"],
        [("X1", "Vis", "A", "", 10, 3), ("X2", "Ecrou", "A", "", 0, 5)],
    )
    forward = resolve_lookback(table.date_columns, "01/02/2024", 1)
    backward = forward.__class__(
        current_label=forward.previous_label,
        previous_label=forward.current_label,
        current_position=forward.previous_position,
        previous_position=forward.current_position,
    )

    ahead = {r.article_code: r.variation for r in compute_variations(table, forward)}
    behind = {r.article_code: r.variation for r in compute_variations(table, backward)}

    assert ahead == {code: -value for code, value in behind.items()}


def test_no_movement_gives_no_records():
    table = _table(["01/01/2024", "01/02/2024"], [("X1", "Vis", "A", "", 4, 4)])

    assert compute_variations(table, resolve_lookback(table.date_columns, "01/02/2024", 1)) == []
