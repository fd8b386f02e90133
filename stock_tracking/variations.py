from enum import Enum

from . import settings
from .schemas import VariationRecord
from .timeseries import LookbackWindow
from .tracking import TrackingTable


class Tier(str, Enum):
    CRITICAL = "critical"
    LOW = "low"
    NORMAL = "normal"


def classify_tier(quantity: int) -> Tier:
    if quantity <= settings.CRITICAL_STOCK_THRESHOLD:
        return Tier.CRITICAL
    if quantity <= settings.LOW_STOCK_THRESHOLD:
        return Tier.LOW
    return Tier.NORMAL


def compute_variations(table: TrackingTable, window: LookbackWindow) -> list[VariationRecord]:
    """
    Per-row `current - previous` between the two columns of the window.
    Empty cells count as 0; rows whose quantity did not move are left out.
    Records keep the table's row order.
    """
    current = table.quantities(window.current_label)
    previous = table.quantities(window.previous_label)
    delta = current - previous

    moved = table.frame[delta != 0].assign(
        variation=delta[delta != 0], current_quantity=current[delta != 0]
    )
    return [
        VariationRecord(**row)
        for row in moved[settings.METADATA_COLUMNS + ["variation", "current_quantity"]].to_dict("records")
    ]
