import logging

import pandas as pd

from .utils import EXPORT_COLUMNS, cell_text

logger = logging.getLogger(__name__)

AGGREGATE_COLUMNS = ["article_code", "description", "location", "location_description", "quantity"]


def aggregate_export(df: pd.DataFrame) -> pd.DataFrame:
    """
    Folds raw export rows into one entry per article/location key.
    - Rows without an article code or a location code are skipped.
    - Quantity is the number of rows for the key (one row = one unit).
    - Descriptions come from the first row seen for the key.
    The result is indexed by key, in first-seen order.
    """
    normalized = pd.DataFrame(
        {col: df[col].map(cell_text) for col in EXPORT_COLUMNS}, index=df.index
    )

    has_codes = (normalized["article_code"] != "") & (normalized["location"] != "")
    skipped = int((~has_codes).sum())
    if skipped:
        logger.info(f"  > Skipped {skipped} export rows without article or location code")
    normalized = normalized[has_codes].copy()

    normalized["key"] = normalized["article_code"] + "|" + normalized["location"]

    # First occurrence wins for the descriptive fields
    first_seen = normalized.drop_duplicates(subset="key", keep="first").set_index("key")
    counts = normalized.groupby("key", sort=False).size()

    aggregated = first_seen.assign(quantity=counts.reindex(first_seen.index).astype(int))
    aggregated = aggregated[AGGREGATE_COLUMNS]

    logger.info(f"📦 {len(aggregated)} unique articles in export")
    return aggregated
