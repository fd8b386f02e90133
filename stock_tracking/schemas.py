from pydantic import BaseModel, Field


class VariationRecord(BaseModel):
    """
    One line of a variation report. The aliases are the report's column
    headers, in display order.
    """

    article_code: str = Field(..., alias="Codification DSNA")
    description: str = Field(default="", alias="Désignation")
    location: str = Field(..., alias="Magasin")
    location_description: str = Field(default="", alias="Description")
    variation: int = Field(..., alias="Variation")
    current_quantity: int = Field(..., alias="Quantité actuelle")

    class Config:
        populate_by_name = True


class TrackingJobParams(BaseModel):
    """Parameters of the stock-tracking treatment, as sent by the upload form."""

    export_date: str = Field(..., min_length=1)


class ReportOutcome(BaseModel):
    sheet_name: str
    state: str  # "populated" or "no_data"
    previous_label: str | None = None
    records: int = 0


class RunSummary(BaseModel):
    """Posted to the webhook once a tracking file has been rewritten."""

    export_date: str = Field(..., alias="exportDate")
    tracking_file: str = Field(..., alias="trackingFile")
    rows_updated: int = Field(default=0, ge=0, alias="rowsUpdated")
    rows_zeroed: int = Field(default=0, ge=0, alias="rowsZeroed")
    rows_inserted: int = Field(default=0, ge=0, alias="rowsInserted")
    monthly: ReportOutcome
    semestrial: ReportOutcome

    class Config:
        populate_by_name = True
