import logging
from dataclasses import dataclass
from pathlib import Path

import pandas as pd
from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from stock_tracking import data_handler, settings, utils
from stock_tracking.dates import normalize_export_date
from stock_tracking.parsers import aggregate_export
from stock_tracking.pipeline import DataPipeline
from stock_tracking.report_writer import (
    recreate_report_sheet,
    write_no_data_message,
    write_variation_report,
)
from stock_tracking.schemas import ReportOutcome, RunSummary
from stock_tracking.timeseries import resolve_lookback
from stock_tracking.tracking import TrackingTable, merge_export
from stock_tracking.variations import compute_variations

logger = logging.getLogger(__name__)


@dataclass
class TrackingJob:
    workbook: Workbook
    stock_sheet: Worksheet
    table: TrackingTable
    export: pd.DataFrame


class StockTrackingPipeline(DataPipeline):
    """
    Merges an export snapshot into the tracking workbook as a new date column,
    then rebuilds the monthly and semestrial variation sheets.
    """

    def __init__(
        self,
        tracking_path: Path,
        export_path: Path,
        export_date: str,
        output_path: Path | None = None,
        test_mode: bool = False,
        batch_size: int = settings.NEW_ROWS_BATCH_SIZE,
    ):
        super().__init__("stock tracking", test_mode=test_mode)
        self.tracking_path = Path(tracking_path)
        self.export_path = Path(export_path)
        self.output_path = Path(output_path) if output_path else self.tracking_path
        self.batch_size = batch_size
        # Fails fast on a malformed date, before any file is opened
        self.label = normalize_export_date(export_date)
        self.summary: RunSummary | None = None

    def extract(self) -> TrackingJob:
        logger.info(f"📁 Tracking file: {self.tracking_path}")
        logger.info(f"📁 Export file: {self.export_path}")
        logger.info(f"📅 Export date: {self.label}")

        workbook = utils.load_tracking_workbook(self.tracking_path)
        stock_sheet = utils.get_stock_sheet(workbook)
        table = TrackingTable.from_sheet(stock_sheet)
        export = aggregate_export(utils.load_export_frame(self.export_path))
        logger.info("📖 Workbooks loaded in memory")
        return TrackingJob(workbook, stock_sheet, table, export)

    def transform(self, job: TrackingJob) -> tuple[TrackingJob, RunSummary]:
        logger.info("📊 Step 1/3: Update tracking...")
        merge = merge_export(job.table, job.export, self.label, batch_size=self.batch_size)
        job.table.write_to_sheet(job.stock_sheet, self.label)

        logger.info("📊 Step 2/3: Update monthly tracking...")
        monthly = self._build_report(
            job,
            settings.MONTHLY_SHEET_NAME,
            settings.MONTHLY_PERIODS,
            settings.MONTHLY_NO_DATA_MESSAGE,
        )

        logger.info("📊 Step 3/3: Update semestrial tracking...")
        semestrial = self._build_report(
            job,
            settings.SEMESTRIAL_SHEET_NAME,
            settings.SEMESTRIAL_PERIODS,
            settings.SEMESTRIAL_NO_DATA_MESSAGE,
        )

        summary = RunSummary(
            export_date=self.label,
            tracking_file=self.output_path.name,
            rows_updated=merge.updated,
            rows_zeroed=merge.zeroed,
            rows_inserted=merge.inserted,
            monthly=monthly,
            semestrial=semestrial,
        )
        return job, summary

    def _build_report(
        self, job: TrackingJob, sheet_name: str, periods: int, no_data_message: str
    ) -> ReportOutcome:
        window = resolve_lookback(job.table.date_columns, self.label, periods)
        if window is None:
            worksheet = recreate_report_sheet(job.workbook, sheet_name)
            write_no_data_message(worksheet, no_data_message)
            logger.info(f"  > {sheet_name}: not enough history ({periods} period(s) back)")
            return ReportOutcome(sheet_name=sheet_name, state="no_data")

        records = compute_variations(job.table, window)
        worksheet = recreate_report_sheet(job.workbook, sheet_name)
        title = settings.REPORT_TITLE_TEMPLATE.format(
            previous=window.previous_label, current=window.current_label
        )
        write_variation_report(worksheet, records, title)
        logger.info(f"  > {sheet_name}: {len(records)} variations vs {window.previous_label}")
        return ReportOutcome(
            sheet_name=sheet_name,
            state="populated",
            previous_label=window.previous_label,
            records=len(records),
        )

    def load(self, data: tuple[TrackingJob, RunSummary]) -> Path:
        job, summary = data
        logger.info("💾 Saving workbook...")
        saved_path = data_handler.save_workbook(job.workbook, self.output_path)
        self.summary = summary

        if not self.test_mode:
            data_handler.post_to_webhook(summary)
        else:
            logger.info("🧪 Test Mode: Skipping webhook post.")
        return saved_path


def process_stock_tracking(
    tracking_path: Path,
    export_path: Path,
    export_date: str,
    output_path: Path | None = None,
    test_mode: bool = False,
) -> Path:
    """Runs one stock tracking job and returns the path of the rewritten workbook."""
    pipeline = StockTrackingPipeline(
        tracking_path, export_path, export_date, output_path=output_path, test_mode=test_mode
    )
    return pipeline.run()
