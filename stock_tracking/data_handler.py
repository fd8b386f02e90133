import logging
import os
import tempfile
from pathlib import Path

import requests
from openpyxl import Workbook

from . import settings
from .schemas import RunSummary

logger = logging.getLogger(__name__)


def save_workbook(workbook: Workbook, file_path: Path) -> Path:
    """
    Saves the workbook through a temporary file in the target directory, then
    swaps it into place, so the destination is either the old file or the new one.
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(suffix=".xlsx", dir=file_path.parent)
    os.close(fd)
    try:
        workbook.save(tmp_name)
        os.replace(tmp_name, file_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info(f"💾 Workbook saved to: {file_path}")
    return file_path


def post_to_webhook(summary: RunSummary) -> None:
    """
    Posts the run summary to the webhook. A failed post is logged, never raised:
    the tracking file is already saved at this point.
    """
    if not settings.WEBHOOK_URL:
        logger.info("⚠️ WEBHOOK_URL not set. Skipping webhook post.")
        return

    logger.info(f"🚀 Posting run summary to webhook: {settings.WEBHOOK_URL}")
    try:
        response = requests.post(
            settings.WEBHOOK_URL, json=summary.model_dump(mode="json", by_alias=True), timeout=15
        )
        response.raise_for_status()
        logger.info("✅ Run summary successfully posted to webhook.")
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Error posting to webhook: {e}")
