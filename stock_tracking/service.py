"""
Treatment catalog and request handling for the upload front-end.

The front-end hands over the uploaded files (field name -> temporary path) and
the form parameters; this module validates them, runs the treatment and cleans
up the temporary files.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from pydantic import ValidationError

from . import settings
from .exceptions import (
    InvalidUpload,
    MissingRequiredFile,
    MissingRequiredParameter,
    TreatmentUnavailable,
)
from .pipelines.stock_tracking import process_stock_tracking
from .schemas import TrackingJobParams

logger = logging.getLogger(__name__)

STOCK_TRACKING_ID = "stock-tracking"
FILE_FIELD_PREFIX = "file_"

# --- Treatment Registry ---
# Only "stock-tracking" can run; the others are announced to the front-end.
TREATMENTS = [
    {
        "id": STOCK_TRACKING_ID,
        "name": "Suivi des Stocks",
        "description": "Mise à jour automatique du suivi mensuel et semestriel des stocks",
        "status": "active",
        "files": [
            {"id": "tracking", "label": "Fichier de suivi", "accept": ".xlsx,.xls"},
            {"id": "export", "label": "Fichier d'export", "accept": ".xlsx,.xls"},
        ],
        "params": [
            {"id": "export_date", "label": "Date d'export", "type": "date", "placeholder": ""}
        ],
    },
    {
        "id": "sales-analysis",
        "name": "Analyse des Ventes",
        "description": "Génération de rapports et analyses de ventes mensuelles",
        "status": "coming_soon",
        "files": [{"id": "sales", "label": "Fichier des ventes", "accept": ".xlsx,.xls"}],
        "params": [
            {"id": "period", "label": "Période", "type": "text", "placeholder": "Ex: Q1 2024"}
        ],
    },
    {
        "id": "data-merge",
        "name": "Fusion de Données",
        "description": "Consolidation de plusieurs fichiers Excel en un seul",
        "status": "coming_soon",
        "files": [
            {"id": "file1", "label": "Premier fichier", "accept": ".xlsx,.xls"},
            {"id": "file2", "label": "Deuxième fichier", "accept": ".xlsx,.xls"},
        ],
        "params": [],
    },
]


def get_treatment(treatment_id: str) -> dict[str, Any]:
    """Returns the catalog entry of an active treatment."""
    for treatment in TREATMENTS:
        if treatment["id"] == treatment_id and treatment["status"] == "active":
            return treatment
    raise TreatmentUnavailable(treatment_id)


def validate_upload(filename: str, size_bytes: int) -> None:
    if Path(filename).suffix.lower() not in settings.ALLOWED_UPLOAD_EXTENSIONS:
        raise InvalidUpload("Seuls les fichiers Excel (.xlsx, .xls) sont acceptés")
    if size_bytes > settings.MAX_UPLOAD_MB * 1024 * 1024:
        raise InvalidUpload(f"Fichier trop volumineux (max {settings.MAX_UPLOAD_MB} Mo)")


def map_uploaded_files(files: dict[str, Path]) -> dict[str, Path]:
    """Strips the "file_" prefix of the upload field names: file_tracking -> tracking."""
    return {
        field.removeprefix(FILE_FIELD_PREFIX): Path(path) for field, path in files.items()
    }


def parse_params(params: dict[str, Any] | str | None) -> dict[str, Any]:
    if params is None or params == "":
        return {}
    if isinstance(params, str):
        try:
            params = json.loads(params)
        except json.JSONDecodeError as exc:
            raise InvalidUpload(f"Paramètres invalides: {exc.msg}") from exc
    if not isinstance(params, dict):
        raise InvalidUpload("Paramètres invalides: objet JSON attendu")
    return params


def result_filename(export_date: str) -> str:
    return settings.RESULT_FILENAME_TEMPLATE.format(date=export_date.replace("/", "-"))


def process_treatment(
    treatment_id: str,
    files: dict[str, Path],
    params: dict[str, Any] | str | None,
    test_mode: bool = False,
) -> Path:
    """
    Validates a request and runs the treatment.
    The tracking upload is rewritten in place and its path returned; the
    caller serves it under `result_filename` and removes it afterwards.
    Client errors (unknown treatment, missing file or parameter) are raised
    before any file is read.
    """
    treatment = get_treatment(treatment_id)
    file_map = map_uploaded_files(files)
    logger.info(f"🚀 Treatment requested: {treatment_id}")
    for file_id, path in file_map.items():
        logger.info(f"  > {file_id}: {path.name}")

    for file_def in treatment["files"]:
        if file_def["id"] not in file_map:
            raise MissingRequiredFile(file_def["id"])

    try:
        job_params = TrackingJobParams(**parse_params(params))
    except ValidationError as exc:
        missing = exc.errors()[0]["loc"][0] if exc.errors() else "export_date"
        raise MissingRequiredParameter(str(missing)) from exc

    return process_stock_tracking(
        file_map["tracking"],
        file_map["export"],
        job_params.export_date,
        test_mode=test_mode,
    )


def cleanup_files(file_paths: Iterable[Path | str | None]) -> None:
    """Best-effort removal of temporary files; files already gone are ignored."""
    for file_path in file_paths:
        if not file_path:
            continue
        try:
            Path(file_path).unlink()
            logger.info(f"🗑️ File deleted: {file_path}")
        except FileNotFoundError:
            continue
        except OSError as e:
            logger.error(f"❌ Error deleting {file_path}: {e}")
