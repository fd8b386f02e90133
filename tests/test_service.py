from pathlib import Path

import pytest

from stock_tracking import settings
from stock_tracking.exceptions import (
    InvalidDateFormat,
    InvalidUpload,
    MissingRequiredFile,
    MissingRequiredParameter,
    TreatmentUnavailable,
)
from stock_tracking.service import (
    cleanup_files,
    get_treatment,
    map_uploaded_files,
    parse_params,
    process_treatment,
    result_filename,
    validate_upload,
)

from conftest import build_export_workbook, build_tracking_workbook, sheet_rows


@pytest.fixture
def uploads(tmp_path):
    return {
        "file_tracking": build_tracking_workbook(tmp_path / "suivi.xlsx", [], [("X1", "Vis", "A", "Magasin A")]),
        "file_export": build_export_workbook(tmp_path / "export.xlsx", [("X1", "A", "Vis", "Magasin A")]),
    }


def test_only_the_stock_treatment_runs():
    assert get_treatment("stock-tracking")["name"] == "Suivi des Stocks"
    for treatment_id in ("sales-analysis", "data-merge", "inconnu"):
        with pytest.raises(TreatmentUnavailable) as exc_info:
            get_treatment(treatment_id)
        assert exc_info.value.status_code == 400


def test_upload_field_names_are_mapped():
    assert map_uploaded_files({"file_tracking": "a.xlsx", "export": "b.xlsx"}) == {
        "tracking": Path("a.xlsx"),
        "export": Path("b.xlsx"),
    }


def test_params_accept_json_text():
    assert parse_params('{"export_date": "2024-01-15"}') == {"export_date": "2024-01-15"}
    assert parse_params(None) == {}
    with pytest.raises(InvalidUpload):
        parse_params("{export_date")
    with pytest.raises(InvalidUpload):
        parse_params("[1, 2]")


def test_upload_validation():
    validate_upload("Suivi.XLSX", 1024)
    with pytest.raises(InvalidUpload):
        validate_upload("suivi.csv", 1024)
    with pytest.raises(InvalidUpload):
        validate_upload("suivi.xlsx", (settings.MAX_UPLOAD_MB + 1) * 1024 * 1024)


def test_result_filename_has_no_slashes():
    assert result_filename("2024-01-15") == "resultat_stock_tracking_2024-01-15.xlsx"
    assert result_filename("15/01/2024") == "resultat_stock_tracking_15-01-2024.xlsx"


def test_treatment_rewrites_the_tracking_upload(uploads):
    result = process_treatment("stock-tracking", uploads, {"export_date": "2024-01-15"}, test_mode=True)

    assert result == uploads["file_tracking"]
    assert sheet_rows(result, settings.STOCK_SHEET_NAME)[1] == ("X1", "Vis", "A", "Magasin A", 1)


def test_missing_file_is_a_client_error(uploads):
    del uploads["file_export"]

    with pytest.raises(MissingRequiredFile) as exc_info:
        process_treatment("stock-tracking", uploads, {"export_date": "2024-01-15"})

    assert exc_info.value.file_id == "export"
    assert exc_info.value.status_code == 400


@pytest.mark.parametrize("params", [{}, {"export_date": ""}, None])
def test_missing_date_is_a_client_error(uploads, params):
    with pytest.raises(MissingRequiredParameter) as exc_info:
        process_treatment("stock-tracking", uploads, params)

    assert exc_info.value.param_id == "export_date"


def test_bad_date_is_reported_as_such(uploads):
    with pytest.raises(InvalidDateFormat):
        process_treatment("stock-tracking", uploads, {"export_date": "15.01.2024"})


def test_cleanup_ignores_missing_files(tmp_path):
    present = tmp_path / "upload.xlsx"
    present.write_bytes(b"x")

    cleanup_files([present, tmp_path / "gone.xlsx", None])

    assert not present.exists()
