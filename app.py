"""
Stock Tracking: Streamlit upload page

Upload the tracking workbook and the latest export, pick the export date,
and download the updated tracking workbook.
Run with: streamlit run app.py
"""

import tempfile
from datetime import date
from pathlib import Path

import streamlit as st

from stock_tracking import settings
from stock_tracking.exceptions import StockTrackingError
from stock_tracking.logger import setup_logger
from stock_tracking.service import (
    STOCK_TRACKING_ID,
    TREATMENTS,
    cleanup_files,
    process_treatment,
    result_filename,
    validate_upload,
)

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

setup_logger()

# Page config
st.set_page_config(page_title="Suivi des Stocks", page_icon="📦", layout="centered")

for key, default in [("result_bytes", None), ("result_name", None)]:
    if key not in st.session_state:
        st.session_state[key] = default


def save_upload(uploaded) -> Path:
    """Writes a Streamlit upload to a temporary file under UPLOAD_DIR."""
    validate_upload(uploaded.name, uploaded.size)
    settings.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    suffix = Path(uploaded.name).suffix.lower()
    with tempfile.NamedTemporaryFile(dir=settings.UPLOAD_DIR, suffix=suffix, delete=False) as tmp:
        tmp.write(uploaded.getbuffer())
    return Path(tmp.name)


treatment = next(t for t in TREATMENTS if t["id"] == STOCK_TRACKING_ID)

st.title(f"📦 {treatment['name']}")
st.caption(treatment["description"])

with st.sidebar:
    st.header("🧰 Traitements")
    for item in TREATMENTS:
        badge = "✅" if item["status"] == "active" else "🚧"
        st.markdown(f"{badge} **{item['name']}**  \n{item['description']}")

uploads = {
    f"file_{file_def['id']}": st.file_uploader(file_def["label"], type=["xlsx", "xls"])
    for file_def in treatment["files"]
}
export_date = st.date_input("Date d'export", value=date.today(), format="DD/MM/YYYY")

if st.button("▶ Lancer le traitement", type="primary", use_container_width=True):
    st.session_state.result_bytes = None
    saved_paths: list[Path] = []
    try:
        files = {}
        for field, uploaded in uploads.items():
            if uploaded is not None:
                files[field] = save_upload(uploaded)
                saved_paths.append(files[field])

        params = {"export_date": export_date.isoformat() if export_date else ""}
        with st.spinner("Traitement en cours…"):
            output_path = process_treatment(STOCK_TRACKING_ID, files, params)
        st.session_state.result_bytes = output_path.read_bytes()
        st.session_state.result_name = result_filename(params["export_date"])
        st.success("Traitement terminé !")
    except StockTrackingError as e:
        if e.status_code < 500:
            st.warning(str(e))
        else:
            st.error(str(e))
    except Exception as e:
        st.error(f"Erreur lors du traitement: {e}")
        st.exception(e)
    finally:
        # Uploads (the tracking one is also the output) never outlive the request
        cleanup_files(saved_paths)

if st.session_state.result_bytes is not None:
    st.download_button(
        label="⬇️ Télécharger le fichier de suivi",
        data=st.session_state.result_bytes,
        file_name=st.session_state.result_name,
        mime=XLSX_MIME,
        use_container_width=True,
    )
