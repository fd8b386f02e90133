import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Path Configuration ---
# Use Path objects for robust, OS-agnostic path handling.
UPLOAD_DIR = BASE_DIR / os.getenv("UPLOAD_DIR", "uploads")
LOG_DIR = BASE_DIR / "logs"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Workbook Layout ---
STOCK_SHEET_NAME = os.getenv("STOCK_SHEET_NAME", "Liste de Stock")
MONTHLY_SHEET_NAME = os.getenv("MONTHLY_SHEET_NAME", "Suivi Mensuel")
SEMESTRIAL_SHEET_NAME = os.getenv("SEMESTRIAL_SHEET_NAME", "Suivi Semestriel")

# Columns 1-4 of the stock sheet. Everything after them is a date column.
METADATA_COLUMNS = ["article_code", "description", "location", "location_description"]
METADATA_HEADERS = ["Codification DSNA", "Désignation", "Magasin", "Description"]

# --- Business Rules ---
MONTHLY_PERIODS = 1
SEMESTRIAL_PERIODS = 6
NEW_ROWS_BATCH_SIZE = int(os.getenv("NEW_ROWS_BATCH_SIZE", "1000"))
CRITICAL_STOCK_THRESHOLD = int(os.getenv("CRITICAL_STOCK_THRESHOLD", "5"))
LOW_STOCK_THRESHOLD = int(os.getenv("LOW_STOCK_THRESHOLD", "10"))

# --- Uploads ---
ALLOWED_UPLOAD_EXTENSIONS = (".xlsx", ".xls")
MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "50"))

# --- Report Text ---
REPORT_TITLE_TEMPLATE = "Variation entre le {previous} et le {current}"
NO_VARIATION_MESSAGE = "Aucune variation pour cette période"
MONTHLY_NO_DATA_MESSAGE = "Pas de données disponibles pour le mois"
SEMESTRIAL_NO_DATA_MESSAGE = "Pas de données disponibles pour le semestre"
RESULT_FILENAME_TEMPLATE = "resultat_stock_tracking_{date}.xlsx"

# --- Styling (ARGB) ---
HEADER_FILL_COLOR = "FF003366"
HEADER_FONT_COLOR = "FFFFFFFF"
TITLE_FILL_COLOR = "FFD3D3D3"
CRITICAL_FILL_COLOR = "FFFFCCCC"
LOW_FILL_COLOR = "FFFFDAB9"
MIN_COLUMN_WIDTH = 10
MAX_COLUMN_WIDTH = 50

# --- Webhook ---
WEBHOOK_URL = os.getenv("WEBHOOK_URL")
