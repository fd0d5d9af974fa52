"""
CashPulse — Configuration: paths, storage backend, LLM settings, metric constants.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths: override with CASHPULSE_DATA_DIR env var for cloud deployment
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("CASHPULSE_DATA_DIR", str(Path.home() / ".cashpulse")))
BASE_FOLDER = _data_dir
STORE_FOLDER = _data_dir / "store"
EXPORTS_FOLDER = _data_dir / "exports"

# ---------------------------------------------------------------------------
# Storage backend, selected once at process start ("memory" | "json")
# ---------------------------------------------------------------------------
STORAGE_BACKEND = os.environ.get("CASHPULSE_STORAGE_BACKEND", "memory").strip().lower()

# No authentication: requests name their owner via X-User-Id, else this user
DEFAULT_USER_ID = os.environ.get("CASHPULSE_DEFAULT_USER", "demo")

# ---------------------------------------------------------------------------
# Upload limits
# ---------------------------------------------------------------------------
MAX_UPLOAD_BYTES = int(float(os.environ.get("CASHPULSE_MAX_UPLOAD_MB", "10")) * 1024 * 1024)

# ---------------------------------------------------------------------------
# LLM (insight + report narrative)
# ---------------------------------------------------------------------------
OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY", "")
OPENAI_MODEL = os.environ.get("CASHPULSE_OPENAI_MODEL", "gpt-4o")
LLM_TIMEOUT_SECONDS = float(os.environ.get("CASHPULSE_LLM_TIMEOUT", "60"))
INSIGHT_SAMPLE_SIZE = 10
INSIGHT_COUNT = 3

# ---------------------------------------------------------------------------
# CSV column synonyms (canonical name → accepted header spellings, first wins)
# ---------------------------------------------------------------------------
COLUMN_SYNONYMS = {
    "amount": ("amount", "Amount", "AMOUNT"),
    "description": ("description", "Description", "DESCRIPTION"),
    "category": ("category", "Category", "CATEGORY"),
    "date": ("date", "Date", "DATE"),
    "type": ("type", "Type", "TYPE"),
}

DEFAULT_DESCRIPTION = "Unknown"
DEFAULT_CATEGORY = "Other"

SAMPLE_CSV_TEMPLATE = (
    "Date,Description,Category,Amount,Type\n"
    "2024-01-15,Client Payment - ABC Corp,Revenue,5000,income\n"
    "2024-01-16,Office Rent,Operating Expenses,2500,expense\n"
)

# ---------------------------------------------------------------------------
# KPI inputs
# ---------------------------------------------------------------------------
COGS_CATEGORIES = {"COGS", "Cost of Goods Sold"}
MARKETING_KEYWORD = "marketing"
MONTHS_PER_YEAR = 12
CAC_TRANSACTIONS_PER_CUSTOMER = 100
ARPU_TRANSACTIONS_PER_USER = 50
# Placeholder until customer-level data is ingested
CHURN_RATE_PLACEHOLDER = 5.2

# ---------------------------------------------------------------------------
# Trend + target-area thresholds
# ---------------------------------------------------------------------------
TREND_WINDOW = 3
REVENUE_SLOPE_THRESHOLD = 500
EXPENSE_SLOPE_THRESHOLD = 200

CATEGORY_SHARE_WARN_PCT = 30
CATEGORY_SHARE_HIGH_PCT = 50
GROSS_MARGIN_WARN_PCT = 50
GROSS_MARGIN_HIGH_PCT = 30

# Forecast page: runway above this many months is "healthy"
HEALTHY_RUNWAY_MONTHS = 6
