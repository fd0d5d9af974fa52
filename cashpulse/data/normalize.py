"""
CSV ingestion: header synonym lookup, amount/type resolution, row → Transaction.
"""
from __future__ import annotations

import datetime as dt
import io
import logging
import re

import pandas as pd

from cashpulse.config import (
    COLUMN_SYNONYMS, DEFAULT_DESCRIPTION, DEFAULT_CATEGORY, SAMPLE_CSV_TEMPLATE,
)
from cashpulse.data.schemas import Transaction, TransactionType, TransactionStatus
from cashpulse.errors import ParseError, ValidationError

logger = logging.getLogger(__name__)

# Leading numeric prefix, the way a lenient float parser reads "12.5 USD"
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


# ---------------------------------------------------------------------------
# Raw CSV reading
# ---------------------------------------------------------------------------

def read_csv_records(csv_text: str) -> list[dict]:
    """Parse CSV text with a header row into a list of trimmed string dicts."""
    try:
        df = pd.read_csv(
            io.StringIO(csv_text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            skipinitialspace=True,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise ParseError(f"Failed to parse CSV data: {exc}") from exc

    df.columns = [str(c).strip() for c in df.columns]
    for col in df.columns:
        df[col] = df[col].str.strip()
    return df.to_dict("records")


def _lookup(record: dict, field: str) -> str | None:
    """First non-empty value among the header spellings of `field`."""
    for key in COLUMN_SYNONYMS[field]:
        value = record.get(key)
        if value:
            return value
    return None


# ---------------------------------------------------------------------------
# Field parsing
# ---------------------------------------------------------------------------

def parse_amount(value: str | None) -> float:
    """Signed float from the leading numeric prefix; 0 when nothing parses."""
    if value is None:
        return 0.0
    m = _NUMBER_RE.match(value.strip())
    if not m:
        return 0.0
    return float(m.group(0))


def parse_date(value: str | None, row_num: int = 0) -> dt.date:
    """ISO dates first, then anything pandas can read. Missing → today."""
    if not value:
        return dt.date.today()
    try:
        return dt.date.fromisoformat(value[:10])
    except ValueError:
        pass
    message = f"Failed to parse CSV data: invalid date '{value}' on row {row_num}"
    try:
        ts = pd.to_datetime(value)
    except (ValueError, TypeError, OverflowError) as exc:
        raise ParseError(message) from exc
    # "NaT" / "nan" parse to a missing timestamp
    if pd.isna(ts):
        raise ParseError(message)
    return ts.date()


def resolve_type(explicit: str | None, amount: float) -> TransactionType:
    """Explicit type column wins; otherwise the amount's sign decides."""
    if explicit:
        return TransactionType.INCOME if explicit.lower() == "income" else TransactionType.EXPENSE
    if amount > 0:
        return TransactionType.INCOME
    return TransactionType.EXPENSE


def normalize_record(record: dict, user_id: str, row_num: int = 0) -> Transaction:
    """Turn one raw CSV row into a canonical Transaction."""
    amount = parse_amount(_lookup(record, "amount"))
    return Transaction(
        date=parse_date(_lookup(record, "date"), row_num),
        description=_lookup(record, "description") or DEFAULT_DESCRIPTION,
        category=_lookup(record, "category") or DEFAULT_CATEGORY,
        amount=abs(amount),
        type=resolve_type(_lookup(record, "type"), amount),
        status=TransactionStatus.COMPLETED,
        user_id=user_id,
    )


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def parse_csv_data(csv_text: str, user_id: str) -> list[Transaction]:
    """Parse CSV text into Transactions owned by `user_id`."""
    records = read_csv_records(csv_text)
    # row 1 is the header
    return [normalize_record(r, user_id, i) for i, r in enumerate(records, 2)]


def validate_financial_data(records: list[dict]) -> bool:
    """Pre-flight gate: non-empty and every record carries an amount-like column."""
    if not records:
        return False
    return all(
        any(key in record for key in COLUMN_SYNONYMS["amount"])
        for record in records
    )


def load_transactions(csv_text: str, user_id: str) -> list[Transaction]:
    """Gate + parse a whole upload. Raises before anything is returned for storage."""
    records = read_csv_records(csv_text)
    if not validate_financial_data(records):
        raise ValidationError("No valid financial data found in file")
    transactions = [normalize_record(r, user_id, i) for i, r in enumerate(records, 2)]
    logger.info("Parsed %d transactions for user %s", len(transactions), user_id)
    return transactions


def sample_template() -> str:
    """Minimum viable CSV accepted by the normalizer."""
    return SAMPLE_CSV_TEMPLATE
