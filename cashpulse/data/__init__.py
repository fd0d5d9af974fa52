"""Transaction schemas, CSV normalization, and per-user storage backends."""
from .schemas import Transaction, TransactionType, TransactionStatus, AiInsight, InsightType, Report, ReportType
from .normalize import parse_csv_data, validate_financial_data, read_csv_records, load_transactions
from .store import TransactionStore, MemoryStore, JsonFileStore, build_store
