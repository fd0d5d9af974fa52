"""
TransactionStore — per-user transactions, AI insights, and the report log.

Two backends share one contract: MemoryStore (process-local) and
JsonFileStore (one JSON document per user). The backend is picked once at
startup by build_store(); nothing downstream depends on which one it is.
"""
from __future__ import annotations

import json
import re
import threading
from abc import ABC, abstractmethod
from collections import defaultdict
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from cashpulse.config import STORAGE_BACKEND, STORE_FOLDER
from cashpulse.data.schemas import AiInsight, Report, Transaction


class TransactionStore(ABC):
    """Repository contract used by the API and CLI."""

    backend_name = "abstract"

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._insight_locks: dict[str, threading.Lock] = defaultdict(threading.Lock)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[Transaction]:
        ...

    @abstractmethod
    def bulk_insert(self, transactions: list[Transaction]) -> int:
        """Store a full batch; returns the number stored."""

    # ------------------------------------------------------------------
    # Insights
    # ------------------------------------------------------------------

    @abstractmethod
    def list_insights(self, user_id: str) -> list[AiInsight]:
        ...

    @abstractmethod
    def replace_insights(self, user_id: str, insights: list[AiInsight]) -> list[AiInsight]:
        """Swap the user's whole insight set for `insights` in one step."""

    def clear_insights(self, user_id: str) -> None:
        self.replace_insights(user_id, [])

    @contextmanager
    def insight_lock(self, user_id: str) -> Iterator[None]:
        """Serialise regenerations for one user."""
        with self._lock:
            lock = self._insight_locks[user_id]
        with lock:
            yield

    # ------------------------------------------------------------------
    # Reports (append-only)
    # ------------------------------------------------------------------

    @abstractmethod
    def list_reports(self, user_id: str) -> list[Report]:
        ...

    @abstractmethod
    def add_report(self, report: Report) -> Report:
        ...

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @abstractmethod
    def row_count(self) -> int:
        ...


class MemoryStore(TransactionStore):
    """Process-local dictionaries keyed by user."""

    backend_name = "memory"

    def __init__(self) -> None:
        super().__init__()
        self._transactions: dict[str, list[Transaction]] = defaultdict(list)
        self._insights: dict[str, list[AiInsight]] = {}
        self._reports: dict[str, list[Report]] = defaultdict(list)

    def list_by_user(self, user_id: str) -> list[Transaction]:
        with self._lock:
            return list(self._transactions.get(user_id, []))

    def bulk_insert(self, transactions: list[Transaction]) -> int:
        with self._lock:
            for t in transactions:
                self._transactions[t.user_id].append(t)
        return len(transactions)

    def list_insights(self, user_id: str) -> list[AiInsight]:
        with self._lock:
            return list(self._insights.get(user_id, []))

    def replace_insights(self, user_id: str, insights: list[AiInsight]) -> list[AiInsight]:
        staged = list(insights)
        with self._lock:
            self._insights[user_id] = staged
        return list(staged)

    def list_reports(self, user_id: str) -> list[Report]:
        with self._lock:
            return list(self._reports.get(user_id, []))

    def add_report(self, report: Report) -> Report:
        with self._lock:
            self._reports[report.user_id].append(report)
        return report

    def row_count(self) -> int:
        with self._lock:
            return sum(len(v) for v in self._transactions.values())


class JsonFileStore(TransactionStore):
    """One JSON document per user under `folder`, rewritten atomically."""

    backend_name = "json"

    def __init__(self, folder: Path = STORE_FOLDER) -> None:
        super().__init__()
        self.folder = Path(folder)
        self.folder.mkdir(parents=True, exist_ok=True)

    def _path(self, user_id: str) -> Path:
        safe = re.sub(r"[^\w\-.]", "_", user_id) or "_"
        return self.folder / f"{safe}.json"

    def _read(self, user_id: str) -> dict:
        path = self._path(user_id)
        if not path.exists():
            return {"transactions": [], "insights": [], "reports": []}
        return json.loads(path.read_text(encoding="utf-8"))

    def _write(self, user_id: str, doc: dict) -> None:
        path = self._path(user_id)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(json.dumps(doc), encoding="utf-8")
        tmp.replace(path)

    def list_by_user(self, user_id: str) -> list[Transaction]:
        with self._lock:
            doc = self._read(user_id)
        return [Transaction.from_dict(t, user_id) for t in doc["transactions"]]

    def bulk_insert(self, transactions: list[Transaction]) -> int:
        by_user: dict[str, list[Transaction]] = defaultdict(list)
        for t in transactions:
            by_user[t.user_id].append(t)
        with self._lock:
            for user_id, batch in by_user.items():
                doc = self._read(user_id)
                doc["transactions"].extend(t.to_dict() for t in batch)
                self._write(user_id, doc)
        return len(transactions)

    def list_insights(self, user_id: str) -> list[AiInsight]:
        with self._lock:
            doc = self._read(user_id)
        return [AiInsight.from_dict(i, user_id) for i in doc["insights"]]

    def replace_insights(self, user_id: str, insights: list[AiInsight]) -> list[AiInsight]:
        staged = list(insights)
        with self._lock:
            doc = self._read(user_id)
            doc["insights"] = [i.to_dict() for i in staged]
            self._write(user_id, doc)
        return staged

    def list_reports(self, user_id: str) -> list[Report]:
        with self._lock:
            doc = self._read(user_id)
        return [Report.from_dict(r, user_id) for r in doc["reports"]]

    def add_report(self, report: Report) -> Report:
        with self._lock:
            doc = self._read(report.user_id)
            doc["reports"].append(report.to_dict())
            self._write(report.user_id, doc)
        return report

    def row_count(self) -> int:
        with self._lock:
            return sum(
                len(json.loads(p.read_text(encoding="utf-8"))["transactions"])
                for p in self.folder.glob("*.json")
            )


_BACKENDS = {
    "memory": MemoryStore,
    "json": JsonFileStore,
}


def build_store(backend: str = STORAGE_BACKEND) -> TransactionStore:
    """Instantiate the configured backend. Unknown names fail at startup."""
    cls = _BACKENDS.get(backend)
    if cls is None:
        raise ValueError(f"Unknown storage backend: {backend!r}. Valid: {list(_BACKENDS)}")
    return cls()
