import datetime as dt
import json
import os
import tempfile
from types import SimpleNamespace

import pytest

# Keep default-path stores and exports out of the real home directory
os.environ.setdefault("CASHPULSE_DATA_DIR", tempfile.mkdtemp(prefix="cashpulse-tests-"))

from cashpulse.ai.insights import InsightGenerator
from cashpulse.data.schemas import Transaction, TransactionType
from cashpulse.data.store import MemoryStore, JsonFileStore


def tx(day: str, amount: float, kind: str = "expense", category: str = "Other", description: str = "Item",
       user_id: str = "demo") -> Transaction:
    """Shorthand Transaction builder used across the suite."""
    return Transaction(
        date=dt.date.fromisoformat(day),
        description=description,
        category=category,
        amount=amount,
        type=TransactionType(kind),
        user_id=user_id,
    )


SAMPLE_CSV = (
    "Date,Description,Category,Amount,Type\n"
    "2024-01-15,Client Payment - ABC Corp,Revenue,5000,income\n"
    "2024-01-16,Office Rent,Operating Expenses,2500,expense\n"
)


class FakeCompletions:
    """Records chat.completions.create calls and replays canned bodies."""

    def __init__(self, bodies=None, error: Exception | None = None):
        self.bodies = list(bodies or [])
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        body = self.bodies.pop(0) if self.bodies else ""
        if body is None:
            return SimpleNamespace(choices=[])
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=body))])


class FakeOpenAI:
    def __init__(self, bodies=None, error: Exception | None = None):
        self.chat = SimpleNamespace(completions=FakeCompletions(bodies, error))

    @property
    def calls(self):
        return self.chat.completions.calls


def insights_body(*titles: str, kind: str = "info") -> str:
    return json.dumps({
        "insights": [{"title": t, "content": f"{t} details", "type": kind} for t in titles]
    })


@pytest.fixture
def sample_transactions():
    return [
        tx("2024-01-15", 5000, "income", "Revenue", "Client Payment - ABC Corp"),
        tx("2024-01-16", 2500, "expense", "Operating Expenses", "Office Rent"),
    ]


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture(params=["memory", "json"])
def any_store(request, tmp_path):
    if request.param == "memory":
        return MemoryStore()
    return JsonFileStore(tmp_path / "store")


@pytest.fixture
def fake_openai():
    return FakeOpenAI()


@pytest.fixture
def generator(fake_openai):
    return InsightGenerator(fake_openai, model="test-model")
