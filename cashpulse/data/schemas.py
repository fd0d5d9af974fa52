"""
Record schemas: transactions, AI insights, reports.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class TransactionStatus(str, Enum):
    COMPLETED = "completed"
    PENDING = "pending"


class InsightType(str, Enum):
    POSITIVE = "positive"
    WARNING = "warning"
    INFO = "info"


class ReportType(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    CUSTOM = "custom"


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


@dataclass(frozen=True)
class Transaction:
    """One ledger line. The sign lives in `type`, never in `amount`."""
    date: dt.date
    description: str
    category: str
    amount: float
    type: TransactionType
    status: TransactionStatus = TransactionStatus.COMPLETED
    user_id: str = ""

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(f"Transaction amount must be non-negative (got {self.amount})")

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "description": self.description,
            "category": self.category,
            "amount": self.amount,
            "type": self.type.value,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict, user_id: str = "") -> "Transaction":
        return cls(
            date=dt.date.fromisoformat(data["date"]),
            description=data["description"],
            category=data["category"],
            amount=float(data["amount"]),
            type=TransactionType(data["type"]),
            status=TransactionStatus(data.get("status", TransactionStatus.COMPLETED.value)),
            user_id=user_id,
        )


@dataclass(frozen=True)
class AiInsight:
    title: str
    content: str
    type: InsightType
    user_id: str = ""
    generated_at: dt.datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "content": self.content,
            "type": self.type.value,
            "generatedAt": self.generated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict, user_id: str = "") -> "AiInsight":
        return cls(
            title=data["title"],
            content=data["content"],
            type=InsightType(data["type"]),
            user_id=user_id,
            generated_at=dt.datetime.fromisoformat(data["generatedAt"]),
        )


@dataclass(frozen=True)
class Report:
    title: str
    content: str
    type: ReportType
    user_id: str = ""
    generated_at: dt.datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "content": self.content,
            "type": self.type.value,
            "generatedAt": self.generated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict, user_id: str = "") -> "Report":
        return cls(
            title=data["title"],
            content=data["content"],
            type=ReportType(data["type"]),
            user_id=user_id,
            generated_at=dt.datetime.fromisoformat(data["generatedAt"]),
        )
