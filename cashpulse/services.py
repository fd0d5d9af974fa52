"""
Request workflows shared by the API and CLI: ingest, regenerate insights, produce a report.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from cashpulse.ai.insights import InsightGenerator
from cashpulse.analytics.metrics import compute_metrics
from cashpulse.analytics.summary import build_financial_summary
from cashpulse.data.normalize import load_transactions
from cashpulse.data.schemas import AiInsight, InsightType, Report, ReportType
from cashpulse.data.store import TransactionStore
from cashpulse.errors import NoDataError, ValidationError
from cashpulse.reports.pdf_report import render_pdf_report

logger = logging.getLogger(__name__)


def ingest_csv(store: TransactionStore, csv_text: str, user_id: str) -> int:
    """Parse + validate the whole file, then store it in one batch."""
    transactions = load_transactions(csv_text, user_id)
    if not transactions:
        raise ValidationError("No valid financial data found in file")
    return store.bulk_insert(transactions)


def regenerate_insights(store: TransactionStore, generator: InsightGenerator, user_id: str) -> list[AiInsight]:
    """Generate a fresh insight set and swap it in for the user's previous one.

    The old set stays visible until the new one is ready; if generation fails
    nothing is replaced.
    """
    transactions = store.list_by_user(user_id)
    if not transactions:
        raise NoDataError()

    summary = build_financial_summary(compute_metrics(transactions))
    with store.insight_lock(user_id):
        raw = generator.generate_insights(summary, transactions)
        staged = [
            AiInsight(title=i["title"], content=i["content"], type=InsightType(i["type"]), user_id=user_id)
            for i in raw
        ]
        saved = store.replace_insights(user_id, staged)
    logger.info("Stored %d insights for user %s", len(saved), user_id)
    return saved


@dataclass(frozen=True)
class RenderedReport:
    report: Report
    pdf: bytes

    @property
    def filename(self) -> str:
        return "_".join(self.report.title.split()) + ".pdf"


def create_report(
    store: TransactionStore,
    generator: InsightGenerator,
    user_id: str,
    title: str = "Financial Report",
    report_type: ReportType = ReportType.MONTHLY,
) -> RenderedReport:
    """Narrative body from the LLM, rendered to PDF, then logged as a Report."""
    transactions = store.list_by_user(user_id)
    if not transactions:
        raise NoDataError()

    metrics = compute_metrics(transactions)
    summary = build_financial_summary(metrics)
    insights = [i.to_dict() for i in store.list_insights(user_id)]

    content = generator.generate_report(summary, insights, report_type.value)
    report = Report(title=title, content=content, type=report_type, user_id=user_id)

    # Append-only log: record only a fully rendered report
    pdf = render_pdf_report(
        title=title,
        content=content,
        generated_at=report.generated_at,
        metrics={
            "revenue": metrics["totalRevenue"],
            "expenses": metrics["totalExpenses"],
            "cashFlow": metrics["netCashFlow"],
            "runway": metrics["runway"],
        },
    )
    store.add_report(report)
    return RenderedReport(report=report, pdf=pdf)
