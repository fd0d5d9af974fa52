"""
Narrative requesters — turn a FinancialSummary into LLM prompts for insights and report bodies.

The model is an opaque collaborator: we build the prompt, make one chat
completion call, and hand back text or a parsed insight list. No retries
here; failures surface as GenerationError.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Sequence

import openai

from cashpulse.config import (
    OPENAI_API_KEY, OPENAI_MODEL, LLM_TIMEOUT_SECONDS, INSIGHT_SAMPLE_SIZE, INSIGHT_COUNT,
)
from cashpulse.analytics.summary import FinancialSummary
from cashpulse.data.schemas import InsightType, Transaction
from cashpulse.errors import GenerationError

logger = logging.getLogger(__name__)

INSIGHT_SYSTEM_PROMPT = (
    "You are a professional financial analyst. "
    "Provide actionable, data-driven insights in JSON format."
)
REPORT_SYSTEM_PROMPT = (
    "You are a professional financial report writer. "
    "Generate comprehensive, well-structured financial reports."
)

_VALID_INSIGHT_TYPES = {t.value for t in InsightType}


# ---------------------------------------------------------------------------
# Prompt construction
# ---------------------------------------------------------------------------

def _summary_lines(summary: FinancialSummary, include_averages: bool = True) -> list[str]:
    lines = [
        f"- Total Revenue: ${summary.total_revenue:,.2f}",
        f"- Total Expenses: ${summary.total_expenses:,.2f}",
        f"- Net Cash Flow: ${summary.net_cash_flow:,.2f}",
    ]
    if include_averages:
        lines += [
            f"- Average Monthly Revenue: ${summary.average_monthly_revenue:,.2f}",
            f"- Average Monthly Expenses: ${summary.average_monthly_expenses:,.2f}",
        ]
    lines += [
        f"- Revenue Growth Rate: {summary.revenue_growth_rate:.1f}%",
        f"- Expense Growth Rate: {summary.expense_growth_rate:.1f}%",
        f"- Runway: {summary.runway:.1f} months",
    ]
    return lines


def _transaction_line(t: Transaction) -> str:
    return f"{t.date.isoformat()}: {t.description} - ${t.amount:,.2f} ({t.type.value})"


def build_insight_prompt(
    summary: FinancialSummary,
    transactions: Sequence[Transaction],
    sample_size: int = INSIGHT_SAMPLE_SIZE,
) -> str:
    sample = "\n".join(_transaction_line(t) for t in list(transactions)[:sample_size])
    return "\n".join([
        f"You are a financial analyst AI. Analyze the following financial data "
        f"and provide {INSIGHT_COUNT} actionable insights.",
        "",
        "Financial Summary:",
        *_summary_lines(summary),
        "",
        "Recent Transactions Sample:",
        sample,
        "",
        f"Provide exactly {INSIGHT_COUNT} insights in JSON format with the following structure:",
        '{"insights": [{"title": "Brief title (max 50 characters)", '
        '"content": "Detailed analysis and recommendation (max 200 characters)", '
        '"type": "positive|warning|info"}]}',
        "",
        "Focus on:",
        "1. Cash flow trends and sustainability",
        "2. Expense optimization opportunities",
        "3. Revenue growth patterns and forecasting",
    ])


def build_report_prompt(
    summary: FinancialSummary,
    insights: Sequence[dict],
    report_type: str = "monthly",
) -> str:
    insight_lines = [f"- {i['title']}: {i['content']}" for i in insights] or ["- (none generated yet)"]
    return "\n".join([
        "Generate a professional financial report based on the following data:",
        "",
        f"Report Type: {report_type}",
        "Financial Summary:",
        *_summary_lines(summary, include_averages=False),
        "",
        "Key Insights:",
        *insight_lines,
        "",
        "Generate a comprehensive financial report in markdown format including:",
        "1. Executive Summary",
        "2. Financial Performance Overview",
        "3. Key Metrics Analysis",
        "4. Insights and Recommendations",
        "5. Forecast and Outlook",
        "",
        "Keep the report professional, concise, and actionable.",
    ])


# ---------------------------------------------------------------------------
# Response handling
# ---------------------------------------------------------------------------

def parse_insights(body: str) -> list[dict]:
    """Parse {"insights": [...]} into clean {title, content, type} dicts."""
    data = json.loads(body or "{}")
    raw = data.get("insights") if isinstance(data, dict) else None
    if not isinstance(raw, list):
        raw = []
    insights = []
    for item in raw:
        if not isinstance(item, dict) or not item.get("title"):
            continue
        kind = str(item.get("type", "info")).lower()
        insights.append({
            "title": str(item["title"]),
            "content": str(item.get("content", "")),
            "type": kind if kind in _VALID_INSIGHT_TYPES else InsightType.INFO.value,
        })
    return insights


class InsightGenerator:
    """Wraps an OpenAI-compatible client (anything exposing chat.completions.create)."""

    def __init__(self, client: Any, model: str = OPENAI_MODEL, sample_size: int = INSIGHT_SAMPLE_SIZE) -> None:
        self.client = client
        self.model = model
        self.sample_size = sample_size

    def _complete(self, system: str, prompt: str, **kwargs) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            **kwargs,
        )
        if not response.choices:
            raise GenerationError("model response contained no choices")
        return response.choices[0].message.content or ""

    def generate_insights(self, summary: FinancialSummary, transactions: Sequence[Transaction]) -> list[dict]:
        prompt = build_insight_prompt(summary, transactions, self.sample_size)
        try:
            body = self._complete(
                INSIGHT_SYSTEM_PROMPT,
                prompt,
                response_format={"type": "json_object"},
                max_tokens=1000,
                temperature=0.3,
            )
            insights = parse_insights(body)
        except (openai.OpenAIError, json.JSONDecodeError, GenerationError) as exc:
            logger.error("Error generating AI insights: %s", exc)
            raise GenerationError(f"Failed to generate AI insights: {exc}") from exc
        if not insights:
            raise GenerationError("Failed to generate AI insights: response contained no insights")
        return insights[:INSIGHT_COUNT]

    def generate_report(
        self,
        summary: FinancialSummary,
        insights: Sequence[dict],
        report_type: str = "monthly",
    ) -> str:
        prompt = build_report_prompt(summary, insights, report_type)
        try:
            return self._complete(REPORT_SYSTEM_PROMPT, prompt, max_tokens=2000, temperature=0.2)
        except (openai.OpenAIError, GenerationError) as exc:
            logger.error("Error generating financial report: %s", exc)
            raise GenerationError(f"Failed to generate financial report: {exc}") from exc


def build_insight_generator(api_key: str = OPENAI_API_KEY) -> InsightGenerator:
    """OpenAI-backed generator from config. Missing key is a GenerationError."""
    if not api_key:
        raise GenerationError("OPENAI_API_KEY is not configured")
    client = openai.OpenAI(api_key=api_key, timeout=LLM_TIMEOUT_SECONDS, max_retries=0)
    return InsightGenerator(client)
