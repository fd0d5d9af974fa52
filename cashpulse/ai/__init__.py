"""LLM-backed insight and report-body generation."""
from .insights import InsightGenerator, build_insight_generator, build_insight_prompt, build_report_prompt
