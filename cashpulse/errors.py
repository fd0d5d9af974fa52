"""
Error taxonomy shared by ingestion, metrics, and the insight/report requesters.
"""
from __future__ import annotations


class CashPulseError(Exception):
    """Base class for all CashPulse errors."""


class ParseError(CashPulseError):
    """CSV text is not well-formed delimited data with a header row."""


class ValidationError(CashPulseError):
    """CSV parsed but holds no usable amount-bearing rows."""


class NoDataError(CashPulseError):
    """An insight or report was requested for a user with no transactions."""

    def __init__(self, message: str = "No financial data available. Please upload data first.") -> None:
        super().__init__(message)


class GenerationError(CashPulseError):
    """The external narrative generator failed or returned an unusable body."""


class RenderError(CashPulseError):
    """The PDF renderer failed to produce a document."""
