"""CashPulse — small-business cash flow metrics from CSV transaction exports."""

__version__ = "1.0.0"
