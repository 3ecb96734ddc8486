"""
Reporting module for turning cycle results into a chat-ready summary.
"""

from .reporter import (
    HOLDINGS_HEADER,
    NO_RECOMMENDATIONS_LINE,
    SEPARATOR,
    ReportFormatter,
    format_report,
)

__all__ = [
    "HOLDINGS_HEADER",
    "NO_RECOMMENDATIONS_LINE",
    "SEPARATOR",
    "ReportFormatter",
    "format_report",
]
