"""
Report formatting for cycle results.

Output uses Slack mrkdwn (``*bold*``) and is fully determined by the
CycleReport passed in, so identical reports always render identically.
"""

from datetime import datetime
from typing import List

from ..evaluation.evaluator import format_disparity
from ..evaluation.models import Classification, EvaluationResult
from ..models import CycleReport


NO_RECOMMENDATIONS_LINE = "✅ No sell recommendations."
HOLDINGS_HEADER = "*📋 Holdings*"
SEPARATOR = "-" * 20
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

SELL_ICON = "💰"
HELD_ICON = "⏳"
FAILED_ICON = "⚠️"


class ReportFormatter:
    """Formats evaluation results and cycle reports."""

    def __init__(self, currency: str = "KRW"):
        self.currency = currency

    def format_price(self, amount: int) -> str:
        """Thousands-separated amount with the currency label."""
        if self.currency:
            return f"{amount:,} {self.currency}"
        return f"{amount:,}"

    def format_timestamp(self, when: datetime) -> str:
        return when.strftime(TIMESTAMP_FORMAT)

    def format_sell_line(self, result: EvaluationResult) -> str:
        return (
            f"• *{result.resolved_display_name}*: {self.format_price(result.current_price)} "
            f"(target {self.format_price(result.target_price)} / "
            f"{format_disparity(result.disparity_percent)})"
        )

    def format_holding_line(self, result: EvaluationResult) -> str:
        """One holdings line; lookup failures carry no numeric fields."""
        if result.classification is Classification.LOOKUP_FAILED:
            return f"{FAILED_ICON} *{result.resolved_display_name}* ({result.identifier}): lookup failed"

        line = (
            f"{HELD_ICON} *{result.resolved_display_name}* ({result.identifier}): "
            f"{self.format_price(result.current_price)} "
            f"(target: {self.format_price(result.target_price)} / "
            f"disparity: {format_disparity(result.disparity_percent)})"
        )
        return line + self.format_name_mismatch(result)

    def format_name_mismatch(self, result: EvaluationResult) -> str:
        if not result.name_mismatch:
            return ""
        return f" ({FAILED_ICON} actual name: {result.name_mismatch})"

    def format_log_line(self, result: EvaluationResult) -> str:
        """Single-line summary used for per-entry logging."""
        label = f"[{result.resolved_display_name} ({result.identifier})]"
        if result.classification is Classification.LOOKUP_FAILED:
            return f"{label} lookup failed: {result.failure_reason or 'unknown error'}"

        if result.classification is Classification.SELL_RECOMMENDED:
            status = f"{SELL_ICON} sell recommended (target reached)"
        else:
            status = f"{HELD_ICON} hold (below target)"
        return (
            f"{label} {self.format_price(result.current_price)} / "
            f"target: {self.format_price(result.target_price)} "
            f"({format_disparity(result.disparity_percent)}) - {status}"
            f"{self.format_name_mismatch(result)}"
        )

    def format(self, report: CycleReport) -> str:
        """
        Render the full report message.

        Layout: header with generation time, then either the counted sell
        recommendations or NO_RECOMMENDATIONS_LINE, a separator, and the
        holdings section when there are held or failed entries.
        """
        lines: List[str] = [f"*📈 Price Monitoring Report ({self.format_timestamp(report.generated_at)})*", ""]

        if report.sell_recommendations:
            lines.append(f"🚨 *Sell Recommendations ({len(report.sell_recommendations)})* 🚨")
            lines.extend(self.format_sell_line(r) for r in report.sell_recommendations)
        else:
            lines.append(NO_RECOMMENDATIONS_LINE)

        lines.extend(["", SEPARATOR, ""])

        # Rendered here so the currency label matches the sell lines
        held_lines = [self.format_holding_line(r) for r in report.held_results] if report.results else report.held_lines
        if held_lines:
            lines.append(HOLDINGS_HEADER)
            lines.extend(held_lines)

        return "\n".join(lines).rstrip("\n")


def format_report(report: CycleReport, currency: str = "KRW") -> str:
    """Format a cycle report with a default formatter."""
    return ReportFormatter(currency=currency).format(report)
