"""
Core monitoring system: runs one evaluation cycle and hands the report off for delivery.
"""

import logging
import time
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Sequence

from .config.models import MonitorConfig, TargetEntry
from .delivery.base import DeliveryResult, ReportDelivery
from .evaluation.evaluator import evaluate
from .evaluation.models import Classification, EvaluationResult
from .models import CycleReport
from .pacing import PacingPolicy, RandomPacingPolicy
from .quote_source.models import LookupFailure
from .quote_source.quote_source import QuoteSource, build_quote_source
from .reporting.reporter import ReportFormatter

logger = logging.getLogger(__name__)


def run_cycle(
    entries: Iterable[TargetEntry],
    quote_source: QuoteSource,
    pacing_policy: PacingPolicy,
    formatter: Optional[ReportFormatter] = None,
    clock: Callable[[], datetime] = datetime.now,
    sleep: Callable[[float], None] = time.sleep,
) -> CycleReport:
    """
    Evaluate every entry in order and assemble the cycle report.

    Lookups are strictly sequential with the pacing delay applied before each
    one. A failure for one entry (a fetch error, malformed price text, or a
    quote with no usable price) is recorded as LOOKUP_FAILED and the loop
    moves on; the cycle itself never aborts.

    Args:
        entries: Target entries in report order
        quote_source: Source used to fetch each quote
        pacing_policy: Supplies the delay before each lookup
        formatter: Formats the holdings lines (default ReportFormatter())
        clock: Returns the report timestamp
        sleep: Blocking sleep used for pacing

    Returns:
        CycleReport with results partitioned in input order
    """
    formatter = formatter or ReportFormatter()
    results: List[EvaluationResult] = []

    for entry in entries:
        delay = pacing_policy.next_delay()
        if delay > 0:
            sleep(delay)

        result = _evaluate_entry(entry, quote_source)
        results.append(result)

        if result.classification is Classification.LOOKUP_FAILED:
            logger.error(formatter.format_log_line(result))
        else:
            logger.info(formatter.format_log_line(result))

    sell_recommendations = [r for r in results if r.classification is Classification.SELL_RECOMMENDED]
    report = CycleReport(
        generated_at=clock(),
        results=results,
        sell_recommendations=sell_recommendations,
        held_lines=[
            formatter.format_holding_line(r)
            for r in results
            if r.classification is not Classification.SELL_RECOMMENDED
        ],
    )

    logger.info(
        f"Cycle completed: {len(sell_recommendations)} sell recommendations, "
        f"{report.held_count} held, {report.failed_count} failed"
    )
    return report


def _evaluate_entry(entry: TargetEntry, quote_source: QuoteSource) -> EvaluationResult:
    """Fetch and evaluate one entry, converting any failure into LOOKUP_FAILED."""
    try:
        quote = quote_source.fetch(entry.identifier)
    except Exception as e:
        return evaluate(entry, LookupFailure(identifier=entry.identifier, reason=str(e)))

    try:
        return evaluate(entry, quote)
    except Exception as e:
        return evaluate(entry, LookupFailure(identifier=entry.identifier, reason=str(e)))


class MonitorSystem:
    """Runs monitoring cycles over the configured targets and delivers the reports."""

    def __init__(
        self,
        config: MonitorConfig,
        quote_source: Optional[QuoteSource] = None,
        pacing_policy: Optional[PacingPolicy] = None,
        deliveries: Optional[Sequence[ReportDelivery]] = None,
        formatter: Optional[ReportFormatter] = None,
        clock: Callable[[], datetime] = datetime.now,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the monitoring system.

        Args:
            config: Monitor configuration holding the target list
            quote_source: Quote source (optional, built from config if None)
            pacing_policy: Pacing policy (optional, random within the configured range if None)
            deliveries: Report deliveries (optional, delivery is skipped if empty)
            formatter: Report formatter (optional, uses the configured currency if None)
            clock: Timestamp source for reports
            sleep: Blocking sleep used for pacing
        """
        self.config = config
        self.targets = tuple(config.targets)
        self.quote_source = quote_source or build_quote_source(config)
        self.pacing_policy = pacing_policy or RandomPacingPolicy.from_config(config.pacing)
        self.deliveries = list(deliveries or [])
        self.formatter = formatter or ReportFormatter(currency=config.currency)
        self.clock = clock
        self.sleep = sleep

        logger.info(f"MonitorSystem initialized with {len(self.targets)} targets")

    def run_cycle(self) -> CycleReport:
        """Run one evaluation cycle without delivering it."""
        logger.info(f"[{self.clock():%Y-%m-%d %H:%M:%S}] Checking prices for {len(self.targets)} targets...")
        return run_cycle(
            self.targets,
            self.quote_source,
            self.pacing_policy,
            formatter=self.formatter,
            clock=self.clock,
            sleep=self.sleep,
        )

    def deliver(self, report: CycleReport) -> List[DeliveryResult]:
        """
        Format and deliver a report to every configured destination.

        Delivery failures are logged and returned in the results; they never
        affect the already computed report.
        """
        if not self.deliveries:
            logger.info("Report delivery is not configured, skipping delivery")
            return []

        text = self.formatter.format(report)
        results = []
        for delivery in self.deliveries:
            result = delivery.deliver(text)
            if not result.ok:
                logger.error(f"Report delivery via {delivery.name} failed: {result.message}")
            results.append(result)
        return results

    def run(self) -> CycleReport:
        """Run one cycle and deliver its report."""
        report = self.run_cycle()
        self.deliver(report)
        return report
