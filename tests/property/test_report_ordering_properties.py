"""
Property-based tests for cycle ordering and failure isolation.
"""

from typing import List, Tuple

from hypothesis import given, strategies as st

from target_monitor.config.models import TargetEntry
from target_monitor.evaluation import Classification
from target_monitor.monitor_system import run_cycle
from target_monitor.pacing import NoDelayPacingPolicy
from target_monitor.quote_source import Quote, QuoteLookupError, QuoteSource


class MappingQuoteSource(QuoteSource):
    def __init__(self, prices, failing=()):
        self.prices = prices
        self.failing = set(failing)

    def fetch(self, identifier):
        if identifier in self.failing:
            raise QuoteLookupError(f"{identifier} unavailable")
        return Quote(identifier=identifier, raw_price_text=f"{self.prices[identifier]:,}")


entry_pairs = st.lists(
    st.tuples(st.integers(min_value=1, max_value=10**7), st.integers(min_value=1, max_value=10**7)),
    min_size=1,
    max_size=25,
)


def build(pairs: List[Tuple[int, int]]):
    entries = [TargetEntry(code=f"E{i:03d}", target=target) for i, (target, _) in enumerate(pairs)]
    prices = {f"E{i:03d}": current for i, (_, current) in enumerate(pairs)}
    return entries, prices


class TestReportOrderingProperties:
    """Property-based tests for report assembly."""

    @given(pairs=entry_pairs)
    def test_partition_is_stable(self, pairs):
        """
        Feature: target-price-monitor, Property 6: Stable Partition

        Sell recommendations and holdings lines each keep the input order.
        """
        entries, prices = build(pairs)
        report = run_cycle(entries, MappingQuoteSource(prices), NoDelayPacingPolicy())

        expected_sell = [e.identifier for e in entries if prices[e.identifier] >= e.target_price]
        expected_held = [e.identifier for e in entries if prices[e.identifier] < e.target_price]

        assert [r.identifier for r in report.sell_recommendations] == expected_sell
        assert [line.split("(")[1].split(")")[0] for line in report.held_lines] == expected_held
        assert [r.identifier for r in report.results] == [e.identifier for e in entries]

    @given(pairs=entry_pairs, data=st.data())
    def test_single_failure_does_not_abort_cycle(self, pairs, data):
        """
        Feature: target-price-monitor, Property 7: Partial Failure Isolation

        When exactly one of N lookups fails, the report holds N-1 classified
        entries and exactly one LOOKUP_FAILED line.
        """
        entries, prices = build(pairs)
        failing = data.draw(st.sampled_from(entries)).identifier

        report = run_cycle(entries, MappingQuoteSource(prices, failing=[failing]), NoDelayPacingPolicy())

        failed = [r for r in report.results if r.classification is Classification.LOOKUP_FAILED]
        classified = [r for r in report.results if r.classification is not Classification.LOOKUP_FAILED]

        assert [r.identifier for r in failed] == [failing]
        assert len(classified) == len(entries) - 1
        assert sum(1 for line in report.held_lines if line.endswith("lookup failed")) == 1
        assert len(report.sell_recommendations) + len(report.held_lines) == len(entries)
