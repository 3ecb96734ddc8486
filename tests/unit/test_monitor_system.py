"""
Unit tests for the monitoring cycle orchestration.
"""

from datetime import datetime
from decimal import Decimal
from unittest.mock import Mock

import pytest

from target_monitor.config.models import MonitorConfig, TargetEntry
from target_monitor.delivery.base import DeliveryResult, DeliveryStatus, ReportDelivery
from target_monitor.evaluation import Classification
from target_monitor.monitor_system import MonitorSystem, run_cycle
from target_monitor.pacing import NoDelayPacingPolicy, PacingPolicy
from target_monitor.quote_source import Quote, QuoteLookupError, QuoteSource


NOW = datetime(2025, 10, 14, 9, 0, 0)


class FakeQuoteSource(QuoteSource):
    """Returns canned quotes; values that are exceptions are raised."""

    def __init__(self, quotes, events=None):
        self.quotes = quotes
        self.calls = []
        self.events = events if events is not None else []

    def fetch(self, identifier):
        self.calls.append(identifier)
        self.events.append(("fetch", identifier))
        value = self.quotes[identifier]
        if isinstance(value, Exception):
            raise value
        name, price = value
        return Quote(identifier=identifier, api_display_name=name, raw_price_text=price)


class FixedPacingPolicy(PacingPolicy):
    def __init__(self, delay):
        self.delay = delay

    def next_delay(self):
        return self.delay


class RecordingDelivery(ReportDelivery):
    def __init__(self, ok=True):
        super().__init__("recording", "test-channel")
        self.ok = ok
        self.texts = []

    def deliver(self, text):
        self.texts.append(text)
        status = DeliveryStatus.SUCCESS if self.ok else DeliveryStatus.FAILED
        return DeliveryResult(status, self.destination, message=None if self.ok else "channel_not_found")


class TestRunCycle:
    """Test run_cycle()."""

    @pytest.fixture
    def entries(self):
        return [
            TargetEntry(code="AAA", target=100),
            TargetEntry(code="BBB", target=50),
        ]

    def test_classifies_and_partitions(self, entries):
        source = FakeQuoteSource({"AAA": (None, "100"), "BBB": (None, "40")})
        report = run_cycle(entries, source, NoDelayPacingPolicy(), clock=lambda: NOW)

        assert [r.identifier for r in report.sell_recommendations] == ["AAA"]
        assert report.sell_recommendations[0].disparity_percent == Decimal("0.00")
        assert report.held_lines == ["⏳ *BBB* (BBB): 40 KRW (target: 50 KRW / disparity: -20.00%)"]
        assert report.generated_at == NOW

    def test_fetches_in_input_order(self, entries):
        source = FakeQuoteSource({"AAA": (None, "1"), "BBB": (None, "1")})
        run_cycle(list(reversed(entries)), source, NoDelayPacingPolicy())

        assert source.calls == ["BBB", "AAA"]

    def test_pacing_delay_precedes_each_lookup(self, entries):
        events = []
        source = FakeQuoteSource({"AAA": (None, "1"), "BBB": (None, "1")}, events=events)

        run_cycle(entries, source, FixedPacingPolicy(2.0), sleep=lambda s: events.append(("sleep", s)))

        assert events == [("sleep", 2.0), ("fetch", "AAA"), ("sleep", 2.0), ("fetch", "BBB")]

    def test_zero_delay_does_not_sleep(self, entries):
        sleep = Mock()
        source = FakeQuoteSource({"AAA": (None, "1"), "BBB": (None, "1")})

        run_cycle(entries, source, NoDelayPacingPolicy(), sleep=sleep)

        sleep.assert_not_called()

    def test_fetch_failure_is_isolated(self, entries):
        source = FakeQuoteSource({"AAA": QuoteLookupError("HTTP 500"), "BBB": (None, "40")})
        report = run_cycle(entries, source, NoDelayPacingPolicy())

        assert source.calls == ["AAA", "BBB"]
        assert report.results[0].classification is Classification.LOOKUP_FAILED
        assert report.results[0].failure_reason == "HTTP 500"
        assert report.results[1].classification is Classification.HELD
        assert report.failed_count == 1
        assert report.held_lines[0] == "⚠️ *AAA* (AAA): lookup failed"

    def test_unexpected_exception_is_isolated(self, entries):
        source = FakeQuoteSource({"AAA": RuntimeError("boom"), "BBB": (None, "60")})
        report = run_cycle(entries, source, NoDelayPacingPolicy())

        assert report.failed_count == 1
        assert [r.identifier for r in report.sell_recommendations] == ["BBB"]

    def test_malformed_price_recorded_as_lookup_failure(self, entries):
        source = FakeQuoteSource({"AAA": (None, "--"), "BBB": (None, "40")})
        report = run_cycle(entries, source, NoDelayPacingPolicy())

        assert report.results[0].classification is Classification.LOOKUP_FAILED
        assert "Malformed price" in report.results[0].failure_reason
        assert report.sell_recommendations == []

    def test_quote_without_price_is_isolated(self, entries):
        class EmptyQuoteSource(QuoteSource):
            def fetch(self, identifier):
                return None

        report = run_cycle(entries, EmptyQuoteSource(), NoDelayPacingPolicy())

        assert [r.classification for r in report.results] == [
            Classification.LOOKUP_FAILED,
            Classification.LOOKUP_FAILED,
        ]
        assert report.held_lines == ["⚠️ *AAA* (AAA): lookup failed", "⚠️ *BBB* (BBB): lookup failed"]

    def test_all_entries_failing_still_produces_report(self, entries):
        source = FakeQuoteSource({"AAA": QuoteLookupError("x"), "BBB": QuoteLookupError("y")})
        report = run_cycle(entries, source, NoDelayPacingPolicy())

        assert report.failed_count == 2
        assert len(report.held_lines) == 2
        assert report.sell_recommendations == []

    def test_no_retry_within_cycle(self, entries):
        source = FakeQuoteSource({"AAA": QuoteLookupError("x"), "BBB": (None, "1")})
        run_cycle(entries, source, NoDelayPacingPolicy())

        assert source.calls.count("AAA") == 1


class TestMonitorSystem:
    """Test MonitorSystem wiring and delivery hand-off."""

    @pytest.fixture
    def config(self):
        return MonitorConfig(targets=[{"code": "AAA", "target": 100}, {"code": "BBB", "target": 50}])

    @pytest.fixture
    def source(self):
        return FakeQuoteSource({"AAA": ("Alpha", "120"), "BBB": ("Beta", "40")})

    def test_run_delivers_formatted_report(self, config, source):
        delivery = RecordingDelivery()
        system = MonitorSystem(
            config, quote_source=source, pacing_policy=NoDelayPacingPolicy(),
            deliveries=[delivery], clock=lambda: NOW,
        )

        report = system.run()

        assert len(delivery.texts) == 1
        assert delivery.texts[0] == system.formatter.format(report)
        assert "🚨 *Sell Recommendations (1)* 🚨" in delivery.texts[0]

    def test_delivery_skipped_when_not_configured(self, config, source):
        system = MonitorSystem(config, quote_source=source, pacing_policy=NoDelayPacingPolicy(), clock=lambda: NOW)

        report = system.run_cycle()

        assert system.deliver(report) == []
        assert len(report.results) == 2

    def test_delivery_failure_does_not_affect_report(self, config, source):
        failing = RecordingDelivery(ok=False)
        system = MonitorSystem(
            config, quote_source=source, pacing_policy=NoDelayPacingPolicy(),
            deliveries=[failing], clock=lambda: NOW,
        )

        report = system.run()

        assert len(report.sell_recommendations) == 1
        results = system.deliver(report)
        assert results[0].ok is False

    def test_delivers_to_every_destination(self, config, source):
        first, second = RecordingDelivery(ok=False), RecordingDelivery()
        system = MonitorSystem(
            config, quote_source=source, pacing_policy=NoDelayPacingPolicy(),
            deliveries=[first, second], clock=lambda: NOW,
        )

        system.run()

        assert len(first.texts) == 1
        assert len(second.texts) == 1

    def test_currency_from_config(self, source):
        config = MonitorConfig(targets=[{"code": "AAA", "target": 100}], currency="USD")
        system = MonitorSystem(config, quote_source=source, pacing_policy=NoDelayPacingPolicy())

        assert system.formatter.format_price(5) == "5 USD"

    def test_default_pacing_uses_configured_range(self, config, source):
        system = MonitorSystem(config, quote_source=source)

        assert system.pacing_policy.min_delay == 1.0
        assert system.pacing_policy.max_delay == 3.0

    def test_runs_are_independent(self, config):
        source = FakeQuoteSource({"AAA": ("Alpha", "120"), "BBB": ("Beta", "40")})
        system = MonitorSystem(config, quote_source=source, pacing_policy=NoDelayPacingPolicy(), clock=lambda: NOW)

        first = system.run_cycle()
        source.quotes["AAA"] = ("Alpha", "80")
        second = system.run_cycle()

        assert len(first.sell_recommendations) == 1
        assert second.sell_recommendations == []
        assert len(first.held_lines) == 1
