"""
Command-line interface implementation.
"""

import argparse
import logging
import signal
import sys
from pathlib import Path
from typing import List, Optional

from ..config import ConfigurationError, ConfigurationManager, MonitorConfig, MonitorSettings
from ..delivery import StdoutReportDelivery, build_delivery
from ..delivery.base import ReportDelivery
from ..monitor_system import MonitorSystem
from ..scheduler import CycleScheduler, HolidayCalendar, build_clock, validate_cron_expression


logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """Set up logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="target-monitor",
        description="Check current prices against target prices and report sell recommendations.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  target-monitor --config config.yaml --mode immediate --print-report
  target-monitor --config config.yaml --schedule "0 9-15 * * 1-5"
  target-monitor --config targets.json --next-runs 5
        """
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        help="Path to the YAML/JSON configuration file (default: config.yaml)"
    )
    parser.add_argument(
        "--env-file",
        type=str,
        help="Path to a dotenv file (default: .env.development or .env.production next to the config)"
    )
    parser.add_argument(
        "--mode",
        choices=["scheduled", "immediate"],
        help="Run on the schedule, or run exactly one cycle now (default: from MONITOR_MODE/MONITOR_ENV)"
    )
    parser.add_argument(
        "--schedule",
        type=str,
        help="Cron expression overriding CRON_SCHEDULE and the config file"
    )
    parser.add_argument(
        "--print-report",
        action="store_true",
        help="Also print each report to stdout"
    )
    parser.add_argument(
        "--validate-config",
        action="store_true",
        help="Validate configuration and exit"
    )
    parser.add_argument(
        "--next-runs",
        type=int,
        metavar="N",
        help="Show the next N scheduled runs (holidays excluded) and exit"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set logging level"
    )

    return parser


def resolve_schedule(args: argparse.Namespace, config: MonitorConfig, settings: MonitorSettings) -> str:
    """Pick the effective cron expression: --schedule, then CRON_SCHEDULE, then the config file."""
    expression = args.schedule or settings.cron_schedule or config.schedule
    return validate_cron_expression(expression)


def build_holiday_calendar(config: MonitorConfig) -> HolidayCalendar:
    """Create the holiday calendar, reporting unknown countries as configuration errors."""
    try:
        return HolidayCalendar(
            country=config.holiday_country,
            subdivision=config.holiday_subdivision,
            extra_dates=config.extra_holidays,
        )
    except NotImplementedError as e:
        raise ConfigurationError(
            f"Unsupported holiday calendar: {config.holiday_country} {config.holiday_subdivision or ''}".strip()
        ) from e


def build_deliveries(settings: MonitorSettings, print_report: bool) -> List[ReportDelivery]:
    deliveries: List[ReportDelivery] = []
    slack = build_delivery(settings)
    if slack is not None:
        deliveries.append(slack)
    else:
        logger.info("Slack is not configured, reports will not be sent")
    if print_report:
        deliveries.append(StdoutReportDelivery())
    return deliveries


def install_signal_handlers(scheduler: CycleScheduler) -> None:
    """Stop the scheduler loop on SIGINT/SIGTERM."""
    def _handle(signum, frame):
        logger.info(f"Received signal {signum}, shutting down")
        scheduler.stop()

    signal.signal(signal.SIGINT, _handle)
    signal.signal(signal.SIGTERM, _handle)


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    config_manager = ConfigurationManager()
    try:
        config = config_manager.load_config(args.config)
        config_dir = str(Path(args.config).parent) if args.config else None
        settings = config_manager.load_settings(args.env_file, config_dir)
        if args.mode:
            settings.mode = args.mode
        cron_expression = resolve_schedule(args, config, settings)
        calendar = build_holiday_calendar(config)
        clock = build_clock(config.timezone)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    logger.info(f"Loaded configuration with {len(config.targets)} targets")
    logger.info(f"Schedule: \"{cron_expression}\" ({config.holiday_country} holidays excluded)")

    if args.validate_config:
        logger.info("Configuration validation successful")
        return

    system = MonitorSystem(
        config,
        deliveries=build_deliveries(settings, args.print_report),
        clock=clock,
    )
    scheduler = CycleScheduler(cron_expression, system.run, calendar.is_holiday, clock=clock)

    if args.next_runs:
        for fire_time in scheduler.next_fire_times(args.next_runs):
            print(f"{fire_time:%Y-%m-%d %H:%M (%a)}")
        return

    if settings.mode == "immediate":
        logger.info("Immediate mode: running one cycle now")
        scheduler.run_now()
        return

    install_signal_handlers(scheduler)
    logger.info("Price monitoring scheduler started")
    scheduler.run_forever()


if __name__ == "__main__":
    main()
