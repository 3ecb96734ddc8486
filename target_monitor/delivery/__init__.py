"""
Report delivery module for sending formatted reports to a messaging channel.
"""

from typing import Optional

from ..config.models import MonitorSettings
from .base import DeliveryResult, DeliveryStatus, ReportDelivery
from .slack_delivery import SlackReportDelivery
from .stdout_delivery import StdoutReportDelivery

__all__ = [
    "DeliveryResult",
    "DeliveryStatus",
    "ReportDelivery",
    "SlackReportDelivery",
    "StdoutReportDelivery",
    "build_delivery",
]


def build_delivery(settings: MonitorSettings) -> Optional[ReportDelivery]:
    """Return a Slack delivery when token and channel are set, otherwise None."""
    if not settings.delivery_configured:
        return None
    return SlackReportDelivery(token=settings.slack_bot_token, channel=settings.slack_channel_id)
