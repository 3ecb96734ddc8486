"""Slack delivery via the Web API."""

from typing import Optional

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from .base import DeliveryResult, DeliveryStatus, ReportDelivery


class SlackReportDelivery(ReportDelivery):
    """Posts reports to a Slack channel with chat.postMessage."""

    def __init__(self, token: str, channel: str, client: Optional[WebClient] = None):
        super().__init__("slack", channel)
        self.client = client or WebClient(token=token)

    def deliver(self, text: str) -> DeliveryResult:
        try:
            response = self.client.chat_postMessage(channel=self.destination, text=text)
        except SlackApiError as e:
            error = e.response.get("error") if e.response is not None else str(e)
            self.logger.error(f"Slack delivery to {self.destination} failed: {error}")
            return DeliveryResult(DeliveryStatus.FAILED, self.destination, message=str(error), error=e)
        except Exception as e:
            self.logger.error(f"Slack delivery to {self.destination} failed: {e}")
            return DeliveryResult(DeliveryStatus.FAILED, self.destination, message=str(e), error=e)

        self.logger.info(f"Report delivered to Slack channel {self.destination}")
        return DeliveryResult(DeliveryStatus.SUCCESS, self.destination, message=response.get("ts"))
