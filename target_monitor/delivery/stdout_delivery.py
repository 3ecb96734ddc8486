"""Stdout report delivery."""

import sys
from typing import Optional, TextIO

from .base import DeliveryResult, DeliveryStatus, ReportDelivery


class StdoutReportDelivery(ReportDelivery):
    """Writes reports to a text stream, stdout by default."""

    def __init__(self, stream: Optional[TextIO] = None):
        super().__init__("stdout", "stdout")
        self.stream = stream or sys.stdout

    def deliver(self, text: str) -> DeliveryResult:
        try:
            self.stream.write(text + "\n")
            self.stream.flush()
        except OSError as e:
            self.logger.error(f"Failed to write report to stdout: {e}")
            return DeliveryResult(DeliveryStatus.FAILED, self.destination, message=str(e), error=e)
        return DeliveryResult(DeliveryStatus.SUCCESS, self.destination)
