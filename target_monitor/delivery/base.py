"""Base classes for report delivery mechanisms."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DeliveryStatus(Enum):
    """Report delivery status."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class DeliveryResult:
    """Result of a report delivery attempt."""
    status: DeliveryStatus
    destination: str
    message: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.status is DeliveryStatus.SUCCESS


class ReportDelivery(ABC):
    """Base class for report delivery mechanisms. Implementations never raise."""

    def __init__(self, name: str, destination: str):
        self.name = name
        self.destination = destination
        self.logger = logging.getLogger(f"target_monitor.delivery.{name}")

    @abstractmethod
    def deliver(self, text: str) -> DeliveryResult:
        """
        Deliver a formatted report.

        Args:
            text: Report text

        Returns:
            DeliveryResult describing the outcome
        """
