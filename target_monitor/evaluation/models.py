"""
Data models for per-entry evaluation results.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Classification(Enum):
    """Outcome of evaluating one entry."""

    SELL_RECOMMENDED = "sell_recommended"
    HELD = "held"
    LOOKUP_FAILED = "lookup_failed"


class EvaluationResult(BaseModel):
    """Result of comparing one entry's current price to its target."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    resolved_display_name: str
    target_price: int
    classification: Classification
    current_price: Optional[int] = None
    disparity_percent: Optional[Decimal] = None
    api_display_name: Optional[str] = None
    name_mismatch: Optional[str] = None
    failure_reason: Optional[str] = None

    @property
    def is_sell_recommended(self) -> bool:
        return self.classification is Classification.SELL_RECOMMENDED

    @property
    def lookup_failed(self) -> bool:
        return self.classification is Classification.LOOKUP_FAILED
