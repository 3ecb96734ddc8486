"""
Shared data models for the target price monitor.
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .evaluation.models import Classification, EvaluationResult


class CycleReport(BaseModel):
    """Outcome of one pass over all configured entries."""

    model_config = ConfigDict(frozen=True)

    generated_at: datetime
    results: List[EvaluationResult] = Field(default_factory=list)
    sell_recommendations: List[EvaluationResult] = Field(default_factory=list)
    held_lines: List[str] = Field(default_factory=list)

    @property
    def held_results(self) -> List[EvaluationResult]:
        """Held and failed results in input order."""
        return [r for r in self.results if r.classification is not Classification.SELL_RECOMMENDED]

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if r.classification is Classification.LOOKUP_FAILED)

    @property
    def held_count(self) -> int:
        return sum(1 for r in self.results if r.classification is Classification.HELD)
