"""
Pacing policies that space out successive quote lookups.
"""

import random
from abc import ABC, abstractmethod
from typing import Optional

from .config.models import PacingConfig


class PacingPolicy(ABC):
    """Decides how long to wait before the next external lookup."""

    @abstractmethod
    def next_delay(self) -> float:
        """Return the delay in seconds to apply before the next lookup."""


class RandomPacingPolicy(PacingPolicy):
    """Uniformly random delay within [min_delay, max_delay] seconds."""

    def __init__(self, min_delay: float = 1.0, max_delay: float = 3.0, rng: Optional[random.Random] = None):
        if min_delay < 0 or max_delay < min_delay:
            raise ValueError(f"Invalid pacing range: {min_delay}..{max_delay}")
        self.min_delay = min_delay
        self.max_delay = max_delay
        self._rng = rng or random.Random()

    @classmethod
    def from_config(cls, config: PacingConfig) -> "RandomPacingPolicy":
        return cls(config.min_delay_seconds, config.max_delay_seconds)

    def next_delay(self) -> float:
        return self._rng.uniform(self.min_delay, self.max_delay)


class NoDelayPacingPolicy(PacingPolicy):
    """Never waits. Intended for tests and one-off local runs."""

    def next_delay(self) -> float:
        return 0.0
