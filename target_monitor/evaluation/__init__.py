"""
Evaluation module for comparing current prices against target prices.
"""

from .evaluator import calculate_disparity, evaluate, format_disparity
from .models import Classification, EvaluationResult
from .normalizer import MalformedPriceError, normalize_price

__all__ = [
    "Classification",
    "EvaluationResult",
    "MalformedPriceError",
    "calculate_disparity",
    "evaluate",
    "format_disparity",
    "normalize_price",
]
