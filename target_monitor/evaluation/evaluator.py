"""
Evaluator that classifies one target entry against its current quote.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from ..config.models import TargetEntry
from ..quote_source.models import LookupFailure, Quote
from .models import Classification, EvaluationResult
from .normalizer import normalize_price


TWO_PLACES = Decimal("0.01")


def calculate_disparity(current_price: int, target_price: int) -> Decimal:
    """
    Percentage difference between current and target price, rounded half-up to 2 places.

    Args:
        current_price: Current price in whole units
        target_price: Target price in whole units, must be positive

    Returns:
        ((current - target) / target) * 100 as a Decimal with two decimal places
    """
    if target_price <= 0:
        raise ValueError(f"target_price must be positive, got {target_price}")

    raw = Decimal(current_price - target_price) * 100 / Decimal(target_price)
    return raw.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def format_disparity(disparity: Decimal) -> str:
    """
    Render a disparity as a signed percentage, e.g. ``+12.50%`` or ``-20.00%``.

    Values that are not negative carry an explicit ``+``; a price exactly at
    target renders as ``+0.00%``. A negative value that rounds to zero keeps
    its sign (``-0.00%``).
    """
    text = f"{disparity:.2f}"
    if not disparity.is_signed():
        text = f"+{text}"
    return f"{text}%"


def evaluate(entry: TargetEntry, quote: Union[Quote, LookupFailure]) -> EvaluationResult:
    """
    Classify one entry from its quote.

    A LookupFailure yields LOOKUP_FAILED without any arithmetic. Otherwise the
    price text is normalized (MalformedPriceError propagates to the caller),
    the disparity is computed and the entry is SELL_RECOMMENDED when the
    current price has reached the target.

    Args:
        entry: Configured target entry
        quote: Quote for the entry, or a LookupFailure

    Returns:
        EvaluationResult for the entry
    """
    if isinstance(quote, LookupFailure):
        return EvaluationResult(
            identifier=entry.identifier,
            resolved_display_name=entry.display_name or entry.identifier,
            target_price=entry.target_price,
            classification=Classification.LOOKUP_FAILED,
            failure_reason=quote.reason or None,
        )

    current_price = normalize_price(quote.raw_price_text)
    disparity = calculate_disparity(current_price, entry.target_price)

    if current_price >= entry.target_price:
        classification = Classification.SELL_RECOMMENDED
    else:
        classification = Classification.HELD

    name_mismatch = None
    if entry.display_name and quote.api_display_name and entry.display_name != quote.api_display_name:
        name_mismatch = quote.api_display_name

    resolved_name = entry.display_name or quote.api_display_name or entry.identifier

    return EvaluationResult(
        identifier=entry.identifier,
        resolved_display_name=resolved_name,
        target_price=entry.target_price,
        classification=classification,
        current_price=current_price,
        disparity_percent=disparity,
        api_display_name=quote.api_display_name,
        name_mismatch=name_mismatch,
    )
