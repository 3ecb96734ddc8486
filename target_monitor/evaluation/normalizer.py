"""
Price text normalization.
"""

import re


THOUSANDS_SEPARATORS = (",", "_", "'", " ", "\u00a0")

_DIGITS = re.compile(r"[0-9]+")


class MalformedPriceError(ValueError):
    """Raised when a price string is not a thousands-separated integer."""


def normalize_price(raw_price_text: str) -> int:
    """
    Parse a thousands-separated price string such as ``"1,234,567"`` into an int.

    Raises:
        MalformedPriceError: If anything other than digits remains after the
            separators are stripped.
    """
    if not isinstance(raw_price_text, str):
        raise MalformedPriceError(f"Price must be a string, got {type(raw_price_text).__name__}")

    residual = raw_price_text.strip()
    for separator in THOUSANDS_SEPARATORS:
        residual = residual.replace(separator, "")

    # ASCII digits only
    if not _DIGITS.fullmatch(residual):
        raise MalformedPriceError(f"Malformed price text: {raw_price_text!r}")

    return int(residual, 10)
