"""
Quote source module for fetching current prices of configured securities.

Each source returns a raw Quote whose price text is normalized later; any
failure surfaces as QuoteLookupError.
"""

from .models import LookupFailure, Quote
from .quote_source import (
    NaverQuoteSource,
    QuoteLookupError,
    QuoteSource,
    YFinanceQuoteSource,
    build_quote_source,
)

__all__ = [
    "LookupFailure",
    "Quote",
    "QuoteSource",
    "NaverQuoteSource",
    "YFinanceQuoteSource",
    "QuoteLookupError",
    "build_quote_source",
]
