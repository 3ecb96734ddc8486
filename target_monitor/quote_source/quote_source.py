"""
Quote source implementations for fetching current prices.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import requests

from ..config.models import MonitorConfig
from .models import Quote


logger = logging.getLogger(__name__)


class QuoteLookupError(Exception):
    """Raised when a quote cannot be fetched or the response lacks a price."""


class QuoteSource(ABC):
    """Fetches the current quote for a single identifier."""

    @abstractmethod
    def fetch(self, identifier: str) -> Quote:
        """
        Fetch the current quote for an identifier.

        Raises:
            QuoteLookupError: On transport errors, non-2xx responses or a missing price.
        """


class NaverQuoteSource(QuoteSource):
    """Reads quotes from the Naver mobile stock API."""

    BASE_URL = "https://m.stock.naver.com/api/stock/{code}/basic"
    USER_AGENT = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/110.0.0.0 Safari/537.36"
    )

    def __init__(self, timeout: float = 10.0, session: Optional[requests.Session] = None):
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": self.USER_AGENT})

    def fetch(self, identifier: str) -> Quote:
        url = self.BASE_URL.format(code=identifier)
        logger.debug(f"Fetching quote for {identifier} from {url}")

        try:
            response = self._session.get(url, timeout=self._timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise QuoteLookupError(f"Request for {identifier} failed: {e}") from e
        except ValueError as e:
            raise QuoteLookupError(f"Response for {identifier} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise QuoteLookupError(f"Unexpected response payload for {identifier}")

        close_price = data.get("closePrice")
        if close_price is None or not str(close_price).strip():
            raise QuoteLookupError(f"Response for {identifier} has no closePrice")

        return Quote(
            identifier=identifier,
            api_display_name=data.get("stockName") or None,
            raw_price_text=str(close_price),
        )


class YFinanceQuoteSource(QuoteSource):
    """
    Reads the latest close from yfinance.

    Prices are rounded to whole currency units, which suits listings quoted in
    integer units such as KRX tickers (``005930.KS``).
    """

    def __init__(self):
        self._yf = None

    def _get_yfinance(self):
        """Lazy import of yfinance to avoid SSL issues during package setup."""
        if self._yf is None:
            import yfinance as yf
            self._yf = yf
        return self._yf

    def fetch(self, identifier: str) -> Quote:
        try:
            yf = self._get_yfinance()
            data = yf.Ticker(identifier).history(period="1d")
        except Exception as e:
            raise QuoteLookupError(f"yfinance lookup for {identifier} failed: {e}") from e

        if data is None or data.empty:
            raise QuoteLookupError(f"No current price data available for {identifier}")

        close = float(data['Close'].iloc[-1])
        return Quote(identifier=identifier, raw_price_text=f"{int(round(close)):,}")


def build_quote_source(config: MonitorConfig) -> QuoteSource:
    """Create the quote source selected in the configuration."""
    if config.quote_source == "yfinance":
        return YFinanceQuoteSource()
    return NaverQuoteSource(timeout=config.request_timeout_seconds)
