"""
Data models for quote lookups.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict


class Quote(BaseModel):
    """Raw quote record as returned by a quote source."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    api_display_name: Optional[str] = None
    raw_price_text: str


class LookupFailure(BaseModel):
    """Signals that the quote for an entry could not be retrieved or parsed."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    reason: str = ""
