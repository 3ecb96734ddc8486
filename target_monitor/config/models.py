"""
Configuration models using Pydantic for validation.
"""

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


DEFAULT_SCHEDULE = "0 9-15 * * 1-5"


class TargetEntry(BaseModel):
    """A configured security with its target (sell) price."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    identifier: str = Field(alias="code", min_length=1, description="Exchange code of the security")
    target_price: int = Field(alias="target", gt=0, description="Target price in whole currency units")
    display_name: Optional[str] = Field(default=None, alias="name", description="Optional display name")

    @field_validator("identifier")
    @classmethod
    def _strip_identifier(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("identifier must not be blank")
        return value

    @field_validator("display_name")
    @classmethod
    def _blank_name_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value


class PacingConfig(BaseModel):
    """Bounds for the randomized delay inserted before each quote lookup."""

    model_config = ConfigDict(extra="forbid")

    min_delay_seconds: float = Field(default=1.0, ge=0.0)
    max_delay_seconds: float = Field(default=3.0, ge=0.0)

    @model_validator(mode="after")
    def _check_range(self) -> "PacingConfig":
        if self.min_delay_seconds > self.max_delay_seconds:
            raise ValueError("min_delay_seconds must not exceed max_delay_seconds")
        return self


class MonitorConfig(BaseModel):
    """Configuration model for the target price monitor."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    targets: List[TargetEntry] = Field(min_length=1, description="Securities to monitor, in report order")
    schedule: str = Field(default=DEFAULT_SCHEDULE, description="Cron expression for scheduled mode")
    timezone: Optional[str] = Field(default=None, description="IANA timezone; local time if omitted")
    holiday_country: str = Field(default="KR", description="Country code for the holiday calendar")
    holiday_subdivision: Optional[str] = None
    extra_holidays: List[date] = Field(default_factory=list, description="Additional market closure dates")
    quote_source: Literal["naver", "yfinance"] = "naver"
    request_timeout_seconds: float = Field(default=10.0, gt=0.0)
    pacing: PacingConfig = Field(default_factory=PacingConfig)
    currency: str = Field(default="KRW", description="Label appended to prices in the report")

    @field_validator("targets")
    @classmethod
    def _unique_identifiers(cls, targets: List[TargetEntry]) -> List[TargetEntry]:
        seen = set()
        for entry in targets:
            if entry.identifier in seen:
                raise ValueError(f"duplicate identifier in targets: {entry.identifier}")
            seen.add(entry.identifier)
        return targets


class MonitorSettings(BaseModel):
    """Runtime settings taken from the environment."""

    model_config = ConfigDict(validate_assignment=True)

    mode: Literal["scheduled", "immediate"] = "scheduled"
    slack_bot_token: Optional[str] = None
    slack_channel_id: Optional[str] = None
    cron_schedule: Optional[str] = None

    @property
    def delivery_configured(self) -> bool:
        return bool(self.slack_bot_token and self.slack_channel_id)
