"""Configuration objects handed to every agent and provider wrapper."""
from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from extraction.budget import BudgetRules

DEFAULT_MODEL = "claude-sonnet-4-5-20250929"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


class ModelSettings(BaseModel):
    """Language-model connection used by every agent's generate() call."""

    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: str = DEFAULT_MODEL
    temperature: float = 0.7
    max_tokens: int = 1500
    timeout_seconds: float = 60.0

    @property
    def configured(self) -> bool:
        return bool(self.api_key)


class ProviderSettings(BaseModel):
    """Credential and endpoint for one external data provider."""

    api_key: Optional[str] = None
    base_url: str = ""
    timeout_seconds: float = 10.0

    @property
    def configured(self) -> bool:
        return bool(self.api_key)


class PlannerSettings(BaseModel):
    llm: ModelSettings = Field(default_factory=ModelSettings)
    weather: ProviderSettings = Field(
        default_factory=lambda: ProviderSettings(base_url="https://api.openweathermap.org")
    )
    flights: ProviderSettings = Field(
        default_factory=lambda: ProviderSettings(base_url="https://serpapi.com/search", timeout_seconds=20.0)
    )
    accommodation: ProviderSettings = Field(
        default_factory=lambda: ProviderSettings(base_url="https://overpass-api.de/api/interpreter", timeout_seconds=12.0)
    )
    max_flight_results: int = 5
    default_origin: str = "New York"
    budget_rules: BudgetRules = Field(default_factory=BudgetRules)

    @classmethod
    def from_env(cls) -> "PlannerSettings":
        """Load settings from the process environment (and a .env file if present)."""

        load_dotenv()
        defaults = cls()
        return cls(
            llm=ModelSettings(
                api_key=os.getenv("ANTHROPIC_API_KEY"),
                base_url=os.getenv("ANTHROPIC_BASE_URL") or None,
                model=os.getenv("ANTHROPIC_MODEL", DEFAULT_MODEL),
                temperature=_env_float("ANTHROPIC_TEMPERATURE", 0.7),
                timeout_seconds=_env_float("LLM_TIMEOUT_SECONDS", 60.0),
            ),
            weather=defaults.weather.model_copy(
                update={"api_key": os.getenv("OPENWEATHER_API_KEY")}
            ),
            flights=defaults.flights.model_copy(update={"api_key": os.getenv("SERP_API_KEY")}),
            # Any value enables the keyless Overpass lookup; it is not sent upstream.
            accommodation=defaults.accommodation.model_copy(
                update={"api_key": os.getenv("BOOKING_API_KEY") or os.getenv("ACCOMMODATION_API_KEY")}
            ),
            default_origin=os.getenv("DEFAULT_ORIGIN_CITY", defaults.default_origin),
        )
