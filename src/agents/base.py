import asyncio
import logging
from datetime import date
from typing import Any, Optional

import anthropic
from anthropic import Anthropic

from core.config import PlannerSettings
from core.errors import ConfigurationError, PlannerError, ProviderError, ProviderTimeoutError
from core.logger import log_event
from models.schemas import AgentResponse, TripRequest

logger = logging.getLogger(__name__)

INVALID_DATES = "Invalid dates provided"


class BaseAgent:
    """
    Shared plumbing for the planning agents: one bounded language-model call,
    date validation and the failed-response envelope.
    """

    name = "agent"

    def __init__(self, settings: Optional[PlannerSettings] = None, client: Optional[Anthropic] = None):
        self.settings = settings or PlannerSettings()
        self.client = client

    def _block_attr(self, block: Any, attr: str) -> Any:
        if isinstance(block, dict):
            return block.get(attr)
        return getattr(block, attr, None)

    def _response_text(self, resp: Any) -> str:
        content = self._block_attr(resp, "content") or []
        parts = [
            self._block_attr(block, "text") or ""
            for block in content
            if self._block_attr(block, "type") == "text"
        ]
        return "\n".join(parts).strip()

    async def generate(self, prompt: str) -> str:
        """
        Send a single-turn prompt and return the reply text.

        Raises ConfigurationError without a client, ProviderTimeoutError when
        the call outlives the configured timeout and ProviderError for any
        other API failure.
        """
        if self.client is None:
            raise ConfigurationError("Anthropic client not configured")

        llm = self.settings.llm
        try:
            resp = await asyncio.wait_for(
                asyncio.to_thread(
                    self.client.messages.create,
                    model=llm.model,
                    max_tokens=llm.max_tokens,
                    temperature=llm.temperature,
                    messages=[{"role": "user", "content": prompt}],
                ),
                timeout=llm.timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise ProviderTimeoutError(
                f"Model call exceeded {llm.timeout_seconds}s", provider="anthropic"
            ) from exc
        except anthropic.APIError as exc:
            raise ProviderError(f"Model call failed: {exc}", provider="anthropic") from exc
        return self._response_text(resp)

    async def generate_or_empty(self, prompt: str, request_id: str) -> str:
        """generate(), but any configuration or provider failure yields ""."""
        try:
            return await self.generate(prompt)
        except PlannerError as exc:
            logger.warning("%s: model unavailable (%s); continuing with fallback extraction", self.name, exc)
            log_event(request_id, "llm_unavailable", {"agent": self.name, "error": exc.message})
            return ""

    def validate_dates(self, start: date, end: date, today: Optional[date] = None) -> bool:
        # Same-day trips are allowed.
        today = today or date.today()
        return start >= today and end >= start

    def handle_error(self, error: Exception, request_id: str = "") -> AgentResponse:
        message = str(error) or "An unknown error occurred"
        logger.error("%s error: %s", self.name, message)
        log_event(request_id, "agent_error", {"agent": self.name, "error": message})
        return AgentResponse(success=False, error=message)

    async def process(self, request: TripRequest, **kwargs: Any) -> AgentResponse:
        raise NotImplementedError
