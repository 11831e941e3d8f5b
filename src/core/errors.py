"""
Error taxonomy shared by the agents and the provider wrappers.

Configuration and provider errors never escape an agent: they are logged and
the agent switches to its fallback data. Only TripValidationError is surfaced
to callers, as an explicit failed AgentResponse.
"""


class PlannerError(Exception):
    """Base exception for all planner errors."""

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class ConfigurationError(PlannerError):
    """A required credential or setting is missing."""


class ProviderError(PlannerError):
    """
    An external call failed: network error, non-2xx status, provider-reported
    error payload, or an unusable response body.
    """

    def __init__(self, message: str, provider: str = "", context: dict | None = None):
        super().__init__(message, context)
        self.provider = provider


class ProviderTimeoutError(ProviderError):
    """An external call did not finish within its configured timeout."""


class TripValidationError(PlannerError):
    """The trip request itself is invalid (e.g. end date before start date)."""
