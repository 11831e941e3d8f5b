from datetime import date, timedelta

import httpx

from models.schemas import TripPreferences, TripRequest


class MockResponse:
    def __init__(self, payload, status_code: int = 200):
        self._payload = payload
        self.status_code = status_code
        self.request = httpx.Request("GET", "https://mock")

    def json(self):
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise httpx.HTTPStatusError(
                "mock error",
                request=self.request,
                response=httpx.Response(self.status_code, request=self.request),
            )


class MockAsyncClient:
    def __init__(self, response: MockResponse | None = None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls: list[tuple[str, dict | None]] = []
        self.call_kwargs: list[dict] = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def get(self, url: str, params=None, **kwargs):
        self.calls.append((url, params))
        self.call_kwargs.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


class FakeMessages:
    def __init__(self, text: str = "", error: Exception | None = None):
        self.text = text
        self.error = error
        self.calls: list[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return {"content": [{"type": "text", "text": self.text}]}


class FakeAnthropic:
    """Stands in for anthropic.Anthropic; only messages.create is used."""

    def __init__(self, text: str = "", error: Exception | None = None):
        self.messages = FakeMessages(text, error)


def make_request(
    destination: str = "Paris",
    start_offset: int = 1,
    days: int = 3,
    **preferences,
) -> TripRequest:
    start = date.today() + timedelta(days=start_offset)
    return TripRequest(
        destination=destination,
        start_date=start,
        end_date=start + timedelta(days=days - 1),
        preferences=TripPreferences(**preferences),
    )
