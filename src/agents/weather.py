import json

from agents.base import INVALID_DATES, BaseAgent
from agents.prompts import WEATHER_PROMPT
from core.errors import TripValidationError
from core.logger import log_event
from extraction.advice import keyword_recommendations, leading_summary
from models.schemas import AgentResponse, TripRequest
from tools.weather import get_weather

DEFAULT_SUMMARY = "Weather information processed successfully."
DEFAULT_RECOMMENDATIONS = [
    "Check weather conditions before outdoor activities",
    "Pack appropriate clothing for the expected weather",
    "Stay hydrated and use sun protection",
]
ADVICE_KEYWORDS = ("recommend", "suggest", "tip")


class WeatherAgent(BaseAgent):
    name = "weather"

    async def process(self, request: TripRequest) -> AgentResponse:
        try:
            if not self.validate_dates(request.start_date, request.end_date):
                raise TripValidationError(INVALID_DATES)

            info = await get_weather(request.destination, request.start_date, request.end_date, self.settings.weather)

            # Mock forecasts arrive with canned advice; live ones need the model.
            if not info.summary:
                prompt = WEATHER_PROMPT.format(
                    location=info.location,
                    start_date=request.start_date.isoformat(),
                    end_date=request.end_date.isoformat(),
                    weather_data=json.dumps([day.model_dump() for day in info.forecast]),
                )
                text = await self.generate_or_empty(prompt, request.request_id)
                info.summary = leading_summary(text, DEFAULT_SUMMARY)
                info.recommendations = keyword_recommendations(text, ADVICE_KEYWORDS, 4, DEFAULT_RECOMMENDATIONS)

            log_event(request.request_id, "weather_ready", {"location": info.location, "days": len(info.forecast)})
            return AgentResponse(success=True, data=info)
        except TripValidationError as exc:
            return self.handle_error(exc, request.request_id)
