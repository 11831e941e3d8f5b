from typing import Optional

from agents.base import INVALID_DATES, BaseAgent
from agents.prompts import ITINERARY_PROMPT
from core.errors import TripValidationError
from core.logger import log_event
from extraction.itinerary import parse_itinerary
from models.schemas import AgentResponse, LocalRecommendations, TripRequest


class ItineraryAgent(BaseAgent):
    """
    Day-by-day plan. Day dates are counted from today, not the trip start;
    consumers should go by DayPlan.day.
    """

    name = "itinerary"

    async def process(
        self,
        request: TripRequest,
        local_recommendations: Optional[LocalRecommendations] = None,
    ) -> AgentResponse:
        try:
            if not self.validate_dates(request.start_date, request.end_date):
                raise TripValidationError(INVALID_DATES)

            prompt = ITINERARY_PROMPT.format(
                destination=request.destination,
                start_date=request.start_date.isoformat(),
                end_date=request.end_date.isoformat(),
                preferences=request.preferences.model_dump_json(),
                local_recommendations=local_recommendations.model_dump_json() if local_recommendations else "{}",
            )
            text = await self.generate_or_empty(prompt, request.request_id)
            itinerary = parse_itinerary(text)
            log_event(
                request.request_id,
                "itinerary_parsed",
                {"days": len(itinerary), "activities": sum(len(d.activities) for d in itinerary)},
            )
            return AgentResponse(success=True, data=itinerary)
        except TripValidationError as exc:
            return self.handle_error(exc, request.request_id)
