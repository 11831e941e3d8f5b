from datetime import datetime, timezone
from typing import List

from agents.base import INVALID_DATES, BaseAgent
from agents.prompts import ACCOMMODATION_PROMPT
from core.errors import TripValidationError
from core.logger import log_event
from extraction.advice import labelled_recommendations, labelled_summary
from models.schemas import AccommodationOption, AccommodationSearchResults, AgentResponse, TripRequest
from tools.accommodation import billable_nights, find_accommodation

DEFAULT_SUMMARY = "Accommodation search completed successfully."


def describe_accommodations(options: List[AccommodationOption]) -> str:
    return "\n".join(
        f"- {option.name} ({option.type}, rating {option.rating:g}): "
        f"${option.price_per_night.amount:g}/night, {option.location.distance_from_center or 'distance unknown'} "
        f"from center; amenities: {', '.join(option.amenities) or 'n/a'}"
        for option in options
    )


class AccommodationAgent(BaseAgent):
    name = "accommodation"

    async def process(self, request: TripRequest) -> AgentResponse:
        try:
            if not self.validate_dates(request.start_date, request.end_date):
                raise TripValidationError(INVALID_DATES)

            options = await find_accommodation(request, self.settings.accommodation)
            prefs = request.preferences
            prompt = ACCOMMODATION_PROMPT.format(
                destination=request.destination,
                start_date=request.start_date.isoformat(),
                end_date=request.end_date.isoformat(),
                accommodation_type=prefs.accommodation_type or "any",
                budget=prefs.budget or "not specified",
                travel_style=prefs.travel_style or "not specified",
                accommodation_options=describe_accommodations(options),
            )
            text = await self.generate_or_empty(prompt, request.request_id)

            results = AccommodationSearchResults(
                destination=request.destination,
                check_in_date=request.start_date.isoformat(),
                check_out_date=request.end_date.isoformat(),
                nights=billable_nights(request),
                accommodation_type=prefs.accommodation_type or "hotel",
                accommodations=options,
                search_summary=labelled_summary(text, DEFAULT_SUMMARY),
                recommendations=labelled_recommendations(text),
                last_updated=datetime.now(timezone.utc).isoformat(),
            )
            log_event(request.request_id, "accommodation_ready", {"count": len(options)})
            return AgentResponse(success=True, data=results)
        except TripValidationError as exc:
            return self.handle_error(exc, request.request_id)
