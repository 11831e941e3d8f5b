from datetime import datetime, timezone
from typing import List

from agents.base import INVALID_DATES, BaseAgent
from agents.prompts import FLIGHT_PROMPT
from core.errors import TripValidationError
from core.logger import log_event
from extraction.advice import keyword_recommendations, leading_summary
from models.schemas import AgentResponse, FlightOption, FlightSearchResults, TripRequest
from tools.airports import lookup_airport_code
from tools.flights import search_flights

DEFAULT_RECOMMENDATIONS = [
    "Compare prices across different airlines",
    "Book flights 6-8 weeks in advance for best prices",
    "Consider nearby airports for potentially lower fares",
    "Check airline baggage policies before booking",
]
ADVICE_KEYWORDS = ("recommend", "suggest", "tip", "consider")


def describe_flights(flights: List[FlightOption]) -> str:
    lines = []
    for flight in flights:
        first = flight.outbound[0] if flight.outbound else None
        departs = f"{first.departure.time} {first.departure.date}" if first else "N/A"
        lines.append(
            f"- {flight.airline}: ${flight.price.amount:g} {flight.price.currency}, "
            f"{flight.stops} stop(s), {flight.total_duration}, departs {departs}"
        )
    return "\n".join(lines)


def default_summary(flights: List[FlightOption], origin: str, destination: str) -> str:
    summary = f"Found {len(flights)} flight options from {origin} to {destination}."
    prices = [flight.price.amount for flight in flights]
    if prices:
        summary += f" Prices range from ${min(prices):g} to ${max(prices):g}."
    return summary


class FlightAgent(BaseAgent):
    name = "flight"

    def origin_city(self, request: TripRequest) -> str:
        return request.preferences.origin or self.settings.default_origin

    async def process(self, request: TripRequest) -> AgentResponse:
        try:
            if not self.validate_dates(request.start_date, request.end_date):
                raise TripValidationError(INVALID_DATES)

            origin = self.origin_city(request)
            origin_airport = lookup_airport_code(origin)
            destination_airport = lookup_airport_code(request.destination)
            # Unresolvable cities still get a three-letter placeholder code.
            origin_code = origin_airport.airport_code or origin[:3].upper()
            destination_code = destination_airport.airport_code or request.destination[:3].upper()

            flights = await search_flights(
                origin_code,
                destination_code,
                request.start_date,
                request.end_date,
                self.settings.flights,
                max_results=self.settings.max_flight_results,
                origin_city=origin,
                destination_city=request.destination,
            )

            prompt = FLIGHT_PROMPT.format(
                origin=origin,
                origin_code=origin_code,
                destination=request.destination,
                destination_code=destination_code,
                departure_date=request.start_date.isoformat(),
                return_date=request.end_date.isoformat(),
                flight_options=describe_flights(flights),
            )
            text = await self.generate_or_empty(prompt, request.request_id)

            results = FlightSearchResults(
                origin=origin,
                destination=request.destination,
                departure_date=request.start_date.isoformat(),
                return_date=request.end_date.isoformat(),
                passengers=1,
                flights=flights,
                search_summary=leading_summary(text, default_summary(flights, origin, request.destination)),
                recommendations=keyword_recommendations(text, ADVICE_KEYWORDS, 5, DEFAULT_RECOMMENDATIONS),
                last_updated=datetime.now(timezone.utc).isoformat(),
            )
            log_event(
                request.request_id,
                "flights_ready",
                {"origin": origin_code, "destination": destination_code, "count": len(flights)},
            )
            return AgentResponse(success=True, data=results)
        except TripValidationError as exc:
            return self.handle_error(exc, request.request_id)
