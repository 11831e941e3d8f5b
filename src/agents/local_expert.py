from agents.base import INVALID_DATES, BaseAgent
from agents.prompts import LOCAL_EXPERT_PROMPT, local_expert_sections
from core.errors import TripValidationError
from core.logger import log_event
from extraction.sections import parse_recommendations
from models.schemas import AgentResponse, TripRequest


class LocalExpertAgent(BaseAgent):
    name = "local_expert"

    async def process(self, request: TripRequest) -> AgentResponse:
        try:
            if not self.validate_dates(request.start_date, request.end_date):
                raise TripValidationError(INVALID_DATES)

            prompt = LOCAL_EXPERT_PROMPT.format(
                destination=request.destination,
                start_date=request.start_date.isoformat(),
                end_date=request.end_date.isoformat(),
                preferences=request.preferences.model_dump_json(),
                sections=local_expert_sections(),
            )
            text = await self.generate_or_empty(prompt, request.request_id)
            recommendations = parse_recommendations(text)
            log_event(
                request.request_id,
                "local_expert_parsed",
                {field: len(items) for field, items in recommendations.model_dump().items()},
            )
            return AgentResponse(success=True, data=recommendations)
        except TripValidationError as exc:
            return self.handle_error(exc, request.request_id)
