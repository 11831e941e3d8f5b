from typing import List, Optional

from agents.base import INVALID_DATES, BaseAgent
from agents.prompts import BUDGET_PROMPT
from core.errors import TripValidationError
from core.logger import log_event
from extraction.budget import extract_budget
from models.schemas import AgentResponse, DayPlan, TripRequest


def activity_names(days: Optional[List[DayPlan]]) -> str:
    names = [activity.name for day in days or [] for activity in day.activities]
    return ", ".join(names) if names else "none planned yet"


class BudgetAgent(BaseAgent):
    name = "budget"

    async def process(
        self,
        request: TripRequest,
        planned_activities: Optional[List[DayPlan]] = None,
    ) -> AgentResponse:
        try:
            if not self.validate_dates(request.start_date, request.end_date):
                raise TripValidationError(INVALID_DATES)

            prompt = BUDGET_PROMPT.format(
                destination=request.destination,
                start_date=request.start_date.isoformat(),
                end_date=request.end_date.isoformat(),
                preferences=request.preferences.model_dump_json(),
                planned_activities=activity_names(planned_activities),
            )
            text = await self.generate_or_empty(prompt, request.request_id)
            budget = extract_budget(text, self.settings.budget_rules, trip_days=request.nights + 1)
            log_event(request.request_id, "budget_reconciled", budget.model_dump())
            return AgentResponse(success=True, data=budget)
        except TripValidationError as exc:
            return self.handle_error(exc, request.request_id)
