import asyncio
import logging
from typing import Any, Callable, Dict, Optional

from anthropic import Anthropic

from agents.accommodation import AccommodationAgent
from agents.budget import BudgetAgent
from agents.flight import FlightAgent
from agents.itinerary import ItineraryAgent
from agents.local_expert import LocalExpertAgent
from agents.weather import WeatherAgent
from core.config import PlannerSettings
from core.logger import log_event
from models.schemas import AgentResponse, LocalRecommendations, TravelPlan, TripRequest

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[Dict[str, Any]], Any]


class TravelPlanningCoordinator:
    """
    Runs the planning agents in dependency order and assembles a TravelPlan.

    Local expert, itinerary and budget are required; weather, flights and
    accommodation are best-effort and leave their slot empty on failure.
    """

    def __init__(self, settings: Optional[PlannerSettings] = None, client: Optional[Anthropic] = None):
        self.settings = settings or PlannerSettings()
        self.local_expert_agent = LocalExpertAgent(self.settings, client)
        self.itinerary_agent = ItineraryAgent(self.settings, client)
        self.budget_agent = BudgetAgent(self.settings, client)
        self.weather_agent = WeatherAgent(self.settings, client)
        self.flight_agent = FlightAgent(self.settings, client)
        self.accommodation_agent = AccommodationAgent(self.settings, client)

    async def _emit_progress(self, cb: Optional[ProgressCallback], payload: Dict[str, Any]) -> None:
        if not cb:
            return
        try:
            result = cb(payload)
            if asyncio.iscoroutine(result):
                await result
        except Exception:
            # Progress updates should never break core flow
            return

    async def _optional(self, name: str, coro: Any, request_id: str) -> Any:
        try:
            response = await coro
        except Exception as exc:
            logger.warning("%s agent raised: %s", name, exc)
            log_event(request_id, "optional_agent_failed", {"agent": name, "error": str(exc)})
            return None
        if not response.success:
            log_event(request_id, "optional_agent_failed", {"agent": name, "error": response.error})
            return None
        return response.data

    async def create_travel_plan(
        self,
        request: TripRequest,
        progress_cb: Optional[ProgressCallback] = None,
    ) -> AgentResponse:
        rid = request.request_id
        log_event(rid, "plan_started", {"destination": request.destination})

        await self._emit_progress(progress_cb, {"stage": "local_expert", "message": "Gathering local insights"})
        local = await self.local_expert_agent.process(request)
        if not local.success:
            return self._failed(rid, local.error)
        recs: LocalRecommendations = local.data

        await self._emit_progress(progress_cb, {"stage": "itinerary", "message": "Building the day-by-day plan"})
        itinerary = await self.itinerary_agent.process(request, local_recommendations=recs)
        if not itinerary.success:
            return self._failed(rid, itinerary.error)

        await self._emit_progress(progress_cb, {"stage": "budget", "message": "Estimating the budget"})
        budget = await self.budget_agent.process(request, planned_activities=itinerary.data)
        if not budget.success:
            return self._failed(rid, budget.error)

        await self._emit_progress(
            progress_cb, {"stage": "enrichment", "message": "Checking weather, flights and accommodation"}
        )
        weather_info, flight_info, accommodation_info = await asyncio.gather(
            self._optional("weather", self.weather_agent.process(request), rid),
            self._optional("flight", self.flight_agent.process(request), rid),
            self._optional("accommodation", self.accommodation_agent.process(request), rid),
        )

        plan = TravelPlan(
            destination=request.destination,
            start_date=request.start_date,
            end_date=request.end_date,
            itinerary=itinerary.data or [],
            budget=budget.data,
            general_tips=[*recs.customs, *recs.safety, *recs.timing, *recs.seasonal],
            local_recommendations=[*recs.hidden_gems, *recs.dining, *recs.shopping, *recs.events],
            language_tips=list(recs.language),
            weather_info=weather_info,
            flight_info=flight_info,
            accommodation_info=accommodation_info,
        )
        log_event(
            rid,
            "plan_completed",
            {
                "days": len(plan.itinerary),
                "budget_total": plan.budget.total,
                "weather": weather_info is not None,
                "flights": flight_info is not None,
                "accommodation": accommodation_info is not None,
            },
        )
        return AgentResponse(success=True, data=plan)

    def _failed(self, request_id: str, error: str) -> AgentResponse:
        message = error or "Failed to create travel plan"
        log_event(request_id, "plan_failed", {"error": message})
        return AgentResponse(success=False, error=message)
