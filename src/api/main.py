# src/api/main.py
import asyncio
import json
import logging
from datetime import date
from typing import List, Optional

from anthropic import Anthropic
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse

from agents.coordinator import TravelPlanningCoordinator
from core.config import PlannerSettings
from models.schemas import TravelPlan, TripPreferences, TripRequest

logging.basicConfig(level=logging.INFO)

settings = PlannerSettings.from_env()


def build_client(settings: PlannerSettings) -> Optional[Anthropic]:
    if not settings.llm.configured:
        return None
    kwargs = {"api_key": settings.llm.api_key}
    if settings.llm.base_url:
        kwargs["base_url"] = settings.llm.base_url
    return Anthropic(**kwargs)


app = FastAPI(title="Travel Plan Agents")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

coordinator = TravelPlanningCoordinator(settings=settings, client=build_client(settings))


@app.get("/health")
async def health() -> dict:
    return {"status": "ok", "llm_configured": settings.llm.configured}


@app.post("/api/generate", response_model=TravelPlan)
async def generate(req: TripRequest) -> TravelPlan:
    result = await coordinator.create_travel_plan(req)
    if not result.success:
        raise HTTPException(status_code=500, detail=result.error or "Failed to generate travel plan")
    return result.data


@app.get("/api/generate/stream")
async def generate_stream(
    destination: str,
    start_date: date,
    end_date: date,
    origin: str = "",
    budget: str = "",
    accommodation_type: str = "",
    travel_style: str = "",
    interests: Optional[List[str]] = Query(None),
):
    request = TripRequest(
        destination=destination,
        start_date=start_date,
        end_date=end_date,
        preferences=TripPreferences(
            origin=origin,
            budget=budget,
            accommodation_type=accommodation_type,
            travel_style=travel_style,
            interests=interests or [],
        ),
    )

    async def event_generator():
        queue: asyncio.Queue = asyncio.Queue()

        async def progress(evt: dict) -> None:
            await queue.put(evt)

        async def run_coordinator() -> None:
            try:
                result = await coordinator.create_travel_plan(request, progress_cb=progress)
                if result.success:
                    await queue.put({"stage": "done", "plan": result.data.model_dump(mode="json")})
                else:
                    await queue.put({"stage": "error", "message": result.error})
            except Exception as exc:
                await queue.put({"stage": "error", "message": str(exc)})
            finally:
                await queue.put(None)

        runner = asyncio.create_task(run_coordinator())
        try:
            while True:
                evt = await queue.get()
                if evt is None:
                    break
                yield f"data: {json.dumps(evt)}\n\n"
        finally:
            runner.cancel()

    return StreamingResponse(event_generator(), media_type="text/event-stream")
