from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from app.dependencies.services import get_simulation_service
from app.schemas.simulation_schemas import (
    PlayerContextRequest,
    PlayerContextSchema,
    SimulationRequest,
    SimulationResultResponse,
    TimelineRequest,
    TimelineResponse,
)
from app.services.errors import ServiceError
from app.services.simulation_service import SimulationService

router = APIRouter(prefix="/api/v1/simulation", tags=["simulation"])


def _service_error(exc: ServiceError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.to_detail())


@router.post("", response_model=SimulationResultResponse)
def simulate(
    payload: SimulationRequest,
    service: SimulationService = Depends(get_simulation_service),
):
    """
    Simulate one what-if scenario against the player's current standing.

    Request body:
    {
        "player_context": {...},
        "booked_cruises": [{"id": "c1", "nights": 7, "total_price": 1500, "retail_value": 2500}],
        "scenario": {"type": "add_cruise", "new_nights": 7, "new_spend": 1800}
    }
    """
    try:
        return service.simulate(payload)
    except ServiceError as exc:
        raise _service_error(exc)


@router.post("/compare", response_model=SimulationResultResponse)
def compare(
    payload: SimulationRequest,
    service: SimulationService = Depends(get_simulation_service),
):
    """Simulate a scenario and attach the do-nothing baseline with the difference."""
    try:
        return service.compare(payload)
    except ServiceError as exc:
        raise _service_error(exc)


@router.post("/timeline", response_model=TimelineResponse)
def timeline(
    payload: TimelineRequest,
    service: SimulationService = Depends(get_simulation_service),
):
    try:
        return service.timeline(payload)
    except ServiceError as exc:
        raise _service_error(exc)


@router.post("/context", response_model=PlayerContextSchema)
def build_context(
    payload: PlayerContextRequest,
    service: SimulationService = Depends(get_simulation_service),
):
    """Derive a player context from loyalty standing and booked cruise history."""
    return service.build_context(payload)
