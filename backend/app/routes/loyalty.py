from fastapi import APIRouter, Depends, Query

from app.dependencies.services import get_simulation_service
from app.schemas.simulation_schemas import LoyaltyStatusResponse, LoyaltyTablesResponse
from app.services.simulation_service import SimulationService

router = APIRouter(
    prefix="/api/v1/loyalty",
    tags=["loyalty"]
)


@router.get("/tables", response_model=LoyaltyTablesResponse)
def get_tables(service: SimulationService = Depends(get_simulation_service)):
    return service.loyalty_tables()


@router.get("/status", response_model=LoyaltyStatusResponse)
def get_status(
    points: float = Query(0, ge=0, description="Casino points this tier year"),
    nights: float = Query(0, ge=0, description="Cumulative cruise nights"),
    service: SimulationService = Depends(get_simulation_service),
):
    """Current tier and level with progress toward the next rung of each."""
    return service.loyalty_status(points, nights)
