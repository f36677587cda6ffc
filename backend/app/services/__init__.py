from .errors import ServiceError
from .simulation_service import SimulationService

__all__ = [
    "ServiceError",
    "SimulationService",
]
