from .simulation import router as simulation_router
from .loyalty import router as loyalty_router

__all__ = [
    "simulation_router",
    "loyalty_router",
]
