from app.services.simulation_service import SimulationService


def get_simulation_service() -> SimulationService:
    # Tier and level tables default to Club Royale and Crown & Anchor
    return SimulationService()
