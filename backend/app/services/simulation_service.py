from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime
from typing import Any, Callable, Optional

from simulator import clock
from simulator.context import build_player_context, validate_player_inputs
from simulator.models import BookedCruise, CasinoOffer, PlayerContext, ScenarioInput
from simulator.simulation import run_comparison_simulation, run_simulation
from simulator.thresholds import CLUB_ROYALE_TIERS, CROWN_ANCHOR_LEVELS, ThresholdTable
from simulator.timeline import generate_timeline_projections

from app.config import SimulationSettings
from app.schemas.simulation_schemas import (
    BookedCruiseSchema,
    PlayerContextRequest,
    PlayerContextSchema,
    SimulationRequest,
    TimelineRequest,
)
from app.services.errors import ServiceError

logger = logging.getLogger(__name__)


class SimulationService:
    """Adapts API payloads to the simulator and its results back to plain dicts."""

    def __init__(
        self,
        tiers: ThresholdTable = CLUB_ROYALE_TIERS,
        levels: ThresholdTable = CROWN_ANCHOR_LEVELS,
        now: Optional[Callable[[], datetime]] = None,
    ):
        self.tiers = tiers
        self.levels = levels
        self._now = now or clock.now

    def simulate(self, request: SimulationRequest) -> dict[str, Any]:
        player_context, cruises, offers = self._inputs(request)
        scenario = ScenarioInput(**request.scenario.model_dump())

        logger.info("Simulating %s for %d booked cruise(s)", scenario.type, len(cruises))
        result = run_simulation(
            player_context, cruises, scenario, offers,
            tiers=self.tiers, levels=self.levels, now=self._now(),
        )
        return asdict(result)

    def compare(self, request: SimulationRequest) -> dict[str, Any]:
        player_context, cruises, offers = self._inputs(request)
        scenario = ScenarioInput(**request.scenario.model_dump())

        logger.info("Comparing %s against baseline for %d booked cruise(s)", scenario.type, len(cruises))
        result = run_comparison_simulation(
            player_context, cruises, scenario, offers,
            tiers=self.tiers, levels=self.levels, now=self._now(),
        )
        return asdict(result)

    def timeline(self, request: TimelineRequest) -> dict[str, Any]:
        months_ahead = request.months_ahead
        if months_ahead is None:
            months_ahead = SimulationSettings.DEFAULT_MONTHS_AHEAD
        if months_ahead > SimulationSettings.MAX_MONTHS_AHEAD:
            raise ServiceError.validation(
                f"months_ahead must be at most {SimulationSettings.MAX_MONTHS_AHEAD}.",
                months_ahead=months_ahead,
            )

        player_context = self._player_context(request.player_context)
        cruises = self._cruises(request.booked_cruises)
        self._ensure_valid(request.strict, player_context, cruises, [])

        logger.info("Projecting timeline %d month(s) ahead", months_ahead)
        projections = generate_timeline_projections(
            player_context, cruises, months_ahead=months_ahead,
            tiers=self.tiers, levels=self.levels, now=self._now(),
        )
        return {
            "months_ahead": months_ahead,
            "projections": [asdict(point) for point in projections],
        }

    def build_context(self, request: PlayerContextRequest) -> dict[str, Any]:
        player_context = build_player_context(
            self._cruises(request.booked_cruises),
            current_points=request.current_points,
            current_nights=request.current_nights,
            average_nights_per_month=request.average_nights_per_month,
            tiers=self.tiers,
            levels=self.levels,
        )
        return asdict(player_context)

    def loyalty_tables(self) -> dict[str, Any]:
        def rows(table: ThresholdTable) -> list[dict[str, Any]]:
            return [
                {
                    "name": entry.name,
                    "threshold": entry.threshold,
                    "benefits": list(entry.benefits),
                    "points_per_night": entry.points_per_night,
                }
                for entry in table
            ]

        return {"tiers": rows(self.tiers), "levels": rows(self.levels)}

    def loyalty_status(self, points: float, nights: float) -> dict[str, Any]:
        tier = self.tiers.lookup(points)
        level = self.levels.lookup(nights)
        return {
            "tier": {"current": tier, **asdict(self.tiers.progress(points, tier))},
            "level": {"current": level, **asdict(self.levels.progress(nights, level))},
        }

    def _inputs(self, request: SimulationRequest):
        player_context = self._player_context(request.player_context)
        cruises = self._cruises(request.booked_cruises)
        offers = [CasinoOffer(**offer.model_dump()) for offer in request.offers]
        self._ensure_valid(request.strict, player_context, cruises, offers)
        return player_context, cruises, offers

    @staticmethod
    def _player_context(schema: PlayerContextSchema) -> PlayerContext:
        return PlayerContext(**schema.model_dump())

    @staticmethod
    def _cruises(schemas: list[BookedCruiseSchema]) -> list[BookedCruise]:
        return [BookedCruise(**cruise.model_dump()) for cruise in schemas]

    @staticmethod
    def _ensure_valid(
        strict: bool,
        player_context: PlayerContext,
        cruises: list[BookedCruise],
        offers: list[CasinoOffer],
    ) -> None:
        if not strict:
            return
        problems = validate_player_inputs(player_context, cruises, offers)
        if problems:
            logger.info("Rejected strict simulation request: %d problem(s)", len(problems))
            raise ServiceError.validation("Simulation inputs failed strict validation.", problems=problems)
