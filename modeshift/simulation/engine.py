"""
Simulation orchestrator.

Runs a pricing scenario against the fixed baseline over all zones and
personas and assembles a self-contained, JSON-serializable result.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

import numpy as np

from ..agents.base import Persona
from ..pricing.base import (
    ParkingZoneProfile,
    Scenario,
    TransitZoneProfile,
    baseline_scenario,
)
from .personas import PersonaResult, aggregate_personas
from .zones import ZoneCategory, ZoneResult, aggregate_zones

logger = logging.getLogger(__name__)

HYPOTHESES: tuple[str, ...] = (
    "Parking duration: short stay = 1h, long stay = 3.5h (average proxy).",
    "Marginal car running cost = 0.18 CHF/km (excluding depreciation).",
    "Softmax temperature 0.6 - moderate sensitivity to cost differences.",
    "Carpool available if schedule rigidity < 0.85 and matching > 0.3.",
    "Demand-responsive shuttle: base 2.50 CHF + 0.35 CHF/km, time +20% vs direct.",
    "Taxi vouchers: unit value 8 CHF, eligible personas with irregular hours/seniors.",
    "Order-of-magnitude results; calibration on real data required for definitive figures.",
)


@dataclass(frozen=True)
class SimulationResults:
    """Complete output of one simulation run."""

    run_id: str
    timestamp: str
    global_shift_index: float
    zone_results: tuple[ZoneResult, ...]
    persona_results: tuple[PersonaResult, ...]
    equity_flags: tuple[str, ...]
    hypotheses: tuple[str, ...]
    summary: str
    scenario: Optional[Scenario] = field(default=None, compare=False)

    def zone(self, zone_id: str) -> Optional[ZoneResult]:
        for result in self.zone_results:
            if result.zone_id == zone_id:
                return result
        return None

    def persona(self, persona_id: str) -> Optional[PersonaResult]:
        for result in self.persona_results:
            if result.persona_id == persona_id:
                return result
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "timestamp": self.timestamp,
            "global_shift_index": self.global_shift_index,
            "zone_results": [z.to_dict() for z in self.zone_results],
            "persona_results": [p.to_dict() for p in self.persona_results],
            "equity_flags": list(self.equity_flags),
            "hypotheses": list(self.hypotheses),
            "summary": self.summary,
        }


def build_summary(
    zone_results: list[ZoneResult],
    global_shift_index: float,
    equity_flags: list[str],
) -> str:
    """One-paragraph summary of a run."""
    high_potential = sum(
        1 for z in zone_results if z.category == ZoneCategory.HIGH_POTENTIAL
    )
    if equity_flags:
        equity_text = f"{len(equity_flags)} persona(s) at equity risk detected."
    else:
        equity_text = "No major equity risk identified."

    return (
        f"Simulated scenario: {len(zone_results)} zones analysed. "
        f"{high_potential} zone(s) with high shift potential (green). "
        f"Estimated global shift: {global_shift_index * 100:.0f}%. "
        f"{equity_text}"
    )


class SimulationEngine:
    """
    Stateless scenario evaluator over fixed reference data.

    Holds the parking, transit and persona references; each call to run()
    is independent and leaves the engine unchanged.
    """

    def __init__(
        self,
        parking_profiles: list[ParkingZoneProfile],
        transit_profiles: list[TransitZoneProfile],
        personas: list[Persona],
        zone_labels: Optional[dict[str, str]] = None,
    ):
        self.parking_by_zone = {p.zone_id: p for p in parking_profiles}
        self.transit_by_zone = {t.zone_id: t for t in transit_profiles}
        self.personas = list(personas)
        self.zone_labels = dict(zone_labels or {})

    def run(
        self,
        scenario: Scenario,
        run_id: Optional[str] = None,
        timestamp: Optional[str] = None,
    ) -> SimulationResults:
        """
        Evaluate a scenario against the baseline.

        Args:
            scenario: Policy levers under study
            run_id: Identifier for the run (generated if omitted)
            timestamp: ISO timestamp (current UTC time if omitted)

        Returns:
            SimulationResults
        """
        baseline = baseline_scenario()
        run_id = run_id or f"sim_{uuid.uuid4().hex[:8]}"
        timestamp = timestamp or datetime.now(timezone.utc).isoformat()

        logger.info(
            f"Running {run_id}: {len(self.parking_by_zone)} zones, "
            f"{len(self.personas)} personas"
        )

        zone_results = aggregate_zones(
            self.parking_by_zone,
            self.transit_by_zone,
            self.personas,
            scenario,
            baseline,
            zone_labels=self.zone_labels,
        )
        persona_results = aggregate_personas(
            self.personas,
            self.parking_by_zone,
            self.transit_by_zone,
            scenario,
            baseline,
        )

        if zone_results:
            global_shift_index = float(np.mean([z.shift_index for z in zone_results]))
        else:
            global_shift_index = 0.0

        equity_flags = [p.flag_label for p in persona_results if p.equity_flag]

        logger.info(
            f"{run_id} complete: global shift {global_shift_index:.3f}, "
            f"{len(equity_flags)} equity flag(s)"
        )

        return SimulationResults(
            run_id=run_id,
            timestamp=timestamp,
            global_shift_index=global_shift_index,
            zone_results=tuple(zone_results),
            persona_results=tuple(persona_results),
            equity_flags=tuple(equity_flags),
            hypotheses=HYPOTHESES,
            summary=build_summary(zone_results, global_shift_index, equity_flags),
            scenario=scenario,
        )


def run_simulation(
    scenario: Scenario,
    parking_profiles: list[ParkingZoneProfile],
    transit_profiles: list[TransitZoneProfile],
    personas: list[Persona],
    zone_labels: Optional[dict[str, str]] = None,
    run_id: Optional[str] = None,
    timestamp: Optional[str] = None,
) -> SimulationResults:
    """
    Convenience function to run a simulation.

    Args:
        scenario: Policy levers under study
        parking_profiles: Parking profile per zone
        transit_profiles: Transit profile per zone
        personas: Representative travelers
        zone_labels: Optional display labels per zone id
        run_id: Optional run identifier
        timestamp: Optional ISO timestamp

    Returns:
        SimulationResults
    """
    engine = SimulationEngine(parking_profiles, transit_profiles, personas, zone_labels)
    return engine.run(scenario, run_id=run_id, timestamp=timestamp)
