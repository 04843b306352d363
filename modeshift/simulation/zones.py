"""
Zone-level aggregation of persona mode choices.

For each zone the personas whose typical trip starts or ends there are run
under the baseline and the scenario; their car shares give the zone's shift
index, which feeds a heuristic elasticity score and a traffic-light category.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import numpy as np

from ..agents.base import ModeSplit, Persona
from ..agents.behavioral import compute_mode_split
from ..pricing.base import ParkingZoneProfile, Scenario, TransitZoneProfile
from ..pricing.costs import compute_trip_costs

logger = logging.getLogger(__name__)

ZONE_LABELS: dict[str, str] = {
    "centre": "City centre",
    "gare": "Station (Gare)",
    "east": "East",
    "west": "West",
    "north": "North",
    "south": "South",
    "employment": "Employment zone",
    "periphery": "Periphery",
}

# Elasticity score bonus per complementary measure switched on
ALTERNATIVE_BONUS = {"carpool": 10, "shuttle": 8, "taxi": 5}

EQUITY_CAR_COST_RATIO = 1.2
ALTERNATIVE_TRANSIT_RATIO = 1.3


class ZoneCategory(Enum):
    """Shift potential tier of a zone."""

    HIGH_POTENTIAL = "high-potential"
    MODERATE = "moderate"
    LOW_POTENTIAL = "low-potential"

    @property
    def colour(self) -> str:
        return {
            ZoneCategory.HIGH_POTENTIAL: "green",
            ZoneCategory.MODERATE: "orange",
            ZoneCategory.LOW_POTENTIAL: "red",
        }[self]

    @classmethod
    def from_score(cls, score: int) -> ZoneCategory:
        if score >= 60:
            return cls.HIGH_POTENTIAL
        if score >= 35:
            return cls.MODERATE
        return cls.LOW_POTENTIAL


@dataclass(frozen=True)
class ZoneResult:
    """Outcome of a scenario in one zone."""

    zone_id: str
    label: str
    elasticity_score: int  # 0-100
    category: ZoneCategory
    shift_index: float  # Fraction of car share displaced, 0-1
    mode_split: ModeSplit  # Mean scenario split over the zone's personas
    equity_flag: bool = False
    equity_reason: Optional[str] = None
    estimated_threshold: Optional[float] = None  # CHF/h

    def to_dict(self) -> dict[str, Any]:
        return {
            "zone_id": self.zone_id,
            "label": self.label,
            "elasticity_score": self.elasticity_score,
            "category": self.category.value,
            "colour": self.category.colour,
            "shift_index": self.shift_index,
            "estimated_threshold": self.estimated_threshold,
            "equity_flag": self.equity_flag,
            "equity_reason": self.equity_reason,
            "mode_split": self.mode_split.to_dict(),
        }


def compute_shift_index(car_share_before: float, car_share_after: float) -> float:
    """Relative drop in car share, clamped to [0, 1]."""
    shift = (car_share_before - car_share_after) / max(car_share_before, 0.01)
    return float(np.clip(shift, 0, 1))


def compute_elasticity_score(
    shift_index: float,
    access_index: float,
    scenario: Scenario,
    baseline: Scenario,
) -> int:
    """
    Heuristic 0-100 score of a zone's capacity for mode shift.

    score = shift*60 + access*30*0.4 + min(dprice*8, 30)*0.3 + bonus
    where dprice is the centre peak price change versus baseline and bonus
    rewards each complementary measure switched on.
    """
    access_bonus = access_index * 30
    price_signal = min(
        (scenario.centre_peak_price - baseline.centre_peak_price) * 8, 30
    )
    alternatives_bonus = sum(
        ALTERNATIVE_BONUS[name] for name in scenario.alternatives_enabled
    )
    raw = shift_index * 60 + access_bonus * 0.4 + price_signal * 0.3 + alternatives_bonus
    # Halves round up
    return int(math.floor(float(np.clip(raw, 0, 100)) + 0.5))


def estimate_threshold(
    parking: ParkingZoneProfile,
    transit: TransitZoneProfile,
) -> float:
    """Hourly price (CHF/h) above which car displacement becomes significant."""
    return float(np.clip(parking.base_price * (1 + (1 - transit.access_index)), 2, 8))


def aggregate_zone(
    zone_id: str,
    parking: ParkingZoneProfile,
    transit: TransitZoneProfile,
    personas: list[Persona],
    scenario: Scenario,
    baseline: Scenario,
    label: Optional[str] = None,
) -> Optional[ZoneResult]:
    """
    Aggregate baseline and scenario choices of a zone's personas.

    Args:
        zone_id: Zone under study
        parking: Parking profile of the zone
        transit: Transit profile of the zone
        personas: All personas; those not visiting the zone are ignored
        scenario: Policy under study
        baseline: Reference policy
        label: Display label (defaults to ZONE_LABELS, then the zone id)

    Returns:
        ZoneResult, or None if no persona visits the zone
    """
    zone_personas = [p for p in personas if p.visits(zone_id)]
    if not zone_personas:
        logger.debug(f"Skipping zone {zone_id}: no associated personas")
        return None

    car_before: list[float] = []
    car_after: list[float] = []
    scenario_splits: list[ModeSplit] = []
    at_risk: list[str] = []

    for persona in zone_personas:
        baseline_costs = compute_trip_costs(persona, parking, transit, baseline, zone_id)
        scenario_costs = compute_trip_costs(persona, parking, transit, scenario, zone_id)

        before = compute_mode_split(baseline_costs, persona)
        after = compute_mode_split(scenario_costs, persona)

        car_before.append(before.car)
        car_after.append(after.car)
        scenario_splits.append(after)

        # Equity: car gets much dearer and nothing credible replaces it
        costs_increased = scenario_costs.car > baseline_costs.car * EQUITY_CAR_COST_RATIO
        has_alternative = (
            scenario_costs.transit < scenario_costs.car * ALTERNATIVE_TRANSIT_RATIO
            or math.isfinite(scenario_costs.carpool)
            or math.isfinite(scenario_costs.shuttle)
        )
        if costs_increased and not has_alternative and persona.is_low_income:
            at_risk.append(persona.label)

    shift_index = compute_shift_index(float(np.mean(car_before)), float(np.mean(car_after)))
    score = compute_elasticity_score(shift_index, transit.access_index, scenario, baseline)

    return ZoneResult(
        zone_id=zone_id,
        label=label or parking.label or ZONE_LABELS.get(zone_id, zone_id),
        elasticity_score=score,
        category=ZoneCategory.from_score(score),
        shift_index=shift_index,
        mode_split=ModeSplit.mean(scenario_splits),
        equity_flag=bool(at_risk),
        equity_reason=f"Personas at risk: {', '.join(at_risk)}" if at_risk else None,
        estimated_threshold=(
            estimate_threshold(parking, transit) if zone_id == "centre" else None
        ),
    )


def aggregate_zones(
    parking_by_zone: dict[str, ParkingZoneProfile],
    transit_by_zone: dict[str, TransitZoneProfile],
    personas: list[Persona],
    scenario: Scenario,
    baseline: Scenario,
    zone_labels: Optional[dict[str, str]] = None,
) -> list[ZoneResult]:
    """Zone results in parking-profile order, skipping incomplete zones."""
    zone_labels = zone_labels or {}
    results = []

    for zone_id, parking in parking_by_zone.items():
        transit = transit_by_zone.get(zone_id)
        if transit is None:
            # TODO: raise here instead once callers can opt into strict reference data
            logger.debug(f"Skipping zone {zone_id}: no transit profile")
            continue

        result = aggregate_zone(
            zone_id,
            parking,
            transit,
            personas,
            scenario,
            baseline,
            label=zone_labels.get(zone_id),
        )
        if result is not None:
            results.append(result)

    return results
