"""
Persona-level before/after comparison.

Each persona's typical trip is costed under the baseline and the scenario in
its destination zone. The dominant mode of each split determines which cost
the persona is assumed to pay, and short explanation bullets are derived
from the resulting delta.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

from ..agents.base import Persona, TravelMode
from ..agents.behavioral import compute_mode_split
from ..pricing.base import FALLBACK_ZONE, ParkingZoneProfile, Scenario, TransitZoneProfile
from ..pricing.costs import compute_trip_costs

logger = logging.getLogger(__name__)

NEUTRAL_DELTA_CHF = 0.5
EQUITY_COST_RATIO = 1.15


def round_cost(value: float) -> float:
    """Round to one decimal, halves up."""
    return math.floor(value * 10 + 0.5) / 10


@dataclass(frozen=True)
class PersonaResult:
    """Outcome of a scenario for one persona."""

    persona_id: str
    label: str
    before_cost: float  # CHF per trip
    after_cost: float
    cost_delta: float
    dominant_mode_before: TravelMode
    dominant_mode_after: TravelMode
    equity_flag: bool
    explanation: tuple[str, ...] = ()
    emoji: str = ""
    tags: tuple[str, ...] = ()

    @property
    def mode_changed(self) -> bool:
        return self.dominant_mode_before != self.dominant_mode_after

    @property
    def flag_label(self) -> str:
        """Display label used in consolidated equity flags."""
        return f"{self.emoji} {self.label}".strip()

    def to_dict(self) -> dict[str, Any]:
        return {
            "persona_id": self.persona_id,
            "label": self.label,
            "emoji": self.emoji,
            "before_cost": self.before_cost,
            "after_cost": self.after_cost,
            "cost_delta": self.cost_delta,
            "dominant_mode_before": self.dominant_mode_before.label,
            "dominant_mode_after": self.dominant_mode_after.label,
            "equity_flag": self.equity_flag,
            "tags": list(self.tags),
            "explanation": list(self.explanation),
        }


def explain_outcome(
    persona: Persona,
    delta: float,
    mode_before: TravelMode,
    mode_after: TravelMode,
    equity_flag: bool,
) -> list[str]:
    """Deterministic explanation bullets for a persona outcome."""
    bullets = []

    if abs(delta) < NEUTRAL_DELTA_CHF:
        bullets.append(
            "Neutral cost impact: the scenario does not materially change "
            "the total trip cost for this profile."
        )
    elif delta > 0:
        bullets.append(f"Estimated increase: +{delta:.1f} CHF/trip compared with today.")
    else:
        bullets.append(f"Estimated saving: {delta:.1f} CHF/trip compared with today.")

    if mode_before != mode_after:
        bullets.append(
            f"Likely mode shift: {mode_before.label} -> {mode_after.label} "
            "under the scenario settings."
        )
    else:
        bullets.append(f"Stable preferred mode: {mode_after.label} remains the dominant option.")

    if equity_flag:
        bullets.append(
            "Equity risk: low income and a cost increase without an accessible "
            "alternative. Compensating measures are recommended."
        )
    elif persona.alternatives and mode_after != TravelMode.CAR:
        bullets.append(
            f"Alternative available: {persona.alternatives[0].upper()} is a credible "
            "option for this profile."
        )

    return bullets


def aggregate_persona(
    persona: Persona,
    parking_by_zone: dict[str, ParkingZoneProfile],
    transit_by_zone: dict[str, TransitZoneProfile],
    scenario: Scenario,
    baseline: Scenario,
) -> PersonaResult:
    """
    Compare a persona's dominant mode and trip cost before and after.

    Profiles come from the destination zone; when it has none, the centre
    zone's profiles are used instead.
    """
    zone_id = persona.trip.destination_zone

    parking = parking_by_zone.get(zone_id)
    if parking is None:
        logger.debug(f"No parking profile for {zone_id}; {persona.persona_id} uses {FALLBACK_ZONE}")
        parking = parking_by_zone[FALLBACK_ZONE]
    transit = transit_by_zone.get(zone_id)
    if transit is None:
        logger.debug(f"No transit profile for {zone_id}; {persona.persona_id} uses {FALLBACK_ZONE}")
        transit = transit_by_zone[FALLBACK_ZONE]

    baseline_costs = compute_trip_costs(persona, parking, transit, baseline, zone_id)
    scenario_costs = compute_trip_costs(persona, parking, transit, scenario, zone_id)

    mode_before = compute_mode_split(baseline_costs, persona).dominant_mode()
    mode_after = compute_mode_split(scenario_costs, persona).dominant_mode()

    before_cost = baseline_costs.cost(mode_before)
    after_cost = scenario_costs.cost(mode_after)
    if math.isinf(after_cost):
        after_cost = scenario_costs.car

    equity_flag = persona.is_low_income and after_cost > before_cost * EQUITY_COST_RATIO
    delta = after_cost - before_cost

    return PersonaResult(
        persona_id=persona.persona_id,
        label=persona.label,
        before_cost=round_cost(before_cost),
        after_cost=round_cost(after_cost),
        cost_delta=round_cost(delta),
        dominant_mode_before=mode_before,
        dominant_mode_after=mode_after,
        equity_flag=equity_flag,
        explanation=tuple(
            explain_outcome(persona, delta, mode_before, mode_after, equity_flag)
        ),
        emoji=persona.emoji,
        tags=persona.tags,
    )


def aggregate_personas(
    personas: list[Persona],
    parking_by_zone: dict[str, ParkingZoneProfile],
    transit_by_zone: dict[str, TransitZoneProfile],
    scenario: Scenario,
    baseline: Scenario,
) -> list[PersonaResult]:
    return [
        aggregate_persona(p, parking_by_zone, transit_by_zone, scenario, baseline)
        for p in personas
    ]
