"""
Base traveler types and behavioral interfaces for mode-shift simulation.

Personas represent representative travelers whose typical trip, value of
time and attitudes drive the choice among car, transit, carpool,
demand-responsive shuttle and subsidized taxi.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np
from numpy.typing import NDArray


class TravelMode(Enum):
    """Travel modes, in the canonical order used by cost and split vectors."""

    CAR = "car"
    TRANSIT = "transit"
    CARPOOL = "carpool"
    SHUTTLE = "shuttle"  # Demand-responsive transport
    TAXI = "taxi"  # Subsidized taxi vouchers

    @property
    def label(self) -> str:
        return MODE_LABELS[self]


MODE_ORDER: tuple[TravelMode, ...] = tuple(TravelMode)

MODE_LABELS: dict[TravelMode, str] = {
    TravelMode.CAR: "Car",
    TravelMode.TRANSIT: "Transit",
    TravelMode.CARPOOL: "Carpool",
    TravelMode.SHUTTLE: "Shuttle",
    TravelMode.TAXI: "Taxi vouchers",
}


class IncomeBracket(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TimeWindow(Enum):
    PEAK = "peak"
    OFFPEAK = "offpeak"


class DurationType(Enum):
    SHORT = "short"
    LONG = "long"


@dataclass(frozen=True)
class TypicalTrip:
    """The trip a persona makes on a representative day."""

    origin_zone: str
    destination_zone: str
    time_window: TimeWindow = TimeWindow.PEAK
    duration: DurationType = DurationType.SHORT


@dataclass(frozen=True)
class Persona:
    """Representative traveler with fixed behavioral parameters."""

    persona_id: str
    label: str
    trip: TypicalTrip
    # Value of time (CHF/hour)
    value_of_time: float = 25.0
    price_sensitivity: float = 0.5
    # Attitudes, all in [0, 1]
    schedule_rigidity: float = 0.5
    transit_affinity: float = 0.5
    car_dependency: float = 0.5
    income: IncomeBracket = IncomeBracket.MEDIUM
    emoji: str = ""
    description: str = ""
    tags: tuple[str, ...] = ()
    alternatives: tuple[str, ...] = ()

    def visits(self, zone_id: str) -> bool:
        """Whether the typical trip starts or ends in a zone."""
        return zone_id in (self.trip.origin_zone, self.trip.destination_zone)

    @property
    def is_low_income(self) -> bool:
        return self.income == IncomeBracket.LOW


@dataclass(frozen=True)
class ModeSplit:
    """Choice probabilities over the five modes."""

    car: float = 0.0
    transit: float = 0.0
    carpool: float = 0.0
    shuttle: float = 0.0
    taxi: float = 0.0

    @classmethod
    def from_array(cls, probs: NDArray) -> ModeSplit:
        return cls(*(float(p) for p in probs))

    @classmethod
    def mean(cls, splits: list[ModeSplit]) -> ModeSplit:
        """Average several splits entry-wise."""
        if not splits:
            return cls()
        stacked = np.vstack([s.as_array() for s in splits])
        return cls.from_array(stacked.mean(axis=0))

    def as_array(self) -> NDArray:
        return np.array([self.car, self.transit, self.carpool, self.shuttle, self.taxi])

    def probability(self, mode: TravelMode) -> float:
        return getattr(self, mode.value)

    def dominant_mode(self) -> TravelMode:
        """Most probable mode; ties go to the earliest mode in MODE_ORDER."""
        return MODE_ORDER[int(np.argmax(self.as_array()))]

    def to_dict(self) -> dict[str, float]:
        return {mode.value: self.probability(mode) for mode in MODE_ORDER}


class BehavioralModel(ABC):
    """Abstract base class for mode-choice response functions."""

    @abstractmethod
    def choice_probabilities(
        self,
        costs: NDArray,
        persona: Persona,
    ) -> NDArray:
        """Turn a cost vector into choice probabilities for a persona."""
        pass

    def describe(self) -> dict[str, Any]:
        """Parameters worth disclosing alongside results."""
        return {"model": type(self).__name__}


@dataclass
class PopulationSummary:
    """Headcount of a persona set by income bracket and dominant attitude."""

    n_personas: int = 0
    by_income: dict[str, int] = field(default_factory=dict)
    car_dependent: int = 0
    transit_leaning: int = 0


def summarize_personas(personas: list[Persona]) -> PopulationSummary:
    """Count personas per income bracket and by car/transit leaning."""
    summary = PopulationSummary(n_personas=len(personas))
    for persona in personas:
        key = persona.income.value
        summary.by_income[key] = summary.by_income.get(key, 0) + 1
        if persona.car_dependency >= 0.6:
            summary.car_dependent += 1
        if persona.transit_affinity >= 0.6:
            summary.transit_leaning += 1
    return summary
