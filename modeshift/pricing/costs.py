"""
Generalized trip cost per mode.

Every mode's cost is expressed in CHF-equivalent: out-of-pocket money plus
travel time valued at the persona's value of time, plus fixed penalties for
parking search, transit access and schedule inconvenience. A mode that is not
offered in the scenario, or not open to the persona, costs +inf.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..agents.base import DurationType, MODE_ORDER, Persona, TimeWindow, TravelMode
from .base import (
    CENTRE_LEVER_ZONES,
    PERIPHERY_LEVER_ZONES,
    REFERENCE_CENTRE_PEAK_PRICE,
    ParkingZoneProfile,
    Scenario,
    TransitZoneProfile,
)

# Stay duration proxies (hours)
SHORT_STAY_H = 1.0
LONG_STAY_H = 3.5

CAR_KM_COST = 0.18  # Marginal running cost, CHF/km
SHUTTLE_BASE_FEE = 2.5
SHUTTLE_PER_KM = 0.35
TAXI_BASE = 12.0
TAXI_PER_KM = 2.8
TAXI_VOUCHER_VALUE = 8.0
TRANSFER_PENALTY = 2.5  # Walk/transfer inconvenience at zero access

MIN_MATCHING_POTENTIAL = 0.3

TAXI_ELIGIBLE_TAGS = frozenset(
    {"irregular hours", "senior", "reduced mobility", "shift-worker", "urgent"}
)


@dataclass(frozen=True)
class TripCostVector:
    """CHF-equivalent cost of each mode; math.inf marks an unavailable mode."""

    car: float
    transit: float
    carpool: float = math.inf
    shuttle: float = math.inf
    taxi: float = math.inf

    def as_array(self) -> NDArray:
        return np.array([self.car, self.transit, self.carpool, self.shuttle, self.taxi])

    def cost(self, mode: TravelMode) -> float:
        return getattr(self, mode.value)

    def is_available(self, mode: TravelMode) -> bool:
        return math.isfinite(self.cost(mode))

    def available_modes(self) -> list[TravelMode]:
        return [mode for mode in MODE_ORDER if self.is_available(mode)]


def _clamp(value: float, low: float, high: float) -> float:
    return float(np.clip(value, low, high))


def time_cost(minutes: float, value_of_time: float) -> float:
    """Value of travel time in CHF."""
    return minutes / 60 * value_of_time


def stay_hours(duration: DurationType) -> float:
    return SHORT_STAY_H if duration == DurationType.SHORT else LONG_STAY_H


def estimated_distance_km(transit: TransitZoneProfile) -> float:
    """Trip length proxy: poorly connected zones lie further out."""
    return _clamp((1 - transit.access_index) * 20 + 2, 1, 25)


def hourly_parking_price(
    parking: ParkingZoneProfile,
    scenario: Scenario,
    zone_id: str,
    time_window: TimeWindow,
) -> float:
    """Hourly price a zone charges under a scenario."""
    peak = time_window == TimeWindow.PEAK
    if zone_id in CENTRE_LEVER_ZONES:
        return scenario.centre_peak_price if peak else scenario.centre_offpeak_price
    if zone_id in PERIPHERY_LEVER_ZONES:
        return scenario.periphery_peak_price if peak else scenario.periphery_offpeak_price

    # Other zones follow the centre peak lever relative to today's price
    multiplier = parking.peak_multiplier if peak else parking.offpeak_multiplier
    scenario_factor = scenario.centre_peak_price / REFERENCE_CENTRE_PEAK_PRICE
    return parking.base_price * scenario_factor * multiplier


def effective_parking_price(
    parking: ParkingZoneProfile,
    scenario: Scenario,
    zone_id: str,
    time_window: TimeWindow,
    duration: DurationType,
) -> float:
    """
    Parking charge for a whole stay.

    With progressive pricing (slope > 1), long stays pay the base price for
    the first hour and base * slope for each hour beyond it.
    """
    hours = stay_hours(duration)
    base_price = hourly_parking_price(parking, scenario, zone_id, time_window)

    if scenario.progressive_slope_factor > 1 and duration == DurationType.LONG:
        first_hour = base_price * 1
        remaining = (hours - 1) * base_price * scenario.progressive_slope_factor
        return first_hour + remaining

    return base_price * hours


def carpool_matching_potential(persona: Persona) -> float:
    """Chance of finding a match; rigid schedules match poorly."""
    return _clamp(1 - persona.schedule_rigidity * 0.7, 0.1, 0.9)


def is_taxi_eligible(persona: Persona) -> bool:
    return any(tag in TAXI_ELIGIBLE_TAGS for tag in persona.tags)


def compute_trip_costs(
    persona: Persona,
    parking: ParkingZoneProfile,
    transit: TransitZoneProfile,
    scenario: Scenario,
    zone_id: str,
) -> TripCostVector:
    """
    Cost of each mode for a persona's typical trip in a zone.

    Args:
        persona: Traveler whose trip and value of time apply
        parking: Parking profile of the zone
        transit: Transit profile of the zone
        scenario: Active or baseline policy
        zone_id: Selects which parking levers apply

    Returns:
        TripCostVector in CHF-equivalent units
    """
    trip = persona.trip
    vot = persona.value_of_time
    distance_km = estimated_distance_km(transit)
    peak = trip.time_window == TimeWindow.PEAK

    # Car
    parking_cost = effective_parking_price(
        parking, scenario, zone_id, trip.time_window, trip.duration
    )
    car_time_min = _clamp(transit.time_to_center_min * 0.8, 5, 45)
    friction_penalty = parking.friction_index * vot * 0.3
    car_total = (
        parking_cost
        + time_cost(car_time_min, vot)
        + friction_penalty
        + distance_km * CAR_KM_COST
    )

    # Transit
    if peak:
        discount_factor = 1.0
    else:
        discount_factor = 1 - min(
            transit.max_offpeak_discount, scenario.transit_offpeak_discount_pct / 100
        )
    headway = transit.peak_headway_min if peak else transit.offpeak_headway_min
    wait_min = headway / 2
    transit_total = (
        transit.base_fare * discount_factor
        + time_cost(transit.time_to_center_min + wait_min, vot)
        + (1 - transit.access_index) * TRANSFER_PENALTY
    )

    # Carpool
    carpool_total = math.inf
    if scenario.enable_carpool and carpool_matching_potential(persona) > MIN_MATCHING_POTENTIAL:
        inconvenience = persona.schedule_rigidity * vot * 0.5 * (30 / 60)
        carpool_total = car_total * 0.6 + inconvenience

    # Demand-responsive shuttle
    shuttle_total = math.inf
    if scenario.enable_shuttle:
        shuttle_total = (
            SHUTTLE_BASE_FEE
            + distance_km * SHUTTLE_PER_KM
            + time_cost(transit.time_to_center_min * 1.2, vot)
        )

    # Subsidized taxi
    taxi_total = math.inf
    if scenario.enable_taxi_vouchers and is_taxi_eligible(persona):
        taxi_total = (
            TAXI_BASE
            + distance_km * TAXI_PER_KM
            - TAXI_VOUCHER_VALUE
            + time_cost(car_time_min * 1.1, vot)
        )

    return TripCostVector(
        car=car_total,
        transit=transit_total,
        carpool=carpool_total,
        shuttle=shuttle_total,
        taxi=taxi_total,
    )
