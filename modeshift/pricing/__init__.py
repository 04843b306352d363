"""Pricing scenarios, zone profiles and the trip cost model."""

from .base import (
    CENTRE_LEVER_ZONES,
    FALLBACK_ZONE,
    PERIPHERY_LEVER_ZONES,
    Objective,
    ParkingZoneProfile,
    Scenario,
    TransitZoneProfile,
    baseline_scenario,
)
from .costs import (
    TripCostVector,
    compute_trip_costs,
    effective_parking_price,
    estimated_distance_km,
)
from .schema import ScenarioRequest, ScenarioValidationError, parse_scenario

__all__ = [
    # Scenario and profiles
    "CENTRE_LEVER_ZONES",
    "FALLBACK_ZONE",
    "PERIPHERY_LEVER_ZONES",
    "Objective",
    "ParkingZoneProfile",
    "Scenario",
    "TransitZoneProfile",
    "baseline_scenario",
    # Cost model
    "TripCostVector",
    "compute_trip_costs",
    "effective_parking_price",
    "estimated_distance_km",
    # Input validation
    "ScenarioRequest",
    "ScenarioValidationError",
    "parse_scenario",
]
