"""
Pricing scenarios and per-zone reference profiles.

A scenario is the set of policy levers under study: parking prices per area
class and time window, progressive pricing, an off-peak transit discount and
three complementary measures. Zone profiles describe the static parking and
transit supply of each zone.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any, Optional

# Zones priced with the centre levers
CENTRE_LEVER_ZONES = ("centre", "gare")
# Zones priced with the periphery levers
PERIPHERY_LEVER_ZONES = ("periphery",)
# Centre peak price (CHF/h) the other zones' base prices are quoted against
REFERENCE_CENTRE_PEAK_PRICE = 2.5
# Zone whose profiles serve personas heading to an unmapped zone
FALLBACK_ZONE = "centre"


class Objective(Enum):
    """Declared policy objective; carried for interpretation only."""

    REDUCE_PEAK_CAR = "reduce-peak-car"
    PROTECT_SHORT_STAY = "protect-short-stay"
    EQUITY_ACCESS = "equity-access"


@dataclass(frozen=True)
class Scenario:
    """Policy levers for one simulation run."""

    # Parking prices (CHF/h)
    centre_peak_price: float = 2.5
    centre_offpeak_price: float = 1.5
    periphery_peak_price: float = 0.0
    periphery_offpeak_price: float = 0.0

    # 1.0 = linear; > 1 multiplies the hourly price beyond the first hour
    progressive_slope_factor: float = 1.0

    # Off-peak transit discount (%)
    transit_offpeak_discount_pct: float = 0.0

    # Complementary measures
    enable_carpool: bool = False
    enable_shuttle: bool = False
    enable_taxi_vouchers: bool = False

    objective: Objective = Objective.REDUCE_PEAK_CAR

    scenario_id: Optional[str] = None
    name: Optional[str] = None

    @property
    def alternatives_enabled(self) -> list[str]:
        """Names of the complementary measures switched on."""
        flags = {
            "carpool": self.enable_carpool,
            "shuttle": self.enable_shuttle,
            "taxi": self.enable_taxi_vouchers,
        }
        return [name for name, on in flags.items() if on]

    def with_changes(self, **changes: Any) -> Scenario:
        """Copy of this scenario with some levers changed."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["objective"] = self.objective.value
        return data


def baseline_scenario() -> Scenario:
    """Present-day pricing all scenarios are compared against."""
    return Scenario(
        centre_peak_price=2.5,
        centre_offpeak_price=1.5,
        periphery_peak_price=0.0,
        periphery_offpeak_price=0.0,
        progressive_slope_factor=1.0,
        transit_offpeak_discount_pct=0.0,
        enable_carpool=False,
        enable_shuttle=False,
        enable_taxi_vouchers=False,
        objective=Objective.REDUCE_PEAK_CAR,
        scenario_id="baseline",
        name="Baseline",
    )


@dataclass(frozen=True)
class ParkingZoneProfile:
    """Static parking supply of a zone."""

    zone_id: str
    capacity: int
    base_price: float  # CHF/h
    peak_multiplier: float = 1.0
    offpeak_multiplier: float = 1.0
    long_stay_share: float = 0.0
    friction_index: float = 0.0  # Parking-search difficulty in [0, 1]
    label: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class TransitZoneProfile:
    """Static transit supply of a zone."""

    zone_id: str
    access_index: float  # Connectivity quality in [0, 1]
    time_to_center_min: float
    peak_headway_min: float
    offpeak_headway_min: float
    base_fare: float  # CHF per trip
    max_offpeak_discount: float = 0.0  # Fraction
    notes: Optional[str] = None
