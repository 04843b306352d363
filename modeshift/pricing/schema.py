"""Validated scenario input for callers that receive raw JSON payloads."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .base import Objective, Scenario


class ScenarioValidationError(ValueError):
    """Raised when a scenario payload falls outside the accepted ranges."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("Invalid scenario: " + "; ".join(errors))


class ScenarioRequest(BaseModel):
    """Scenario payload with lever ranges; accepts snake_case or wire names."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    scenario_id: Optional[str] = Field(default=None, alias="id")
    name: Optional[str] = Field(default=None)

    centre_peak_price: float = Field(
        ..., ge=0.0, le=10.0, alias="centrePeakPriceCHFh",
        description="Centre parking price at peak (CHF/h)",
    )
    centre_offpeak_price: float = Field(
        ..., ge=0.0, le=10.0, alias="centreOffpeakPriceCHFh",
        description="Centre parking price off-peak (CHF/h)",
    )
    periphery_peak_price: float = Field(
        default=0.0, ge=0.0, le=5.0, alias="peripheriePeakPriceCHFh",
    )
    periphery_offpeak_price: float = Field(
        default=0.0, ge=0.0, le=5.0, alias="peripherieOffpeakPriceCHFh",
    )
    progressive_slope_factor: float = Field(
        default=1.0, ge=1.0, le=3.0, alias="progressiveSlopeFactor",
        description="Hourly price multiplier beyond the first hour",
    )
    transit_offpeak_discount_pct: float = Field(
        default=0.0, ge=0.0, le=50.0, alias="tpOffpeakDiscountPct",
    )
    enable_carpool: bool = Field(default=False, alias="enableCovoiturage")
    enable_shuttle: bool = Field(default=False, alias="enableTAD")
    enable_taxi_vouchers: bool = Field(default=False, alias="enableTaxiBons")
    objective: Objective = Field(default=Objective.REDUCE_PEAK_CAR)

    def to_scenario(self) -> Scenario:
        return Scenario(
            centre_peak_price=self.centre_peak_price,
            centre_offpeak_price=self.centre_offpeak_price,
            periphery_peak_price=self.periphery_peak_price,
            periphery_offpeak_price=self.periphery_offpeak_price,
            progressive_slope_factor=self.progressive_slope_factor,
            transit_offpeak_discount_pct=self.transit_offpeak_discount_pct,
            enable_carpool=self.enable_carpool,
            enable_shuttle=self.enable_shuttle,
            enable_taxi_vouchers=self.enable_taxi_vouchers,
            objective=self.objective,
            scenario_id=self.scenario_id,
            name=self.name,
        )


def parse_scenario(payload: dict[str, Any]) -> Scenario:
    """
    Validate a raw scenario payload and build the engine scenario.

    Raises:
        ScenarioValidationError: if a lever is missing or out of range
    """
    try:
        request = ScenarioRequest.model_validate(payload)
    except ValidationError as e:
        messages = [
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise ScenarioValidationError(messages) from e
    return request.to_scenario()
