"""
Reference data loading.

Zones, parking and transit profiles and personas are static inputs read
from YAML. The packaged dataset describes the city of Sion (Valais).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from ..agents.base import (
    DurationType,
    IncomeBracket,
    Persona,
    TimeWindow,
    TypicalTrip,
)
from ..pricing.base import ParkingZoneProfile, TransitZoneProfile

logger = logging.getLogger(__name__)

DEFAULT_REFERENCE_PATH = Path(__file__).parent / "sion.yaml"


class ReferenceDataError(ValueError):
    """Raised when a reference record is missing fields or has bad values."""


@dataclass
class ReferenceData:
    """Static inputs shared by every simulation run."""

    parking: list[ParkingZoneProfile] = field(default_factory=list)
    transit: list[TransitZoneProfile] = field(default_factory=list)
    personas: list[Persona] = field(default_factory=list)
    zone_labels: dict[str, str] = field(default_factory=dict)

    @property
    def zone_ids(self) -> list[str]:
        return [p.zone_id for p in self.parking]

    def persona(self, persona_id: str) -> Optional[Persona]:
        for persona in self.personas:
            if persona.persona_id == persona_id:
                return persona
        return None


def parse_persona(record: dict[str, Any]) -> Persona:
    """Build a Persona from a YAML/JSON record."""
    trip = record["trip"]
    return Persona(
        persona_id=str(record["persona_id"]),
        label=record["label"],
        trip=TypicalTrip(
            origin_zone=trip["origin_zone"],
            destination_zone=trip["destination_zone"],
            time_window=TimeWindow(trip.get("time_window", "peak")),
            duration=DurationType(trip.get("duration", "short")),
        ),
        value_of_time=float(record["value_of_time"]),
        price_sensitivity=float(record.get("price_sensitivity", 0.5)),
        schedule_rigidity=float(record["schedule_rigidity"]),
        transit_affinity=float(record["transit_affinity"]),
        car_dependency=float(record["car_dependency"]),
        income=IncomeBracket(record.get("income", "medium")),
        emoji=record.get("emoji", ""),
        description=record.get("description", ""),
        tags=tuple(record.get("tags") or ()),
        alternatives=tuple(record.get("alternatives") or ()),
    )


def _build(kind: str, records: list[dict[str, Any]], factory) -> list:
    items = []
    for idx, record in enumerate(records or []):
        try:
            items.append(factory(record))
        except (KeyError, TypeError, ValueError) as e:
            raise ReferenceDataError(f"Invalid {kind} record #{idx}: {e!r}") from e
    return items


def load_reference_data(path: Optional[Union[str, Path]] = None) -> ReferenceData:
    """
    Load zones, profiles and personas from a YAML file.

    Args:
        path: YAML file (defaults to the packaged Sion dataset)

    Returns:
        ReferenceData

    Raises:
        FileNotFoundError: if the file does not exist
        ReferenceDataError: if a record cannot be parsed
    """
    path = Path(path) if path is not None else DEFAULT_REFERENCE_PATH
    if not path.exists():
        raise FileNotFoundError(f"Reference data not found: {path}")

    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    data = ReferenceData(
        parking=_build("parking", raw.get("parking"), lambda r: ParkingZoneProfile(**r)),
        transit=_build("transit", raw.get("transit"), lambda r: TransitZoneProfile(**r)),
        personas=_build("persona", raw.get("personas"), parse_persona),
        zone_labels={z["zone_id"]: z["label"] for z in raw.get("zones") or []},
    )

    logger.info(
        f"Loaded reference data from {path}: {len(data.parking)} parking, "
        f"{len(data.transit)} transit profiles, {len(data.personas)} personas"
    )
    return data
