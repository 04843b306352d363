"""Traveler personas and mode-choice models."""

from .base import (
    MODE_LABELS,
    MODE_ORDER,
    BehavioralModel,
    DurationType,
    IncomeBracket,
    ModeSplit,
    Persona,
    PopulationSummary,
    TimeWindow,
    TravelMode,
    TypicalTrip,
    summarize_personas,
)
from .behavioral import (
    SOFTMAX_TEMPERATURE,
    SoftmaxChoiceModel,
    compute_mode_split,
    softmax,
)

__all__ = [
    # Base types
    "MODE_LABELS",
    "MODE_ORDER",
    "BehavioralModel",
    "DurationType",
    "IncomeBracket",
    "ModeSplit",
    "Persona",
    "PopulationSummary",
    "TimeWindow",
    "TravelMode",
    "TypicalTrip",
    "summarize_personas",
    # Choice model
    "SOFTMAX_TEMPERATURE",
    "SoftmaxChoiceModel",
    "compute_mode_split",
    "softmax",
]
