"""
Simulation of pricing scenarios over zones and personas.

Provides the orchestrator, zone and persona aggregation, and tabular export.
"""

from .engine import HYPOTHESES, SimulationEngine, SimulationResults, run_simulation
from .metrics import (
    create_parameter_grid,
    persona_dataframe,
    summary_metrics,
    sweep_scenarios,
    zone_dataframe,
)
from .personas import PersonaResult, aggregate_persona, aggregate_personas
from .zones import ZoneCategory, ZoneResult, aggregate_zone, aggregate_zones

__all__ = [
    # Engine
    "HYPOTHESES",
    "SimulationEngine",
    "SimulationResults",
    "run_simulation",
    # Zones
    "ZoneCategory",
    "ZoneResult",
    "aggregate_zone",
    "aggregate_zones",
    # Personas
    "PersonaResult",
    "aggregate_persona",
    "aggregate_personas",
    # Metrics
    "create_parameter_grid",
    "persona_dataframe",
    "summary_metrics",
    "sweep_scenarios",
    "zone_dataframe",
]
