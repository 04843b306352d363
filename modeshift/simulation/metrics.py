"""
Tabular views of simulation results and scenario sweeps over a lever grid.

Results are flattened into pandas DataFrames for CSV export and comparison
across scenarios.
"""

from __future__ import annotations

import logging
from itertools import product
from typing import Any, Optional

import numpy as np
import pandas as pd

from ..agents.base import MODE_ORDER, Persona
from ..pricing.base import ParkingZoneProfile, Scenario, TransitZoneProfile
from .engine import SimulationEngine, SimulationResults
from .zones import ZoneCategory

logger = logging.getLogger(__name__)


def zone_dataframe(results: SimulationResults) -> pd.DataFrame:
    """One row per zone, with the scenario mode split spread into columns."""
    if not results.zone_results:
        return pd.DataFrame()

    records = []
    for z in results.zone_results:
        record = {
            "zone_id": z.zone_id,
            "label": z.label,
            "elasticity_score": z.elasticity_score,
            "category": z.category.value,
            "shift_index": z.shift_index,
            "estimated_threshold": z.estimated_threshold,
            "equity_flag": z.equity_flag,
            "equity_reason": z.equity_reason,
        }
        for mode in MODE_ORDER:
            record[f"share_{mode.value}"] = z.mode_split.probability(mode)
        records.append(record)

    return pd.DataFrame(records)


def persona_dataframe(results: SimulationResults) -> pd.DataFrame:
    """One row per persona."""
    if not results.persona_results:
        return pd.DataFrame()

    records = [
        {
            "persona_id": p.persona_id,
            "label": p.label,
            "before_cost": p.before_cost,
            "after_cost": p.after_cost,
            "cost_delta": p.cost_delta,
            "mode_before": p.dominant_mode_before.value,
            "mode_after": p.dominant_mode_after.value,
            "mode_changed": p.mode_changed,
            "equity_flag": p.equity_flag,
        }
        for p in results.persona_results
    ]

    return pd.DataFrame(records)


def summary_metrics(results: SimulationResults) -> dict[str, Any]:
    """
    Headline figures of a run.

    Returns:
        Dictionary of aggregate metrics
    """
    zones = results.zone_results
    personas = results.persona_results

    if not zones:
        mean_car_share = 0.0
        mean_score = 0.0
    else:
        mean_car_share = float(np.mean([z.mode_split.car for z in zones]))
        mean_score = float(np.mean([z.elasticity_score for z in zones]))

    return {
        "global_shift_index": results.global_shift_index,
        "n_zones": len(zones),
        "n_high_potential": sum(
            1 for z in zones if z.category == ZoneCategory.HIGH_POTENTIAL
        ),
        "n_low_potential": sum(
            1 for z in zones if z.category == ZoneCategory.LOW_POTENTIAL
        ),
        "mean_elasticity_score": mean_score,
        "mean_car_share": mean_car_share,
        "n_zone_equity_flags": sum(1 for z in zones if z.equity_flag),
        "n_persona_equity_flags": len(results.equity_flags),
        "n_mode_changes": sum(1 for p in personas if p.mode_changed),
        "mean_cost_delta": (
            float(np.mean([p.cost_delta for p in personas])) if personas else 0.0
        ),
    }


def create_parameter_grid(**param_lists) -> list[dict[str, Any]]:
    """
    Create a full factorial parameter grid.

    Args:
        **param_lists: Keyword arguments mapping lever names to lists of values

    Returns:
        List of parameter dictionaries
    """
    if not param_lists:
        return [{}]

    keys = list(param_lists.keys())
    values = list(param_lists.values())

    return [dict(zip(keys, combo)) for combo in product(*values)]


def sweep_scenarios(
    base: Scenario,
    parking_profiles: list[ParkingZoneProfile],
    transit_profiles: list[TransitZoneProfile],
    personas: list[Persona],
    zone_labels: Optional[dict[str, str]] = None,
    **param_lists: list[Any],
) -> pd.DataFrame:
    """
    Run the base scenario over a grid of lever values.

    Args:
        base: Scenario providing the levers not varied
        parking_profiles: Parking profile per zone
        transit_profiles: Transit profile per zone
        personas: Representative travelers
        zone_labels: Optional display labels per zone id
        **param_lists: Scenario field names mapped to the values to test

    Returns:
        DataFrame with one row per grid point: lever values plus summary metrics
    """
    engine = SimulationEngine(parking_profiles, transit_profiles, personas, zone_labels)
    grid = create_parameter_grid(**param_lists)
    logger.info(f"Sweeping {len(grid)} scenario(s) over {', '.join(param_lists) or 'nothing'}")

    records = []
    for idx, params in enumerate(grid):
        scenario = base.with_changes(**params)
        results = engine.run(scenario, run_id=f"sweep_{idx:03d}")
        record = dict(params)
        record.update(summary_metrics(results))
        records.append(record)

    return pd.DataFrame(records)
