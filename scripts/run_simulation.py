#!/usr/bin/env python3
"""
Run a single pricing scenario from a YAML configuration file.

Usage:
    python -m scripts.run_simulation --config configs/moderate_increase.yaml

Options:
    --config PATH       Path to YAML configuration file (required)
    --reference PATH    Override reference data (zones, profiles, personas)
    --output-dir PATH   Override output directory from config
    --run-id ID         Fix the run identifier
    --verbose           Enable verbose logging
    --dry-run           Parse config and show settings without running
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import yaml

from modeshift.agents import summarize_personas
from modeshift.data import DEFAULT_REFERENCE_PATH, ReferenceDataError, load_reference_data
from modeshift.pricing import ScenarioValidationError, parse_scenario
from modeshift.simulation import (
    SimulationResults,
    persona_dataframe,
    run_simulation,
    summary_metrics,
    zone_dataframe,
)

logger = logging.getLogger(__name__)


def load_config(config_path: Path) -> dict[str, Any]:
    """Load configuration from YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        config = yaml.safe_load(f)

    return config or {}


def setup_logging(config: dict[str, Any], verbose: bool = False) -> None:
    """Setup logging based on configuration."""
    log_config = config.get("logging", {})
    level = logging.DEBUG if verbose else getattr(logging, log_config.get("level", "INFO"))

    # Create logs directory if needed
    log_file = log_config.get("file")
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_file) if log_file else logging.NullHandler(),
        ],
    )


def resolve_reference_path(config: dict[str, Any], override: Optional[Path] = None) -> Path:
    """Reference data file: CLI override, then config, then the packaged dataset."""
    configured = (config.get("reference") or {}).get("path")
    return Path(override or configured or DEFAULT_REFERENCE_PATH)


def save_results(
    results: SimulationResults,
    config: dict[str, Any],
    output_dir: Path,
) -> None:
    """Save simulation results."""
    output_dir.mkdir(parents=True, exist_ok=True)

    output_config = config.get("output", {})
    formats = output_config.get("formats", ["json", "csv"])

    if "json" in formats:
        results_path = output_dir / "results.json"
        with open(results_path, "w", encoding="utf-8") as f:
            json.dump(results.to_dict(), f, indent=2, ensure_ascii=False)
        logger.info(f"Saved results to {results_path}")

    if "csv" in formats:
        zones_path = output_dir / "zones.csv"
        zone_dataframe(results).to_csv(zones_path, index=False)
        personas_path = output_dir / "personas.csv"
        persona_dataframe(results).to_csv(personas_path, index=False)
        logger.info(f"Saved zone and persona tables to {output_dir}")

    # Save config used
    config_path = output_dir / "config_used.yaml"
    with open(config_path, "w") as f:
        yaml.dump(config, f, default_flow_style=False)


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Run a pricing scenario from a YAML configuration file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "--config",
        type=Path,
        required=True,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--reference",
        type=Path,
        default=None,
        help="Reference data YAML (default: packaged Sion dataset)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Override output directory from config",
    )
    parser.add_argument(
        "--run-id",
        type=str,
        default=None,
        help="Run identifier (default: generated)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse config and show settings without running",
    )

    return parser.parse_args()


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Load configuration
    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except yaml.YAMLError as e:
        print(f"Error parsing config: {e}", file=sys.stderr)
        return 1

    setup_logging(config, args.verbose)

    sim_config = config.get("simulation", {})
    output_config = config.get("output", {})

    reference_path = resolve_reference_path(config, args.reference)
    output_dir = args.output_dir or Path(output_config.get("directory", "results/simulation"))

    try:
        scenario = parse_scenario(config.get("scenario", {}))
        reference = load_reference_data(reference_path)
    except ScenarioValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (FileNotFoundError, ReferenceDataError) as e:
        print(f"Error loading reference data: {e}", file=sys.stderr)
        return 1

    population = summarize_personas(reference.personas)

    # Show settings
    print(f"Scenario: {sim_config.get('name', scenario.name or 'Unnamed')}")
    print(f"  Config: {args.config}")
    print(f"  Reference: {reference_path}")
    print(f"  Centre price: {scenario.centre_peak_price:.2f} / {scenario.centre_offpeak_price:.2f} CHF/h")
    print(f"  Periphery price: {scenario.periphery_peak_price:.2f} / {scenario.periphery_offpeak_price:.2f} CHF/h")
    print(f"  Progressive factor: {scenario.progressive_slope_factor:.2f}")
    print(f"  Off-peak transit discount: {scenario.transit_offpeak_discount_pct:.0f}%")
    print(f"  Alternatives: {', '.join(scenario.alternatives_enabled) or 'none'}")
    print(f"  Zones: {len(reference.parking)}, personas: {population.n_personas}")
    print(f"  Output: {output_dir}")
    print()

    if args.dry_run:
        print("Dry run - not executing simulation")
        print("\nPersonas by income:")
        for bracket, count in sorted(population.by_income.items()):
            print(f"  {bracket}: {count}")
        print(f"  Car dependent: {population.car_dependent}")
        print(f"  Transit leaning: {population.transit_leaning}")
        return 0

    try:
        results = run_simulation(
            scenario,
            reference.parking,
            reference.transit,
            reference.personas,
            zone_labels=reference.zone_labels,
            run_id=args.run_id,
        )
        save_results(results, config, output_dir)

        metrics = summary_metrics(results)
        print("\nResults:")
        print(f"  {results.summary}")
        print(f"  Mean car share: {metrics['mean_car_share']:.1%}")
        print(f"  Personas changing mode: {metrics['n_mode_changes']}")
        for label in results.equity_flags:
            print(f"  Equity risk: {label}")
        print(f"\nResults saved to: {output_dir}")

        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user.")
        return 130
    except Exception as e:
        logger.exception(f"Simulation failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
