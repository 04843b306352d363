#!/usr/bin/env python3
"""
Sweep pricing levers and tabulate headline metrics per combination.

Usage examples:

    python -m scripts.run_price_sweep \\
        --centre-peak-prices 2.5 3.5 4.5 6.0 \\
        --offpeak-discounts 0 20 35

    python -m scripts.run_price_sweep --base-config configs/equity.yaml \\
        --slope-factors 1.0 1.5 2.0 \\
        --enable-carpool

Common options:
    --base-config PATH     Scenario providing the levers not swept
    --reference PATH       Reference data YAML (default: packaged Sion dataset)
    --output-dir PATH      Output directory (default: results/price_sweep)
    --verbose              Show progress and logging
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml

from modeshift.data import ReferenceDataError, load_reference_data
from modeshift.pricing import ScenarioValidationError, baseline_scenario, parse_scenario
from modeshift.simulation import sweep_scenarios


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Sweep parking and transit pricing levers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    # Common options
    parser.add_argument(
        "--base-config",
        type=Path,
        default=None,
        help="YAML config whose scenario section sets the levers not swept (default: baseline)",
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
        default=Path("results/price_sweep"),
        help="Output directory (default: results/price_sweep)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    # Levers
    parser.add_argument(
        "--centre-peak-prices",
        type=float,
        nargs="+",
        default=[2.5, 3.5, 4.5, 6.0],
        help="Centre peak prices in CHF/h (default: 2.5 3.5 4.5 6.0)",
    )
    parser.add_argument(
        "--offpeak-discounts",
        type=float,
        nargs="+",
        default=[0.0],
        help="Off-peak transit discounts in percent (default: 0)",
    )
    parser.add_argument(
        "--slope-factors",
        type=float,
        nargs="+",
        default=[1.0],
        help="Progressive slope factors (default: 1.0)",
    )
    parser.add_argument(
        "--enable-carpool",
        action="store_true",
        help="Enable carpooling in every swept scenario",
    )
    parser.add_argument(
        "--enable-shuttle",
        action="store_true",
        help="Enable the demand-responsive shuttle in every swept scenario",
    )

    return parser.parse_args()


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Setup logging
    log_level = logging.INFO if args.verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        if args.base_config is not None:
            with open(args.base_config) as f:
                config = yaml.safe_load(f) or {}
            base = parse_scenario(config.get("scenario", {}))
        else:
            base = baseline_scenario()
        reference = load_reference_data(args.reference)
    except (FileNotFoundError, yaml.YAMLError, ReferenceDataError, ScenarioValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    base = base.with_changes(
        enable_carpool=base.enable_carpool or args.enable_carpool,
        enable_shuttle=base.enable_shuttle or args.enable_shuttle,
    )

    print("Running price sweep...")
    print(f"  Centre peak prices: {args.centre_peak_prices}")
    print(f"  Off-peak discounts: {args.offpeak_discounts}")
    print(f"  Slope factors: {args.slope_factors}")
    print(f"  Alternatives: {', '.join(base.alternatives_enabled) or 'none'}")
    print()

    try:
        results = sweep_scenarios(
            base,
            reference.parking,
            reference.transit,
            reference.personas,
            zone_labels=reference.zone_labels,
            centre_peak_price=args.centre_peak_prices,
            transit_offpeak_discount_pct=args.offpeak_discounts,
            progressive_slope_factor=args.slope_factors,
        )
    except KeyboardInterrupt:
        print("\nSweep interrupted by user.")
        return 130
    except Exception as e:
        logging.exception(f"Sweep failed: {e}")
        return 1

    args.output_dir.mkdir(parents=True, exist_ok=True)
    summary_path = args.output_dir / "summary.csv"
    results.to_csv(summary_path, index=False)

    print(f"\nSweep complete!")
    print(f"Results saved to: {summary_path}")
    print(f"\nSummary:")
    print(results.to_string(index=False))

    return 0


if __name__ == "__main__":
    sys.exit(main())
