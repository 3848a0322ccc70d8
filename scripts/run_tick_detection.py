#!/usr/bin/env python3
"""Run the tick detection model and report per-group summaries.

Loads a base YAML config (optional; defaults otherwise), applies an
optional scenario override and command-line overrides, runs one
simulation or an ensemble, and prints warm vs cold summaries. Figures are
written only when --plot-dir is given; no simulation data is saved.

Usage:
    python scripts/run_tick_detection.py
    python scripts/run_tick_detection.py --config configs/default.yaml --seed 7
    python scripts/run_tick_detection.py --runs 50 --replicates 200
    python scripts/run_tick_detection.py --seed 1 --plot-dir figures/
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, Optional

# ── Project imports ──────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from tickdetect.config import (
    SimulationConfig,
    apply_overrides,
    default_config,
    load_config,
)
from tickdetect.detection import expected_probability, group_offset
from tickdetect.model import (
    run_ensemble,
    run_simulation,
    summarize_ensemble,
    summarize_result,
)
from tickdetect.movement import mean_distance
from tickdetect.tables import ensemble_to_frame, group_means
from tickdetect.types import GROUPS
from tickdetect.utils import config_hash, timer


def build_config(args: argparse.Namespace) -> SimulationConfig:
    """Base YAML → scenario YAML → CLI flags."""
    overrides: Dict = {}
    if args.seed is not None:
        overrides.setdefault('simulation', {})['seed'] = args.seed
    if args.replicates is not None:
        overrides.setdefault('simulation', {})['n_replicates'] = args.replicates

    if args.config is not None:
        return load_config(args.config, scenario_path=args.scenario,
                           sweep_overrides=overrides)
    if args.scenario is not None:
        config = load_config(args.scenario)
    else:
        config = default_config()
    return apply_overrides(config, overrides) if overrides else config


def print_offsets(config: SimulationConfig) -> None:
    """Nominal detection probability at each group's day-0 mean distance."""
    print("\nNominal detection probability (mean distance at day 0):")
    for group in GROUPS:
        dist = mean_distance(group, 0.0, config.movement)
        offset = group_offset(group, config.detection)
        p = expected_probability(dist, offset)
        print(f"  {group.label:>4}: distance {dist:7.1f} m, "
              f"offset {offset:6.1f} → p = {p:.3f}")


def report_single(config: SimulationConfig,
                  plot_dir: Optional[Path]) -> None:
    with timer("simulation"):
        result = run_simulation(config)
    summary = summarize_result(result)

    print(f"\nReplicates: {result.n_replicates}   "
          f"warm start abundance: {result.warm_start}")
    print(f"{'group':>6} {'distance':>9} {'prob':>6} {'alive':>7} "
          f"{'detected':>9} {'rate':>6}")
    for group in GROUPS:
        s = summary[group]
        print(f"{group.label:>6} {s.mean_distance:9.1f} "
              f"{s.mean_probability:6.3f} {s.mean_abundance:7.1f} "
              f"{s.mean_detections:9.2f} {s.detection_rate:6.3f}")

    if plot_dir is not None:
        from tickdetect.viz import plot_dashboard

        plot_dir.mkdir(parents=True, exist_ok=True)
        out = plot_dir / "tick_detection_dashboard.png"
        plot_dashboard(result, config=config, save_path=str(out))
        print(f"\nSaved {out}")


def report_ensemble(config: SimulationConfig, n_runs: int) -> None:
    with timer(f"ensemble ({n_runs} runs)"):
        results = run_ensemble(config, n_runs=n_runs)
    summary = summarize_ensemble(results)

    print(f"\n{'group':>6} {'runs':>5} {'mean det':>9} {'sd':>7} {'rate':>6}")
    for group in GROUPS:
        s = summary[group]
        print(f"{group.label:>6} {s['n_runs']:5d} {s['mean_detections']:9.2f} "
              f"{s['sd_detections']:7.2f} {s['mean_detection_rate']:6.3f}")

    means = group_means(ensemble_to_frame(results))
    print("\nPooled replicate means (all runs):")
    print(means.to_string(float_format=lambda v: f"{v:.3f}"))


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Simulate trap detections of warm- vs cold-history ticks.",
        epilog="Example: python scripts/run_tick_detection.py --seed 42 --runs 20",
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="Base config YAML (default: built-in defaults)",
    )
    parser.add_argument(
        "--scenario", type=str, default=None,
        help="Scenario override YAML merged over the base config",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="RNG seed (default: from config; unseeded if absent)",
    )
    parser.add_argument(
        "--replicates", type=int, default=None,
        help="Replicates per run (default: from config, 100)",
    )
    parser.add_argument(
        "--runs", type=int, default=1,
        help="Number of independent runs (default: 1)",
    )
    parser.add_argument(
        "--plot-dir", type=str, default=None,
        help="Directory for the dashboard figure (single run only)",
    )
    args = parser.parse_args(argv)

    print("=" * 60)
    print("TickDetect Simulation Runner")
    print("=" * 60)

    try:
        config = build_config(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"\n  ⚠️  {e}")
        sys.exit(2)

    print(f"Config hash: {config_hash(config)[:12]}   "
          f"seed: {config.simulation.seed}")
    print_offsets(config)

    if args.runs > 1:
        if args.plot_dir is not None:
            print(f"\n  ⚠️  --plot-dir ignored: the dashboard is drawn for "
                  f"single runs only (got --runs {args.runs})")
        report_ensemble(config, args.runs)
    else:
        plot_dir = Path(args.plot_dir) if args.plot_dir else None
        report_single(config, plot_dir)

    print("\n✅ Done.")


if __name__ == "__main__":
    main()
