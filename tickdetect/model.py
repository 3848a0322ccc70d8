"""Tick detection pipeline: movement → probability, abundance → detections.

One run is a single synchronous batch:
  1. Day vector: n replicate days ~ Uniform[day_min, day_max], shared by
     both groups so warm and cold trajectories line up replicate by replicate
  2. Movement (per group) → detection probability (per group)
  3. Abundance (per group), independent of movement
  4. Detections = Binomial(abundance, probability), paired by replicate

Fixed draw order on the generator:
  days → warm movement → cold movement → warm abundance → cold abundance
       → warm detections → cold detections
so a given seed and config always reproduce identical arrays.

Ensembles run the pipeline repeatedly on independent spawned streams.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np

from tickdetect.abundance import simulate_abundance
from tickdetect.config import SimulationConfig, default_config, validate_config
from tickdetect.detection import convert_movement, sample_detections
from tickdetect.movement import simulate_movement
from tickdetect.rng import create_rng, spawn_run_rngs
from tickdetect.types import GROUPS, Group, SimulationResult


# ═══════════════════════════════════════════════════════════════════════
# DAY VECTOR
# ═══════════════════════════════════════════════════════════════════════

def draw_days(
    n: int,
    day_min: float,
    day_max: float,
    rng: np.random.Generator,
) -> np.ndarray:
    """Elapsed day per replicate, Uniform[day_min, day_max].

    Raises:
        ValueError: If n <= 0 or the window is invalid.
    """
    if n <= 0:
        raise ValueError(f"replicate count must be > 0, got {n}")
    if day_min < 0 or day_min > day_max:
        raise ValueError(
            f"day window must satisfy 0 <= day_min <= day_max, "
            f"got [{day_min}, {day_max}]"
        )
    return rng.uniform(day_min, day_max, size=n)


def _check_days(days) -> np.ndarray:
    days = np.array(days, dtype=np.float64)
    if days.ndim != 1 or len(days) == 0:
        raise ValueError(
            f"days must be a non-empty 1-D sequence, got shape {days.shape}"
        )
    if np.any(days < 0) or not np.all(np.isfinite(days)):
        raise ValueError("days must be finite and non-negative")
    return days


# ═══════════════════════════════════════════════════════════════════════
# SINGLE RUN
# ═══════════════════════════════════════════════════════════════════════

def run_simulation(
    config: Optional[SimulationConfig] = None,
    rng: Optional[np.random.Generator] = None,
    days: Optional[np.ndarray] = None,
) -> SimulationResult:
    """Run the full pipeline once.

    Args:
        config: Optional SimulationConfig; uses defaults if None.
        rng: Generator to draw from. If None, one is created from
            config.simulation.seed.
        days: Optional explicit day vector. Overrides n_replicates and the
            day window; no uniform draw is made.

    Returns:
        SimulationResult with all four stage tables for both groups.

    Raises:
        ValueError: On invalid configuration or day vector, before any
            sampling.
    """
    if config is None:
        config = default_config()
    validate_config(config)
    sim = config.simulation

    if days is not None:
        days = _check_days(days)
    if rng is None:
        rng = create_rng(sim.seed)
    if days is None:
        days = draw_days(sim.n_replicates, sim.day_min, sim.day_max, rng)

    result = SimulationResult(days=days)
    result.days.setflags(write=False)

    for group in GROUPS:
        movement = simulate_movement(group, days, config.movement, rng)
        result.movement[group] = movement
        result.probability[group] = convert_movement(movement,
                                                     config.detection)

    for group in GROUPS:
        samples, start = simulate_abundance(group, days, config.abundance, rng)
        result.abundance[group] = samples
        if group == Group.WARM:
            result.warm_start = start

    for group in GROUPS:
        result.detections[group] = sample_detections(
            result.abundance[group], result.probability[group], rng,
        )

    return result


# ═══════════════════════════════════════════════════════════════════════
# ENSEMBLES & SUMMARIES
# ═══════════════════════════════════════════════════════════════════════

def run_ensemble(
    config: Optional[SimulationConfig] = None,
    n_runs: int = 10,
    seed: Optional[int] = None,
) -> List[SimulationResult]:
    """Run the pipeline n_runs times on independent RNG streams.

    Run k always sees the same stream for a given seed, regardless of
    n_runs.

    Args:
        config: Optional SimulationConfig; uses defaults if None.
        n_runs: Number of runs (>= 1).
        seed: Master seed; falls back to config.simulation.seed.

    Returns:
        List of SimulationResult, one per run.
    """
    if config is None:
        config = default_config()
    validate_config(config)
    if seed is None:
        seed = config.simulation.seed
    return [run_simulation(config, rng=rng)
            for rng in spawn_run_rngs(seed, n_runs)]


@dataclass
class GroupSummary:
    """Per-group means over replicates of one run."""
    group: Group
    n_replicates: int
    mean_distance: float
    mean_probability: float
    mean_abundance: float
    mean_detections: float
    total_abundance: int
    total_detections: int

    @property
    def detection_rate(self) -> float:
        """Detected / alive, pooled over replicates (0 when none alive)."""
        if self.total_abundance == 0:
            return 0.0
        return self.total_detections / self.total_abundance


def summarize_result(result: SimulationResult) -> Dict[Group, GroupSummary]:
    """Per-group summary statistics for one run."""
    summary = {}
    for group in GROUPS:
        prob = result.probability[group]
        ab = result.abundance[group]
        det = result.detections[group]
        summary[group] = GroupSummary(
            group=group,
            n_replicates=len(ab),
            mean_distance=float(prob.distance.mean()),
            mean_probability=float(prob.probability.mean()),
            mean_abundance=float(ab.count.mean()),
            mean_detections=float(det.count.mean()),
            total_abundance=int(ab.count.sum()),
            total_detections=int(det.count.sum()),
        )
    return summary


def summarize_ensemble(
    results: List[SimulationResult],
) -> Dict[Group, Dict[str, float]]:
    """Mean and SD across runs of each run's mean detections per group."""
    if not results:
        raise ValueError("results must contain at least one run")
    out = {}
    for group in GROUPS:
        per_run = np.array([r.detections[group].count.mean() for r in results])
        rates = np.array([summarize_result(r)[group].detection_rate
                          for r in results])
        out[group] = {
            'n_runs': len(results),
            'mean_detections': float(per_run.mean()),
            'sd_detections': float(per_run.std(ddof=1)) if len(results) > 1 else 0.0,
            'mean_detection_rate': float(rates.mean()),
        }
    return out
