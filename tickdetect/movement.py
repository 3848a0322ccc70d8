"""Distance moved per replicate, by thermal history.

Warm-history ticks slow down over time:
    intercept ~ Normal(150, 40)      per replicate
    slope     ~ Normal(-3.0, 0.4)    per replicate
    distance  = max(intercept + slope × day, 0)

Cold-history ticks move the same amount regardless of day:
    distance  = max(Normal(100, 40), 0)

Negative draws are floored to exactly 0, never resampled. The floor puts a
point mass at zero, which is part of the model (a tick that did not move
cannot be trapped).
"""

from __future__ import annotations

import numpy as np

from .config import MovementSection
from .types import Group, MovementSamples


def floor_at_zero(values: np.ndarray) -> np.ndarray:
    """Clip negative values to exactly 0.0 (never raises)."""
    return np.maximum(values, 0.0)


def warm_distance_curve(
    intercept: np.ndarray,
    slope: np.ndarray,
    days: np.ndarray,
) -> np.ndarray:
    """Unfloored linear distance: intercept + slope × day (elementwise)."""
    return (np.asarray(intercept, dtype=np.float64)
            + np.asarray(slope, dtype=np.float64)
            * np.asarray(days, dtype=np.float64))


def simulate_warm_movement(
    days: np.ndarray,
    cfg: MovementSection,
    rng: np.random.Generator,
) -> MovementSamples:
    """Draw one intercept and one slope per replicate; evaluate at its day.

    Args:
        days: Elapsed day per replicate, shape (n,).
        cfg: Movement parameters.
        rng: NumPy random generator.

    Returns:
        MovementSamples tagged Group.WARM.
    """
    days = np.asarray(days, dtype=np.float64)
    n = len(days)
    intercept = rng.normal(cfg.warm_intercept_mean, cfg.warm_intercept_sd,
                           size=n)
    slope = rng.normal(cfg.warm_slope_mean, cfg.warm_slope_sd, size=n)
    distance = floor_at_zero(warm_distance_curve(intercept, slope, days))
    return MovementSamples(group=Group.WARM, day=days, distance=distance)


def simulate_cold_movement(
    days: np.ndarray,
    cfg: MovementSection,
    rng: np.random.Generator,
) -> MovementSamples:
    """Draw distance directly per replicate; day only tags the sample."""
    days = np.asarray(days, dtype=np.float64)
    distance = floor_at_zero(rng.normal(cfg.cold_mean, cfg.cold_sd,
                                        size=len(days)))
    return MovementSamples(group=Group.COLD, day=days, distance=distance)


def simulate_movement(
    group: Group,
    days: np.ndarray,
    cfg: MovementSection,
    rng: np.random.Generator,
) -> MovementSamples:
    """Dispatch to the group's movement model."""
    if group == Group.WARM:
        return simulate_warm_movement(days, cfg, rng)
    if group == Group.COLD:
        return simulate_cold_movement(days, cfg, rng)
    raise ValueError(f"Unknown group: {group!r}")


def mean_distance(group: Group, day: float, cfg: MovementSection) -> float:
    """Expected unfloored distance for a group at a given day."""
    if group == Group.WARM:
        return cfg.warm_intercept_mean + cfg.warm_slope_mean * day
    return cfg.cold_mean
