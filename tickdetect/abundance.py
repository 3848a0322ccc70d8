"""Live-tick abundance over elapsed day, by thermal history.

Two mortality models, kept deliberately separate because the lab curves
differ in shape:

WARM — linear decline
    start  ~ Poisson(100)            once per run, shared by all replicates
    slope  ~ Normal(-2.6, 0.3)       per replicate
    count  = max(ceil(start + slope × day), 0)

COLD — logistic decline with a threshold around day 24
    a ~ Normal(95, 4)                asymptote (starting level)
    b ~ Normal(24, 1)                inflection day
    c ~ Normal(-4, 0.3)              rate (negative = declining)
    trend  = a / (1 + exp(-(day - b) / c))
    count  = max(rint(trend + Normal(0, 5)), 0)

Rounding differs on purpose: warm rounds up (ceil), cold rounds to nearest
(np.rint, half-to-even). Both floor at zero silently.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .config import AbundanceSection
from .types import AbundanceSamples, Group


# ═══════════════════════════════════════════════════════════════════════
# DETERMINISTIC CURVES
# ═══════════════════════════════════════════════════════════════════════

def warm_abundance_curve(start, slope, days) -> np.ndarray:
    """Linear decline, ceiling-rounded then floored at zero.

    Returns:
        int64 array of live-tick counts.
    """
    raw = (np.asarray(start, dtype=np.float64)
           + np.asarray(slope, dtype=np.float64)
           * np.asarray(days, dtype=np.float64))
    return np.maximum(np.ceil(raw), 0).astype(np.int64)


def logistic_trend(asymptote, inflection, rate, days) -> np.ndarray:
    """a / (1 + exp(-(day - b) / c)), elementwise. Unrounded."""
    asymptote = np.asarray(asymptote, dtype=np.float64)
    inflection = np.asarray(inflection, dtype=np.float64)
    rate = np.asarray(rate, dtype=np.float64)
    days = np.asarray(days, dtype=np.float64)
    with np.errstate(over='ignore', divide='ignore', invalid='ignore'):
        return asymptote / (1.0 + np.exp(-(days - inflection) / rate))


def cold_abundance_curve(asymptote, inflection, rate, days,
                         noise=0.0) -> np.ndarray:
    """Logistic trend plus noise, rounded to nearest then floored at zero.

    An undefined trend (rate 0 exactly at the inflection day) counts as 0.
    """
    trend = logistic_trend(asymptote, inflection, rate, days)
    observed = trend + np.asarray(noise, dtype=np.float64)
    observed = np.nan_to_num(observed, nan=0.0, posinf=0.0, neginf=0.0)
    return np.maximum(np.rint(observed), 0).astype(np.int64)


# ═══════════════════════════════════════════════════════════════════════
# STOCHASTIC SIMULATORS
# ═══════════════════════════════════════════════════════════════════════

def simulate_warm_abundance(
    days: np.ndarray,
    cfg: AbundanceSection,
    rng: np.random.Generator,
) -> Tuple[AbundanceSamples, int]:
    """Linear-decay abundance for warm-history ticks.

    Draw order: the run-level start count first, then one slope per
    replicate.

    Args:
        days: Elapsed day per replicate, shape (n,).
        cfg: Abundance parameters.
        rng: NumPy random generator.

    Returns:
        (AbundanceSamples tagged Group.WARM, the shared start count).
    """
    days = np.asarray(days, dtype=np.float64)
    start = int(rng.poisson(cfg.warm_start_lambda))
    slope = rng.normal(cfg.warm_slope_mean, cfg.warm_slope_sd, size=len(days))
    counts = warm_abundance_curve(start, slope, days)
    return AbundanceSamples(group=Group.WARM, day=days, count=counts), start


def simulate_cold_abundance(
    days: np.ndarray,
    cfg: AbundanceSection,
    rng: np.random.Generator,
) -> AbundanceSamples:
    """Noisy logistic-decay abundance for cold-history ticks.

    Draw order: asymptotes, inflection days, rates, then noise, each as
    one vector over replicates.
    """
    days = np.asarray(days, dtype=np.float64)
    n = len(days)
    asymptote = rng.normal(cfg.cold_asymptote_mean, cfg.cold_asymptote_sd,
                           size=n)
    inflection = rng.normal(cfg.cold_inflection_mean, cfg.cold_inflection_sd,
                            size=n)
    rate = rng.normal(cfg.cold_rate_mean, cfg.cold_rate_sd, size=n)
    noise = rng.normal(0.0, cfg.cold_noise_sd, size=n)
    counts = cold_abundance_curve(asymptote, inflection, rate, days, noise)
    return AbundanceSamples(group=Group.COLD, day=days, count=counts)


def simulate_abundance(
    group: Group,
    days: np.ndarray,
    cfg: AbundanceSection,
    rng: np.random.Generator,
) -> Tuple[AbundanceSamples, int]:
    """Dispatch to the group's abundance model.

    Returns:
        (samples, warm start count). The start count is 0 for COLD,
        which has no run-level draw.
    """
    if group == Group.WARM:
        return simulate_warm_abundance(days, cfg, rng)
    if group == Group.COLD:
        return simulate_cold_abundance(days, cfg, rng), 0
    raise ValueError(f"Unknown group: {group!r}")


def mean_abundance_trend(group: Group, days, cfg: AbundanceSection) -> np.ndarray:
    """Noise-free abundance at the parameter means (unrounded, floored at 0).

    Used for overlaying the expected trajectory on plots.
    """
    days = np.asarray(days, dtype=np.float64)
    if group == Group.WARM:
        trend = cfg.warm_start_lambda + cfg.warm_slope_mean * days
    else:
        trend = logistic_trend(cfg.cold_asymptote_mean,
                               cfg.cold_inflection_mean,
                               cfg.cold_rate_mean, days)
    return np.maximum(trend, 0.0)
