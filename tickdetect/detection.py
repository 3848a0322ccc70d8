"""Detection probability and binomial detection sampling.

Probability that a live tick is trapped saturates with distance moved
(Michaelis–Menten form):

    p = distance / (offset + distance)

  - p(0) = 0 exactly
  - strictly increasing in distance, strictly decreasing in offset
  - p → 1 as distance → ∞, never reached for finite distance

Group offsets (warm 185, cold 210) are tuned so that the default mean
distances give p ≈ 0.30. That target is not enforced; change the movement
means and the realised probability moves with them.

Detections per replicate are Binomial(abundance, p), pairing the two tables
by replicate index within one group.
"""

from __future__ import annotations

import numpy as np

from .config import DetectionSection
from .types import (
    AbundanceSamples,
    DetectionCounts,
    DetectionProbabilities,
    Group,
    MovementSamples,
)


# ═══════════════════════════════════════════════════════════════════════
# DISTANCE → PROBABILITY
# ═══════════════════════════════════════════════════════════════════════

def detection_probability(distance, offset: float) -> np.ndarray:
    """Saturating transform distance / (offset + distance).

    Args:
        distance: Distance(s) moved (m), assumed >= 0.
        offset: Half-saturation distance (m); must be > 0.

    Returns:
        Probability array (float64), same shape as distance.

    Raises:
        ValueError: If offset <= 0.
    """
    if offset <= 0:
        raise ValueError(f"offset must be > 0, got {offset}")
    distance = np.asarray(distance, dtype=np.float64)
    return distance / (offset + distance)


def group_offset(group: Group, cfg: DetectionSection) -> float:
    """Half-saturation offset for a group."""
    if group == Group.WARM:
        return cfg.warm_offset
    if group == Group.COLD:
        return cfg.cold_offset
    raise ValueError(f"Unknown group: {group!r}")


def convert_movement(
    samples: MovementSamples,
    cfg: DetectionSection,
) -> DetectionProbabilities:
    """Map a group's distances to detection probabilities."""
    offset = group_offset(samples.group, cfg)
    return DetectionProbabilities(
        group=samples.group,
        day=samples.day,
        distance=samples.distance,
        probability=detection_probability(samples.distance, offset),
    )


def expected_probability(mean_distance: float, offset: float) -> float:
    """Nominal probability at a mean distance (for tuning offsets)."""
    return float(detection_probability(max(mean_distance, 0.0), offset))


# ═══════════════════════════════════════════════════════════════════════
# BINOMIAL DETECTION
# ═══════════════════════════════════════════════════════════════════════

def sample_detections(
    abundance: AbundanceSamples,
    probability: DetectionProbabilities,
    rng: np.random.Generator,
) -> DetectionCounts:
    """Draw detected ticks per replicate.

    detections[i] ~ Binomial(abundance.count[i], probability.probability[i])

    Args:
        abundance: Live-tick counts for one group.
        probability: Detection probabilities for the same group, same
            replicate ordering.
        rng: NumPy random generator.

    Returns:
        DetectionCounts with 0 <= count <= abundance.count.

    Raises:
        ValueError: If the tables belong to different groups or differ
            in length.
    """
    if abundance.group != probability.group:
        raise ValueError(
            f"Cannot pair {abundance.group.label} abundance with "
            f"{probability.group.label} probabilities"
        )
    if len(abundance) != len(probability):
        raise ValueError(
            f"Replicate count mismatch: {len(abundance)} abundance vs "
            f"{len(probability)} probability rows"
        )
    counts = rng.binomial(abundance.count, probability.probability)
    return DetectionCounts(group=abundance.group, day=abundance.day,
                           count=counts)
