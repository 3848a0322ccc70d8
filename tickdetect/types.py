"""Core data types for TickDetect.

This module is the SINGLE SOURCE OF TRUTH for:
  - Group: thermal-history enumeration (WARM, COLD)
  - Per-stage sample tables (MovementSamples, DetectionProbabilities,
    AbundanceSamples, DetectionCounts)
  - SimulationResult: the bundle handed to tables/viz consumers

Every table is keyed by (group, replicate index). Replicate i in one table
pairs with replicate i in every other table of the same group; no other join
key is guaranteed. Arrays are frozen (read-only) once a table is built.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict

import numpy as np


# ═══════════════════════════════════════════════════════════════════════
# ENUMERATIONS
# ═══════════════════════════════════════════════════════════════════════

class Group(IntEnum):
    """Prior thermal history of a tick population.

    WARM: linear movement decline, linear mortality (ceiling rounding)
    COLD: day-independent movement, logistic mortality (nearest rounding)
    """
    WARM = 0
    COLD = 1

    @property
    def label(self) -> str:
        return self.name.lower()


GROUPS = (Group.WARM, Group.COLD)


def _frozen(values, dtype) -> np.ndarray:
    """Copy to a 1-D array of dtype and mark it read-only."""
    arr = np.array(values, dtype=dtype, copy=True).reshape(-1)
    arr.setflags(write=False)
    return arr


# ═══════════════════════════════════════════════════════════════════════
# SAMPLE TABLES
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class MovementSamples:
    """Distance moved per replicate (m), floored at zero."""
    group: Group
    day: np.ndarray        # float64, elapsed day per replicate
    distance: np.ndarray   # float64, >= 0

    def __post_init__(self):
        object.__setattr__(self, 'group', Group(self.group))
        object.__setattr__(self, 'day', _frozen(self.day, np.float64))
        object.__setattr__(self, 'distance', _frozen(self.distance, np.float64))
        _check_lengths(self, self.day, self.distance)

    def __len__(self) -> int:
        return len(self.day)

    @property
    def replicate(self) -> np.ndarray:
        return np.arange(len(self.day))


@dataclass(frozen=True)
class DetectionProbabilities:
    """Per-replicate probability that a live tick is trapped, in [0, 1)."""
    group: Group
    day: np.ndarray
    distance: np.ndarray
    probability: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, 'group', Group(self.group))
        object.__setattr__(self, 'day', _frozen(self.day, np.float64))
        object.__setattr__(self, 'distance', _frozen(self.distance, np.float64))
        object.__setattr__(self, 'probability',
                           _frozen(self.probability, np.float64))
        _check_lengths(self, self.day, self.distance, self.probability)

    def __len__(self) -> int:
        return len(self.day)

    @property
    def replicate(self) -> np.ndarray:
        return np.arange(len(self.day))


@dataclass(frozen=True)
class AbundanceSamples:
    """Live ticks per replicate (integer, >= 0)."""
    group: Group
    day: np.ndarray
    count: np.ndarray      # int64

    def __post_init__(self):
        object.__setattr__(self, 'group', Group(self.group))
        object.__setattr__(self, 'day', _frozen(self.day, np.float64))
        object.__setattr__(self, 'count', _frozen(self.count, np.int64))
        _check_lengths(self, self.day, self.count)

    def __len__(self) -> int:
        return len(self.day)

    @property
    def replicate(self) -> np.ndarray:
        return np.arange(len(self.day))


@dataclass(frozen=True)
class DetectionCounts:
    """Ticks detected per replicate; never exceeds the paired abundance."""
    group: Group
    day: np.ndarray
    count: np.ndarray      # int64

    def __post_init__(self):
        object.__setattr__(self, 'group', Group(self.group))
        object.__setattr__(self, 'day', _frozen(self.day, np.float64))
        object.__setattr__(self, 'count', _frozen(self.count, np.int64))
        _check_lengths(self, self.day, self.count)

    def __len__(self) -> int:
        return len(self.day)

    @property
    def replicate(self) -> np.ndarray:
        return np.arange(len(self.day))


def _check_lengths(table, *arrays) -> None:
    lengths = {len(a) for a in arrays}
    if len(lengths) != 1:
        raise ValueError(
            f"{type(table).__name__} columns must have equal length, "
            f"got {sorted(lengths)}"
        )


# ═══════════════════════════════════════════════════════════════════════
# RUN RESULT
# ═══════════════════════════════════════════════════════════════════════

@dataclass
class SimulationResult:
    """All four stage outputs of one pipeline run, per group."""
    days: np.ndarray
    movement: Dict[Group, MovementSamples] = field(default_factory=dict)
    probability: Dict[Group, DetectionProbabilities] = field(default_factory=dict)
    abundance: Dict[Group, AbundanceSamples] = field(default_factory=dict)
    detections: Dict[Group, DetectionCounts] = field(default_factory=dict)
    warm_start: int = 0    # run-level Poisson draw shared by warm replicates

    @property
    def n_replicates(self) -> int:
        return len(self.days)
