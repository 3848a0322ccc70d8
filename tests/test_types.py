"""Tests for tickdetect.types — Group enum and immutable sample tables."""

import numpy as np
import pytest

from tickdetect.types import (
    GROUPS,
    AbundanceSamples,
    DetectionCounts,
    DetectionProbabilities,
    Group,
    MovementSamples,
    SimulationResult,
)


class TestGroup:
    def test_values(self):
        assert Group.WARM == 0
        assert Group.COLD == 1

    def test_labels(self):
        assert Group.WARM.label == 'warm'
        assert Group.COLD.label == 'cold'

    def test_group_order(self):
        assert GROUPS == (Group.WARM, Group.COLD)


class TestTables:
    def test_movement_samples_columns(self):
        mv = MovementSamples(group=Group.WARM, day=[0, 1, 2],
                             distance=[150.0, 147.0, 144.0])
        assert len(mv) == 3
        assert mv.day.dtype == np.float64
        np.testing.assert_array_equal(mv.replicate, [0, 1, 2])

    def test_group_coerced_from_int(self):
        mv = MovementSamples(group=1, day=[0.0], distance=[1.0])
        assert mv.group is Group.COLD

    def test_counts_are_int64(self):
        ab = AbundanceSamples(group=Group.COLD, day=[1.0, 2.0], count=[3, 4])
        det = DetectionCounts(group=Group.COLD, day=[1.0, 2.0], count=[1, 0])
        assert ab.count.dtype == np.int64
        assert det.count.dtype == np.int64

    def test_arrays_are_read_only(self):
        pr = DetectionProbabilities(group=Group.WARM, day=[0.0],
                                    distance=[150.0], probability=[0.45])
        with pytest.raises(ValueError):
            pr.probability[0] = 0.9

    def test_source_array_not_frozen(self):
        """Tables copy their inputs; the caller's array stays writable."""
        days = np.array([0.0, 5.0])
        MovementSamples(group=Group.WARM, day=days, distance=[1.0, 2.0])
        days[0] = 3.0
        assert days[0] == 3.0

    def test_fields_cannot_be_reassigned(self):
        mv = MovementSamples(group=Group.WARM, day=[0.0], distance=[1.0])
        with pytest.raises(AttributeError):
            mv.group = Group.COLD

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError, match="equal length"):
            AbundanceSamples(group=Group.WARM, day=[0.0, 1.0], count=[5])


class TestSimulationResult:
    def test_n_replicates(self):
        result = SimulationResult(days=np.array([1.0, 2.0, 3.0]))
        assert result.n_replicates == 3
        assert result.movement == {}
        assert result.warm_start == 0
