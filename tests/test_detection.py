"""Tests for detection module: saturating probability and binomial sampling."""

import numpy as np
import pytest

from tickdetect.config import DetectionSection
from tickdetect.detection import (
    convert_movement,
    detection_probability,
    expected_probability,
    group_offset,
    sample_detections,
)
from tickdetect.types import (
    AbundanceSamples,
    DetectionProbabilities,
    Group,
    MovementSamples,
)


# ═══════════════════════════════════════════════════════════════════════
# SATURATING TRANSFORM
# ═══════════════════════════════════════════════════════════════════════

class TestDetectionProbability:
    def test_zero_distance_is_zero(self):
        for offset in (1e-6, 1.0, 185.0, 210.0, 1e9):
            assert detection_probability(0.0, offset) == 0.0

    def test_warm_reference_value(self):
        assert detection_probability(150.0, 185.0) == pytest.approx(150.0 / 335.0)
        assert detection_probability(150.0, 185.0) == pytest.approx(0.4478, abs=1e-4)

    def test_half_saturation_at_offset(self):
        assert detection_probability(210.0, 210.0) == pytest.approx(0.5)

    def test_bounded_below_one(self):
        d = np.array([0.0, 1.0, 1e3, 1e6, 1e12])
        p = detection_probability(d, 185.0)
        assert np.all(p >= 0.0)
        assert np.all(p < 1.0)

    def test_strictly_increasing_in_distance(self):
        d = np.linspace(0.0, 1000.0, 500)
        for offset in (185.0, 210.0):
            p = detection_probability(d, offset)
            assert np.all(np.diff(p) > 0)

    def test_doubling_offset_lowers_probability(self):
        d = np.array([1.0, 50.0, 150.0, 400.0])
        for offset in (185.0, 210.0):
            assert np.all(detection_probability(d, 2 * offset)
                          < detection_probability(d, offset))

    def test_shape_preserved(self):
        d = np.ones((3, 4))
        assert detection_probability(d, 185.0).shape == (3, 4)

    @pytest.mark.parametrize("offset", [0.0, -1.0, -185.0])
    def test_nonpositive_offset_raises(self, offset):
        with pytest.raises(ValueError, match="offset"):
            detection_probability(10.0, offset)

    def test_expected_probability(self):
        assert expected_probability(150.0, 185.0) == pytest.approx(150.0 / 335.0)
        assert expected_probability(100.0, 210.0) == pytest.approx(100.0 / 310.0)
        assert expected_probability(-20.0, 185.0) == 0.0


class TestConvertMovement:
    def test_group_offsets(self):
        cfg = DetectionSection()
        assert group_offset(Group.WARM, cfg) == 185.0
        assert group_offset(Group.COLD, cfg) == 210.0

    def test_unknown_group_raises(self):
        with pytest.raises(ValueError):
            group_offset(5, DetectionSection())

    def test_uses_group_specific_offset(self):
        cfg = DetectionSection()
        warm = convert_movement(
            MovementSamples(group=Group.WARM, day=[0.0], distance=[150.0]), cfg)
        cold = convert_movement(
            MovementSamples(group=Group.COLD, day=[0.0], distance=[150.0]), cfg)
        assert warm.probability[0] == pytest.approx(150.0 / 335.0)
        assert cold.probability[0] == pytest.approx(150.0 / 360.0)
        assert warm.probability[0] > cold.probability[0]

    def test_carries_keys_through(self):
        mv = MovementSamples(group=Group.COLD, day=[3.0, 7.0],
                             distance=[0.0, 90.0])
        pr = convert_movement(mv, DetectionSection())
        assert pr.group == Group.COLD
        np.testing.assert_array_equal(pr.day, mv.day)
        np.testing.assert_array_equal(pr.distance, mv.distance)
        assert pr.probability[0] == 0.0


# ═══════════════════════════════════════════════════════════════════════
# BINOMIAL SAMPLER
# ═══════════════════════════════════════════════════════════════════════

def _pair(group, counts, probs):
    n = len(counts)
    days = np.arange(n, dtype=float)
    ab = AbundanceSamples(group=group, day=days, count=counts)
    pr = DetectionProbabilities(group=group, day=days,
                                distance=np.zeros(n), probability=probs)
    return ab, pr


class TestSampleDetections:
    def test_bounded_by_abundance(self):
        rng = np.random.default_rng(42)
        counts = rng.integers(0, 120, size=3000)
        probs = rng.uniform(0, 0.99, size=3000)
        ab, pr = _pair(Group.WARM, counts, probs)
        det = sample_detections(ab, pr, rng)
        assert np.all(det.count >= 0)
        assert np.all(det.count <= ab.count)
        assert det.count.dtype == np.int64

    def test_zero_abundance_gives_zero(self):
        ab, pr = _pair(Group.COLD, [0, 0, 0], [0.3, 0.5, 0.9])
        det = sample_detections(ab, pr, np.random.default_rng(0))
        np.testing.assert_array_equal(det.count, [0, 0, 0])

    def test_zero_probability_gives_zero(self):
        ab, pr = _pair(Group.WARM, [10, 50, 100], [0.0, 0.0, 0.0])
        det = sample_detections(ab, pr, np.random.default_rng(0))
        np.testing.assert_array_equal(det.count, [0, 0, 0])

    def test_pairs_by_position(self):
        """Replicate i uses abundance i and probability i."""
        ab, pr = _pair(Group.WARM, [0, 1000], [0.9, 0.0])
        det = sample_detections(ab, pr, np.random.default_rng(0))
        np.testing.assert_array_equal(det.count, [0, 0])

    def test_binomial_mean(self):
        n = 20000
        ab, pr = _pair(Group.COLD, np.full(n, 80), np.full(n, 0.3))
        det = sample_detections(ab, pr, np.random.default_rng(8))
        assert det.count.mean() == pytest.approx(24.0, abs=0.3)

    def test_keys_follow_abundance(self):
        ab, pr = _pair(Group.COLD, [5, 6], [0.2, 0.4])
        det = sample_detections(ab, pr, np.random.default_rng(0))
        assert det.group == Group.COLD
        np.testing.assert_array_equal(det.day, ab.day)

    def test_group_mismatch_raises(self):
        ab, _ = _pair(Group.WARM, [5], [0.2])
        _, pr = _pair(Group.COLD, [5], [0.2])
        with pytest.raises(ValueError, match="Cannot pair"):
            sample_detections(ab, pr, np.random.default_rng(0))

    def test_length_mismatch_raises(self):
        ab, _ = _pair(Group.WARM, [5, 6], [0.2, 0.3])
        _, pr = _pair(Group.WARM, [5], [0.2])
        with pytest.raises(ValueError, match="mismatch"):
            sample_detections(ab, pr, np.random.default_rng(0))
