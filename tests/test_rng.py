"""Tests for tickdetect.rng — seeded generators, run streams, replay."""

import numpy as np
import pytest

from tickdetect.rng import (
    create_rng,
    rng_state_snapshot,
    spawn_run_rngs,
)


class TestCreateRng:
    def test_generator_type(self):
        rng = create_rng(42)
        assert isinstance(rng, np.random.Generator)
        assert isinstance(rng.bit_generator, np.random.PCG64)

    def test_reproducibility(self):
        np.testing.assert_array_equal(create_rng(42).random(100),
                                      create_rng(42).random(100))

    def test_different_seeds_differ(self):
        assert not np.array_equal(create_rng(42).random(10),
                                  create_rng(43).random(10))

    def test_unseeded_works(self):
        assert 0.0 <= create_rng(None).random() < 1.0

    def test_negative_seed_raises(self):
        with pytest.raises(ValueError, match="non-negative"):
            create_rng(-1)


class TestSpawnRunRngs:
    def test_count(self):
        assert len(spawn_run_rngs(42, n_runs=4)) == 4

    def test_streams_are_independent(self):
        vals = [rng.random() for rng in spawn_run_rngs(42, n_runs=5)]
        assert len(set(vals)) == len(vals)

    def test_adding_runs_keeps_earlier_streams(self):
        """SeedSequence spawning depends on position, not total count."""
        small = spawn_run_rngs(42, n_runs=3)
        large = spawn_run_rngs(42, n_runs=8)
        for a, b in zip(small, large):
            np.testing.assert_array_equal(a.random(50), b.random(50))

    def test_zero_runs_raises(self):
        with pytest.raises(ValueError, match="n_runs"):
            spawn_run_rngs(42, n_runs=0)

    def test_negative_seed_raises(self):
        with pytest.raises(ValueError):
            spawn_run_rngs(-3, n_runs=2)


class TestStateSnapshot:
    def test_snapshot_replays_into_fresh_generator(self):
        rng = create_rng(7)
        rng.poisson(100, size=5)
        snapshot = rng_state_snapshot(rng)
        expected = rng.binomial(50, 0.3, size=10)

        other = create_rng(999)
        other.bit_generator.state = snapshot
        np.testing.assert_array_equal(other.binomial(50, 0.3, size=10),
                                      expected)

    def test_snapshot_is_unchanged_by_reading(self):
        rng = create_rng(42)
        assert rng_state_snapshot(rng) == rng_state_snapshot(rng)
        rng.random()
        assert rng_state_snapshot(rng) != rng_state_snapshot(create_rng(42))
