"""Tests for snowflake construction.

Validates arm layout, point counts, the rotation order of the arms,
n-fold symmetry, random-source usage, and read-only exposure of the
path.
"""

from __future__ import annotations

import math
import random

import numpy as np
import pytest
from pydantic import ValidationError

from paraflake.builder.options import ConfigError, SnowflakeOptions
from paraflake.builder.snowflake import Snowflake, build_arm, gap_size, points_per_arm
from paraflake.geometry.polyline import Polyline

FOUR_ARMS = {
    "numArms": 4,
    "armLength": 100,
    "armThickness": 3,
    "numSpikes": 3,
    "spacer": 0.5,
}


def _rotated(path: Polyline, degrees: float) -> np.ndarray:
    rotated = path.clone()
    rotated.rotate(math.radians(degrees))
    return rotated.to_array()


# ---------------------------------------------------------------------------
# Single arm
# ---------------------------------------------------------------------------


class TestBuildArm:
    @pytest.fixture()
    def arm(self, scripted_random) -> Polyline:
        opts = SnowflakeOptions.from_mapping(FOUR_ARMS)
        return build_arm(opts, scripted_random([10, 20, 30]))

    def test_point_count(self, arm: Polyline) -> None:
        assert len(arm) == points_per_arm(3) == 23

    def test_base_and_first_spike(self, arm: Polyline) -> None:
        angle = math.radians(31)
        expected = [
            (3.0, 1.5),
            (0.5, 1.5),
            (1.0 + 10 * math.cos(angle), 10 * math.sin(angle)),
            (1.0 + 100 / 3 / 2, 1.5),
        ]
        np.testing.assert_allclose(arm.to_array()[:4], expected)

    def test_spike_bases_spaced_by_two_gaps(self, arm: Polyline) -> None:
        gap = 100 / 3 / 2
        xs = arm.to_array()[[1, 4, 7], 0]
        np.testing.assert_allclose(xs, [0.5, 0.5 + 2 * gap, 0.5 + 4 * gap])

    def test_peaks_use_drawn_lengths(self, arm: Polyline) -> None:
        peaks_y = arm.to_array()[[2, 5, 8], 1]
        np.testing.assert_allclose(peaks_y, np.array([10, 20, 30]) * math.sin(math.radians(31)))

    def test_end_and_tip(self, arm: Polyline) -> None:
        assert arm[10].as_tuple() == (100.0, 1.5)
        assert arm[11].x == pytest.approx(110.0)
        assert arm[11].y == 0.0

    def test_second_half_mirrors_first(self, arm: Polyline) -> None:
        pts = arm.to_array()
        upper = pts[:11]
        lower = pts[12:][::-1]
        np.testing.assert_allclose(lower[:, 0], upper[:, 0])
        np.testing.assert_allclose(lower[:, 1], -upper[:, 1])

    def test_arm_ends_at_mirrored_base(self, arm: Polyline) -> None:
        assert arm[-1].as_tuple() == (3.0, -1.5)

    def test_spike_angle_option(self, scripted_random) -> None:
        opts = SnowflakeOptions.from_mapping(FOUR_ARMS, spikeAngle=45)
        arm = build_arm(opts, scripted_random([10, 10, 10]))
        assert arm[2].y == pytest.approx(10 * math.sin(math.radians(45)))


class TestGapSize:
    def test_formula(self) -> None:
        opts = SnowflakeOptions.from_mapping(armLength=100, numSpikes=4)
        assert gap_size(opts) == pytest.approx(12.5)

    def test_unresolved_spikes_rejected(self) -> None:
        with pytest.raises(ConfigError, match="resolved"):
            gap_size(SnowflakeOptions())


# ---------------------------------------------------------------------------
# Full snowflake
# ---------------------------------------------------------------------------


class TestSnowflake:
    def test_four_arm_scenario(self, scripted_random) -> None:
        flake = Snowflake(FOUR_ARMS, rng=scripted_random())
        lines = flake.format().splitlines()

        assert lines[0] == "G1 X3.00 Y1.50"
        assert len(lines) == len(flake) == 4 * 23

    def test_point_count_is_arms_times_arm(self) -> None:
        flake = Snowflake(numArms=6, numSpikes=2, rng=random.Random(3))
        assert flake.points_per_arm == 17
        assert len(flake) == 6 * flake.points_per_arm

    def test_gap_size_property(self, scripted_random) -> None:
        flake = Snowflake(FOUR_ARMS, rng=scripted_random())
        assert flake.gap_size == pytest.approx(100 / 3 / 2)

    def test_arms_rotate_clockwise_by_step(self, scripted_random) -> None:
        flake = Snowflake(FOUR_ARMS, rng=scripted_random())
        pts = flake.path.to_array()
        # Arm 1 starts with the base point rotated by -90 degrees
        np.testing.assert_allclose(pts[23], [1.5, -3.0], atol=1e-12)
        np.testing.assert_allclose(pts[46], [-3.0, -1.5], atol=1e-12)

    @pytest.mark.parametrize("seed", [0, 1, 42])
    def test_six_fold_symmetry(self, seed: int) -> None:
        flake = Snowflake(numArms=6, rng=random.Random(seed))
        path = flake.path
        n = flake.points_per_arm

        rotated = _rotated(path, 60.0)
        # Rotating by one step maps every arm onto its predecessor
        expected = np.roll(path.to_array(), n, axis=0)
        np.testing.assert_allclose(rotated, expected, atol=1e-9)

    def test_point_set_invariant_under_step_rotation(self) -> None:
        flake = Snowflake(numArms=5, numSpikes=4, rng=random.Random(9))
        path = flake.path
        original = {tuple(np.round(p, 6)) for p in path.to_array()}
        rotated = {tuple(np.round(p, 6)) for p in _rotated(path, 72.0)}
        assert rotated == original

    def test_single_arm(self, scripted_random) -> None:
        flake = Snowflake({**FOUR_ARMS, "numArms": 1}, rng=scripted_random())
        assert len(flake) == 23


class TestRandomSource:
    def test_num_spikes_drawn_when_unset(self, scripted_random) -> None:
        rng = scripted_random([4])
        flake = Snowflake(rng=rng)
        assert flake.options.num_spikes == 4
        assert rng.calls[0] == (2, 5)

    def test_spike_lengths_drawn_in_range(self, scripted_random) -> None:
        rng = scripted_random()
        Snowflake(FOUR_ARMS, rng=rng)
        assert rng.calls == [(3, 50)] * 3

    def test_fractional_limits_rounded_inward(self, scripted_random) -> None:
        rng = scripted_random()
        Snowflake(armLength=101, armThickness=2.5, numSpikes=2, rng=rng)
        assert rng.calls == [(3, 50), (3, 50)]

    def test_seeded_sources_reproduce(self) -> None:
        a = Snowflake(rng=random.Random(123))
        b = Snowflake(rng=random.Random(123))
        assert a.format() == b.format()

    def test_default_source_is_used(self) -> None:
        flake = Snowflake()
        assert 2 <= flake.options.num_spikes <= 5


class TestReadOnly:
    def test_path_is_a_copy(self, scripted_random) -> None:
        flake = Snowflake(FOUR_ARMS, rng=scripted_random())
        path = flake.path
        path.rotate(1.0)
        path.append(path[0].clone())
        assert flake.format().splitlines()[0] == "G1 X3.00 Y1.50"
        assert len(flake) == 92

    def test_options_frozen(self, scripted_random) -> None:
        flake = Snowflake(FOUR_ARMS, rng=scripted_random())
        with pytest.raises((ValidationError, TypeError)):
            flake.options.num_arms = 3

    def test_draw_uses_path(self, scripted_random, recorder) -> None:
        flake = Snowflake(FOUR_ARMS, rng=scripted_random())
        flake.draw(recorder)
        assert recorder.calls[0] == ("begin_path",)
        assert recorder.calls[1] == ("move_to", 3.0, 1.5)
        assert recorder.calls[-1] == ("close_path",)
        assert sum(1 for c in recorder.calls if c[0] == "line_to") == 91

    def test_accepts_options_model(self, scripted_random) -> None:
        opts = SnowflakeOptions.from_mapping(FOUR_ARMS)
        flake = Snowflake(opts, rng=scripted_random(), numArms=2)
        assert flake.options.num_arms == 2
        assert len(flake) == 46
