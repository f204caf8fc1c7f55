"""Tests for exact quarter-turn orientations."""
import math

import numpy as np
import pytest

from polycube.geometry.rotation import (
    ALL_ORIENTATIONS,
    AXES,
    IDENTITY,
    ROTATION_MATRICES,
    Orientation,
    apply,
    compose,
    get_rotation_matrix,
    rotate90,
)


class TestRotationTable:

    def test_24_distinct_matrices(self):
        keys = {tuple(m.ravel().tolist()) for m in ROTATION_MATRICES}
        assert len(keys) == 24

    def test_matrices_are_proper_rotations(self):
        for m in ROTATION_MATRICES:
            assert np.array_equal(m @ m.T, np.eye(3, dtype=int))
            assert round(np.linalg.det(m)) == 1

    def test_identity_is_index_zero(self):
        assert IDENTITY.is_identity
        assert np.array_equal(IDENTITY.matrix, np.eye(3, dtype=int))

    def test_index_out_of_range(self):
        with pytest.raises(ValueError):
            Orientation(24)
        with pytest.raises(ValueError):
            get_rotation_matrix(-1)


class TestRotate90:

    @pytest.mark.parametrize("axis", AXES)
    def test_four_turns_return_to_start(self, axis):
        for start in ALL_ORIENTATIONS:
            o = start
            for _ in range(4):
                o = rotate90(o, axis)
            assert o == start

    @pytest.mark.parametrize("axis", AXES)
    def test_no_drift_after_many_turns(self, axis):
        o = IDENTITY
        for _ in range(4000):
            o = rotate90(o, axis)
        assert o == IDENTITY

    def test_quarter_turn_about_z(self):
        assert np.array_equal(rotate90(IDENTITY, "z").apply((1, 0, 0)), [0, 1, 0])

    def test_quarter_turn_about_x(self):
        assert np.array_equal(rotate90(IDENTITY, "x").apply((0, 1, 0)), [0, 0, 1])

    def test_negative_turns(self):
        assert rotate90(IDENTITY, "y", -1) == rotate90(IDENTITY, "y", 3)

    def test_turns_about_world_axes(self):
        # X then Z is not Z then X
        xz = rotate90(rotate90(IDENTITY, "x"), "z")
        zx = rotate90(rotate90(IDENTITY, "z"), "x")
        assert xz != zx
        assert np.array_equal(xz.matrix, rotate90(IDENTITY, "z").matrix @ rotate90(IDENTITY, "x").matrix)

    def test_unknown_axis(self):
        with pytest.raises(ValueError):
            rotate90(IDENTITY, "w")

    def test_every_orientation_reachable(self):
        seen = {IDENTITY}
        frontier = [IDENTITY]
        while frontier:
            o = frontier.pop()
            for axis in AXES:
                nxt = rotate90(o, axis)
                if nxt not in seen:
                    seen.add(nxt)
                    frontier.append(nxt)
        assert seen == set(ALL_ORIENTATIONS)


class TestCompose:

    def test_identity_is_neutral(self):
        for o in ALL_ORIENTATIONS:
            assert compose(IDENTITY, o) == o
            assert compose(o, IDENTITY) == o

    def test_order(self):
        a = rotate90(IDENTITY, "x")
        b = rotate90(IDENTITY, "y")
        assert np.array_equal(compose(a, b).matrix, b.matrix @ a.matrix)

    def test_associative(self):
        for a in ALL_ORIENTATIONS[::3]:
            for b in ALL_ORIENTATIONS[::2]:
                for c in ALL_ORIENTATIONS:
                    assert compose(compose(a, b), c) == compose(a, compose(b, c))

    def test_apply_preserves_length(self):
        point = np.array([1.5, -2.0, 0.5])
        for o in ALL_ORIENTATIONS:
            assert np.linalg.norm(apply(o, point)) == pytest.approx(np.linalg.norm(point))


class TestEuler:

    def test_from_euler_matches_quarter_turns(self):
        assert Orientation.from_euler(0, 0, math.pi / 2) == rotate90(IDENTITY, "z")
        assert Orientation.from_euler(math.pi / 2, 0, 0) == rotate90(IDENTITY, "x")
        assert Orientation.from_euler(0, -math.pi / 2, 0) == rotate90(IDENTITY, "y", -1)

    def test_from_euler_snaps_noisy_angles(self):
        assert Orientation.from_euler(0, 0, math.pi / 2 + 1e-9) == rotate90(IDENTITY, "z")

    def test_euler_round_trip(self):
        for o in ALL_ORIENTATIONS:
            assert Orientation.from_euler(*o.to_euler()) == o

    def test_from_matrix_rejects_non_rotation(self):
        with pytest.raises(ValueError):
            Orientation.from_matrix(np.diag([1, 1, -1]))
