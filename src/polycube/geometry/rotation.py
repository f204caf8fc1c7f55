"""
Exact quarter-turn orientations.

The 24 proper rotations of the cube (the discrete subgroup of SO(3) that maps
the grid onto itself) are generated once as integer matrices. An Orientation
is an index into that table, so composing any number of quarter turns never
accumulates floating point drift.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import numpy as np

Axis = str
AXES: Tuple[Axis, ...] = ("x", "y", "z")

HALF_PI = math.pi / 2

# Quarter turn (+90 degrees, right-handed) about each world axis
RX90 = np.array([
    [1, 0, 0],
    [0, 0, -1],
    [0, 1, 0]
], dtype=int)

RY90 = np.array([
    [0, 0, 1],
    [0, 1, 0],
    [-1, 0, 0]
], dtype=int)

RZ90 = np.array([
    [0, -1, 0],
    [1, 0, 0],
    [0, 0, 1]
], dtype=int)

QUARTER_TURNS: Dict[Axis, np.ndarray] = {"x": RX90, "y": RY90, "z": RZ90}


def generate_24_rotations() -> List[np.ndarray]:
    """
    Generate the 24 proper rotation matrices.

    6 face directions for +Z, each combined with 4 turns about Z.
    Index 0 is the identity.
    """
    I = np.eye(3, dtype=int)

    face_rotations = [
        I,                      # +Z up
        RX90,                   # +Y up
        RX90 @ RX90,            # -Z up
        RX90 @ RX90 @ RX90,     # -Y up
        RY90,                   # +X up
        RY90 @ RY90 @ RY90,     # -X up
    ]

    rotations = []
    for face_rot in face_rotations:
        for i in range(4):
            z_rot = np.linalg.matrix_power(RZ90, i)
            rotations.append(face_rot @ z_rot)

    return rotations


ROTATION_MATRICES: List[np.ndarray] = generate_24_rotations()

for _matrix in ROTATION_MATRICES:
    _matrix.setflags(write=False)


def _matrix_key(matrix: np.ndarray) -> Tuple[int, ...]:
    return tuple(int(v) for v in np.asarray(matrix).ravel())


_INDEX_BY_KEY: Dict[Tuple[int, ...], int] = {
    _matrix_key(m): i for i, m in enumerate(ROTATION_MATRICES)
}

if len(_INDEX_BY_KEY) != 24:
    raise RuntimeError(f"Expected 24 distinct rotations, got {len(_INDEX_BY_KEY)}")


def get_rotation_matrix(rot_index: int) -> np.ndarray:
    """
    Get a rotation matrix.

    rot_index: 0-23
    """
    if not 0 <= rot_index < 24:
        raise ValueError(f"Rotation index must be 0-23, got {rot_index}")
    return ROTATION_MATRICES[rot_index]


def _check_axis(axis: Axis) -> Axis:
    axis = str(axis).lower()
    if axis not in QUARTER_TURNS:
        raise ValueError(f"Axis must be one of {AXES}, got {axis!r}")
    return axis


def _quarter_turns(angle: float) -> int:
    return int(round(angle / HALF_PI)) % 4


@dataclass(frozen=True)
class Orientation:
    """One of the 24 grid-preserving rotations."""
    index: int = 0

    def __post_init__(self):
        if not isinstance(self.index, (int, np.integer)) or not 0 <= self.index < 24:
            raise ValueError(f"Rotation index must be 0-23, got {self.index}")

    @property
    def matrix(self) -> np.ndarray:
        return ROTATION_MATRICES[self.index]

    @property
    def is_identity(self) -> bool:
        return self.index == 0

    @classmethod
    def from_matrix(cls, matrix: np.ndarray) -> "Orientation":
        """Look up the orientation of an integer rotation matrix."""
        key = _matrix_key(np.rint(np.asarray(matrix)).astype(int))
        if key not in _INDEX_BY_KEY:
            raise ValueError(f"Not a quarter-turn rotation matrix: {np.asarray(matrix).tolist()}")
        return cls(_INDEX_BY_KEY[key])

    @classmethod
    def from_euler(cls, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> "Orientation":
        """
        Build an orientation from XYZ-order Euler angles in radians.

        Each angle is snapped to the nearest quarter turn. XYZ order means the
        matrix is Rx @ Ry @ Rz, matching the renderer's default Euler order.
        """
        matrix = (
            np.linalg.matrix_power(RX90, _quarter_turns(x))
            @ np.linalg.matrix_power(RY90, _quarter_turns(y))
            @ np.linalg.matrix_power(RZ90, _quarter_turns(z))
        )
        return cls.from_matrix(matrix)

    def to_euler(self) -> Tuple[float, float, float]:
        """XYZ-order Euler angles in radians, for handing to a renderer."""
        m = self.matrix
        y = math.asin(max(-1.0, min(1.0, float(m[0, 2]))))
        if abs(m[0, 2]) < 1:
            x = math.atan2(-m[1, 2], m[2, 2])
            z = math.atan2(-m[0, 1], m[0, 0])
        else:
            x = math.atan2(m[2, 1], m[1, 1])
            z = 0.0
        return (x, y, z)

    def apply(self, point: Sequence[float]) -> np.ndarray:
        return apply(self, point)

    def rotate90(self, axis: Axis, turns: int = 1) -> "Orientation":
        return rotate90(self, axis, turns)


IDENTITY = Orientation(0)
ALL_ORIENTATIONS: Tuple[Orientation, ...] = tuple(Orientation(i) for i in range(24))


def apply(orientation: Orientation, point: Sequence[float]) -> np.ndarray:
    """Rotate a point (or an N x 3 array of points)."""
    points = np.asarray(point, dtype=float)
    if points.ndim == 1:
        return orientation.matrix @ points
    return points @ orientation.matrix.T


def compose(a: Orientation, b: Orientation) -> Orientation:
    """Rotate by `a` about the world axes, then by `b`."""
    return Orientation.from_matrix(b.matrix @ a.matrix)


def rotate90(orientation: Orientation, axis: Axis, turns: int = 1) -> Orientation:
    """
    Apply quarter turns about a world axis.

    Args:
        orientation: current orientation
        axis: "x", "y" or "z"
        turns: number of +90 degree turns; negative turns rotate the other way

    Returns:
        The new orientation. Four turns about one axis give back the input.
    """
    axis = _check_axis(axis)
    step = Orientation.from_matrix(np.linalg.matrix_power(QUARTER_TURNS[axis], int(turns) % 4))
    return compose(orientation, step)
