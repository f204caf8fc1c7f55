"""
Occupancy resolver - which grid cells a placed shape covers.

This has to agree with how the renderer draws a shape: block centers are
shifted by the canonical center offset (centering the mesh on its local
origin), rotated about that origin, then moved to the world position.
"""

from typing import FrozenSet, Sequence, Union

import numpy as np

from polycube.geometry.catalog import ShapeType
from polycube.geometry.centering import block_centers, center_offset
from polycube.geometry.rotation import Orientation, apply
from polycube.geometry.types import Cell, Placement


def local_cell_centers(shape_type: Union[str, ShapeType], orientation: Orientation) -> np.ndarray:
    """
    Rotated, centered block centers relative to the placement position.

    Equal to rotating the raw block centers and adding
    rotated_center_offset(shape_type, orientation).
    """
    centered = block_centers(shape_type) + center_offset(shape_type)
    return apply(orientation, centered)


def occupied_cells(shape_type: Union[str, ShapeType],
                   position: Sequence[float],
                   orientation: Orientation) -> FrozenSet[Cell]:
    """
    Get the grid cells occupied by a shape.

    Args:
        shape_type: shape to resolve
        position: world position of the shape's centered origin
        orientation: current orientation

    Returns:
        frozenset of integer (x, y, z) cells, one per block
    """
    world = local_cell_centers(shape_type, orientation) + np.asarray(position, dtype=float)
    cells = np.floor(world).astype(int)
    return frozenset((int(x), int(y), int(z)) for x, y, z in cells)


def placement_cells(placement: Placement) -> FrozenSet[Cell]:
    return occupied_cells(placement.shape_type, placement.position, placement.orientation)


def is_below_ground(shape_type: Union[str, ShapeType],
                    position: Sequence[float],
                    orientation: Orientation,
                    ground_level: int = 0) -> bool:
    """Whether any occupied cell sits below the ground plane."""
    return any(z < ground_level for _, _, z in occupied_cells(shape_type, position, orientation))
