"""
Bounding boxes and center offsets.

Shapes are rendered and resolved centered on their local origin. Two offsets
exist and both are needed:

- center_offset: from the canonical box, applied to block centers before the
  rotation (mesh building, occupancy).
- rotated_center_offset: from the rotated box. Anything that snaps a position
  to the grid after a rotation must use this one, since the rotated
  silhouette decides which positions put the shape's corners on grid lines.
"""

from typing import Tuple, Union

import numpy as np

from polycube.geometry.catalog import ShapeDefinition, ShapeType, lookup
from polycube.geometry.rotation import Orientation, apply

ShapeRef = Union[str, ShapeType, ShapeDefinition]


def _definition(shape: ShapeRef) -> ShapeDefinition:
    if isinstance(shape, ShapeDefinition):
        return shape
    return lookup(shape)


def block_array(shape: ShapeRef) -> np.ndarray:
    """Block minimum corners as an N x 3 int array."""
    return np.array(_definition(shape).blocks, dtype=int).reshape(-1, 3)


def block_centers(shape: ShapeRef) -> np.ndarray:
    """Block centers (x+0.5, y+0.5, z+0.5) as an N x 3 float array."""
    return block_array(shape) + 0.5


def bounding_box(shape: ShapeRef) -> Tuple[np.ndarray, np.ndarray]:
    """
    Axis-aligned bounding box of the canonical pose.

    Returns:
        (min, max) per axis; max includes the unit extent of the last block
    """
    blocks = block_array(shape)
    return blocks.min(axis=0), blocks.max(axis=0) + 1


def rotated_bounding_box(shape: ShapeRef, orientation: Orientation) -> Tuple[np.ndarray, np.ndarray]:
    """
    Bounding box of the shape after rotating its (uncentered) block centers.

    Every rotated block still spans half a cell around its center, so the
    box is the center extremes widened by 0.5 on each side.
    """
    centers = apply(orientation, block_centers(shape))
    return centers.min(axis=0) - 0.5, centers.max(axis=0) + 0.5


def center_offset(shape: ShapeRef) -> np.ndarray:
    """Offset that centers the canonical bounding box on the origin."""
    box_min, box_max = bounding_box(shape)
    return -(box_min + box_max) / 2.0


def rotated_center_offset(shape: ShapeRef, orientation: Orientation) -> np.ndarray:
    """Offset that centers the rotated bounding box on the origin."""
    box_min, box_max = rotated_bounding_box(shape, orientation)
    return -(box_min + box_max) / 2.0


def shape_dimensions(shape: ShapeRef) -> Tuple[int, int, int]:
    """Canonical extent along x, y and z."""
    box_min, box_max = bounding_box(shape)
    dx, dy, dz = (box_max - box_min).tolist()
    return (int(dx), int(dy), int(dz))


def rotated_dimensions(shape: ShapeRef, orientation: Orientation) -> Tuple[int, int, int]:
    box_min, box_max = rotated_bounding_box(shape, orientation)
    dx, dy, dz = np.rint(box_max - box_min).astype(int).tolist()
    return (dx, dy, dz)
