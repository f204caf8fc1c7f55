"""
Collision and ground-support checks, plus the snapping policy callers use.

Nothing here raises for an ordinary overlap or a below-ground position: an
overlap is a False/True verdict and a sinking position is clamped.
"""

import math
from typing import AbstractSet, Iterable, List, Optional, Sequence, Union

from polycube.core.registry import get_collision_strategy, register_collision_strategy
from polycube.geometry.catalog import ShapeType
from polycube.geometry.centering import rotated_bounding_box, rotated_center_offset
from polycube.geometry.occupancy import placement_cells
from polycube.geometry.rotation import Orientation
from polycube.geometry.types import Cell, Placement, Position

DEFAULT_STRATEGY = "hashed"


@register_collision_strategy("pairwise")
def pairwise_overlap(candidate_cells: AbstractSet[Cell], other_cells: AbstractSet[Cell]) -> bool:
    """Compare every candidate cell with every other cell."""
    for cell in candidate_cells:
        for other in other_cells:
            if cell[0] == other[0] and cell[1] == other[1] and cell[2] == other[2]:
                return True
    return False


@register_collision_strategy("hashed")
def hashed_overlap(candidate_cells: AbstractSet[Cell], other_cells: AbstractSet[Cell]) -> bool:
    """Set membership test, O(1) per cell."""
    return not candidate_cells.isdisjoint(other_cells)


def colliding_ids(candidate: Placement,
                  existing: Iterable[Placement],
                  exclude_id: Optional[str] = None,
                  strategy: str = DEFAULT_STRATEGY) -> List[str]:
    """
    Ids of the existing placements whose cells overlap the candidate.

    Args:
        candidate: proposed placement
        existing: placements already in the scene
        exclude_id: placement to skip (the one being moved)
        strategy: registered overlap test name

    Returns:
        ids in the order they appear in `existing`
    """
    overlaps = get_collision_strategy(strategy)
    candidate_cells = placement_cells(candidate)
    hits = []
    for placement in existing:
        if exclude_id is not None and placement.id == exclude_id:
            continue
        if overlaps(candidate_cells, placement_cells(placement)):
            hits.append(placement.id)
    return hits


def collides(candidate: Placement,
             existing: Iterable[Placement],
             exclude_id: Optional[str] = None,
             strategy: str = DEFAULT_STRATEGY) -> bool:
    """
    Check if a candidate placement would overlap any existing placement.

    Args:
        candidate: proposed placement
        existing: placements already in the scene
        exclude_id: placement to skip (the one being moved)
        strategy: registered overlap test name

    Returns:
        True if any candidate cell is occupied by another placement
    """
    overlaps = get_collision_strategy(strategy)
    candidate_cells = placement_cells(candidate)
    for placement in existing:
        if exclude_id is not None and placement.id == exclude_id:
            continue
        if overlaps(candidate_cells, placement_cells(placement)):
            return True
    return False


def minimum_ground_position(shape_type: Union[str, ShapeType],
                            orientation: Orientation,
                            ground_level: float = 0.0) -> float:
    """
    Lowest vertical position at which the shape rests on the ground.

    The rotated bottom face sits at min_z + offset_z relative to the position,
    so the position that puts it on the ground plane is the negation of that.
    """
    box_min, _ = rotated_bounding_box(shape_type, orientation)
    offset = rotated_center_offset(shape_type, orientation)
    local_bottom = float(box_min[2] + offset[2])
    return ground_level - local_bottom


def clamp_to_ground(shape_type: Union[str, ShapeType],
                    orientation: Orientation,
                    z: float,
                    ground_level: float = 0.0) -> float:
    return max(minimum_ground_position(shape_type, orientation, ground_level), z)


def round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


def snap_axis(raw: float, offset: float) -> float:
    """
    Snap a coordinate so that position + offset lands on an integer.

    Shapes with an odd extent along the axis end up on half-integers, even
    extents on integers; either way the shape's faces lie on grid lines.
    """
    return round_half_up(raw + offset) - offset


def snap_position(shape_type: Union[str, ShapeType],
                  orientation: Orientation,
                  raw: Sequence[float],
                  ground_level: float = 0.0) -> Position:
    """Snap all three axes with the rotated offset and keep z above ground."""
    offset = rotated_center_offset(shape_type, orientation)
    x = snap_axis(float(raw[0]), float(offset[0]))
    y = snap_axis(float(raw[1]), float(offset[1]))
    z = snap_axis(float(raw[2]), float(offset[2]))
    return (x, y, clamp_to_ground(shape_type, orientation, z, ground_level))


def snap_to_ground(shape_type: Union[str, ShapeType],
                   orientation: Orientation,
                   raw_x: float,
                   raw_y: float,
                   ground_level: float = 0.0) -> Position:
    """Snap x and y and rest the shape on the ground plane."""
    offset = rotated_center_offset(shape_type, orientation)
    return (
        snap_axis(raw_x, float(offset[0])),
        snap_axis(raw_y, float(offset[1])),
        minimum_ground_position(shape_type, orientation, ground_level),
    )
