"""
Exposed block faces - the faces a merged shape mesh keeps.

A face is exposed when no other block of the same shape sits next to it.
The renderer builds its mesh from these and the visualizer draws them.
"""

from typing import List, Tuple, Union

from polycube.geometry.catalog import Block, ShapeType, lookup

Direction = Tuple[int, int, int]

FACE_DIRECTIONS: Tuple[Direction, ...] = (
    (1, 0, 0),
    (-1, 0, 0),
    (0, 1, 0),
    (0, -1, 0),
    (0, 0, 1),
    (0, 0, -1),
)


def exposed_faces(shape_type: Union[str, ShapeType]) -> List[Tuple[Block, Direction]]:
    """
    Get the outward faces of a shape in its canonical pose.

    Returns:
        (block, direction) pairs; a single cube yields all 6 faces
    """
    blocks = lookup(shape_type).blocks
    occupied = set(blocks)

    faces = []
    for x, y, z in blocks:
        for dx, dy, dz in FACE_DIRECTIONS:
            if (x + dx, y + dy, z + dz) not in occupied:
                faces.append(((x, y, z), (dx, dy, dz)))
    return faces


def face_count(shape_type: Union[str, ShapeType]) -> int:
    return len(exposed_faces(shape_type))
