"""
Placement - a shape instance in the world.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Sequence, Tuple

from polycube.geometry.catalog import ShapeType, shape_type_from_value
from polycube.geometry.rotation import IDENTITY, Orientation

Position = Tuple[float, float, float]
Cell = Tuple[int, int, int]


def as_position(value: Sequence[float]) -> Position:
    if len(value) != 3:
        raise ValueError(f"position must have 3 components, got {len(value)}")
    x, y, z = value
    return (float(x), float(y), float(z))


@dataclass
class Placement:
    """
    A shape type placed at a world position with an orientation.

    position is the shape's centered local origin in world space; after
    snapping it lies on integer or half-integer coordinates.
    """
    id: str
    shape_type: ShapeType
    position: Position = (0.0, 0.0, 0.0)
    orientation: Orientation = field(default=IDENTITY)

    def __post_init__(self):
        self.shape_type = shape_type_from_value(self.shape_type)
        self.position = as_position(self.position)
        if not isinstance(self.orientation, Orientation):
            self.orientation = Orientation(int(self.orientation))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "shape_type": self.shape_type.value,
            "position": list(self.position),
            "orientation": self.orientation.index,
        }
