"""
Shape catalog - the polycube variants a scene can hold.

Every shape is a set of 1x1x1 unit cubes. A block at (x, y, z) is its minimum
corner and covers [x, x+1) x [y, y+1) x [z, z+1) in the canonical pose.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Tuple, Union

Block = Tuple[int, int, int]


class ShapeCatalogError(ValueError):
    """Raised when the shape table is malformed."""


class UnknownShapeType(ShapeCatalogError):
    """Raised when a shape type has no catalog entry."""


class ShapeType(Enum):
    """Shape variants"""
    CUBE = "cube-1x1x1"
    CUBOID_1X1X2 = "cuboid-1x1x2"
    CUBOID_1X1X3 = "cuboid-1x1x3"
    L_SHORT = "l-shape-short"
    L_LONG = "l-shape-long"
    T_SHORT = "t-shape-short"
    T_LONG = "t-shape-long"


@dataclass(frozen=True)
class ShapeDefinition:
    """A named, immutable block list in the canonical (unrotated) pose."""
    type: ShapeType
    name: str
    blocks: Tuple[Block, ...]

    def __len__(self) -> int:
        return len(self.blocks)


def _define(shape_type: ShapeType, name: str, blocks: Iterable[Block]) -> ShapeDefinition:
    return ShapeDefinition(
        type=shape_type,
        name=name,
        blocks=tuple((int(x), int(y), int(z)) for x, y, z in blocks),
    )


SHAPE_DEFINITIONS: Tuple[ShapeDefinition, ...] = (
    _define(ShapeType.CUBE, "Cube", [(0, 0, 0)]),
    _define(ShapeType.CUBOID_1X1X2, "Cuboid 1x2", [(0, 0, 0), (0, 1, 0)]),
    _define(ShapeType.CUBOID_1X1X3, "Cuboid 1x3", [(0, 0, 0), (0, 1, 0), (0, 2, 0)]),
    # 2 horizontal + 1 on the top-left
    _define(ShapeType.L_SHORT, "L Short", [(0, 1, 0), (0, 0, 0), (1, 0, 0)]),
    # 1 top-left, 1 under it, 2 more to the right
    _define(ShapeType.L_LONG, "L Long", [(0, 1, 0), (0, 0, 0), (1, 0, 0), (2, 0, 0)]),
    # 3 across the top + 1 down from the center
    _define(ShapeType.T_SHORT, "T Short", [(0, 1, 0), (1, 1, 0), (2, 1, 0), (1, 0, 0)]),
    # 3 across the top + 2 down from the center
    _define(ShapeType.T_LONG, "T Long", [(0, 2, 0), (1, 2, 0), (2, 2, 0), (1, 1, 0), (1, 0, 0)]),
)


def validate_catalog(definitions: Iterable[ShapeDefinition]) -> Dict[ShapeType, ShapeDefinition]:
    """
    Check the shape table and index it by type.

    Raises:
        ShapeCatalogError: a type is missing or defined twice, or a block list
            is empty or repeats a block.
    """
    table: Dict[ShapeType, ShapeDefinition] = {}
    for definition in definitions:
        if definition.type in table:
            raise ShapeCatalogError(f"Shape type defined twice: {definition.type.value}")
        if not definition.blocks:
            raise ShapeCatalogError(f"Shape {definition.type.value} has no blocks")
        if len(set(definition.blocks)) != len(definition.blocks):
            raise ShapeCatalogError(f"Shape {definition.type.value} repeats a block")
        table[definition.type] = definition

    missing = [t.value for t in ShapeType if t not in table]
    if missing:
        raise ShapeCatalogError(f"No definition for shape types: {', '.join(missing)}")
    return table


_CATALOG = validate_catalog(SHAPE_DEFINITIONS)


def shape_type_from_value(value: Union[str, ShapeType]) -> ShapeType:
    """Resolve a ShapeType from its string tag (e.g. "l-shape-short")."""
    if isinstance(value, ShapeType):
        return value
    try:
        return ShapeType(value)
    except ValueError:
        raise UnknownShapeType(f"Unknown shape type: {value}") from None


def lookup(shape_type: Union[str, ShapeType]) -> ShapeDefinition:
    """
    Get the canonical definition of a shape type.

    Args:
        shape_type: ShapeType member or its string tag

    Returns:
        ShapeDefinition

    Raises:
        UnknownShapeType: the value is not a known shape type
    """
    resolved = shape_type_from_value(shape_type)
    definition = _CATALOG.get(resolved)
    if definition is None:
        raise UnknownShapeType(f"Unknown shape type: {resolved}")
    return definition
