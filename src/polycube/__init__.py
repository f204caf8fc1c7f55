"""
polycube: voxel occupancy & collision model for grid-aligned polycube shapes.

Shapes (cubes, cuboids, L- and T-pieces) are placed on a unit grid, moved and
turned in exact quarter turns, and kept from overlapping or sinking below the
ground plane.

Example Usage:
```python
from polycube import Scene, ShapeType, minimum_ground_position, IDENTITY

scene = Scene()
z = minimum_ground_position(ShapeType.L_SHORT, IDENTITY)
result = scene.add(ShapeType.L_SHORT, (0.0, 0.0, z))
scene.rotate(result.placement.id, "z")
```

Command-line Usage:
```bash
polycube shapes
polycube cells --shape t-shape-long --position 0.5 0.5 0.5 --rotate z
polycube replay --actions session.yaml --config polycube.yaml
```
"""

from polycube.core.config import Config, load_config, validate_config
from polycube.geometry import (
    ShapeType, ShapeDefinition, lookup,
    Orientation, IDENTITY, ALL_ORIENTATIONS, rotate90, compose,
    center_offset, rotated_center_offset, bounding_box,
    Placement, occupied_cells,
    collides, minimum_ground_position, snap_position,
)
from polycube.scene import Scene, EditResult, ErrorCode, Preview

__version__ = "0.1.0"

__all__ = [
    "Config",
    "load_config",
    "validate_config",
    "ShapeType",
    "ShapeDefinition",
    "lookup",
    "Orientation",
    "IDENTITY",
    "ALL_ORIENTATIONS",
    "rotate90",
    "compose",
    "center_offset",
    "rotated_center_offset",
    "bounding_box",
    "Placement",
    "occupied_cells",
    "collides",
    "minimum_ground_position",
    "snap_position",
    "Scene",
    "EditResult",
    "ErrorCode",
    "Preview",
]
