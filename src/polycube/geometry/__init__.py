"""
Voxel occupancy & collision model.

Shape catalog -> centering -> orientation -> occupancy -> collision/support.
Everything in this package is a pure function of its arguments.
"""

from polycube.geometry.catalog import (
    ShapeType, ShapeDefinition, SHAPE_DEFINITIONS,
    ShapeCatalogError, UnknownShapeType, lookup
)

from polycube.geometry.rotation import (
    Orientation, IDENTITY, ALL_ORIENTATIONS, ROTATION_MATRICES,
    apply, compose, rotate90, get_rotation_matrix
)

from polycube.geometry.centering import (
    bounding_box, rotated_bounding_box,
    center_offset, rotated_center_offset,
    shape_dimensions, rotated_dimensions
)

from polycube.geometry.types import Placement, Position, Cell

from polycube.geometry.occupancy import occupied_cells, placement_cells, is_below_ground

from polycube.geometry.collision import (
    collides, colliding_ids,
    minimum_ground_position, clamp_to_ground,
    snap_axis, snap_position, snap_to_ground
)

from polycube.geometry.faces import exposed_faces

__all__ = [
    # Catalog
    'ShapeType', 'ShapeDefinition', 'SHAPE_DEFINITIONS',
    'ShapeCatalogError', 'UnknownShapeType', 'lookup',
    # Rotation
    'Orientation', 'IDENTITY', 'ALL_ORIENTATIONS', 'ROTATION_MATRICES',
    'apply', 'compose', 'rotate90', 'get_rotation_matrix',
    # Centering
    'bounding_box', 'rotated_bounding_box',
    'center_offset', 'rotated_center_offset',
    'shape_dimensions', 'rotated_dimensions',
    # Occupancy
    'Placement', 'Position', 'Cell',
    'occupied_cells', 'placement_cells', 'is_below_ground',
    # Collision & support
    'collides', 'colliding_ids',
    'minimum_ground_position', 'clamp_to_ground',
    'snap_axis', 'snap_position', 'snap_to_ground',
    # Renderer-shared faces
    'exposed_faces',
]
