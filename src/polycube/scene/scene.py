"""
Scene - the single owner of placement state.

Every add/move/rotate builds a candidate placement first and checks it for
collisions. A colliding candidate is kept as a non-committing preview and the
committed placement stays untouched; a free candidate is committed and the
preview is cleared.
"""

import threading
import uuid
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Sequence, Union

import numpy as np

from polycube.core.config import SceneConfig
from polycube.core.registry import get_collision_strategy
from polycube.geometry.catalog import ShapeType, shape_type_from_value
from polycube.geometry.centering import rotated_center_offset, shape_dimensions
from polycube.geometry.collision import (
    clamp_to_ground, colliding_ids, snap_axis, snap_position, snap_to_ground
)
from polycube.geometry.occupancy import placement_cells
from polycube.geometry.rotation import AXES, IDENTITY, Orientation, rotate90
from polycube.geometry.types import Cell, Placement, Position, as_position
from polycube.scene.results import EditResult, ErrorCode, Preview

if TYPE_CHECKING:
    from polycube.utils.logger import SessionLogger


class Scene:
    """Placements, selection and the current preview."""

    def __init__(self, config: Optional[SceneConfig] = None,
                 logger: Optional["SessionLogger"] = None):
        self.config = config or SceneConfig()
        # Fail fast on a misconfigured strategy
        get_collision_strategy(self.config.collision_strategy)
        self.logger = logger

        self._placements: Dict[str, Placement] = {}
        self._selected_id: Optional[str] = None
        self._preview: Optional[Preview] = None
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._placements)

    def __contains__(self, placement_id: str) -> bool:
        return placement_id in self._placements

    def __iter__(self) -> Iterator[Placement]:
        return iter(self.snapshot())

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def preview(self) -> Optional[Preview]:
        with self._lock:
            return self._preview.copy() if self._preview else None

    def get(self, placement_id: str) -> Optional[Placement]:
        """Copy of a placement, or None."""
        with self._lock:
            placement = self._placements.get(placement_id)
            return replace(placement) if placement else None

    def snapshot(self) -> List[Placement]:
        """Consistent copy of all placements, in insertion order."""
        with self._lock:
            return [replace(p) for p in self._placements.values()]

    def occupancy(self) -> Dict[Cell, str]:
        """Map of occupied cell -> placement id."""
        with self._lock:
            by_cell = {}
            for placement in self._placements.values():
                for cell in placement_cells(placement):
                    by_cell[cell] = placement.id
            return by_cell

    def gizmo_anchor(self, placement_id: str) -> Optional[Position]:
        """World position of the shape's upper corner, the rotation pivot."""
        with self._lock:
            placement = self._placements.get(placement_id)
            if placement is None:
                return None
            return self._upper_corner(placement)

    # ------------------------------------------------------------------
    # Selection & preview
    # ------------------------------------------------------------------

    def select(self, placement_id: Optional[str]) -> EditResult:
        with self._lock:
            if placement_id is not None and placement_id not in self._placements:
                return self._finish("select", {"id": placement_id}, EditResult(
                    success=False,
                    error=ErrorCode.NOT_FOUND,
                    message=f"Placement {placement_id} not found"
                ))
            self._selected_id = placement_id
            return self._finish("select", {"id": placement_id}, EditResult(
                success=True,
                error=ErrorCode.OK,
                placement=self.get(placement_id) if placement_id else None,
                message="Selection cleared" if placement_id is None else f"Selected {placement_id}"
            ))

    def clear_preview(self):
        with self._lock:
            self._preview = None

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def add(self, shape_type: Union[str, ShapeType], position: Sequence[float],
            orientation: Orientation = IDENTITY,
            placement_id: Optional[str] = None) -> EditResult:
        """
        Add a shape to the scene.

        Args:
            shape_type: shape to add
            position: snapped world position; z is clamped to the ground
            orientation: initial orientation
            placement_id: id to use, a random UUID by default

        Returns:
            EditResult with the committed placement, or a collision preview
        """
        shape_type = shape_type_from_value(shape_type)
        params = {"shape_type": shape_type.value, "position": list(position),
                  "orientation": orientation.index}
        with self._lock:
            if len(self._placements) >= self.config.max_placements:
                return self._finish("add", params, EditResult(
                    success=False,
                    error=ErrorCode.SCENE_FULL,
                    message=f"Scene already holds {len(self._placements)} placements"
                ))

            placement_id = placement_id or str(uuid.uuid4())
            if placement_id in self._placements:
                raise ValueError(f"Placement id already in use: {placement_id}")

            x, y, z = as_position(position)
            z = clamp_to_ground(shape_type, orientation, z, self.config.ground_level)
            candidate = Placement(placement_id, shape_type, (x, y, z), orientation)
            return self._propose("add", params, candidate, exclude_id=None)

    def preview_drop(self, shape_type: Union[str, ShapeType],
                     raw_x: float, raw_y: float) -> Preview:
        """
        Preview a shape dragged in from the palette.

        The shape is snapped on the ground plane and checked for collisions;
        the preview is stored whether or not it collides.
        """
        shape_type = shape_type_from_value(shape_type)
        with self._lock:
            position = snap_to_ground(shape_type, IDENTITY, raw_x, raw_y, self.config.ground_level)
            candidate = Placement("", shape_type, position, IDENTITY)
            hits = colliding_ids(candidate, self._placements.values(),
                                 strategy=self.config.collision_strategy)
            self._preview = Preview(shape_type, position, IDENTITY,
                                    is_colliding=bool(hits), colliding_ids=hits)
            return self._preview.copy()

    def drop(self, shape_type: Union[str, ShapeType], raw_x: float, raw_y: float) -> EditResult:
        """Place a palette shape at the snapped ground position under the pointer."""
        shape_type = shape_type_from_value(shape_type)
        with self._lock:
            position = snap_to_ground(shape_type, IDENTITY, raw_x, raw_y, self.config.ground_level)
            return self.add(shape_type, position)

    def remove(self, placement_id: str) -> EditResult:
        with self._lock:
            placement = self._placements.pop(placement_id, None)
            if placement is None:
                return self._finish("remove", {"id": placement_id}, EditResult(
                    success=False,
                    error=ErrorCode.NOT_FOUND,
                    message=f"Placement {placement_id} not found"
                ))
            if self._selected_id == placement_id:
                self._selected_id = None
            return self._finish("remove", {"id": placement_id}, EditResult(
                success=True,
                error=ErrorCode.OK,
                placement=placement,
                message=f"Placement {placement_id} removed"
            ))

    def reset(self):
        with self._lock:
            self._placements.clear()
            self._selected_id = None
            self._preview = None
            if self.logger:
                self.logger.log_edit("reset", {}, EditResult(True, ErrorCode.OK, message="Scene cleared"))

    def move_to(self, placement_id: str, position: Sequence[float]) -> EditResult:
        """Move to an already-snapped position; z never goes below the ground."""
        params = {"id": placement_id, "position": list(position)}
        with self._lock:
            placement = self._placements.get(placement_id)
            if placement is None:
                return self._not_found("move", params, placement_id)
            x, y, z = as_position(position)
            z = clamp_to_ground(placement.shape_type, placement.orientation, z, self.config.ground_level)
            candidate = replace(placement, position=(x, y, z))
            return self._propose("move", params, candidate, exclude_id=placement_id)

    def drag(self, placement_id: str, raw_x: float, raw_y: float) -> EditResult:
        """Pointer drag on the ground plane: snap x/y and rest on the ground."""
        params = {"id": placement_id, "raw_x": raw_x, "raw_y": raw_y}
        with self._lock:
            placement = self._placements.get(placement_id)
            if placement is None:
                return self._not_found("drag", params, placement_id)
            position = snap_to_ground(placement.shape_type, placement.orientation,
                                      raw_x, raw_y, self.config.ground_level)
            candidate = replace(placement, position=position)
            return self._propose("drag", params, candidate, exclude_id=placement_id)

    def translate_axis(self, placement_id: str, axis: str, raw_value: float) -> EditResult:
        """
        Gizmo translation along one world axis.

        The value is snapped with the rotation-aware offset; along z it is
        also clamped to the ground.
        """
        params = {"id": placement_id, "axis": axis, "raw_value": raw_value}
        axis = str(axis).lower()
        if axis not in AXES:
            raise ValueError(f"Axis must be one of {AXES}, got {axis!r}")
        with self._lock:
            placement = self._placements.get(placement_id)
            if placement is None:
                return self._not_found("translate", params, placement_id)

            i = AXES.index(axis)
            offset = rotated_center_offset(placement.shape_type, placement.orientation)
            value = snap_axis(float(raw_value), float(offset[i]))
            if axis == "z":
                value = clamp_to_ground(placement.shape_type, placement.orientation,
                                        value, self.config.ground_level)
            position = list(placement.position)
            position[i] = value
            candidate = replace(placement, position=tuple(position))
            return self._propose("translate", params, candidate, exclude_id=placement_id)

    def rotate(self, placement_id: str, axis: str, turns: int = 1) -> EditResult:
        """
        Rotate a placement by quarter turns about a world axis.

        The pivot is the shape's upper corner, where the gizmo sits, so the
        shape turns in place around that corner instead of its center.
        """
        params = {"id": placement_id, "axis": axis, "turns": turns}
        with self._lock:
            placement = self._placements.get(placement_id)
            if placement is None:
                return self._not_found("rotate", params, placement_id)

            new_orientation = rotate90(placement.orientation, axis, turns)
            step = rotate90(IDENTITY, axis, turns).matrix

            pivot = np.array(self._upper_corner(placement))
            relative = np.array(placement.position) - pivot
            raw_position = pivot + step @ relative

            position = snap_position(placement.shape_type, new_orientation, raw_position,
                                     self.config.ground_level)
            candidate = replace(placement, position=position, orientation=new_orientation)
            return self._propose("rotate", params, candidate, exclude_id=placement_id)

    def rotate_selected(self, axis: str, turns: int = 1) -> EditResult:
        with self._lock:
            if self._selected_id is None:
                return self._finish("rotate", {"axis": axis, "turns": turns}, EditResult(
                    success=False,
                    error=ErrorCode.NO_SELECTION,
                    message="No placement selected"
                ))
            return self.rotate(self._selected_id, axis, turns)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _upper_corner(self, placement: Placement) -> Position:
        half = np.array(shape_dimensions(placement.shape_type), dtype=float) / 2.0
        corner = placement.orientation.matrix @ half + np.array(placement.position)
        return as_position(corner.tolist())

    def _propose(self, action: str, params: Dict[str, Any],
                 candidate: Placement, exclude_id: Optional[str]) -> EditResult:
        hits = colliding_ids(candidate, self._placements.values(), exclude_id=exclude_id,
                             strategy=self.config.collision_strategy)
        if hits:
            self._preview = Preview(
                shape_type=candidate.shape_type,
                position=candidate.position,
                orientation=candidate.orientation,
                is_colliding=True,
                colliding_ids=hits,
            )
            return self._finish(action, params, EditResult(
                success=False,
                error=ErrorCode.COLLISION,
                preview=self._preview.copy(),
                message=f"Collision with {', '.join(hits)}"
            ))

        self._placements[candidate.id] = candidate
        self._preview = None
        return self._finish(action, params, EditResult(
            success=True,
            error=ErrorCode.OK,
            placement=replace(candidate),
            message=f"Placement {candidate.id} {action} applied"
        ))

    def _not_found(self, action: str, params: Dict[str, Any], placement_id: str) -> EditResult:
        return self._finish(action, params, EditResult(
            success=False,
            error=ErrorCode.NOT_FOUND,
            message=f"Placement {placement_id} not found"
        ))

    def _finish(self, action: str, params: Dict[str, Any], result: EditResult) -> EditResult:
        if self.logger:
            self.logger.log_edit(action, params, result, scene=self)
        return result
