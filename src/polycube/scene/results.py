"""
Edit outcomes returned by the scene owner.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional

from polycube.geometry.catalog import ShapeType
from polycube.geometry.rotation import Orientation
from polycube.geometry.types import Placement, Position


class ErrorCode(Enum):
    """Error codes"""
    OK = "OK"
    COLLISION = "Collision"
    NOT_FOUND = "NotFound"
    NO_SELECTION = "NoSelection"
    SCENE_FULL = "SceneFull"


@dataclass
class Preview:
    """A candidate transform shown to the user but not committed."""
    shape_type: ShapeType
    position: Position
    orientation: Orientation
    is_colliding: bool = True
    colliding_ids: List[str] = field(default_factory=list)

    def copy(self) -> "Preview":
        return replace(self, colliding_ids=list(self.colliding_ids))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "shape_type": self.shape_type.value,
            "position": list(self.position),
            "orientation": self.orientation.index,
            "is_colliding": self.is_colliding,
            "colliding_ids": list(self.colliding_ids),
        }


@dataclass
class EditResult:
    """Edit result"""
    success: bool
    error: ErrorCode
    placement: Optional[Placement] = None
    preview: Optional[Preview] = None
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "error": self.error.value,
            "placement": self.placement.to_dict() if self.placement else None,
            "preview": self.preview.to_dict() if self.preview else None,
            "message": self.message,
        }
