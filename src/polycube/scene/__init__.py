"""Scene owner: placements, selection and collision previews."""

from polycube.scene.results import ErrorCode, EditResult, Preview
from polycube.scene.scene import Scene

__all__ = [
    "Scene",
    "ErrorCode",
    "EditResult",
    "Preview",
]
