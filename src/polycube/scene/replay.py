"""
Replay a recorded list of edits against a scene.

Action files are YAML or JSON: either a list of actions or a mapping with an
"actions" key. Each action is a mapping with an "action" name, e.g.

    - {action: add, shape: l-shape-short, position: [0, 0, 0.5], id: base}
    - {action: rotate, id: base, axis: z, turns: 1}
    - {action: drop, shape: cube-1x1x1, x: 3.2, y: 1.1}
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, List

import yaml

from polycube.geometry.rotation import Orientation
from polycube.scene.results import EditResult, ErrorCode
from polycube.scene.scene import Scene

Action = Dict[str, Any]


def load_actions(path: str) -> List[Action]:
    """
    Load an action list from a YAML or JSON file.

    Raises:
        FileNotFoundError: the file does not exist
        ValueError: the file is not valid YAML/JSON or does not hold a list
            of action mappings
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Action file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        try:
            if path.suffix.lower() == '.json':
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ValueError(f"Invalid action file: {e}")

    if isinstance(data, dict) and 'actions' in data:
        data = data['actions']
    if not isinstance(data, list):
        raise ValueError("Invalid action file. Expected a list of actions or a mapping with an 'actions' key.")
    for i, action in enumerate(data):
        if not isinstance(action, dict) or 'action' not in action:
            raise ValueError(f"Action {i} must be a mapping with an 'action' key")
    return data


def _add(scene: Scene, a: Action) -> EditResult:
    return scene.add(a["shape"], a["position"],
                     orientation=Orientation(int(a.get("orientation", 0))),
                     placement_id=a.get("id"))


def _select(scene: Scene, a: Action) -> EditResult:
    return scene.select(a.get("id"))


def _reset(scene: Scene, a: Action) -> EditResult:
    scene.reset()
    return EditResult(success=True, error=ErrorCode.OK, message="Scene cleared")


ACTION_HANDLERS: Dict[str, Callable[[Scene, Action], EditResult]] = {
    "add": _add,
    "drop": lambda scene, a: scene.drop(a["shape"], float(a["x"]), float(a["y"])),
    "remove": lambda scene, a: scene.remove(a["id"]),
    "select": _select,
    "move": lambda scene, a: scene.move_to(a["id"], a["position"]),
    "drag": lambda scene, a: scene.drag(a["id"], float(a["x"]), float(a["y"])),
    "translate": lambda scene, a: scene.translate_axis(a["id"], a["axis"], float(a["value"])),
    "rotate": lambda scene, a: scene.rotate(a["id"], a["axis"], int(a.get("turns", 1))),
    "rotate_selected": lambda scene, a: scene.rotate_selected(a["axis"], int(a.get("turns", 1))),
    "reset": _reset,
}


def apply_action(scene: Scene, action: Action) -> EditResult:
    """
    Apply one recorded action.

    Raises:
        ValueError: unknown action name
        KeyError: a required field is missing
    """
    name = action["action"]
    handler = ACTION_HANDLERS.get(name)
    if handler is None:
        raise ValueError(f"Unknown action: {name}. Available: {', '.join(sorted(ACTION_HANDLERS))}")
    return handler(scene, action)


def replay(scene: Scene, actions: List[Action]) -> List[EditResult]:
    return [apply_action(scene, action) for action in actions]
