"""Tests for session logging, replay, visualization and the CLI."""
import json
import os

import pandas as pd
import pytest
import yaml

from polycube.cli import main
from polycube.core.config import LoggingConfig, SceneConfig
from polycube.geometry.catalog import ShapeType
from polycube.scene import ErrorCode, Scene
from polycube.scene.replay import apply_action, load_actions, replay
from polycube.utils.logger import SessionLogger
from polycube.utils.visualizer import save_scene_visualization, visualize_scene

ACTIONS = [
    {"action": "add", "shape": "l-shape-short", "position": [1, 1, 0.5], "id": "base"},
    {"action": "add", "shape": "cube-1x1x1", "position": [0, 0, 0.5], "id": "clash"},
    {"action": "drop", "shape": "cube-1x1x1", "x": 5.2, "y": 0.1},
    {"action": "select", "id": "base"},
    {"action": "rotate_selected", "axis": "z"},
    {"action": "translate", "id": "base", "axis": "y", "value": 4.2},
]


@pytest.fixture
def actions_file(tmp_path):
    path = tmp_path / "session.yaml"
    path.write_text(yaml.dump({"actions": ACTIONS}), encoding="utf-8")
    return str(path)


class TestSessionLogger:

    def test_logs_every_edit(self, tmp_path):
        logger = SessionLogger(str(tmp_path), "t", verbose=False)
        scene = Scene(SceneConfig(), logger=logger)
        scene.add(ShapeType.CUBE, (0, 0, 0.5), placement_id="a")
        scene.add(ShapeType.CUBE, (0, 0, 0.5), placement_id="b")

        assert [log["action"] for log in logger.logs] == ["add", "add"]
        assert logger.logs[0]["success"] is True
        assert logger.logs[1]["error"] == ErrorCode.COLLISION.value
        assert logger.logs[1]["preview"]["colliding_ids"] == ["a"]

    def test_save_logs(self, tmp_path):
        logger = SessionLogger(str(tmp_path), "t", verbose=False)
        scene = Scene(logger=logger)
        scene.add(ShapeType.CUBE, (0, 0, 0.5))
        scene.remove("ghost")

        log_file = logger.save_logs()
        with open(log_file) as f:
            saved = json.load(f)
        assert len(saved) == 2
        with open(os.path.join(logger.run_dir, "summary.txt")) as f:
            summary = f.read()
        assert "Applied: 1" in summary
        assert "Rejected: 1" in summary

    def test_edits_table_appends(self, tmp_path):
        logger = SessionLogger(str(tmp_path), "t", verbose=False)
        Scene(logger=logger).add(ShapeType.CUBE, (0, 0, 0.5))
        csv_path = str(tmp_path / "edits.csv")
        logger.save_edits_table(csv_path)
        logger.save_edits_table(csv_path)
        assert len(pd.read_csv(csv_path)) == 2

    def test_snapshots(self, tmp_path):
        logger = SessionLogger.from_config(LoggingConfig(log_dir=str(tmp_path), save_snapshots=True, verbose=False))
        Scene(logger=logger).add(ShapeType.T_LONG, (1.5, 1.5, 0.5))
        assert os.path.exists(logger.logs[0]["image_path"])


class TestReplay:

    def test_load_yaml(self, actions_file):
        assert load_actions(actions_file) == ACTIONS

    def test_load_json_list(self, tmp_path):
        path = tmp_path / "a.json"
        path.write_text(json.dumps(ACTIONS), encoding="utf-8")
        assert load_actions(str(path)) == ACTIONS

    def test_load_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("actions: [ {action: add, \n", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid action file"):
            load_actions(str(path))

    def test_load_invalid(self, tmp_path):
        path = tmp_path / "a.yaml"
        path.write_text(yaml.dump([{"shape": "cube-1x1x1"}]), encoding="utf-8")
        with pytest.raises(ValueError):
            load_actions(str(path))
        with pytest.raises(FileNotFoundError):
            load_actions(str(tmp_path / "missing.yaml"))

    def test_replay(self):
        scene = Scene()
        results = replay(scene, ACTIONS)
        assert [r.success for r in results] == [True, False, True, True, True, True]
        assert results[1].error is ErrorCode.COLLISION
        assert len(scene) == 2
        assert scene.get("base").position == (3.0, 4.0, 0.5)

    def test_unknown_action(self):
        with pytest.raises(ValueError):
            apply_action(Scene(), {"action": "explode"})


class TestVisualizer:

    def test_visualize(self, tmp_path):
        scene = Scene()
        scene.add(ShapeType.L_LONG, (1.5, 1.0, 0.5), placement_id="l")
        scene.select("l")
        scene.preview_drop(ShapeType.CUBE, 0.2, 0.2)
        fig = visualize_scene(scene, title="test")
        assert fig is not None

        path = str(tmp_path / "scene.png")
        save_scene_visualization(scene, path)
        assert os.path.getsize(path) > 0

    def test_empty_scene(self, tmp_path):
        path = str(tmp_path / "empty.png")
        save_scene_visualization(Scene(), path)
        assert os.path.exists(path)


class TestCli:

    def test_no_arguments(self):
        assert main([]) == 1

    def test_shapes_table(self, capsys):
        assert main(["shapes"]) == 0
        assert "t-shape-long" in capsys.readouterr().out

    def test_shapes_json(self, capsys):
        assert main(["shapes", "--format", "json"]) == 0
        rows = json.loads(capsys.readouterr().out)
        assert len(rows) == 7
        t_long = next(row for row in rows if row["type"] == "t-shape-long")
        assert t_long["ground_z"] == 0.5
        assert t_long["center_offset"] == [-1.5, -1.5, -0.5]

    def test_cells(self, capsys):
        assert main(["cells", "--shape", "cube-1x1x1"]) == 0
        assert "(0,0,0)" in capsys.readouterr().out

    def test_cells_rotated(self, capsys):
        assert main(["cells", "--shape", "l-shape-short", "--position", "1", "1", "0.5", "--rotate", "z"]) == 0
        assert "(0,0,0) (1,0,0) (1,1,0)" in capsys.readouterr().out

    def test_replay(self, actions_file, tmp_path):
        png = str(tmp_path / "final.png")
        assert main(["replay", "--actions", actions_file, "--output-dir", str(tmp_path / "logs"),
                     "--save-png", png]) == 0
        assert os.path.exists(png)
        assert os.listdir(tmp_path / "logs")

    def test_replay_missing_actions(self, tmp_path):
        assert main(["replay", "--actions", str(tmp_path / "nope.yaml")]) == 1

    def test_replay_broken_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("actions: [ {action: add, \n", encoding="utf-8")
        assert main(["replay", "--actions", str(path), "--output-dir", str(tmp_path / "logs")]) == 1

    def test_replay_bad_position(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump([{"action": "add", "shape": "cube-1x1x1", "position": 5}]), encoding="utf-8")
        assert main(["replay", "--actions", str(path), "--output-dir", str(tmp_path / "logs")]) == 1

    def test_replay_keeps_log_when_an_action_aborts(self, tmp_path):
        path = tmp_path / "dup.yaml"
        path.write_text(yaml.dump([
            {"action": "add", "shape": "cube-1x1x1", "position": [0, 0, 0.5], "id": "a"},
            {"action": "add", "shape": "cube-1x1x1", "position": [3, 0, 0.5], "id": "a"},
        ]), encoding="utf-8")
        logs = tmp_path / "logs"
        assert main(["replay", "--actions", str(path), "--output-dir", str(logs)]) == 1

        (run_dir,) = os.listdir(logs)
        with open(logs / run_dir / "session_log.json") as f:
            saved = json.load(f)
        assert [entry["action"] for entry in saved] == ["add"]
        assert saved[0]["success"] is True
        assert os.path.exists(logs / run_dir / "summary.txt")

    def test_replay_edits_csv(self, actions_file, tmp_path):
        csv_path = str(tmp_path / "edits.csv")
        args = ["replay", "--actions", actions_file, "--output-dir", str(tmp_path / "logs"),
                "--edits-csv", csv_path]
        assert main(args) == 0
        edits = pd.read_csv(csv_path)
        assert len(edits) == len(ACTIONS)
        assert edits["error"].tolist().count("Collision") == 1

    def test_config_commands(self, tmp_path):
        path = str(tmp_path / "polycube.yaml")
        assert main(["create-config", "--output", path]) == 0
        assert main(["validate-config", path]) == 0

    def test_validate_bad_config(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({"scene": {"collision_strategy": "octree"}}), encoding="utf-8")
        assert main(["validate-config", str(path)]) == 1
