import os
import json
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import pandas as pd

from polycube.core.config import LoggingConfig

if TYPE_CHECKING:
    from polycube.scene.results import EditResult
    from polycube.scene.scene import Scene


class SessionLogger:
    def __init__(self, log_dir: str, session_name: str,
                 verbose: bool = True, save_snapshots: bool = False):
        """
        Initializes the logger for an editing session.

        Args:
            log_dir (str): The base directory for logs.
            session_name (str): A name for the session; a timestamp is appended.
            verbose (bool): Whether to print each edit to the console.
            save_snapshots (bool): Whether to render the scene after each edit.
        """
        self.timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.session_name = f"{session_name}_{self.timestamp}"
        self.run_dir = os.path.join(log_dir, self.session_name)
        self.images_dir = os.path.join(self.run_dir, "images")
        self.verbose = verbose
        self.save_snapshots = save_snapshots
        self.logs: List[Dict[str, Any]] = []

        os.makedirs(self.run_dir, exist_ok=True)
        if self.save_snapshots:
            os.makedirs(self.images_dir, exist_ok=True)

    @classmethod
    def from_config(cls, config: LoggingConfig) -> "SessionLogger":
        return cls(
            log_dir=config.log_dir,
            session_name=config.session_name,
            verbose=config.verbose,
            save_snapshots=config.save_snapshots,
        )

    def log_edit(self, action: str, parameters: Dict[str, Any],
                 result: "EditResult", scene: Optional["Scene"] = None):
        """
        Logs a single edit attempt.

        Args:
            action (str): Edit name, e.g. "add", "move", "rotate".
            parameters (Dict[str, Any]): The arguments the edit was called with.
            result (EditResult): Outcome of the edit.
            scene (Scene): Scene to snapshot when snapshots are enabled.
        """
        step = len(self.logs)
        log_entry = {
            "step": step,
            "timestamp": datetime.now().isoformat(),
            "action": action,
            "parameters": parameters,
            **result.to_dict(),
        }

        if self.save_snapshots and scene is not None:
            from polycube.utils.visualizer import save_scene_visualization

            image_path = os.path.join(self.images_dir, f"step_{step}.png")
            save_scene_visualization(scene, image_path, title=f"Step {step}: {action}")
            log_entry["image_path"] = image_path

        if self.verbose:
            if result.success:
                print(f"✅ Step {step}: {action} - {result.message}")
            else:
                print(f"❌ Step {step}: {action} rejected ({result.error.value})")
                print(f"  🔍 Details: {result.message}")

        self.logs.append(log_entry)

    def save_logs(self):
        """Saves all collected logs to a JSON file."""
        log_file = os.path.join(self.run_dir, "session_log.json")
        with open(log_file, "w") as f:
            json.dump(self.logs, f, indent=2, default=str)

        summary_file = os.path.join(self.run_dir, "summary.txt")
        self._create_summary_file(summary_file)

        if self.verbose:
            print(f"📁 Logs saved to: {log_file}")
            print(f"📋 Summary saved to: {summary_file}")
        return log_file

    def _create_summary_file(self, summary_file: str):
        """Create a human-readable summary file."""
        applied = len([log for log in self.logs if log.get("success")])
        collisions = len([log for log in self.logs if log.get("error") == "Collision"])
        rejected = len(self.logs) - applied

        with open(summary_file, "w") as f:
            f.write(f"Session Summary: {self.session_name}\n")
            f.write("=" * 60 + "\n")
            f.write(f"Total Edits: {len(self.logs)}\n")
            f.write(f"Applied: {applied}\n")
            f.write(f"Rejected: {rejected}\n")
            f.write(f"Collisions: {collisions}\n")
            f.write(f"Images Saved: {len([log for log in self.logs if 'image_path' in log])}\n")
            f.write("\nStep-by-step breakdown:\n")
            f.write("-" * 30 + "\n")

            for log in self.logs:
                status = "OK" if log.get("success") else log.get("error", "?")
                f.write(f"Step {log.get('step', '?')}: {log.get('action', 'unknown')} [{status}]\n")
                if log.get("message"):
                    f.write(f"  {log['message']}\n")

    def save_edits_table(self, csv_path: str):
        """
        Saves one row per edit to a CSV file.
        If the file exists, it appends the new rows.

        Args:
            csv_path (str): The path to the output CSV file.
        """
        rows = [
            {
                "session": self.session_name,
                "step": log["step"],
                "action": log["action"],
                "success": log["success"],
                "error": log["error"],
                "message": log["message"],
            }
            for log in self.logs
        ]
        edits_df = pd.DataFrame(rows, columns=["session", "step", "action", "success", "error", "message"])

        if os.path.exists(csv_path):
            existing_df = pd.read_csv(csv_path)
            edits_df = pd.concat([existing_df, edits_df], ignore_index=True)

        edits_df.to_csv(csv_path, index=False)
        if self.verbose:
            print(f"Edits saved to {csv_path}")
