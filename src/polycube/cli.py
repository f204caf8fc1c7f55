"""
Command-line interface for polycube.

Inspect the shape catalog, resolve the cells of a single placement, and
replay recorded edit sessions against a fresh scene.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from polycube.core.config import Config, create_default_config, load_config, validate_config
from polycube.core.registry import COLLISION_STRATEGY_REGISTRY
from polycube.geometry.catalog import SHAPE_DEFINITIONS, ShapeType, lookup
from polycube.geometry.centering import center_offset, shape_dimensions
from polycube.geometry.collision import minimum_ground_position
from polycube.geometry.faces import face_count
from polycube.geometry.occupancy import occupied_cells
from polycube.geometry.rotation import AXES, IDENTITY, rotate90
from polycube.scene.replay import apply_action, load_actions
from polycube.scene.scene import Scene
from polycube.utils.display import LiveLogger, StatusDisplay
from polycube.utils.logger import SessionLogger


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    shape_names = [t.value for t in ShapeType]

    parser = argparse.ArgumentParser(
        description="polycube: grid-aligned polycube occupancy & collision",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List shapes with their dimensions and center offsets
  polycube shapes

  # Cells of a T piece turned a quarter about Z, then X
  polycube cells --shape t-shape-long --position 0.5 0.5 0.5 --rotate z x

  # Replay an edit session with logging
  polycube replay --actions session.yaml --config polycube.yaml --save-png scene.png

  # Create / validate a configuration
  polycube create-config --output polycube.yaml
  polycube validate-config polycube.yaml
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    shapes_parser = subparsers.add_parser("shapes", help="List the shape catalog")
    shapes_parser.add_argument("--format", choices=["table", "json"], default="table", help="Output format")

    cells_parser = subparsers.add_parser("cells", help="Resolve the cells of one placement")
    cells_parser.add_argument("--shape", required=True, choices=shape_names, help="Shape type")
    cells_parser.add_argument("--position", nargs=3, type=float, metavar=("X", "Y", "Z"),
                              help="World position (defaults to the origin resting on the ground)")
    cells_parser.add_argument("--rotate", nargs="*", default=[], choices=list(AXES),
                              help="Quarter turns to apply in order, e.g. --rotate z z x")

    replay_parser = subparsers.add_parser("replay", help="Replay an action file against a fresh scene")
    replay_parser.add_argument("--actions", "-a", required=True, help="YAML or JSON action file")
    replay_parser.add_argument("--config", "-c", help="Configuration file")
    replay_parser.add_argument("--output-dir", help="Override log directory")
    replay_parser.add_argument("--save-png", help="Save the final scene to this image")
    replay_parser.add_argument("--edits-csv", help="Append one row per edit to this CSV file")
    replay_parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output")

    config_parser = subparsers.add_parser("create-config", help="Create default configuration file")
    config_parser.add_argument("--output", "-o", default="polycube.yaml", help="Output configuration file")

    validate_parser = subparsers.add_parser("validate-config", help="Validate configuration file")
    validate_parser.add_argument("config", help="Configuration file to validate")
    validate_parser.add_argument("--strict", action="store_true", help="Treat warnings as errors")

    return parser


def shapes_command(args) -> int:
    rows = []
    for definition in SHAPE_DEFINITIONS:
        rows.append({
            "type": definition.type.value,
            "name": definition.name,
            "blocks": len(definition.blocks),
            "dimensions": list(shape_dimensions(definition)),
            "center_offset": center_offset(definition).tolist(),
            "ground_z": minimum_ground_position(definition.type, IDENTITY),
            "exposed_faces": face_count(definition.type),
        })

    if args.format == "json":
        print(json.dumps(rows, indent=2))
        return 0

    StatusDisplay.print_section(f"Shape Catalog ({len(rows)} shapes)")
    for row in rows:
        dims = "x".join(str(d) for d in row["dimensions"])
        offset = ", ".join(f"{v:g}" for v in row["center_offset"])
        print(f"  {row['type']:<16} {row['name']:<12} blocks={row['blocks']} "
              f"dims={dims:<7} offset=({offset}) ground_z={row['ground_z']:g}")
    return 0


def cells_command(args) -> int:
    orientation = IDENTITY
    for axis in args.rotate:
        orientation = rotate90(orientation, axis)

    if args.position is None:
        position = (0.0, 0.0, minimum_ground_position(args.shape, orientation))
    else:
        position = tuple(args.position)

    cells = sorted(occupied_cells(args.shape, position, orientation))
    results = {
        "Shape": lookup(args.shape).name,
        "Orientation": orientation.index,
        "Position": ", ".join(f"{v:g}" for v in position),
        "Ground Z": minimum_ground_position(args.shape, orientation),
        "Cells": " ".join(f"({x},{y},{z})" for x, y, z in cells),
    }
    StatusDisplay.print_results(results, "Occupied Cells")
    return 0


def replay_command(args) -> int:
    logger = LiveLogger(verbose=True)

    try:
        config = _load_and_validate_config(args, logger)
        if config is None:
            return 1
        if args.output_dir:
            config.logging.log_dir = args.output_dir
        if args.verbose:
            config.logging.verbose = True

        actions = load_actions(args.actions)
        StatusDisplay.print_header(f"Replay: {Path(args.actions).name}")
        logger.log_info(f"Loaded {len(actions)} actions from {args.actions}")

        session = SessionLogger.from_config(config.logging)
        scene = Scene(config.scene, logger=session)
        applied = 0
        try:
            for action in actions:
                if apply_action(scene, action).success:
                    applied += 1
        finally:
            # Steps already applied are kept even when an action aborts the replay
            session.save_logs()
            if args.edits_csv:
                session.save_edits_table(args.edits_csv)

        if args.save_png:
            from polycube.utils.visualizer import save_scene_visualization
            save_scene_visualization(scene, args.save_png, title=Path(args.actions).stem)
            logger.log_result(f"Scene image saved to {args.save_png}")

        StatusDisplay.print_results({
            "Actions": len(actions),
            "Applied": applied,
            "Rejected": len(actions) - applied,
            "Placements": len(scene),
            "Log Directory": session.run_dir,
        }, "Replay Results")
        return 0

    except (FileNotFoundError, ValueError, KeyError, TypeError, yaml.YAMLError) as e:
        logger.log_error(f"Replay failed: {e}")
        return 1


def _load_and_validate_config(args, logger: LiveLogger) -> Optional[Config]:
    """Load and validate configuration with error handling."""
    if not getattr(args, "config", None):
        return Config()

    try:
        logger.log_action("Loading configuration")
        config = load_config(args.config)
    except FileNotFoundError:
        logger.log_error(f"Configuration file not found: {args.config}")
        logger.log_info("Use 'polycube create-config' to create a default configuration")
        return None
    except Exception as e:
        logger.log_error(f"Configuration error: {e}")
        return None

    issues = validate_config(config)
    errors = [issue for issue in issues if issue.startswith("ERROR")]
    for issue in issues:
        if issue.startswith("ERROR"):
            logger.log_error(issue.replace("ERROR: ", ""))
        else:
            logger.log_warning(issue.replace("WARNING: ", ""))
    if errors:
        return None
    return config


def create_config_command(args) -> int:
    logger = LiveLogger(verbose=True)
    try:
        create_default_config(args.output)
    except OSError as e:
        logger.log_error(f"Failed to write configuration: {e}")
        return 1
    logger.log_result(f"Default configuration written to {args.output}")
    return 0


def validate_config_command(args) -> int:
    logger = LiveLogger(verbose=True)
    try:
        config = load_config(args.config)
    except Exception as e:
        logger.log_error(f"Configuration error: {e}")
        return 1

    issues = validate_config(config)
    errors = [issue for issue in issues if issue.startswith("ERROR")]
    warnings = [issue for issue in issues if not issue.startswith("ERROR")]

    for error in errors:
        logger.log_error(error.replace("ERROR: ", ""))
    for warning in warnings:
        logger.log_warning(warning.replace("WARNING: ", ""))

    if errors or (args.strict and warnings):
        return 1

    StatusDisplay.print_config({
        "Collision Strategy": config.scene.collision_strategy,
        "Available": ", ".join(sorted(COLLISION_STRATEGY_REGISTRY)),
        "Ground Level": config.scene.ground_level,
        "Max Placements": config.scene.max_placements,
        "Log Directory": config.logging.log_dir,
    }, "Configuration OK")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    argv = sys.argv[1:] if argv is None else argv

    if not argv:
        parser.print_help()
        return 1

    args = parser.parse_args(argv)

    command_handlers = {
        "shapes": shapes_command,
        "cells": cells_command,
        "replay": replay_command,
        "create-config": create_config_command,
        "validate-config": validate_config_command,
    }

    handler = command_handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except KeyboardInterrupt:
        print("\n⚠️  Interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
