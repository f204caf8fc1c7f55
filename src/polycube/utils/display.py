"""
Console display utilities for polycube.
"""

from datetime import datetime
from typing import Any, Dict


class StatusDisplay:
    """Handles status display for different operations."""

    @staticmethod
    def print_header(title: str, width: int = 80):
        """Print a formatted header."""
        print("\n" + "=" * width)
        print(f"{title:^{width}}")
        print("=" * width)

    @staticmethod
    def print_section(title: str, width: int = 60):
        """Print a section header."""
        print(f"\n📋 {title}")
        print("-" * width)

    @staticmethod
    def print_config(config_dict: Dict[str, Any], title: str = "Configuration"):
        """Print configuration in a nice format."""
        StatusDisplay.print_section(title)
        for key, value in config_dict.items():
            print(f"  {key:<20} : {value}")

    @staticmethod
    def print_status(message: str, status: str = "info"):
        """Print a status message with appropriate emoji."""
        icons = {
            "info": "ℹ️",
            "success": "✅",
            "warning": "⚠️",
            "error": "❌",
            "processing": "🔄"
        }
        icon = icons.get(status, "ℹ️")
        timestamp = datetime.now().strftime("%H:%M:%S")
        print(f"{icon} [{timestamp}] {message}")

    @staticmethod
    def print_results(results: Dict[str, Any], title: str = "Results"):
        """Print results in a nice format."""
        StatusDisplay.print_section(title)
        for key, value in results.items():
            if isinstance(value, bool):
                icon = "✅" if value else "❌"
                print(f"  {key:<20} : {icon} {value}")
            elif isinstance(value, float):
                print(f"  {key:<20} : {value:g}")
            else:
                print(f"  {key:<20} : {value}")


class LiveLogger:
    """Verbose-gated status lines."""

    def __init__(self, verbose: bool = True):
        self.verbose = verbose

    def log_action(self, action_name: str, details: str = ""):
        """Log an action being performed."""
        if self.verbose:
            message = f"Executing: {action_name}"
            if details:
                message += f" - {details}"
            StatusDisplay.print_status(message, "processing")

    def log_result(self, message: str, success: bool = True):
        if self.verbose:
            StatusDisplay.print_status(message, "success" if success else "error")

    def log_info(self, message: str):
        if self.verbose:
            StatusDisplay.print_status(message, "info")

    def log_warning(self, message: str):
        if self.verbose:
            StatusDisplay.print_status(message, "warning")

    def log_error(self, message: str):
        if self.verbose:
            StatusDisplay.print_status(message, "error")
