"""Utility modules for polycube."""

from polycube.utils.logger import SessionLogger
from polycube.utils.display import StatusDisplay, LiveLogger

__all__ = [
    "SessionLogger",
    "StatusDisplay",
    "LiveLogger",
]
