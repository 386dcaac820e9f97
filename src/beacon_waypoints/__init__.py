"""
Beacon Waypoints

In-memory registry of public, private and inactive waypoints keyed by
block coordinates inside a 3D world.
"""

__version__ = "0.1.0"

from .coords import Location, WaypointCoord
from .errors import (
    NotFoundError,
    PlayerNotRegisteredError,
    ValidationFailure,
    WaypointRegistryError,
)
from .models import Waypoint
from .player import WaypointPlayer
from .waypoint_manager import WaypointManager

__all__ = [
    "Location",
    "WaypointCoord",
    "Waypoint",
    "WaypointPlayer",
    "WaypointManager",
    "WaypointRegistryError",
    "ValidationFailure",
    "NotFoundError",
    "PlayerNotRegisteredError",
]
