"""Per-player private waypoint storage."""

from __future__ import annotations

from typing import Dict, Hashable, Optional

from .coords import WaypointCoord
from .models import Waypoint


class WaypointPlayer:
    """Private waypoints owned by a single player identity."""

    def __init__(self, player_id: Hashable):
        self.player_id = player_id
        self._waypoints: Dict[WaypointCoord, Waypoint] = {}

    def add_waypoint(self, waypoint: Waypoint) -> None:
        self._waypoints[waypoint.coord] = waypoint

    def remove_waypoint(self, coord: WaypointCoord) -> Optional[Waypoint]:
        return self._waypoints.pop(coord, None)

    def get_waypoint(self, coord: WaypointCoord) -> Optional[Waypoint]:
        return self._waypoints.get(coord)

    def get_waypoints(self) -> Dict[WaypointCoord, Waypoint]:
        """Return the live backing dict (not a copy)."""
        return self._waypoints

    def __len__(self) -> int:
        return len(self._waypoints)

    def __repr__(self) -> str:
        return f"<WaypointPlayer({self.player_id}): {len(self._waypoints)} waypoints>"
