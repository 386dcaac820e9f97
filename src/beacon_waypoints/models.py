"""
Data models for the waypoint registry.
"""

from dataclasses import dataclass
from typing import Any, Dict

from .coords import WaypointCoord


@dataclass
class Waypoint:
    """Named marker bound to a coordinate."""
    coord: WaypointCoord
    name: str

    @property
    def lower_case_name(self) -> str:
        return self.name.lower()

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "coord": self.coord.to_dict()}
