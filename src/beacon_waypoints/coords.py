"""
Spatial keys for the waypoint registry.

A ``Location`` is the continuous position callers receive from the world;
a ``WaypointCoord`` is the block-granular key every waypoint collection is
indexed by.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Union


@dataclass(frozen=True)
class Location:
    """Continuous position inside a world."""
    world: str
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class WaypointCoord:
    """Discretized position plus world identifier, used as a lookup key."""
    x: int
    y: int
    z: int
    world: str

    @classmethod
    def from_location(cls, location: Location) -> "WaypointCoord":
        """Floor each axis of a continuous location to block granularity."""
        return cls(
            x=math.floor(location.x),
            y=math.floor(location.y),
            z=math.floor(location.z),
            world=location.world,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "z": self.z, "world": self.world}

    def __str__(self) -> str:
        return f"{self.x}, {self.y}, {self.z}"


CoordLike = Union[WaypointCoord, Location]


def as_coord(value: CoordLike) -> WaypointCoord:
    """Return ``value`` as a coordinate, floor-converting locations."""
    if isinstance(value, WaypointCoord):
        return value
    return WaypointCoord.from_location(value)
