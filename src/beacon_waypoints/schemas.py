"""Snapshot schema definitions for exporting and replaying registry state.

Export does not go through these models: the registry accepts any hashable
player id and any world name, so ``encode_player`` and ``Waypoint.to_dict``
produce plain data directly. The models validate on the way back in.
"""

from __future__ import annotations

from typing import Any, Dict, Hashable, List, Literal, Tuple
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .coords import WaypointCoord
from .errors import ValidationFailure
from .logging import module_logger
from .models import Waypoint

logger = module_logger(service='waypoints', component='schemas')

PlayerIdType = Literal["uuid", "int", "str"]


class CoordPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    x: int
    y: int
    z: int
    world: str

    def to_coord(self) -> WaypointCoord:
        return WaypointCoord(x=self.x, y=self.y, z=self.z, world=self.world)


class WaypointPayload(BaseModel):
    name: str = ""
    coord: CoordPayload

    def to_waypoint(self) -> Waypoint:
        return Waypoint(coord=self.coord.to_coord(), name=self.name)


class PlayerPayload(BaseModel):
    player_id: str
    player_id_type: PlayerIdType = "str"
    waypoints: List[WaypointPayload] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_player_id(self) -> "PlayerPayload":
        self.decoded_player_id()
        return self

    def decoded_player_id(self) -> Hashable:
        """Rebuild the player id with the type it was exported with."""
        if self.player_id_type == "uuid":
            return UUID(self.player_id)
        if self.player_id_type == "int":
            return int(self.player_id)
        return self.player_id


class RegistrySnapshot(BaseModel):
    public: List[WaypointPayload] = Field(default_factory=list)
    inactive: List[WaypointPayload] = Field(default_factory=list)
    players: List[PlayerPayload] = Field(default_factory=list)


def encode_player_id(player_id: Hashable) -> Tuple[str, PlayerIdType]:
    """Return the string form of a player id and the tag needed to rebuild it.

    UUID, int and str ids round-trip exactly. Any other hashable is exported
    through ``str()`` and comes back as a string.
    """
    if isinstance(player_id, UUID):
        return str(player_id), "uuid"
    # bool is an int subclass but does not survive int(str(...))
    if type(player_id) is int:
        return str(player_id), "int"
    if not isinstance(player_id, str):
        logger.warning(
            f"Player id {player_id!r} of type {type(player_id).__name__} "
            "is exported as a string and will not round-trip"
        )
    return str(player_id), "str"


def encode_player(player_id: Hashable, waypoints: List[Waypoint]) -> Dict[str, Any]:
    encoded_id, id_type = encode_player_id(player_id)
    return {
        "player_id": encoded_id,
        "player_id_type": id_type,
        "waypoints": [wp.to_dict() for wp in waypoints],
    }


def parse_snapshot(data: Dict[str, Any]) -> RegistrySnapshot:
    """Validate raw snapshot data, raising ValidationFailure on bad input."""
    try:
        return RegistrySnapshot.model_validate(data)
    except ValidationError as exc:
        raise ValidationFailure(
            "Invalid registry snapshot",
            details={"errors": exc.errors(include_url=False, include_context=False)},
        ) from exc
