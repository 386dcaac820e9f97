"""Domain-specific errors for the waypoint registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Hashable, Optional


@dataclass
class ErrorPayload:
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "success": False,
            "error_code": self.code,
            "error": self.message,
        }
        if self.details:
            payload["details"] = self.details
        return payload


def error_response(code: str, message: str, *, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return ErrorPayload(code, message, details).to_dict()


class WaypointRegistryError(Exception):
    code = "WAYPOINT_REGISTRY_ERROR"

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_payload(self) -> Dict[str, Any]:
        return error_response(self.code, self.message, details=self.details)


class ValidationFailure(WaypointRegistryError):
    code = "VALIDATION_ERROR"


class NotFoundError(WaypointRegistryError):
    code = "NOT_FOUND"


class PlayerNotRegisteredError(NotFoundError):
    code = "PLAYER_NOT_REGISTERED"

    def __init__(self, player_id: Hashable):
        super().__init__(
            f"Player {player_id} has no private waypoints registry",
            details={"player_id": str(player_id)},
        )
        self.player_id = player_id
