"""
Core waypoint storage and management.

Three independent namespaces are kept: public waypoints, inactive waypoints
(placed markers that have not been named yet) and per-player private
waypoints. A coordinate may appear in all of them at once.

Accessors documented as returning the "live" dict hand out the backing
storage itself. Mutating it, or holding it across registry calls made from
other threads, bypasses the registry lock.
"""

from __future__ import annotations

import contextlib
import threading
from typing import Any, Dict, Hashable, List, Optional

from .config import WaypointRegistryConfig, get_config
from .coords import CoordLike, WaypointCoord, as_coord
from .errors import PlayerNotRegisteredError, ValidationFailure
from .logging import module_logger
from .models import Waypoint
from .player import WaypointPlayer
from .schemas import encode_player, parse_snapshot

logger = module_logger(service='waypoints', component='manager')

MERGE_MODES = ("replace", "merge")


class WaypointManager:
    """Registry of public, private and inactive waypoints."""

    def __init__(self, config: Optional[WaypointRegistryConfig] = None):
        self._config = config or get_config()
        self._public_waypoints: Dict[WaypointCoord, Waypoint] = {}
        self._inactive_waypoints: Dict[WaypointCoord, Waypoint] = {}
        self._waypoint_players: Dict[Hashable, WaypointPlayer] = {}

        # One lock guards all three collections
        self._lock = threading.RLock() if self._config.thread_safe else contextlib.nullcontext()

    def _log_change(self, message: str) -> None:
        if self._config.verbose_logging:
            logger.info(message)
        else:
            logger.debug(message)

    # =============================
    # Public waypoints
    # =============================
    def add_public_waypoint(self, waypoint: Waypoint) -> None:
        with self._lock:
            self._public_waypoints[waypoint.coord] = waypoint
            self._log_change(f"Added public waypoint '{waypoint.name}' at {waypoint.coord}")

    def remove_public_waypoint(self, coord: WaypointCoord) -> Optional[Waypoint]:
        with self._lock:
            removed = self._public_waypoints.pop(coord, None)
            if removed is not None:
                self._log_change(f"Removed public waypoint '{removed.name}' at {coord}")
            return removed

    def get_public_waypoint(self, coord: CoordLike) -> Optional[Waypoint]:
        """Look up a public waypoint by coordinate or continuous location."""
        with self._lock:
            return self._public_waypoints.get(as_coord(coord))

    def get_public_waypoints(self) -> Dict[WaypointCoord, Waypoint]:
        """Return the live dict of public waypoints."""
        return self._public_waypoints

    def get_public_waypoints_sorted_alphabetically(self) -> List[Waypoint]:
        """Public waypoints ordered by case-insensitive name; ties keep insertion order."""
        with self._lock:
            return sorted(self._public_waypoints.values(), key=lambda wp: wp.lower_case_name)

    # =============================
    # Private waypoints
    # =============================
    def _get_or_create_player(self, player_id: Hashable) -> WaypointPlayer:
        player = self._waypoint_players.get(player_id)
        if player is None:
            player = WaypointPlayer(player_id)
            self._waypoint_players[player_id] = player
            self._log_change(f"Registered waypoint player {player_id}")
        return player

    def add_private_waypoint(self, player_id: Hashable, waypoint: Waypoint) -> None:
        with self._lock:
            self._get_or_create_player(player_id).add_waypoint(waypoint)
            self._log_change(f"Added private waypoint '{waypoint.name}' at {waypoint.coord} for {player_id}")

    def remove_private_waypoint(self, player_id: Hashable, coord: WaypointCoord) -> Optional[Waypoint]:
        with self._lock:
            player = self._waypoint_players.get(player_id)
            if player is None:
                return None
            removed = player.remove_waypoint(coord)
            if removed is not None:
                self._log_change(f"Removed private waypoint '{removed.name}' at {coord} for {player_id}")
            return removed

    def get_private_waypoint(self, player_id: Hashable, coord: CoordLike) -> Optional[Waypoint]:
        """Look up a player's waypoint by coordinate or continuous location."""
        with self._lock:
            player = self._waypoint_players.get(player_id)
            if player is None:
                return None
            return player.get_waypoint(as_coord(coord))

    def get_private_waypoints(self, player_id: Hashable) -> Optional[Dict[WaypointCoord, Waypoint]]:
        """Return the player's live waypoint dict, or None if the player was never registered."""
        with self._lock:
            player = self._waypoint_players.get(player_id)
            return player.get_waypoints() if player is not None else None

    def get_private_waypoints_at_coord(self, coord: WaypointCoord) -> List[Waypoint]:
        """Every player's private waypoint at ``coord``; players without one are skipped."""
        with self._lock:
            waypoints = []
            for player in self._waypoint_players.values():
                waypoint = player.get_waypoint(coord)
                if waypoint is not None:
                    waypoints.append(waypoint)
            return waypoints

    def get_num_private_waypoints(self) -> int:
        with self._lock:
            return sum(len(player) for player in self._waypoint_players.values())

    def get_private_waypoints_sorted_alphabetically(self, player_id: Hashable) -> List[Waypoint]:
        """A player's waypoints ordered by name, case-sensitive.

        Raises:
            PlayerNotRegisteredError: the player has no private registry.
        """
        with self._lock:
            player = self._waypoint_players.get(player_id)
            if player is None:
                raise PlayerNotRegisteredError(player_id)
            return sorted(player.get_waypoints().values(), key=lambda wp: wp.name)

    # =============================
    # Inactive waypoints
    # =============================
    def get_inactive_waypoints(self) -> Dict[WaypointCoord, Waypoint]:
        """Return the live dict of placed-but-unnamed waypoints."""
        return self._inactive_waypoints

    def add_inactive_waypoint(self, waypoint: Waypoint) -> None:
        with self._lock:
            self._inactive_waypoints[waypoint.coord] = waypoint
            self._log_change(f"Added inactive waypoint at {waypoint.coord}")

    def remove_inactive_waypoint(self, coord: WaypointCoord) -> Optional[Waypoint]:
        with self._lock:
            removed = self._inactive_waypoints.pop(coord, None)
            if removed is not None:
                self._log_change(f"Removed inactive waypoint at {coord}")
            return removed

    def get_inactive_waypoint(self, coord: CoordLike) -> Optional[Waypoint]:
        with self._lock:
            return self._inactive_waypoints.get(as_coord(coord))

    # =============================
    # Cross-tier queries
    # =============================
    def get_all_waypoints_at_coord(self, coord: WaypointCoord) -> List[Optional[Waypoint]]:
        """Public waypoint at ``coord`` followed by each player's waypoint there.

        Misses stay in the list as None and the inactive tier is not consulted;
        callers filter.
        """
        with self._lock:
            waypoints: List[Optional[Waypoint]] = [self._public_waypoints.get(coord)]
            for player in self._waypoint_players.values():
                waypoints.append(player.get_waypoint(coord))
            return waypoints

    # =============================
    # Player registry
    # =============================
    def add_player(self, player_id: Hashable) -> None:
        """Register a fresh, empty registry for ``player_id``, replacing any existing one."""
        with self._lock:
            existing = self._waypoint_players.get(player_id)
            if existing is not None and len(existing):
                logger.warning(f"Replacing registry for player {player_id}, discarding {len(existing)} private waypoints")
            self._waypoint_players[player_id] = WaypointPlayer(player_id)

    def get_player(self, player_id: Hashable) -> Optional[WaypointPlayer]:
        with self._lock:
            return self._waypoint_players.get(player_id)

    def get_waypoint_players(self) -> Dict[Hashable, WaypointPlayer]:
        """Return the live dict of registered players."""
        return self._waypoint_players

    # =============================
    # Snapshot / bookkeeping
    # =============================
    def get_statistics(self) -> Dict[str, int]:
        with self._lock:
            return {
                'public_waypoints': len(self._public_waypoints),
                'private_waypoints': self.get_num_private_waypoints(),
                'inactive_waypoints': len(self._inactive_waypoints),
                'players': len(self._waypoint_players),
            }

    def clear(self) -> None:
        with self._lock:
            stats = self.get_statistics()
            self._public_waypoints.clear()
            self._inactive_waypoints.clear()
            self._waypoint_players.clear()
            logger.info(f"Cleared waypoint registry: {stats}")

    def export_snapshot(self) -> Dict[str, Any]:
        """Export the registry as plain, JSON-compatible data.

        Player ids are written as strings with a type tag so UUID and int
        ids come back with their original type on import.
        """
        with self._lock:
            return {
                'public': [wp.to_dict() for wp in self._public_waypoints.values()],
                'inactive': [wp.to_dict() for wp in self._inactive_waypoints.values()],
                'players': [
                    encode_player(player.player_id, list(player.get_waypoints().values()))
                    for player in self._waypoint_players.values()
                ],
            }

    def import_snapshot(self, data: Dict[str, Any], merge_mode: str = "replace") -> Dict[str, int]:
        """Replay a snapshot through the add operations.

        Args:
            data: snapshot as produced by export_snapshot()
            merge_mode: 'replace' clears the registry first, 'merge' overlays

        Raises:
            ValidationFailure: bad merge mode or malformed snapshot data.
        """
        if merge_mode not in MERGE_MODES:
            raise ValidationFailure(
                f"Unknown merge mode '{merge_mode}'",
                details={"parameter": "merge_mode", "allowed": list(MERGE_MODES)},
            )
        snapshot = parse_snapshot(data)

        with self._lock:
            if merge_mode == "replace":
                self.clear()

            counts = {'public': 0, 'private': 0, 'inactive': 0, 'players': 0}
            for payload in snapshot.public:
                self.add_public_waypoint(payload.to_waypoint())
                counts['public'] += 1
            for payload in snapshot.inactive:
                self.add_inactive_waypoint(payload.to_waypoint())
                counts['inactive'] += 1
            for player_payload in snapshot.players:
                player_id = player_payload.decoded_player_id()
                # Players with no waypoints stay registered
                self._get_or_create_player(player_id)
                counts['players'] += 1
                for payload in player_payload.waypoints:
                    self.add_private_waypoint(player_id, payload.to_waypoint())
                    counts['private'] += 1

            logger.info(f"Imported waypoint snapshot ({merge_mode}): {counts}")
            return counts
