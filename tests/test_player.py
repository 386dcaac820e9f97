from __future__ import annotations

import uuid

from beacon_waypoints.coords import WaypointCoord
from beacon_waypoints.player import WaypointPlayer


def test_add_then_get_returns_same_waypoint(make_waypoint):
    player = WaypointPlayer(uuid.uuid4())
    waypoint = make_waypoint("Home", 1, 2, 3)
    player.add_waypoint(waypoint)
    assert player.get_waypoint(WaypointCoord(1, 2, 3, "world")) is waypoint


def test_add_overwrites_silently(make_waypoint):
    player = WaypointPlayer(uuid.uuid4())
    player.add_waypoint(make_waypoint("Old", 1, 2, 3))
    replacement = make_waypoint("New", 1, 2, 3)
    player.add_waypoint(replacement)
    assert len(player) == 1
    assert player.get_waypoint(replacement.coord) is replacement


def test_remove_returns_waypoint_then_none(make_waypoint):
    player = WaypointPlayer("steve")
    waypoint = make_waypoint("Mine", 5, 12, 5)
    player.add_waypoint(waypoint)
    assert player.remove_waypoint(waypoint.coord) is waypoint
    assert player.remove_waypoint(waypoint.coord) is None
    assert player.get_waypoint(waypoint.coord) is None


def test_get_waypoints_is_live(make_waypoint):
    player = WaypointPlayer("alex")
    view = player.get_waypoints()
    assert view == {}
    waypoint = make_waypoint("Farm", 7, 63, 7)
    player.add_waypoint(waypoint)
    assert view == {waypoint.coord: waypoint}
