"""Shared fixtures for the waypoint registry tests."""

from __future__ import annotations

import uuid

import pytest

from beacon_waypoints.config import WaypointRegistryConfig, reset_config
from beacon_waypoints.coords import WaypointCoord
from beacon_waypoints.models import Waypoint
from beacon_waypoints.waypoint_manager import WaypointManager


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch):
    """Keep WAYPOINTS_* overrides from the host environment out of the tests."""
    for key in ("WAYPOINTS_CONFIG_FILE", "WAYPOINTS_THREAD_SAFE", "WAYPOINTS_DEBUG_MODE", "WAYPOINTS_VERBOSE_LOGGING"):
        monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config():
    return WaypointRegistryConfig()


@pytest.fixture
def manager(config):
    return WaypointManager(config=config)


@pytest.fixture
def coord():
    return WaypointCoord(10, 64, -20, "world")


@pytest.fixture
def other_coord():
    return WaypointCoord(-3, 70, 5, "world")


@pytest.fixture
def players():
    return [uuid.uuid4() for _ in range(3)]


@pytest.fixture
def make_waypoint():
    def _make(name: str, x: int = 0, y: int = 64, z: int = 0, world: str = "world") -> Waypoint:
        return Waypoint(WaypointCoord(x, y, z, world), name)

    return _make
