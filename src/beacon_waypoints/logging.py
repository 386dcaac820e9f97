"""
Logging for the waypoint registry.

Registry modules log through ``module_logger(service=..., component=...)``.
The service and component travel on every record, so a host that calls
``setup_logging`` sees lines such as::

    2026-01-01 12:00:00,000 WARNING [waypoints/manager] Replacing registry for player ...

Env options (optional):
- WAYPOINTS_LOG_LEVEL=DEBUG|INFO|WARNING|ERROR (default INFO)
- WAYPOINTS_LOG_JSON=1 (JSON formatting)
- WAYPOINTS_LOG_FILE=/path/to/file.log (RotatingFileHandler)
- WAYPOINTS_LOG_COMPONENTS=manager,schemas (only log these components)
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Iterable, Optional

__all__ = [
    "setup_logging",
    "get_logger",
    "module_logger",
]

TEXT_FORMAT = '%(asctime)s %(levelname)s [%(service)s/%(component)s] %(message)s'

_INITIALIZED = False


class _RegistryContextFilter(logging.Filter):
    """Fill in service/component for records that did not come through an adapter."""

    def __init__(self, service: str, components: Optional[Iterable[str]] = None):
        super().__init__()
        self.service = service
        self.components = frozenset(components or ())

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, 'service', None):
            record.service = self.service
        if not getattr(record, 'component', None):
            # beacon_waypoints.waypoint_manager -> waypoint_manager
            record.component = record.name.rsplit('.', 1)[-1]
        return not self.components or record.component in self.components


class _JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            'ts': self.formatTime(record, datefmt='%Y-%m-%dT%H:%M:%S'),
            'level': record.levelname,
            'service': getattr(record, 'service', ''),
            'component': getattr(record, 'component', ''),
            'message': record.getMessage(),
        }
        return json.dumps(payload, ensure_ascii=False)


def _truthy(value: str) -> bool:
    return value.lower() in ('1', 'true', 'yes', 'on')


def setup_logging(
    service: str = 'waypoints',
    level: Optional[str] = None,
    json_format: Optional[bool] = None,
    components: Optional[Iterable[str]] = None,
) -> None:
    """Configure registry logging once. Safe to call multiple times.

    Args:
        service: label used for records without an explicit service
        level: optional level override (DEBUG/INFO/...) else from env
        json_format: optional flag to force JSON format, else from env
        components: optional component names to keep; others are dropped.
            Falls back to the comma-separated WAYPOINTS_LOG_COMPONENTS.
    """
    global _INITIALIZED
    if _INITIALIZED:
        return

    root = logging.getLogger()
    level_name = (level or os.getenv('WAYPOINTS_LOG_LEVEL', 'INFO')).upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    use_json = json_format if json_format is not None else _truthy(os.getenv('WAYPOINTS_LOG_JSON', ''))
    formatter = _JSONFormatter() if use_json else logging.Formatter(TEXT_FORMAT)

    if components is None:
        env_components = os.getenv('WAYPOINTS_LOG_COMPONENTS', '')
        components = [c.strip() for c in env_components.split(',') if c.strip()]
    context_filter = _RegistryContextFilter(service, components)

    handlers = [logging.StreamHandler(stream=sys.stderr)]
    log_path = os.getenv('WAYPOINTS_LOG_FILE')
    if log_path:
        try:
            Path(log_path).parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.handlers.RotatingFileHandler(
                log_path, maxBytes=5 * 1024 * 1024, backupCount=5, encoding='utf-8'))
        except OSError as exc:
            root.warning(f"Could not open log file {log_path}, using console only: {exc}")

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root.addHandler(handler)

    _INITIALIZED = True


def get_logger(name: Optional[str] = None, **context) -> logging.LoggerAdapter:
    return logging.LoggerAdapter(logging.getLogger(name or __name__), context)


def module_logger(**context) -> logging.LoggerAdapter:
    """Convenience to get a logger for the caller's module."""
    name = sys._getframe(1).f_globals.get('__name__', __name__)
    return get_logger(name, **context)
