"""
Backend Connector — fetch hook a process can use to look up stored values.

There is no persistence layer behind the session; the connector is the
seam where one would plug in. Processes call `fetch(*keys)` through their
method set and must accept "no value" (None) as a valid answer.

  - NullBackendConnector:   always returns None
  - StaticBackendConnector: answers from a fixed key → value map, keys
                            joined with "." ("greeting", "default" →
                            "greeting.default")
"""
from __future__ import annotations

import abc
import structlog
from typing import Any, Optional

from config.settings import BackendConfig, get_settings

logger = structlog.get_logger()


class BackendConnector(abc.ABC):
    """Abstract base for all backend connectors."""

    @abc.abstractmethod
    async def fetch(self, *keys: str) -> Optional[str]:
        """Look up a value by key path. None means "no value"."""
        ...


class NullBackendConnector(BackendConnector):

    async def fetch(self, *keys: str) -> Optional[str]:
        logger.debug("null_backend_fetch", keys=list(keys))
        return None


class StaticBackendConnector(BackendConnector):

    def __init__(self, values: dict[str, Any] = None):
        self._values = dict(values or {})

    async def fetch(self, *keys: str) -> Optional[str]:
        path = ".".join(keys)
        value = self._values.get(path)
        logger.debug("static_backend_fetch", path=path, found=value is not None)
        return None if value is None else str(value)


def create_backend_connector(config: BackendConfig = None) -> BackendConnector:
    """Factory function to create the appropriate backend connector."""
    config = config or get_settings().backend
    if config.type == "static":
        return StaticBackendConnector(config.values)
    if config.type != "null":
        logger.warning("unknown_backend_type", type=config.type, fallback="null")
    return NullBackendConnector()
