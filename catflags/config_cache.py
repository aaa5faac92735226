"""Cache interface and the store that guards the cached configuration."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Any

__all__ = ["ConfigCache", "InMemoryConfigCache", "ConfigStore"]


class ConfigCache(ABC):
    """Storage for the raw configuration JSON; implement to customise caching."""

    @abstractmethod
    def get(self) -> str:
        """Return the cached configuration; raise on failure."""

    @abstractmethod
    def set(self, value: str) -> None:
        """Store ``value``; raise on failure."""


class InMemoryConfigCache(ConfigCache):
    """A cache that keeps the configuration in memory."""

    def __init__(self) -> None:
        self._value = ""

    def get(self) -> str:
        return self._value

    def set(self, value: str) -> None:
        self._value = value


class ConfigStore:
    """Thread-safe access to a cache, with an in-memory fallback on errors."""

    def __init__(self, logger: Any, cache: ConfigCache) -> None:
        self._logger = logger
        self._cache = cache
        self._in_memory = ""
        self._lock = threading.Lock()

    def get(self) -> str:
        """Read the configuration, falling back to the last value set."""
        with self._lock:
            try:
                return self._cache.get()
            except Exception as err:
                self._logger.error("Reading from the cache failed, %s", err)
                return self._in_memory

    def set(self, value: str) -> None:
        """Write the configuration, keeping a copy in memory."""
        with self._lock:
            self._in_memory = value
            try:
                self._cache.set(value)
            except Exception as err:
                self._logger.error("Saving into the cache failed, %s", err)