"""A refresh policy that only updates the cache when asked to."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .asyncop import AsyncResult, completed_result
from .config_cache import ConfigStore
from .fetcher import ConfigProvider
from .refresh_policy import RefreshMode, RefreshPolicy

__all__ = ["ManualPollingPolicy", "ManualPoll"]


class ManualPollingPolicy(RefreshPolicy):
    """Serves the cached configuration; it changes only on an explicit refresh."""

    def get_configuration_async(self) -> AsyncResult:
        return completed_result(self._store.get())

    def close(self) -> None:
        """Nothing to shut down."""


@dataclass(frozen=True)
class ManualPoll(RefreshMode):
    """Manual polling mode."""

    def identifier(self) -> str:
        return "m"

    def create_policy(self, fetcher: ConfigProvider, store: ConfigStore, logger: Any) -> ManualPollingPolicy:
        return ManualPollingPolicy(fetcher, store, logger)