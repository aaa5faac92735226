"""Base classes for refresh policies and the modes that create them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .asyncop import Async, AsyncResult
from .config_cache import ConfigStore
from .fetch_response import FetchResponse
from .fetcher import ConfigProvider

__all__ = ["RefreshPolicy", "RefreshMode"]


class RefreshPolicy(ABC):
    """Decides when the cached configuration is updated from the provider."""

    def __init__(self, fetcher: ConfigProvider, store: ConfigStore, logger: Any) -> None:
        self._fetcher = fetcher
        self._store = store
        self._logger = logger

    @abstractmethod
    def get_configuration_async(self) -> AsyncResult:
        """Return a handle whose result is the current configuration JSON."""

    def refresh_async(self) -> Async:
        """Force a fetch and store the new configuration if one was fetched."""

        def store_if_fetched(response: FetchResponse) -> None:
            if response.is_fetched():
                self._store.set(response.body)

        return self._fetcher.get_configuration_async().accept(store_if_fetched)

    def close(self) -> None:
        """Shut down the policy."""


class RefreshMode(ABC):
    """Configuration of a refresh policy."""

    @abstractmethod
    def identifier(self) -> str:
        """The short identifier sent in the user agent by the fetcher."""

    @abstractmethod
    def create_policy(self, fetcher: ConfigProvider, store: ConfigStore, logger: Any) -> RefreshPolicy:
        """Build the refresh policy this mode describes."""