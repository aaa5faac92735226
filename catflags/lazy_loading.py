"""A refresh policy that refetches the configuration once its cache expires."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Optional

from .asyncop import Async, AsyncResult, completed_result
from .config_cache import ConfigStore
from .fetch_response import FetchResponse
from .fetcher import ConfigProvider
from .refresh_policy import RefreshMode, RefreshPolicy

__all__ = ["LazyLoadingPolicy", "LazyLoad"]


class LazyLoadingPolicy(RefreshPolicy):
    """Serves the cached configuration and refetches it when it is older than the interval.

    With ``use_async_refresh`` an expired cache is served as it is while the
    new configuration is being fetched; otherwise callers get the fetch result.
    """

    def __init__(
        self,
        fetcher: ConfigProvider,
        store: ConfigStore,
        logger: Any,
        cache_interval: float,
        use_async_refresh: bool = False,
    ) -> None:
        super().__init__(fetcher, store, logger)
        self._cache_interval = cache_interval
        self._use_async_refresh = use_async_refresh
        self._lock = threading.RLock()
        self._is_fetching = False
        self._last_refresh: Optional[float] = None
        self._fetching: Optional[AsyncResult] = None
        self._init = Async()

    def get_configuration_async(self) -> AsyncResult:
        if not self._expired():
            return self._read_cache()

        initialized = self._init.is_completed()
        if initialized:
            started = self._start_fetch()
            if started is None:
                if self._use_async_refresh:
                    return self._read_cache()
                with self._lock:
                    return self._fetching
            self._logger.debug("Cache expired, refreshing.")
            if self._use_async_refresh:
                return self._read_cache()
            return started

        self._logger.debug("Cache expired, refreshing.")
        self._start_fetch()
        return self._init.apply(self._store.get)

    def close(self) -> None:
        """Nothing to shut down."""

    def _expired(self) -> bool:
        with self._lock:
            last = self._last_refresh
        return last is None or time.monotonic() - last > self._cache_interval

    def _start_fetch(self) -> Optional[AsyncResult]:
        """Start a fetch unless one is running; return its handle, or None."""
        with self._lock:
            if self._is_fetching:
                return None
            self._is_fetching = True
            try:
                self._fetching = self._fetch()
            except Exception:
                self._is_fetching = False
                raise
            return self._fetching

    def _fetch(self) -> AsyncResult:
        return self._fetcher.get_configuration_async().apply_then(self._on_fetched)

    def _on_fetched(self, response: FetchResponse) -> str:
        try:
            cached = self._store.get()
            fetched = response.is_fetched()
            if fetched and response.body != cached:
                self._store.set(response.body)
            if not response.is_failed():
                with self._lock:
                    self._last_refresh = time.monotonic()
            self._init.complete()
            return response.body if fetched else cached
        finally:
            with self._lock:
                self._is_fetching = False

    def _read_cache(self) -> AsyncResult:
        self._logger.debug("Reading from cache.")
        return completed_result(self._store.get())


@dataclass(frozen=True)
class LazyLoad(RefreshMode):
    """Lazy loading mode: ``cache_interval`` in seconds."""

    cache_interval: float
    use_async_refresh: bool = False

    def identifier(self) -> str:
        return "l"

    def create_policy(self, fetcher: ConfigProvider, store: ConfigStore, logger: Any) -> LazyLoadingPolicy:
        return LazyLoadingPolicy(
            fetcher, store, logger, self.cache_interval, self.use_async_refresh
        )