"""A refresh policy that polls for the configuration on a background thread."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .asyncop import Async, AsyncResult, completed_result
from .config_cache import ConfigStore
from .fetcher import ConfigProvider
from .refresh_policy import RefreshMode, RefreshPolicy

__all__ = ["AutoPollingPolicy", "AutoPoll"]


class AutoPollingPolicy(RefreshPolicy):
    """Fetches the configuration immediately and then every ``interval`` seconds."""

    def __init__(
        self,
        fetcher: ConfigProvider,
        store: ConfigStore,
        logger: Any,
        interval: float,
        change_listener: Optional[Callable[[], Any]] = None,
    ) -> None:
        if interval <= 0:
            raise ValueError("non-positive polling interval")
        super().__init__(fetcher, store, logger)
        self._interval = interval
        self._change_listener = change_listener
        self._init = Async()
        self._stop = threading.Event()
        self._logger.debug("Auto polling started with %s interval.", interval)
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def get_configuration_async(self) -> AsyncResult:
        if self._init.is_completed():
            return self._read_cache()
        return self._init.apply(self._store.get)

    def close(self) -> None:
        """Stop polling; safe to call more than once."""
        self._stop.set()

    def _run(self) -> None:
        self._poll()
        while not self._stop.wait(self._interval):
            self._poll()
        self._logger.debug("Auto polling stopped.")

    def _poll(self) -> None:
        self._logger.debug("Polling the latest configuration.")
        try:
            response = self._fetcher.get_configuration_async().get()
            cached = self._store.get()
            if response.is_fetched() and cached != response.body:
                self._store.set(response.body)
                if self._change_listener is not None:
                    self._change_listener()
        except Exception as err:
            self._logger.error("Polling the configuration failed: %s", err)
        finally:
            self._init.complete()

    def _read_cache(self) -> AsyncResult:
        self._logger.debug("Reading from cache.")
        return completed_result(self._store.get())


@dataclass(frozen=True)
class AutoPoll(RefreshMode):
    """Auto polling mode: ``interval`` in seconds, with an optional change listener."""

    interval: float = 120.0
    change_listener: Optional[Callable[[], Any]] = None

    def identifier(self) -> str:
        return "a"

    def create_policy(self, fetcher: ConfigProvider, store: ConfigStore, logger: Any) -> AutoPollingPolicy:
        return AutoPollingPolicy(fetcher, store, logger, self.interval, self.change_listener)