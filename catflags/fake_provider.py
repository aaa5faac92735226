"""A configuration provider that returns a preset response."""

from __future__ import annotations

import threading
import time
from typing import Optional

from .asyncop import AsyncResult
from .fetch_response import FetchResponse, FetchStatus
from .fetcher import ConfigProvider

__all__ = ["FakeConfigProvider"]


class FakeConfigProvider(ConfigProvider):
    """Answers every request with a configurable response after an optional delay."""

    def __init__(self) -> None:
        self._response = FetchResponse(FetchStatus.FETCHED, "")
        self._delay = 0.0

    def get_configuration_async(self) -> AsyncResult:
        result = AsyncResult()
        response, delay = self._response, self._delay

        def run() -> None:
            if delay > 0:
                time.sleep(delay)
            result.complete(response)

        threading.Thread(target=run, daemon=True).start()
        return result

    def set_response(self, response: FetchResponse, delay: Optional[float] = None) -> None:
        """Set the response; a given ``delay`` (seconds) replaces the current one."""
        if delay is not None:
            self._delay = delay
        self._response = response