"""Fetching the configuration JSON over HTTP."""

from __future__ import annotations

import threading
import urllib.error
import urllib.request
from abc import ABC, abstractmethod
from typing import Any

from .asyncop import AsyncResult
from .fetch_response import FetchResponse, FetchStatus

__all__ = ["VERSION", "ConfigProvider", "ConfigFetcher"]

VERSION = "4.0.2"


class ConfigProvider(ABC):
    """Something that can provide the latest configuration."""

    @abstractmethod
    def get_configuration_async(self) -> AsyncResult:
        """Start collecting the configuration; the result is a FetchResponse."""


class ConfigFetcher(ConfigProvider):
    """Downloads the configuration, using ETags to avoid refetching."""

    def __init__(
        self,
        sdk_key: str,
        mode_identifier: str,
        base_url: str,
        logger: Any,
        timeout: float = 15.0,
    ) -> None:
        self._sdk_key = sdk_key
        self._mode = mode_identifier
        self._base_url = base_url
        self._logger = logger
        self._timeout = timeout
        self._etag = ""
        self._lock = threading.Lock()

    def get_configuration_async(self) -> AsyncResult:
        result = AsyncResult()
        threading.Thread(target=lambda: result.complete(self._fetch()), daemon=True).start()
        return result

    def _fetch(self) -> FetchResponse:
        url = f"{self._base_url}/configuration-files/{self._sdk_key}/config_v4.json"
        try:
            request = urllib.request.Request(url, method="GET")
        except ValueError:
            return FetchResponse(FetchStatus.FAILURE)

        request.add_header("X-ConfigCat-UserAgent", f"ConfigCat-Python/{self._mode}-{VERSION}")
        with self._lock:
            etag = self._etag
        if etag:
            request.add_header("If-None-Match", etag)

        try:
            with urllib.request.urlopen(request, timeout=self._timeout) as response:
                status = response.status
                try:
                    body = response.read().decode("utf-8")
                except (OSError, UnicodeDecodeError) as err:
                    self._logger.error("Config fetch failed: %s.", err)
                    return FetchResponse(FetchStatus.FAILURE)
                new_etag = response.headers.get("Etag") or ""
        except urllib.error.HTTPError as err:
            status = err.code
            err.close()
            if status == 304:
                self._logger.debug("Config fetch succeeded: not modified.")
                return FetchResponse(FetchStatus.NOT_MODIFIED)
            return self._unexpected(status)
        except (OSError, ValueError) as err:
            self._logger.error("Config fetch failed: %s.", err)
            return FetchResponse(FetchStatus.FAILURE)

        if status == 304:
            self._logger.debug("Config fetch succeeded: not modified.")
            return FetchResponse(FetchStatus.NOT_MODIFIED)
        if 200 <= status < 300:
            self._logger.debug("Config fetch succeeded: new config fetched.")
            with self._lock:
                self._etag = new_etag
            return FetchResponse(FetchStatus.FETCHED, body)
        return self._unexpected(status)

    def _unexpected(self, status: int) -> FetchResponse:
        self._logger.error(
            "Double-check your SDK key. Received unexpected response: %s.", status
        )
        return FetchResponse(FetchStatus.FAILURE)