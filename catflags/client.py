"""The client that serves feature flag values from a cached configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from .auto_polling import AutoPoll
from .config_cache import ConfigCache, ConfigStore, InMemoryConfigCache
from .fetcher import ConfigFetcher, ConfigProvider
from .logger import LogLevel, default_logger
from .parser import ConfigParser, ParseError
from .refresh_policy import RefreshMode
from .user import User

__all__ = ["ClientConfig", "Client"]

_DEFAULT_HTTP_TIMEOUT = 15.0
_DEFAULT_POLL_INTERVAL = 120.0


@dataclass
class ClientConfig:
    """Options for a Client; unset or invalid values fall back to defaults.

    ``max_wait_time_for_sync_calls`` and ``http_timeout`` are in seconds. A
    maximum wait of 0 blocks synchronous calls until the operation finishes.
    ``base_url`` is where configuration files are downloaded from; it must be
    given unless the client is built with its own configuration provider.
    """

    logger: Any = None
    cache: Optional[ConfigCache] = None
    max_wait_time_for_sync_calls: float = 0.0
    http_timeout: float = _DEFAULT_HTTP_TIMEOUT
    base_url: str = ""
    mode: Optional[RefreshMode] = None


class Client:
    """Reads setting values, keeping the configuration fresh per its refresh mode."""

    def __init__(
        self,
        sdk_key: str,
        config: Optional[ClientConfig] = None,
        fetcher: Optional[ConfigProvider] = None,
    ) -> None:
        if not sdk_key:
            raise ValueError("sdk_key cannot be empty")

        config = config or ClientConfig()
        logger = config.logger if config.logger is not None else default_logger(LogLevel.WARN)
        cache = config.cache if config.cache is not None else InMemoryConfigCache()
        max_wait = max(config.max_wait_time_for_sync_calls, 0.0)
        http_timeout = config.http_timeout if config.http_timeout > 0 else _DEFAULT_HTTP_TIMEOUT
        mode = config.mode if config.mode is not None else AutoPoll(_DEFAULT_POLL_INTERVAL)

        if fetcher is None:
            if not config.base_url:
                raise ValueError("base_url is required when no configuration provider is given")
            fetcher = ConfigFetcher(
                sdk_key, mode.identifier(), config.base_url, logger, http_timeout
            )

        self._logger = logger
        self._store = ConfigStore(logger, cache)
        self._parser = ConfigParser(logger)
        self._max_wait = max_wait
        self._policy = mode.create_policy(fetcher, self._store, logger)

    def get_value(self, key: str, default_value: Any, user: Optional[User] = None) -> Any:
        """Return the value of setting ``key``, or ``default_value`` if it cannot be resolved."""
        if not key:
            raise ValueError("key cannot be empty")

        handle = self._policy.get_configuration_async()
        if self._max_wait > 0:
            try:
                config_json = handle.get_or_timeout(self._max_wait)
            except TimeoutError as err:
                self._logger.error("Policy could not provide the configuration: %s", err)
                return self._parse(self._store.get(), key, default_value, user)
        else:
            config_json = handle.get()
        if not isinstance(config_json, str):
            config_json = ""
        return self._parse(config_json, key, default_value, user)

    def get_value_async(
        self,
        key: str,
        default_value: Any,
        completion: Callable[[Any], Any],
        user: Optional[User] = None,
    ) -> None:
        """Pass the value of setting ``key`` to ``completion`` once the configuration is available."""
        if not key:
            raise ValueError("key cannot be empty")

        self._policy.get_configuration_async().accept(
            lambda config_json: completion(self._parse(config_json, key, default_value, user))
        )

    def get_all_keys(self) -> List[str]:
        """Return every setting key.

        Raises TimeoutError when the configuration is not available within the
        maximum wait time and ParseError when it is malformed.
        """
        handle = self._policy.get_configuration_async()
        if self._max_wait > 0:
            try:
                config_json = handle.get_or_timeout(self._max_wait)
            except TimeoutError as err:
                self._logger.error("Policy could not provide the configuration: %s", err)
                raise
        else:
            config_json = handle.get()
        if not isinstance(config_json, str):
            config_json = ""
        return self._parser.get_all_keys(config_json)

    def get_all_keys_async(
        self, completion: Callable[[Optional[List[str]], Optional[Exception]], Any]
    ) -> None:
        """Call ``completion(keys, None)``, or ``completion(None, error)`` on failure."""

        def deliver(config_json: Any) -> None:
            try:
                keys = self._parser.get_all_keys(config_json)
            except ParseError as err:
                completion(None, err)
                return
            completion(keys, None)

        self._policy.get_configuration_async().accept(deliver)

    def refresh(self) -> None:
        """Force a refresh of the cached configuration and wait for it."""
        handle = self._policy.refresh_async()
        if self._max_wait > 0:
            try:
                handle.wait_or_timeout(self._max_wait)
            except TimeoutError:
                pass
        else:
            handle.wait()

    def refresh_async(self, completion: Callable[[], Any]) -> None:
        """Force a refresh and call ``completion`` when it has finished."""
        self._policy.refresh_async().accept(completion)

    def close(self) -> None:
        """Shut the client down; it should not be used afterwards."""
        self._policy.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _parse(self, config_json: str, key: str, default_value: Any, user: Optional[User]) -> Any:
        try:
            return self._parser.parse(config_json, key, user)
        except ParseError as err:
            self._logger.error(
                "Evaluating get_value(%s) failed. Returning default_value: [%s]. %s.",
                key,
                default_value,
                err,
            )
            return default_value