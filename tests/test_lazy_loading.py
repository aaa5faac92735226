import time

from catflags.config_cache import ConfigStore, InMemoryConfigCache
from catflags.fake_provider import FakeConfigProvider
from catflags.fetch_response import FetchResponse, FetchStatus
from catflags.lazy_loading import LazyLoad, LazyLoadingPolicy
from catflags.logger import LogLevel, default_logger

INTERVAL = 0.5


def _make(use_async, response):
    fetcher = FakeConfigProvider()
    fetcher.set_response(response)
    logger = default_logger(LogLevel.WARN)
    store = ConfigStore(logger, InMemoryConfigCache())
    policy = LazyLoadingPolicy(fetcher, store, logger, INTERVAL, use_async)
    return fetcher, policy


def test_do_not_use_async():
    fetcher, policy = _make(False, FetchResponse(FetchStatus.FETCHED, "test"))
    assert policy.get_configuration_async().get() == "test"

    fetcher.set_response(FetchResponse(FetchStatus.FETCHED, "test2"))
    assert policy.get_configuration_async().get() == "test"

    time.sleep(INTERVAL + 0.2)
    assert policy.get_configuration_async().get() == "test2"


def test_fail_returns_empty():
    _, policy = _make(False, FetchResponse(FetchStatus.FAILURE, ""))
    assert policy.get_configuration_async().get() == ""


def test_use_async():
    fetcher, policy = _make(True, FetchResponse(FetchStatus.FETCHED, "test"))
    assert policy.get_configuration_async().get() == "test"

    time.sleep(INTERVAL + 0.1)
    fetcher.set_response(FetchResponse(FetchStatus.FETCHED, "test2"), delay=0.2)
    assert policy.get_configuration_async().get() == "test"

    time.sleep(0.5)
    assert policy.get_configuration_async().get() == "test2"


def test_failed_fetch_keeps_cache_expired():
    fetcher, policy = _make(False, FetchResponse(FetchStatus.FAILURE, ""))
    assert policy.get_configuration_async().get() == ""

    fetcher.set_response(FetchResponse(FetchStatus.FETCHED, "fresh"))
    assert policy.get_configuration_async().get() == "fresh"


def test_not_modified_returns_cached():
    fetcher, policy = _make(False, FetchResponse(FetchStatus.FETCHED, "first"))
    assert policy.get_configuration_async().get() == "first"

    time.sleep(INTERVAL + 0.2)
    fetcher.set_response(FetchResponse(FetchStatus.NOT_MODIFIED))
    assert policy.get_configuration_async().get() == "first"


def test_close_leaves_policy_usable():
    _, policy = _make(False, FetchResponse(FetchStatus.FETCHED, "test"))
    policy.close()
    assert policy.get_configuration_async().get() == "test"


def test_mode_identifier_and_policy():
    mode = LazyLoad(10.0)
    assert mode.identifier() == "l"
    assert mode.use_async_refresh is False

    fetcher = FakeConfigProvider()
    fetcher.set_response(FetchResponse(FetchStatus.FETCHED, "value"))
    logger = default_logger(LogLevel.WARN)
    policy = mode.create_policy(fetcher, ConfigStore(logger, InMemoryConfigCache()), logger)
    assert policy.get_configuration_async().get() == "value"