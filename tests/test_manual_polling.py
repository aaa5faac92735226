import pytest

from catflags.config_cache import ConfigStore, InMemoryConfigCache
from catflags.fake_provider import FakeConfigProvider
from catflags.fetch_response import FetchResponse, FetchStatus
from catflags.logger import LogLevel, default_logger
from catflags.manual_polling import ManualPoll, ManualPollingPolicy


@pytest.fixture
def logger():
    return default_logger(LogLevel.WARN)


def test_get_configuration_after_refresh(logger):
    fetcher = FakeConfigProvider()
    fetcher.set_response(FetchResponse(FetchStatus.FETCHED, "test"))
    policy = ManualPollingPolicy(fetcher, ConfigStore(logger, InMemoryConfigCache()), logger)

    policy.refresh_async().wait()
    assert policy.get_configuration_async().get() == "test"

    fetcher.set_response(FetchResponse(FetchStatus.FETCHED, "test2"))
    policy.refresh_async().wait()
    assert policy.get_configuration_async().get() == "test2"


def test_get_configuration_fail(logger):
    fetcher = FakeConfigProvider()
    fetcher.set_response(FetchResponse(FetchStatus.FAILURE, ""))
    policy = ManualPollingPolicy(fetcher, ConfigStore(logger, InMemoryConfigCache()), logger)
    assert policy.get_configuration_async().get() == ""


def test_no_fetch_without_refresh(logger):
    fetcher = FakeConfigProvider()
    fetcher.set_response(FetchResponse(FetchStatus.FETCHED, "test"))
    policy = ManualPollingPolicy(fetcher, ConfigStore(logger, InMemoryConfigCache()), logger)
    result = policy.get_configuration_async()
    assert result.is_completed()
    assert result.get() == ""


def test_close_keeps_cache(logger):
    fetcher = FakeConfigProvider()
    fetcher.set_response(FetchResponse(FetchStatus.FETCHED, "test"))
    policy = ManualPollingPolicy(fetcher, ConfigStore(logger, InMemoryConfigCache()), logger)
    policy.refresh_async().wait()
    policy.close()
    assert policy.get_configuration_async().get() == "test"


def test_mode_identifier():
    assert ManualPoll().identifier() == "m"


def test_mode_creates_manual_policy(logger):
    fetcher = FakeConfigProvider()
    fetcher.set_response(FetchResponse(FetchStatus.FETCHED, "test"))
    store = ConfigStore(logger, InMemoryConfigCache())
    policy = ManualPoll().create_policy(fetcher, store, logger)
    assert isinstance(policy, ManualPollingPolicy)
    policy.refresh_async().wait()
    assert store.get() == "test"