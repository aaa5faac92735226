import pytest

from catflags.fake_provider import FakeConfigProvider
from catflags.fetch_response import FetchResponse, FetchStatus


def test_default_response_is_empty_fetch():
    provider = FakeConfigProvider()
    response = provider.get_configuration_async().get_or_timeout(5)
    assert response == FetchResponse(FetchStatus.FETCHED, "")


def test_returns_set_response():
    provider = FakeConfigProvider()
    expected = FetchResponse(FetchStatus.FETCHED, "test")
    provider.set_response(expected)
    assert provider.get_configuration_async().get_or_timeout(5) == expected


def test_failure_response():
    provider = FakeConfigProvider()
    provider.set_response(FetchResponse(FetchStatus.FAILURE, ""))
    assert provider.get_configuration_async().get_or_timeout(5).is_failed()


def test_delay_postpones_completion():
    provider = FakeConfigProvider()
    expected = FetchResponse(FetchStatus.FETCHED, "slow")
    provider.set_response(expected, 0.5)
    handle = provider.get_configuration_async()
    with pytest.raises(TimeoutError):
        handle.get_or_timeout(0.05)
    assert handle.get_or_timeout(5) == expected


def test_set_response_without_delay_keeps_previous_delay():
    provider = FakeConfigProvider()
    provider.set_response(FetchResponse(FetchStatus.FETCHED, "a"), 0.5)
    provider.set_response(FetchResponse(FetchStatus.FETCHED, "b"))
    handle = provider.get_configuration_async()
    with pytest.raises(TimeoutError):
        handle.get_or_timeout(0.05)
    assert handle.get_or_timeout(5).body == "b"


def test_zero_delay_clears_delay():
    provider = FakeConfigProvider()
    provider.set_response(FetchResponse(FetchStatus.FETCHED, "a"), 0.5)
    provider.set_response(FetchResponse(FetchStatus.FETCHED, "b"), 0)
    assert provider.get_configuration_async().get_or_timeout(0.4).body == "b"