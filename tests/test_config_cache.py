import pytest

from catflags.config_cache import ConfigCache, ConfigStore, InMemoryConfigCache


class RecordingLogger:
    def __init__(self):
        self.errors = []

    def error(self, msg, *args):
        self.errors.append(msg % args)


class FailingCache(ConfigCache):
    def get(self):
        raise OSError("fake failing cache fails to get")

    def set(self, value):
        raise OSError("fake failing cache fails to set")


def test_cache_interface_is_abstract():
    with pytest.raises(TypeError):
        ConfigCache()


def test_in_memory_cache_starts_empty():
    assert InMemoryConfigCache().get() == ""


def test_in_memory_cache_round_trip():
    cache = InMemoryConfigCache()
    cache.set("abc")
    assert cache.get() == "abc"


def test_store_round_trip_through_cache():
    cache = InMemoryConfigCache()
    store = ConfigStore(RecordingLogger(), cache)
    store.set('{"a": 1}')
    assert store.get() == '{"a": 1}'
    assert cache.get() == '{"a": 1}'


def test_store_falls_back_to_memory_when_cache_fails():
    logger = RecordingLogger()
    store = ConfigStore(logger, FailingCache())
    store.set("value")
    assert store.get() == "value"
    assert any("fails to set" in message for message in logger.errors)
    assert any("fails to get" in message for message in logger.errors)


def test_failing_store_get_before_set_is_empty():
    store = ConfigStore(RecordingLogger(), FailingCache())
    assert store.get() == ""