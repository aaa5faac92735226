# catflags

A client library for feature flags and remote configuration. It downloads a
JSON configuration document over HTTP, keeps it in a cache, refreshes it
according to a refresh mode you choose, and evaluates settings for a given
user using targeting rules and percentage rollouts.

## Installation

```
pip install catflags
```

## Quick start

```python
from catflags.client import Client, ClientConfig
from catflags.manual_polling import ManualPoll
from catflags.user import User

config = ClientConfig(mode=ManualPoll(), base_url="https://config.example.com")
with Client("placeholder", config) as client:
    client.refresh()
    user = User("user-1234", "someone@example.com", "Hungary", {"Plan": "pro"})
    enabled = client.get_value("isFeatureEnabled", False, user)
```

The configuration is downloaded with a GET request from
`{base_url}/configuration-files/{sdk_key}/config_v4.json`. The fetcher sends
the last `Etag` it received as `If-None-Match`, so an unchanged document is
answered with 304 and the cached copy is kept.

If a setting cannot be evaluated (no configuration yet, an unknown key, a
malformed document, or a setting that evaluates to null) the default value you
passed in is returned and the problem is logged.

An empty SDK key, an empty setting key or an empty user identifier raises
`ValueError`.

## Client options

`catflags.client.ClientConfig` holds:

- `logger`: any object with `debug`, `info`, `warning` and `error` methods,
  such as a `logging.Logger`. Defaults to `catflags.logger.default_logger()`,
  which logs to stderr at `LogLevel.WARN`.
- `cache`: a `ConfigCache`; defaults to an in-memory cache.
- `max_wait_time_for_sync_calls`: seconds a blocking call may wait; 0 (the
  default) waits until the operation finishes. Negative values count as 0.
- `http_timeout`: seconds for an HTTP request; defaults to 15, and
  non-positive values fall back to 15.
- `base_url`: where configuration files are downloaded from. Required unless
  a configuration provider is passed to `Client` directly; otherwise
  `ValueError` is raised.
- `mode`: the refresh mode; defaults to `AutoPoll(120)`.

## Refresh modes

The mode decides when the configuration is fetched again. Intervals are in
seconds.

- `catflags.auto_polling.AutoPoll(interval, change_listener=None)` fetches
  at once and then every `interval` seconds on a background thread, calling
  `change_listener()` whenever a different configuration arrives. Reads wait
  for the first poll. A non-positive interval raises `ValueError`.
- `catflags.lazy_loading.LazyLoad(cache_interval, use_async_refresh=False)`
  fetches on demand once the cached copy is older than `cache_interval`.
  With `use_async_refresh`, the stale value is returned at once while the new
  one is being fetched; otherwise the caller gets the result of the fetch.
- `catflags.manual_polling.ManualPoll()` never fetches by itself; call
  `Client.refresh()` or `Client.refresh_async()` when you want new data.

## Blocking and callback APIs

- `get_value(key, default_value, user=None)` and
  `get_value_async(key, default_value, completion, user=None)`
- `get_all_keys()` and `get_all_keys_async(completion)`; the callback is
  called as `completion(keys, None)` or `completion(None, error)`.
- `refresh()` and `refresh_async(completion)`
- `close()` stops the refresh policy; `Client` is also a context manager.

With a maximum wait time set, a blocking call that takes too long behaves as
follows: `get_value` falls back to the cached configuration, `get_all_keys`
raises `TimeoutError`, and `refresh` returns without waiting further.
`get_all_keys` raises `catflags.parser.ParseError` for a malformed document.

## Users and targeting

A `catflags.user.User` carries an identifier (required), and optionally an
e-mail address, a country and custom attributes. Attribute names are matched
case-insensitively.

Each setting in the configuration document looks like:

```json
{ "mySetting": { "v": "default", "r": [ ... ], "p": [ ... ] } }
```

Targeting rules (`r`, each with attribute `a`, comparator `t`, comparison
value `c` and value `v`) are tried in order; the first one that matches wins.
The comparators are IS ONE OF, IS NOT ONE OF, CONTAINS, DOES NOT CONTAIN,
semantic version comparisons (IS ONE OF, IS NOT ONE OF, <, <=, >, >=), number
comparisons (=, <>, <, <=, >, >=, accepting a comma as decimal separator),
and SHA-1 hashed IS ONE OF / IS NOT ONE OF for sensitive values. A rule whose
values cannot be parsed is skipped.

If no rule matches, percentage options (`p`, each with percentage `p` and
value `v`) place the user in a stable bucket derived from the setting key and
the user identifier. Otherwise the setting's plain value (`v`) is returned.
Without a user, the plain value is always returned.

`catflags.parser.ConfigParser` and `catflags.evaluator.RolloutEvaluator` can
also be used on their own to evaluate a document you already have.

## Caching

By default the configuration is kept in memory
(`catflags.config_cache.InMemoryConfigCache`). To keep it elsewhere, subclass
`catflags.config_cache.ConfigCache`, implement `get()` and `set(value)`, and
pass an instance as `ClientConfig.cache`. If your cache raises, the error is
logged and the last value held in memory is used.

## Asynchronous handles

`catflags.asyncop.Async` and `AsyncResult` are thread-safe one-shot
completion handles used throughout the package. Callbacks can be chained with
`accept`, `apply` and `apply_then`; `wait`/`get` block, and
`wait_or_timeout`/`get_or_timeout` raise `TimeoutError` after the given
number of seconds.

## Testing your code

`catflags.fake_provider.FakeConfigProvider` stands in for the HTTP fetcher.
Give it a `catflags.fetch_response.FetchResponse` with
`set_response(response, delay=None)`; a given delay, in seconds, applies to
all later requests until it is changed. Pass the provider to `Client` to
drive your code without network access:

```python
from catflags.client import Client, ClientConfig
from catflags.fake_provider import FakeConfigProvider
from catflags.fetch_response import FetchResponse, FetchStatus
from catflags.manual_polling import ManualPoll

provider = FakeConfigProvider()
provider.set_response(FetchResponse(FetchStatus.FETCHED, '{"key": {"v": 1}}'))
client = Client("placeholder", ClientConfig(mode=ManualPoll()), provider)
client.refresh()
assert client.get_value("key", 0) == 1
```

## What it does not do

The package is a library only: it has no command-line tool. It has no
built-in download location, so `base_url` must point at a server that serves
the configuration documents. The only cache it ships keeps data in memory;
persistent storage needs your own `ConfigCache`.

## Running the tests

```
pip install catflags[test]
pytest
```