"""Feature flag and remote configuration client with polling, caching and user targeting."""

__version__ = "4.0.2"