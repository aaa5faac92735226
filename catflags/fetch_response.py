"""Outcome of a configuration fetch."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

__all__ = ["FetchStatus", "FetchResponse"]


class FetchStatus(IntEnum):
    """Status of a configuration fetch."""

    FETCHED = 0
    NOT_MODIFIED = 1
    FAILURE = 2


@dataclass(frozen=True)
class FetchResponse:
    """A fetch status together with the fetched body, if any."""

    status: FetchStatus
    body: str = ""

    def is_failed(self) -> bool:
        """Return True if the fetch failed."""
        return self.status is FetchStatus.FAILURE

    def is_not_modified(self) -> bool:
        """Return True if the server answered 304 Not Modified."""
        return self.status is FetchStatus.NOT_MODIFIED

    def is_fetched(self) -> bool:
        """Return True if a new configuration was fetched."""
        return self.status is FetchStatus.FETCHED