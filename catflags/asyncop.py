"""Completion handles for operations that finish on another thread."""

from __future__ import annotations

import threading
from typing import Any, Callable, List, Optional

__all__ = ["Async", "AsyncResult", "completed_result"]


class Async:
    """A one-shot completion signal that callbacks can be chained onto."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._completions: List[Callable[[], Any]] = []

    def is_completed(self) -> bool:
        """Return True once the operation has been completed."""
        return self._done.is_set()

    def is_pending(self) -> bool:
        """Return True while the operation is still running."""
        return not self._done.is_set()

    def accept(self, completion: Callable[[], Any]) -> "Async":
        """Run ``completion`` when the operation completes (now, if it already has)."""
        with self._lock:
            if not self._done.is_set():
                self._completions.append(completion)
                return self
        completion()
        return self

    def apply(self, completion: Callable[[], Any]) -> "AsyncResult":
        """Run ``completion`` on completion and expose its return value."""
        result = AsyncResult()
        self.accept(lambda: result.complete(completion()))
        return result

    def complete(self) -> None:
        """Mark the operation completed and run the subscribed callbacks once."""
        with self._lock:
            if self._done.is_set():
                return
            self._done.set()
            callbacks, self._completions = self._completions, []
        for callback in callbacks:
            callback()

    def wait(self) -> None:
        """Block until the operation is completed."""
        self._done.wait()

    def wait_or_timeout(self, timeout: float) -> None:
        """Block until completion; raise TimeoutError after ``timeout`` seconds."""
        if not self._done.wait(timeout):
            raise TimeoutError("operation cancelled")


class AsyncResult:
    """A completion handle that carries the operation's result."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._completed = False
        self._result: Optional[Any] = None
        self._async = Async()

    def is_completed(self) -> bool:
        """Return True once a result has been delivered."""
        return self._async.is_completed()

    def is_pending(self) -> bool:
        """Return True while no result has been delivered."""
        return self._async.is_pending()

    def accept(self, completion: Callable[[Any], Any]) -> Async:
        """Pass the result to ``completion`` once available; return the underlying Async."""
        return self._async.accept(lambda: completion(self._result))

    def apply_then(self, completion: Callable[[Any], Any]) -> "AsyncResult":
        """Map the result through ``completion`` into a new AsyncResult."""
        mapped = AsyncResult()
        self.accept(lambda result: mapped.complete(completion(result)))
        return mapped

    def complete(self, result: Any) -> None:
        """Deliver ``result``; only the first call has any effect."""
        with self._lock:
            if self._completed:
                return
            self._completed = True
            self._result = result
        self._async.complete()

    def get(self) -> Any:
        """Block until the result is available and return it."""
        self._async.wait()
        return self._result

    def get_or_timeout(self, timeout: float) -> Any:
        """Return the result, raising TimeoutError after ``timeout`` seconds."""
        self._async.wait_or_timeout(timeout)
        return self._result


def completed_result(result: Any) -> AsyncResult:
    """Return an AsyncResult already completed with ``result``."""
    handle = AsyncResult()
    handle.complete(result)
    return handle