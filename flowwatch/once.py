"""One-time execution gate."""

import threading
from typing import Any, Callable


class Once:
    """
    Run a function exactly once, even under concurrent first calls.

    The first caller runs the function while the others block on the lock
    until it has finished. The gate closes even when the function raises;
    only the first caller sees the exception.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    def do(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        if self._done:
            return
        with self._lock:
            if self._done:
                return
            try:
                fn(*args, **kwargs)
            finally:
                self._done = True
