"""
Shutdown callback registry.

Setup code appends callbacks while the telemetry connection is built; the
shutdown routine drains them once, in registration order, at teardown.
"""

import logging
import threading
from typing import Callable, List

logger = logging.getLogger(__name__)

ShutdownCallback = Callable[[], None]


class ShutdownRegistry:
    """
    Ordered, append-only list of zero-argument shutdown callbacks.

    A callback signals failure by raising. ``drain`` is best-effort: a
    failing callback is logged and the remaining callbacks still run.
    """

    def __init__(self) -> None:
        self._callbacks: List[ShutdownCallback] = []
        self._lock = threading.Lock()
        self._drained = False

    def __len__(self) -> int:
        return len(self._callbacks)

    @property
    def drained(self) -> bool:
        return self._drained

    def register(self, callback: ShutdownCallback) -> None:
        """
        Append a callback to run at shutdown.

        Args:
            callback: Zero-argument callable; raise to report a failure
        """
        with self._lock:
            self._callbacks.append(callback)

    def drain(self) -> List[Exception]:
        """
        Invoke every registered callback in insertion order.

        Only the first call runs the callbacks; later calls return an
        empty list.

        Returns:
            The exceptions raised by failing callbacks, in order
        """
        with self._lock:
            if self._drained:
                logger.debug("Shutdown already ran, ignoring call")
                return []
            self._drained = True
            callbacks = list(self._callbacks)
            self._callbacks.clear()

        errors: List[Exception] = []
        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                logger.error("Failed to shut down the service. %s", e)
                errors.append(e)
        return errors
