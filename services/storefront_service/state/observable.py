"""Publish/subscribe base for the client stores."""

from typing import Any, Callable

from libs.common.logging import get_logger

logger = get_logger(__name__)

Listener = Callable[[Any], None]
Unsubscribe = Callable[[], None]


class Observable:
    """
    Holds subscribers and notifies them with a state snapshot after each change.

    A UI binds by calling ``subscribe`` and re-rendering from the snapshot it
    receives. The returned callable detaches the listener and may be called
    more than once.
    """

    def __init__(self):
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _notify(self, snapshot: Any) -> None:
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception(
                    "Store listener %r failed", getattr(listener, "__name__", listener)
                )
