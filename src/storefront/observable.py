"""Observer-list base for client-side state holders."""

from collections.abc import Callable

import structlog

logger = structlog.get_logger(__name__)


class Observable:
    """Pushes a state snapshot to every subscribed listener on change.

    A new listener immediately receives the current snapshot, and
    `subscribe` hands back the matching unsubscribe function.
    """

    def __init__(self):
        self._listeners: list[Callable] = []

    def snapshot(self):
        raise NotImplementedError

    def subscribe(self, listener: Callable) -> Callable[[], None]:
        self._listeners.append(listener)
        listener(self.snapshot())

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _notify(self):
        state = self.snapshot()
        for listener in list(self._listeners):
            listener(state)
