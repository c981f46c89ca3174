"""Timer scheduler port (abstract interface).

Toasts and the carousel only need "run this later" and "never mind". The
production adapter rides the asyncio event loop; tests drive a manual clock.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable


class TimerHandle(ABC):
    @abstractmethod
    def cancel(self) -> None:
        """Stop the callback from running. Cancelling twice is harmless."""
        ...


class Scheduler(ABC):
    """Abstract interface for one-shot timers."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run `callback` once after `delay` seconds."""
        ...
