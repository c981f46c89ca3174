"""Toast and confirm-dialog services.

Both are plain objects handed to whoever needs them. Views subscribe to get
the current state pushed to them on every change and unsubscribe when they
go away.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from itertools import count

from storefront.observable import Observable
from storefront.scheduler.port import Scheduler, TimerHandle

TOAST_TYPES = ("success", "error", "info", "warning")
CONFIRM_TYPES = ("warning", "danger", "info")

DEFAULT_TOAST_DURATION_MS = 2000


@dataclass(frozen=True)
class Toast:
    id: str
    message: str
    type: str = "info"
    duration: int = DEFAULT_TOAST_DURATION_MS  # milliseconds, 0 = until dismissed


@dataclass(frozen=True)
class ConfirmRequest:
    id: str
    message: str
    on_confirm: Callable[[], None] = field(compare=False)
    on_cancel: Callable[[], None] | None = field(default=None, compare=False)
    title: str = "Notice"
    confirm_text: str = "Confirm"
    cancel_text: str = "Cancel"
    type: str = "warning"


class ToastService(Observable):
    """Queue of transient messages, each removed after its own duration."""

    def __init__(self, scheduler: Scheduler, default_duration: int = DEFAULT_TOAST_DURATION_MS):
        super().__init__()
        self._scheduler = scheduler
        self._default_duration = default_duration
        self._ids = count(1)
        self._toasts: list[Toast] = []
        self._timers: dict[str, TimerHandle] = {}

    def snapshot(self) -> list[Toast]:
        return list(self._toasts)

    @property
    def toasts(self) -> list[Toast]:
        return self.snapshot()

    def show(self, message: str, type: str = "info", duration: int | None = None) -> str:
        if type not in TOAST_TYPES:
            raise ValueError(f"Unknown toast type: {type}")

        toast = Toast(
            id=f"toast-{next(self._ids)}",
            message=message,
            type=type,
            duration=self._default_duration if duration is None else duration,
        )
        self._toasts.append(toast)
        self._notify()

        if toast.duration > 0:
            self._timers[toast.id] = self._scheduler.call_later(
                toast.duration / 1000, lambda: self.dismiss(toast.id)
            )
        return toast.id

    def success(self, message: str, duration: int | None = None) -> str:
        return self.show(message, "success", duration)

    def error(self, message: str, duration: int | None = None) -> str:
        return self.show(message, "error", duration)

    def info(self, message: str, duration: int | None = None) -> str:
        return self.show(message, "info", duration)

    def warning(self, message: str, duration: int | None = None) -> str:
        return self.show(message, "warning", duration)

    def dismiss(self, toast_id: str) -> None:
        timer = self._timers.pop(toast_id, None)
        if timer is not None:
            timer.cancel()
        remaining = [t for t in self._toasts if t.id != toast_id]
        if len(remaining) != len(self._toasts):
            self._toasts = remaining
            self._notify()

    def close(self) -> None:
        """Cancel every pending dismissal timer."""
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()


class ConfirmService(Observable):
    """At most one pending confirmation; showing a new one replaces it."""

    def __init__(self):
        super().__init__()
        self._ids = count(1)
        self.current: ConfirmRequest | None = None

    def snapshot(self) -> ConfirmRequest | None:
        return self.current

    def show(
        self,
        message: str,
        on_confirm: Callable[[], None],
        on_cancel: Callable[[], None] | None = None,
        title: str | None = None,
        confirm_text: str | None = None,
        cancel_text: str | None = None,
        type: str | None = None,
    ) -> str:
        if type is not None and type not in CONFIRM_TYPES:
            raise ValueError(f"Unknown confirm type: {type}")

        self.current = ConfirmRequest(
            id=f"confirm-{next(self._ids)}",
            message=message,
            on_confirm=on_confirm,
            on_cancel=on_cancel,
            title=title or "Notice",
            confirm_text=confirm_text or "Confirm",
            cancel_text=cancel_text or "Cancel",
            type=type or "warning",
        )
        self._notify()
        return self.current.id

    def confirm(self) -> None:
        request = self.current
        if request is None:
            return
        request.on_confirm()
        self.close()

    def cancel(self) -> None:
        request = self.current
        if request is not None and request.on_cancel is not None:
            request.on_cancel()
        self.close()

    def close(self) -> None:
        self.current = None
        self._notify()
