"""Auto-advancing banner carousel with a seamless loop.

The displayed track is the real slides padded with a copy of the last slide
in front and a copy of the first slide at the end:

    [last'] [s0] [s1] ... [sN-1] [first']

The visible position starts on s0 (index 1). Moving onto either copy
animates normally; once that slide transition has run, the track jumps with
the transition switched off to the real slide the copy stands for, and the
transition is switched back on a moment later. The jump is never visible.

One slide shows statically with no timers; no slides shows nothing.
"""

from dataclasses import dataclass

import structlog
from pydantic import BaseModel

from storefront.navigation import Navigator
from storefront.observable import Observable
from storefront.scheduler.port import Scheduler, TimerHandle

logger = structlog.get_logger(__name__)

DEFAULT_INTERVAL = 3.0  # seconds between auto-advances
TRANSITION_DURATION = 0.5  # seconds a slide animation takes
REENABLE_DELAY = 0.05  # seconds before the transition is switched back on


class CarouselItem(BaseModel):
    id: str
    image: str
    title: str | None = None
    link: str | None = None


@dataclass(frozen=True)
class CarouselState:
    index: int
    active_dot: int
    transition_enabled: bool
    paused: bool


class Carousel(Observable):
    def __init__(
        self,
        items: list[CarouselItem],
        scheduler: Scheduler,
        interval: float = DEFAULT_INTERVAL,
        autoplay: bool = True,
        transition_duration: float = TRANSITION_DURATION,
        reenable_delay: float = REENABLE_DELAY,
        navigator: Navigator | None = None,
    ):
        super().__init__()
        self.items = list(items)
        self._scheduler = scheduler
        self._interval = interval
        self._autoplay = autoplay
        self._transition_duration = transition_duration
        self._reenable_delay = reenable_delay
        self._navigator = navigator

        self.paused = False
        self.transition_enabled = True
        self._tick_timer: TimerHandle | None = None
        self._snap_timer: TimerHandle | None = None
        self._snap_target: int | None = None
        self._reenable_timer: TimerHandle | None = None

        if self.loops:
            self.slides = [self.items[-1], *self.items, self.items[0]]
            self.index = 1
        else:
            self.slides = list(self.items)
            self.index = 0

    # -------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------
    @property
    def loops(self) -> bool:
        return len(self.items) > 1

    @property
    def active_dot(self) -> int:
        """Index of the real slide on screen, with copies mapped onto their originals."""
        if not self.loops:
            return 0
        return (self.index - 1) % len(self.items)

    @property
    def current_item(self) -> CarouselItem | None:
        return self.slides[self.index] if self.slides else None

    def snapshot(self) -> CarouselState:
        return CarouselState(
            index=self.index,
            active_dot=self.active_dot,
            transition_enabled=self.transition_enabled,
            paused=self.paused,
        )

    # -------------------------------------------------------------------
    # Auto-advance
    # -------------------------------------------------------------------
    def start(self) -> None:
        if self._autoplay and self.loops and not self.paused:
            self._arm_tick()

    def _arm_tick(self) -> None:
        self._cancel("_tick_timer")
        self._tick_timer = self._scheduler.call_later(self._interval, self._on_tick)

    def _on_tick(self) -> None:
        self._tick_timer = None
        self.next()
        self._arm_tick()

    def pause(self) -> None:
        """Pointer entered the carousel."""
        self.paused = True
        self._cancel("_tick_timer")
        self._notify()

    def resume(self) -> None:
        """Pointer left the carousel."""
        self.paused = False
        self._notify()
        self.start()

    # -------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------
    def next(self) -> None:
        self._finish_pending_snap()
        self._move(self.index + 1)

    def prev(self) -> None:
        self._finish_pending_snap()
        self._move(self.index - 1)

    def go_to(self, dot: int) -> None:
        """Jump to the real slide at position `dot`."""
        if not self.loops:
            return
        if not 0 <= dot < len(self.items):
            raise IndexError(f"No slide at position {dot}")
        self._move(dot + 1)

    def click(self) -> None:
        """Follow the current slide's link, if it has one."""
        item = self.current_item
        if item is not None and item.link and self._navigator is not None:
            self._navigator.navigate(item.link)

    def _move(self, index: int) -> None:
        if not self.loops:
            return
        self._finish_pending_snap()

        self.transition_enabled = True
        self.index = index
        self._notify()

        if self.index == len(self.slides) - 1:
            self._schedule_snap(1)
        elif self.index == 0:
            self._schedule_snap(len(self.items))

    # -------------------------------------------------------------------
    # Loop-back jump
    # -------------------------------------------------------------------
    def _schedule_snap(self, target: int) -> None:
        self._snap_target = target
        self._snap_timer = self._scheduler.call_later(self._transition_duration, self._snap)

    def _snap(self) -> None:
        target = self._snap_target
        self._snap_timer = None
        self._snap_target = None

        self.transition_enabled = False
        self.index = target
        self._notify()

        self._cancel("_reenable_timer")
        self._reenable_timer = self._scheduler.call_later(self._reenable_delay, self._reenable)

    def _reenable(self) -> None:
        self._reenable_timer = None
        self.transition_enabled = True
        self._notify()

    def _finish_pending_snap(self) -> None:
        """Complete a scheduled jump right away so a new move starts from a real slide."""
        if self._snap_timer is not None:
            self._cancel("_snap_timer")
            self.index = self._snap_target
            self._snap_target = None
        self._cancel("_reenable_timer")

    def _cancel(self, attr: str) -> None:
        timer = getattr(self, attr)
        if timer is not None:
            timer.cancel()
            setattr(self, attr, None)

    def dispose(self) -> None:
        """Stop every timer; the carousel is going away."""
        for attr in ("_tick_timer", "_snap_timer", "_reenable_timer"):
            self._cancel(attr)
        logger.debug("carousel_disposed", slides=len(self.items))
