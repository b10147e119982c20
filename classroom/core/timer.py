import asyncio
import logging
from enum import Enum
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)

Listener = Callable[[], None]
# (delay_seconds, callback) -> handle exposing cancel()
Scheduler = Callable[[float, Callable[[], None]], Any]


class TimerMode(str, Enum):
    COUNTDOWN = "countdown"
    COUNTUP = "countup"


def loop_scheduler(delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
    """Schedules on the running asyncio loop (NiceGUI's loop in the app)."""
    return asyncio.get_running_loop().call_later(delay, callback)


def format_clock(seconds: int) -> str:
    seconds = max(0, int(seconds))
    return f"{seconds // 60}:{seconds % 60:02d}"


class Timer:
    """
    One-second countdown that belongs to a single presentation.

    The timer never talks to a UI; views subscribe() and re-render.
    At most one tick is pending at any time: every path that schedules a
    tick first cancels the previous one.
    """

    TICK_INTERVAL = 1.0

    def __init__(
        self,
        seconds: int = 0,
        scheduler: Optional[Scheduler] = None,
        mode: TimerMode = TimerMode.COUNTDOWN,
        name: str = "timer",
    ):
        self.name = name
        self.mode = mode
        self.seconds_remaining = seconds
        self.total_seconds = seconds
        self.running = False
        self._scheduler = scheduler or loop_scheduler
        self._handle = None
        self._expire_listeners: List[Listener] = []
        self._change_listeners: List[Listener] = []

    # --- Listeners ---

    def on_expire(self, listener: Listener):
        self._expire_listeners.append(listener)

    def subscribe(self, listener: Listener):
        self._change_listeners.append(listener)

    # --- Controls ---

    def start(self):
        if self.running or self.seconds_remaining <= 0:
            return
        self.running = True
        self._schedule_tick()
        self._notify(self._change_listeners)

    def pause(self):
        if not self.running:
            return
        self.running = False
        self.cancel()
        self._notify(self._change_listeners)

    def toggle(self):
        if self.running:
            self.pause()
        else:
            self.start()

    def reset(self, to_seconds: int):
        self.cancel()
        self.seconds_remaining = to_seconds
        self.total_seconds = to_seconds
        self.running = False
        self._notify(self._change_listeners)

    def cancel(self):
        """Drops the pending tick without touching the timer state."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def tick(self):
        self._handle = None
        if not self.running:
            return

        if self.seconds_remaining > 0:
            self.seconds_remaining -= 1

        if self.seconds_remaining == 0:
            self.running = False
            logger.debug(f"{self.name} expired")
            self._notify(self._change_listeners)
            self._notify(self._expire_listeners)
            return

        self._schedule_tick()
        self._notify(self._change_listeners)

    # --- Display ---

    @property
    def expired(self) -> bool:
        return self.seconds_remaining == 0 and self.total_seconds > 0

    @property
    def display_seconds(self) -> int:
        if self.mode == TimerMode.COUNTUP:
            return self.total_seconds - self.seconds_remaining
        return self.seconds_remaining

    @property
    def display(self) -> str:
        return format_clock(self.display_seconds)

    # --- Internals ---

    def _schedule_tick(self):
        self.cancel()
        self._handle = self._scheduler(self.TICK_INTERVAL, self.tick)

    def _notify(self, listeners: List[Listener]):
        for listener in list(listeners):
            try:
                listener()
            except Exception:
                # Chimes and redraws must never stop the presentation
                logger.debug(f"{self.name} listener failed", exc_info=True)
