import threading
from typing import Callable, Optional

from eventfinder.constants import SUGGEST_DEBOUNCE_SECONDS


class Debouncer:
    """
    Run `func` once input has paused for `delay` seconds.

    Every call() cancels the pending timer and starts a new one, so only the
    most recent call fires. `timer_factory` takes (delay, callback) and
    returns an object with start()/cancel(), threading.Timer by default.
    """

    def __init__(self, func: Callable, delay: float = SUGGEST_DEBOUNCE_SECONDS, timer_factory=None):
        self.func = func
        self.delay = delay
        self.timer_factory = timer_factory or _daemon_timer
        self._timer: Optional[object] = None
        self._generation = 0
        self._lock = threading.Lock()

    def call(self, *args, **kwargs) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            generation = self._generation
            self._timer = self.timer_factory(self.delay, lambda: self._fire(generation, args, kwargs))
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            self._generation += 1
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def _fire(self, generation, args, kwargs):
        with self._lock:
            # A timer cancelled after it started running is stale
            if generation != self._generation:
                return
            self._timer = None
        self.func(*args, **kwargs)


def _daemon_timer(delay, callback):
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    return timer
