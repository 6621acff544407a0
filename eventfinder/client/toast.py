"""
Toast notifications as an explicit publish/subscribe channel
"""
import logging
import threading
from typing import Callable, List, Optional

from eventfinder.client.models import Toast

logger = logging.getLogger("main")

Subscriber = Callable[[Optional[Toast]], None]


class ToastBus:
    """
    Delivers each Toast to every subscriber in subscription order.
    `clear()` publishes None, which subscribers treat as "hide".
    """

    def __init__(self):
        self._subscribers: List[Subscriber] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register `callback`; the returned callable unsubscribes it"""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def show(self, toast: Toast) -> None:
        self._publish(toast)

    def clear(self) -> None:
        self._publish(None)

    def _publish(self, message: Optional[Toast]) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(message)
            except Exception as e:
                # One broken subscriber must not starve the others
                logger.error(f"Toast subscriber failed: {e}", exc_info=True)


def trigger_action(toast: Optional[Toast]) -> bool:
    """Run the toast's action callback (the "Undo" button); False if it has none"""
    if toast is None or toast.on_action is None:
        return False
    toast.on_action()
    return True
