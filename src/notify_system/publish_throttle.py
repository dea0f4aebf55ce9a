"""
Cooldown throttle for outgoing notifications
"""

import threading
import time
from typing import Callable, Optional


class PublishThrottle:
    """
    Admits at most one notification per cooldown window.

    Works like a once-per-interval timer: admit() returns True when the
    window has passed since the last admitted call and moves the window
    forward, otherwise it returns False and changes nothing. The window is
    consumed on admission, whatever happens to the publish afterwards.

    Example:
        throttle = PublishThrottle(10.0)

        # In the dispatch loop:
        if throttle.admit():
            dispatcher.dispatch(edge)  # at most once per 10 seconds
    """

    def __init__(self, window_s: float, clock: Callable[[], float] = time.monotonic):
        """
        Args:
            window_s: Minimum seconds between two admitted notifications
            clock: Monotonic time source in seconds
        """
        if window_s < 0:
            raise ValueError(f"Throttle window must be >= 0, got {window_s}")
        self.window_s = window_s
        self._clock = clock
        self._lock = threading.Lock()
        self._last_publish_at: Optional[float] = None
        self.admitted_count = 0
        self.dropped_count = 0

    @property
    def last_publish_at(self) -> Optional[float]:
        """Time of the last admitted notification, None before the first"""
        return self._last_publish_at

    def admit(self, now: Optional[float] = None) -> bool:
        """
        Decide whether a notification may go out now.

        Returns:
            True if admitted (and the cooldown restarted), False if dropped
        """
        if now is None:
            now = self._clock()
        with self._lock:
            if self._last_publish_at is not None:
                if now - self._last_publish_at < self.window_s:
                    self.dropped_count += 1
                    return False
                # never move backwards, even if the clock does
                now = max(now, self._last_publish_at)
            self._last_publish_at = now
            self.admitted_count += 1
            return True

    def elapsed_s(self, now: Optional[float] = None) -> Optional[float]:
        """Seconds since the last admitted notification"""
        if self._last_publish_at is None:
            return None
        if now is None:
            now = self._clock()
        return now - self._last_publish_at

    def remaining_s(self, now: Optional[float] = None) -> float:
        """Seconds until the next notification would be admitted (0 when open)"""
        elapsed = self.elapsed_s(now)
        if elapsed is None:
            return 0.0
        return max(0.0, self.window_s - elapsed)
