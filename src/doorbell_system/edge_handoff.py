"""
Single-slot rendezvous between the button pipeline and the dispatcher
"""

import threading
from typing import Optional

from button_system.line_state import DebouncedEdge


class EdgeHandoff:
    """
    Blocking, single-slot hand-off of debounced edges.

    put() only returns once the consumer has called done() for that edge
    (the throttle accepted or dropped it), so stale edges never pile up when
    publishing stalls. Edges are handed over strictly in FIFO order.

    Every wait observes the shared cancellation event and gives up once it
    is set.
    """

    def __init__(self, poll_interval_s: float = 0.1):
        self._cond = threading.Condition()
        self._slot: Optional[DebouncedEdge] = None
        self._put_seq = 0
        self._done_seq = 0
        self._taken = False
        self._poll_interval_s = poll_interval_s

    def put(self, edge: DebouncedEdge, cancel: threading.Event) -> bool:
        """
        Offer an edge and wait until the consumer has handled it.

        Returns:
            True when handled, False when cancelled first
        """
        with self._cond:
            while self._slot is not None:
                if cancel.is_set():
                    return False
                self._cond.wait(self._poll_interval_s)

            self._slot = edge
            self._taken = False
            self._put_seq += 1
            seq = self._put_seq
            self._cond.notify_all()

            while self._done_seq < seq:
                if cancel.is_set():
                    return False
                self._cond.wait(self._poll_interval_s)
            return True

    def take(self, cancel: threading.Event) -> Optional[DebouncedEdge]:
        """
        Wait for the next edge.

        Returns:
            The edge, or None when cancelled. The caller must call done()
            after the throttle decision.
        """
        with self._cond:
            while self._slot is None or self._taken:
                if cancel.is_set():
                    return None
                self._cond.wait(self._poll_interval_s)
            self._taken = True
            return self._slot

    def done(self) -> None:
        """Mark the taken edge as accepted or dropped, releasing the producer"""
        with self._cond:
            if self._slot is None:
                return
            self._slot = None
            self._taken = False
            self._done_seq += 1
            self._cond.notify_all()

    @property
    def pending(self) -> bool:
        with self._cond:
            return self._slot is not None
