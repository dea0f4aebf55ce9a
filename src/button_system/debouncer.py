"""
Quiet-period debouncer - turns raw samples into debounced edges
"""

from typing import Optional

from .line_state import DebouncedEdge, LineState, RawSample


class Debouncer:
    """
    Quiet-period debounce over a stream of raw samples.

    Every change of the raw state restarts a countdown of `window_s`. When
    the countdown elapses without another change and the pending state is
    different from the last reported state, one DebouncedEdge is emitted.

    The countdown is an explicit deadline compared against each sample's
    timestamp, so there is never more than one outstanding deadline and no
    timer threads. A window of 0 reports every observed change immediately.

    Single writer: update() is only called from the sampling loop.

    Example:
        debouncer = Debouncer(window_s=0.2)
        for sample in samples:
            edge = debouncer.update(sample)
            if edge:
                handle(edge)
    """

    def __init__(self, window_s: float):
        if window_s < 0:
            raise ValueError(f"Debounce window must be >= 0, got {window_s}")
        self._window_s = window_s
        self._pending_state: Optional[LineState] = None
        self._reported_state: Optional[LineState] = None
        self._deadline: Optional[float] = None

    @property
    def window_s(self) -> float:
        return self._window_s

    @property
    def reported_state(self) -> Optional[LineState]:
        """Last stable state (seeded by the first sample, then by each edge)"""
        return self._reported_state

    @property
    def deadline(self) -> Optional[float]:
        """Time at which the pending state becomes stable, None when idle"""
        return self._deadline

    def update(self, sample: RawSample) -> Optional[DebouncedEdge]:
        """
        Feed one raw sample.

        Returns:
            DebouncedEdge if the pending state just completed its quiet
            period and differs from the reported state, otherwise None
        """
        if self._reported_state is None:
            # First sample is the baseline, never an edge
            self._pending_state = sample.state
            self._reported_state = sample.state
            return None

        if sample.state == self._pending_state:
            return self._settle(sample.observed_at)

        # The pending state may have outlived its window between two samples;
        # it settles before the new state starts its own countdown
        edge = self._settle(sample.observed_at)
        self._pending_state = sample.state
        self._deadline = sample.observed_at + self._window_s
        if edge is None:
            edge = self._settle(sample.observed_at)
        return edge

    def _settle(self, now: float) -> Optional[DebouncedEdge]:
        """Report the pending state once its deadline has passed"""
        if self._deadline is None or now < self._deadline:
            return None

        self._deadline = None
        if self._pending_state == self._reported_state:
            # Bounced back to where it started
            return None

        self._reported_state = self._pending_state
        return DebouncedEdge(state=self._pending_state, fired_at=now)

    def reset(self) -> None:
        """Forget all state; the next sample becomes the new baseline"""
        self._pending_state = None
        self._reported_state = None
        self._deadline = None
