"""
Mock Publisher - No-network implementation for dry runs and tests
"""

import threading
from typing import List, Optional, Tuple

from .interfaces import IPublisher, PublishError


class MockPublisher(IPublisher):
    """
    Records every publish instead of sending it.

    fail_with() makes subsequent publishes raise PublishError, which is how
    the transient-failure path is exercised without a broker.
    """

    def __init__(self, logger=None):
        self._logger = logger
        self._lock = threading.Lock()
        self._failure: Optional[str] = None
        self.published: List[Tuple[str, bytes, bool]] = []
        self.attempts = 0
        self.closed = False

        if self._logger:
            self._logger.info("🔇 MockPublisher initialized (no broker)")

    def fail_with(self, reason: Optional[str]) -> None:
        """Make publishes fail with `reason` (None restores success)"""
        self._failure = reason

    def publish(self, topic: str, payload: bytes, retain: bool) -> None:
        with self._lock:
            self.attempts += 1
            if self._failure is not None:
                raise PublishError(self._failure)
            self.published.append((topic, payload, retain))
        if self._logger:
            self._logger.info(f"Mock: {topic} <- {payload.decode('utf-8', 'replace')} (retain={retain})")

    @property
    def messages(self) -> List[bytes]:
        with self._lock:
            return [payload for _topic, payload, _retain in self.published]

    def close(self) -> None:
        self.closed = True
