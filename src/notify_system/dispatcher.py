"""
Dispatcher - turns admitted edges into published notifications
"""

from .interfaces import IPublisher, PublishError
from .payload import NotificationPayload
from button_system.line_state import DebouncedEdge


class Dispatcher:
    """
    Maps a DebouncedEdge to a NotificationPayload and publishes it.

    Publishing is synchronous. A failed publish is logged and counted, never
    raised: the throttle has already consumed the window and there is no
    retry queue.
    """

    def __init__(self,
                 publisher: IPublisher,
                 topic: str,
                 logger,
                 retain: bool = True,
                 payload_on: str = "ON",
                 payload_off: str = "OFF"):
        """
        Args:
            publisher: IPublisher with an established session
            topic: Topic every notification goes to
            logger: ClassLogger instance for logging
            retain: Ask the broker to retain the last message
            payload_on: Message for a press
            payload_off: Message for a release
        """
        self._publisher = publisher
        self._topic = topic
        self._logger = logger
        self._retain = retain
        self._payload_on = payload_on
        self._payload_off = payload_off
        self.published_count = 0
        self.failed_count = 0

    @property
    def topic(self) -> str:
        return self._topic

    def dispatch(self, edge: DebouncedEdge) -> bool:
        """
        Publish the notification for one edge.

        Returns:
            True if the publisher accepted the message, False if it failed
        """
        payload = NotificationPayload.from_edge(edge, self._payload_on, self._payload_off)
        self._logger.info(f"Button event! pressed={edge.is_press}")

        try:
            self._publisher.publish(self._topic, payload.encode(), self._retain)
        except PublishError as e:
            self.failed_count += 1
            self._logger.error(f"Publish of '{payload}' to '{self._topic}' failed: {e}")
            return False

        self.published_count += 1
        self._logger.info(f"Published '{payload}' to '{self._topic}'")
        return True
