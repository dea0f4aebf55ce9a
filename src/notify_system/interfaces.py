"""
Abstract interface for publishing notifications
"""

from abc import ABC, abstractmethod


class PublishError(RuntimeError):
    """Raised when a notification cannot be handed to the transport"""


class IPublisher(ABC):
    """
    Publish capability with an already established session.

    Connection lifecycle (connect/reconnect) belongs to the implementation,
    not to the callers.
    """

    @abstractmethod
    def publish(self, topic: str, payload: bytes, retain: bool) -> None:
        """
        Publish one message.

        Raises:
            PublishError: if the transport rejects the message
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """End the session. Idempotent."""
        pass
