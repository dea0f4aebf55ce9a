"""
Notification payload - transport message built from a debounced edge
"""

from dataclasses import dataclass

from button_system.line_state import DebouncedEdge


@dataclass(frozen=True)
class NotificationPayload:
    """
    Immutable notification for one button edge.

    Usage:
        payload = NotificationPayload.from_edge(edge)
        payload.message     # "ON" for a press, "OFF" for a release
        payload.encode()    # b"ON"
    """
    asserted: bool
    payload_on: str = "ON"
    payload_off: str = "OFF"

    @classmethod
    def from_edge(cls, edge: DebouncedEdge, payload_on: str = "ON", payload_off: str = "OFF") -> "NotificationPayload":
        return cls(asserted=edge.is_press, payload_on=payload_on, payload_off=payload_off)

    @property
    def message(self) -> str:
        return self.payload_on if self.asserted else self.payload_off

    def encode(self) -> bytes:
        return self.message.encode("utf-8")

    def __str__(self) -> str:
        return self.message
