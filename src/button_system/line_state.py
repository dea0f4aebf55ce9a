"""
Line state data - electrical levels, logical states and the samples/edges built from them
"""

import enum
from dataclasses import dataclass


class PinLevel(enum.Enum):
    """Electrical level of a GPIO line"""
    LOW = 0
    HIGH = 1

    @classmethod
    def from_bool(cls, high: bool) -> "PinLevel":
        return cls.HIGH if high else cls.LOW


class LineState(enum.Enum):
    """Logical state of the button line. ASSERTED means pressed."""
    RELEASED = "released"
    ASSERTED = "asserted"

    @property
    def is_asserted(self) -> bool:
        return self is LineState.ASSERTED

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Polarity:
    """
    Mapping between electrical level and logical state.

    Usage:
        polarity = Polarity(active_low=True)   # pull-up button to GND
        polarity.to_state(PinLevel.LOW)        # LineState.ASSERTED
    """
    active_low: bool = False

    def to_state(self, level: PinLevel) -> LineState:
        asserted_level = PinLevel.LOW if self.active_low else PinLevel.HIGH
        return LineState.ASSERTED if level is asserted_level else LineState.RELEASED

    def to_level(self, state: LineState) -> PinLevel:
        if state is LineState.ASSERTED:
            return PinLevel.LOW if self.active_low else PinLevel.HIGH
        return PinLevel.HIGH if self.active_low else PinLevel.LOW

    def __str__(self) -> str:
        return "active-low" if self.active_low else "active-high"


@dataclass(frozen=True)
class RawSample:
    """One reading of the input line, produced every sampler tick"""
    state: LineState
    observed_at: float  # monotonic seconds


@dataclass(frozen=True)
class DebouncedEdge:
    """A transition that held for the full debounce window"""
    state: LineState
    fired_at: float  # monotonic seconds

    @property
    def is_press(self) -> bool:
        return self.state.is_asserted

    def __str__(self) -> str:
        kind = "press" if self.is_press else "release"
        return f"DebouncedEdge({kind}, fired_at={self.fired_at:.3f})"
