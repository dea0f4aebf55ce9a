"""
Button System Package

GPIO access, sampling and quiet-period debouncing for a single button line.
"""

from .line_state import PinLevel, LineState, Polarity, RawSample, DebouncedEdge
from .interfaces import IGpio, GpioError
from .rpi_gpio import RPiGPIO
from .mock_gpio import MockGPIO
from .pin_sampler import PinSampler
from .debouncer import Debouncer
from .button_reader import ButtonReader

__all__ = [
    "PinLevel",
    "LineState",
    "Polarity",
    "RawSample",
    "DebouncedEdge",
    "IGpio",
    "GpioError",
    "RPiGPIO",
    "MockGPIO",
    "PinSampler",
    "Debouncer",
    "ButtonReader",
]
