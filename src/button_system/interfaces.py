"""
Abstract interfaces for GPIO access
"""

from abc import ABC, abstractmethod

from .line_state import PinLevel


class GpioError(RuntimeError):
    """Raised when the GPIO capability fails to open, configure, read or write"""


class IGpio(ABC):
    """
    Abstract GPIO capability.

    Separates hardware access from the debounce/throttle logic.
    Implementations: RPi.GPIO for production, in-memory mock for tests.
    Concurrent read() calls from several threads must be safe.
    """

    @abstractmethod
    def open(self) -> None:
        """
        Acquire the GPIO resource.

        Raises:
            GpioError: if the hardware cannot be opened
        """
        pass

    @abstractmethod
    def configure_input(self, pin: int, pull: str = "up") -> None:
        """
        Configure a pin as input.

        Args:
            pin: BCM pin number
            pull: "up", "down" or "off"
        """
        pass

    @abstractmethod
    def configure_output(self, pin: int, initial: PinLevel = PinLevel.LOW) -> None:
        """Configure a pin as output driven to `initial`"""
        pass

    @abstractmethod
    def read(self, pin: int) -> PinLevel:
        """Read the current electrical level of an input pin"""
        pass

    @abstractmethod
    def write(self, pin: int, level: PinLevel) -> None:
        """Drive an output pin"""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the GPIO resource. Idempotent."""
        pass

    @property
    @abstractmethod
    def is_open(self) -> bool:
        pass
