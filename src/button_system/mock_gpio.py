"""
Mock GPIO - In-memory GPIO capability for testing and development without a Pi
"""

import threading
from typing import Dict, List, Optional, Tuple

from .interfaces import IGpio, GpioError
from .line_state import PinLevel


class MockGPIO(IGpio):
    """
    In-memory implementation of IGpio.

    Input levels are set with set_level(); writes to outputs are recorded in
    write_history. Reads can be made to fail with fail_reads() to exercise
    the fatal read path.

    Example:
        gpio = MockGPIO(logger)
        gpio.open()
        gpio.configure_input(17)
        gpio.set_level(17, PinLevel.LOW)
        gpio.read(17)   # PinLevel.LOW
    """

    def __init__(self, logger=None, default_level: PinLevel = PinLevel.HIGH):
        self._logger = logger
        self._default_level = default_level
        self._lock = threading.Lock()
        self._levels: Dict[int, PinLevel] = {}
        self._inputs: Dict[int, str] = {}
        self._outputs: Dict[int, PinLevel] = {}
        self._read_error: Optional[Exception] = None
        self._opened = False
        self._closed = False
        self.close_count = 0
        self.write_history: List[Tuple[int, PinLevel]] = []

    @property
    def is_open(self) -> bool:
        return self._opened and not self._closed

    def open(self) -> None:
        self._opened = True
        if self._logger:
            self._logger.info("🔇 MockGPIO opened (no hardware)")

    def configure_input(self, pin: int, pull: str = "up") -> None:
        if not self.is_open:
            raise GpioError("GPIO is not open")
        with self._lock:
            self._inputs[pin] = pull
            self._levels.setdefault(pin, self._default_level)

    def configure_output(self, pin: int, initial: PinLevel = PinLevel.LOW) -> None:
        if not self.is_open:
            raise GpioError("GPIO is not open")
        with self._lock:
            self._outputs[pin] = initial

    def set_level(self, pin: int, level: PinLevel) -> None:
        """Simulate the electrical level of an input pin"""
        with self._lock:
            self._levels[pin] = level

    def fail_reads(self, error: Optional[Exception] = None) -> None:
        """Make every subsequent read raise GpioError (None restores normal reads)"""
        self._read_error = error

    def read(self, pin: int) -> PinLevel:
        if not self.is_open:
            raise GpioError("GPIO is not open")
        if self._read_error is not None:
            raise GpioError(f"Read failed on GPIO{pin}: {self._read_error}")
        with self._lock:
            if pin not in self._inputs:
                raise GpioError(f"GPIO{pin} is not configured as input")
            return self._levels.get(pin, self._default_level)

    def write(self, pin: int, level: PinLevel) -> None:
        if not self.is_open:
            raise GpioError("GPIO is not open")
        with self._lock:
            if pin not in self._outputs:
                raise GpioError(f"GPIO{pin} is not configured as output")
            self._outputs[pin] = level
            self.write_history.append((pin, level))

    def output_level(self, pin: int) -> Optional[PinLevel]:
        """Current level driven on an output pin"""
        with self._lock:
            return self._outputs.get(pin)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self.close_count += 1
        if self._logger:
            self._logger.info("MockGPIO closed")
