"""
GPIO capability implementation using RPi.GPIO
"""

import threading
from typing import Set

try:
    import RPi.GPIO as GPIO
except (ImportError, RuntimeError):
    # RPi.GPIO raises RuntimeError when imported on something that is not a Pi
    GPIO = None

from .interfaces import IGpio, GpioError
from .line_state import PinLevel


class RPiGPIO(IGpio):
    """
    GPIO capability for production on a Raspberry Pi (BCM numbering).

    Only concerned with hardware access: pin setup, level reads/writes and
    releasing the pins again. close() may be called from any thread, any
    number of times.
    """

    def __init__(self, logger):
        """
        Args:
            logger: ClassLogger instance for logging
        """
        self._logger = logger
        self._lock = threading.Lock()
        self._opened = False
        self._closed = False
        self._pins: Set[int] = set()

    @property
    def is_open(self) -> bool:
        return self._opened and not self._closed

    def _pull_mode(self, pull: str) -> int:
        modes = {
            "up": GPIO.PUD_UP,
            "down": GPIO.PUD_DOWN,
            "off": GPIO.PUD_OFF,
        }
        if pull not in modes:
            raise GpioError(f"Unknown pull mode '{pull}' (expected up/down/off)")
        return modes[pull]

    def open(self) -> None:
        """Select BCM numbering"""
        if GPIO is None:
            raise GpioError("RPi.GPIO is required but not available on this machine")
        try:
            GPIO.setwarnings(False)
            GPIO.setmode(GPIO.BCM)
        except Exception as e:
            self._logger.error(f"GPIO open failed: {e}")
            raise GpioError(f"GPIO open failed: {e}") from e
        self._opened = True
        self._logger.info("GPIO opened (BCM mode)")

    def _require_open(self) -> None:
        if not self.is_open:
            raise GpioError("GPIO is not open")

    def configure_input(self, pin: int, pull: str = "up") -> None:
        self._require_open()
        pull_mode = self._pull_mode(pull)
        try:
            GPIO.setup(pin, GPIO.IN, pull_up_down=pull_mode)
        except Exception as e:
            self._logger.error(f"Input setup failed on GPIO{pin}: {e}")
            raise GpioError(f"Input setup failed on GPIO{pin}: {e}") from e
        self._pins.add(pin)
        self._logger.info(f"GPIO{pin} configured as input (pull-{pull})")

    def configure_output(self, pin: int, initial: PinLevel = PinLevel.LOW) -> None:
        self._require_open()
        try:
            GPIO.setup(pin, GPIO.OUT, initial=GPIO.HIGH if initial is PinLevel.HIGH else GPIO.LOW)
        except Exception as e:
            self._logger.error(f"Output setup failed on GPIO{pin}: {e}")
            raise GpioError(f"Output setup failed on GPIO{pin}: {e}") from e
        self._pins.add(pin)
        self._logger.info(f"GPIO{pin} configured as output (initial {initial.name})")

    def read(self, pin: int) -> PinLevel:
        self._require_open()
        try:
            return PinLevel.from_bool(GPIO.input(pin) == GPIO.HIGH)
        except Exception as e:
            raise GpioError(f"Read failed on GPIO{pin}: {e}") from e

    def write(self, pin: int, level: PinLevel) -> None:
        self._require_open()
        try:
            GPIO.output(pin, GPIO.HIGH if level is PinLevel.HIGH else GPIO.LOW)
        except Exception as e:
            raise GpioError(f"Write failed on GPIO{pin}: {e}") from e

    def close(self) -> None:
        """Release configured pins once; later calls do nothing"""
        with self._lock:
            if self._closed or not self._opened:
                self._closed = True
                return
            self._closed = True
            pins = sorted(self._pins)
        if pins:
            GPIO.cleanup(pins)
        self._logger.info(f"GPIO closed (released {len(pins)} pins)")
