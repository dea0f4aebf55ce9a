"""
Pin sampler - reads the logical state of the button line
"""

import time
from typing import Callable

from .interfaces import IGpio
from .line_state import Polarity, RawSample


class PinSampler:
    """
    Reads one input pin through the GPIO capability and stamps the result.

    Only concerned with sampling: polarity mapping and the timestamp.
    Read failures (GpioError) propagate to the caller, no retries.
    """

    def __init__(self,
                 gpio: IGpio,
                 pin: int,
                 polarity: Polarity,
                 clock: Callable[[], float] = time.monotonic):
        """
        Args:
            gpio: Opened GPIO capability (shared, read-only use)
            pin: BCM pin number of the button
            polarity: Level-to-state mapping for the button line
            clock: Monotonic time source in seconds
        """
        self._gpio = gpio
        self._pin = pin
        self._polarity = polarity
        self._clock = clock

    @property
    def pin(self) -> int:
        return self._pin

    def sample(self) -> RawSample:
        level = self._gpio.read(self._pin)
        return RawSample(state=self._polarity.to_state(level), observed_at=self._clock())
