"""
Button reader - sampling plus debouncing for a single button line
"""

from typing import Optional

from .pin_sampler import PinSampler
from .debouncer import Debouncer
from .line_state import DebouncedEdge, RawSample


class ButtonReader:
    """
    Button reader with debounced edge detection.

    Uses PinSampler for hardware access and Debouncer for chatter
    rejection. Each call to read_edge() is one sampling tick.

    Example:
        main_logger = HybridLogger("doorbell")
        logger = main_logger.get_class_logger("ButtonReader", logging.INFO)
        sampler = PinSampler(gpio, 17, Polarity(active_low=True))
        reader = ButtonReader(sampler, Debouncer(0.2), logger)

        while True:
            edge = reader.read_edge()
            if edge:
                logger.info(f"Button edge: {edge}")
    """

    def __init__(self,
                 sampler: PinSampler,
                 debouncer: Debouncer,
                 logger):
        """
        Args:
            sampler: PinSampler for the button pin
            debouncer: Debouncer owned by this reader
            logger: ClassLogger instance from HybridLogger.get_class_logger()
        """
        self._sampler = sampler
        self._debouncer = debouncer
        self._logger = logger
        self._last_sample: Optional[RawSample] = None
        self.press_count = 0
        self.release_count = 0

        self._logger.info(
            f"ButtonReader initialized on GPIO{sampler.pin} "
            f"({int(debouncer.window_s * 1000)}ms debounce)"
        )

    @property
    def last_sample(self) -> Optional[RawSample]:
        return self._last_sample

    def read_edge(self) -> Optional[DebouncedEdge]:
        """
        Take one sample and run it through the debouncer.

        Returns:
            DebouncedEdge when a stable transition completed, otherwise None

        Raises:
            GpioError: if the pin cannot be read
        """
        sample = self._sampler.sample()

        if self._last_sample is None:
            self._logger.debug(f"Initial button state: {sample.state}")
        elif sample.state != self._last_sample.state:
            self._logger.debug(f"Raw change to {sample.state} at {sample.observed_at:.3f}")
        self._last_sample = sample

        edge = self._debouncer.update(sample)
        if edge is None:
            return None

        # Presses at INFO, releases at DEBUG
        if edge.is_press:
            self.press_count += 1
            self._logger.info("Button pressed")
        else:
            self.release_count += 1
            self._logger.debug("Button released")
        return edge
