#!/usr/bin/env python3
"""
Indicator Mirror - drives an LED from the raw button line

The mirror is deliberately oblivious to debouncing and throttling: chatter
on the input shows up on the LED. It only shares the GPIO handle with the
button pipeline and has no ordering relationship with it.
"""
import threading
import time

from button_system.interfaces import IGpio
from button_system.line_state import LineState, Polarity


class IndicatorMirror:
    """Mirror the raw input line onto an output pin at a fixed cadence

    Example:
        mirror = IndicatorMirror(gpio, input_pin=17, output_pin=27,
                                 input_polarity=Polarity(active_low=True),
                                 output_polarity=Polarity(), interval_ms=50,
                                 logger=logger)
        mirror.run(cancel_event)   # blocks until cancel_event is set
    """

    def __init__(self,
                 gpio: IGpio,
                 input_pin: int,
                 output_pin: int,
                 input_polarity: Polarity,
                 output_polarity: Polarity,
                 logger,
                 interval_ms: int = 50):
        self._gpio = gpio
        self._input_pin = input_pin
        self._output_pin = output_pin
        self._input_polarity = input_polarity
        self._output_polarity = output_polarity
        self._logger = logger
        self.target_interval = interval_ms / 1000.0
        self.step_count = 0

    def step(self) -> LineState:
        """Copy the current raw state to the output once

        Returns: The raw LineState that was mirrored
        """
        state = self._input_polarity.to_state(self._gpio.read(self._input_pin))
        self._gpio.write(self._output_pin, self._output_polarity.to_level(state))
        self.step_count += 1
        return state

    def run(self, cancel: threading.Event) -> None:
        """Mirror until `cancel` is set. GpioError propagates to the caller."""
        self._logger.info(
            f"Indicator mirror started: GPIO{self._input_pin} -> GPIO{self._output_pin} "
            f"every {int(self.target_interval * 1000)}ms"
        )
        while not cancel.is_set():
            tick_start = time.monotonic()
            self.step()

            sleep_time = self.target_interval - (time.monotonic() - tick_start)
            if sleep_time > 0:
                cancel.wait(sleep_time)
        self._logger.debug(f"Indicator mirror stopped after {self.step_count} steps")
