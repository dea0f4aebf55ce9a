import pytest

from button_system import (
    ButtonReader,
    Debouncer,
    GpioError,
    LineState,
    MockGPIO,
    PinLevel,
    PinSampler,
    Polarity,
    RPiGPIO,
)
from button_system import rpi_gpio


def test_polarity_mapping():
    active_low = Polarity(active_low=True)
    assert active_low.to_state(PinLevel.LOW) is LineState.ASSERTED
    assert active_low.to_state(PinLevel.HIGH) is LineState.RELEASED
    assert active_low.to_level(LineState.ASSERTED) is PinLevel.LOW

    active_high = Polarity()
    assert active_high.to_state(PinLevel.HIGH) is LineState.ASSERTED
    assert active_high.to_level(LineState.RELEASED) is PinLevel.LOW


def test_mock_gpio_requires_open_and_configured_pins():
    gpio = MockGPIO()
    with pytest.raises(GpioError):
        gpio.read(17)
    gpio.open()
    with pytest.raises(GpioError):
        gpio.read(17)
    gpio.configure_input(17)
    assert gpio.read(17) is PinLevel.HIGH
    with pytest.raises(GpioError):
        gpio.write(17, PinLevel.LOW)


def test_mock_gpio_close_is_idempotent():
    gpio = MockGPIO()
    gpio.open()
    gpio.close()
    gpio.close()
    assert gpio.close_count == 1
    with pytest.raises(GpioError):
        gpio.configure_input(17)


def test_sampler_stamps_logical_state(clock):
    gpio = MockGPIO()
    gpio.open()
    gpio.configure_input(17)
    gpio.set_level(17, PinLevel.LOW)
    clock.advance(2.5)

    sample = PinSampler(gpio, 17, Polarity(active_low=True), clock=clock).sample()
    assert sample.state is LineState.ASSERTED
    assert sample.observed_at == 2.5


def test_sampler_propagates_read_errors(clock):
    gpio = MockGPIO()
    gpio.open()
    gpio.configure_input(17)
    gpio.fail_reads(OSError("bus error"))
    with pytest.raises(GpioError, match="bus error"):
        PinSampler(gpio, 17, Polarity(), clock=clock).sample()


def test_button_reader_counts_debounced_presses(logger, clock):
    gpio = MockGPIO()
    gpio.open()
    gpio.configure_input(17)
    reader = ButtonReader(
        PinSampler(gpio, 17, Polarity(active_low=True), clock=clock),
        Debouncer(window_s=0.5),
        logger,
    )

    def tick(level):
        gpio.set_level(17, level)
        edge = reader.read_edge()
        clock.advance(0.25)
        return edge

    assert tick(PinLevel.HIGH) is None
    assert tick(PinLevel.LOW) is None
    assert tick(PinLevel.LOW) is None
    edge = tick(PinLevel.LOW)
    assert edge is not None and edge.is_press
    assert [tick(PinLevel.HIGH) for _ in range(3)][-1].state is LineState.RELEASED
    assert (reader.press_count, reader.release_count) == (1, 1)


def test_rpi_gpio_without_library_fails_to_open(logger, monkeypatch):
    monkeypatch.setattr(rpi_gpio, "GPIO", None)
    gpio = RPiGPIO(logger)
    with pytest.raises(GpioError, match="RPi.GPIO"):
        gpio.open()
    assert not gpio.is_open
    gpio.close()
