import threading

from button_system import Debouncer, MockGPIO, PinLevel, PinSampler, Polarity, LineState
from led_system import IndicatorMirror

from conftest import wait_for

BUTTON_PIN = 17
LED_PIN = 27


def make_gpio():
    gpio = MockGPIO()
    gpio.open()
    gpio.configure_input(BUTTON_PIN, "up")
    gpio.configure_output(LED_PIN, PinLevel.LOW)
    return gpio


def make_mirror(gpio, logger, interval_ms=50):
    return IndicatorMirror(
        gpio=gpio,
        input_pin=BUTTON_PIN,
        output_pin=LED_PIN,
        input_polarity=Polarity(active_low=True),
        output_polarity=Polarity(active_low=False),
        logger=logger,
        interval_ms=interval_ms,
    )


def test_pressed_button_lights_the_led(logger):
    gpio = make_gpio()
    mirror = make_mirror(gpio, logger)

    gpio.set_level(BUTTON_PIN, PinLevel.LOW)
    assert mirror.step() is LineState.ASSERTED
    assert gpio.output_level(LED_PIN) is PinLevel.HIGH

    gpio.set_level(BUTTON_PIN, PinLevel.HIGH)
    assert mirror.step() is LineState.RELEASED
    assert gpio.output_level(LED_PIN) is PinLevel.LOW


def test_active_low_led_is_inverted(logger):
    gpio = make_gpio()
    mirror = IndicatorMirror(gpio, BUTTON_PIN, LED_PIN, Polarity(active_low=True),
                             Polarity(active_low=True), logger)
    gpio.set_level(BUTTON_PIN, PinLevel.LOW)
    mirror.step()
    assert gpio.output_level(LED_PIN) is PinLevel.LOW


def test_flicker_is_mirrored_while_debounced_pipeline_stays_silent(logger, clock):
    # 20ms flicker period sampled every 10ms, 1s debounce on the pipeline
    gpio = make_gpio()
    mirror = make_mirror(gpio, logger, interval_ms=10)
    sampler = PinSampler(gpio, BUTTON_PIN, Polarity(active_low=True), clock=clock)
    debouncer = Debouncer(window_s=1.0)

    edges = []
    for i in range(100):
        gpio.set_level(BUTTON_PIN, PinLevel.LOW if i % 2 else PinLevel.HIGH)
        mirror.step()
        edge = debouncer.update(sampler.sample())
        if edge:
            edges.append(edge)
        clock.advance(0.010)

    levels = [level for pin, level in gpio.write_history if pin == LED_PIN]
    assert len(levels) == 100
    for previous, current in zip(levels, levels[1:]):
        assert previous is not current
    # one full period = two 10ms steps
    assert levels[0::2] == [PinLevel.LOW] * 50
    assert levels[1::2] == [PinLevel.HIGH] * 50
    assert edges == []


def test_run_loops_until_cancelled(logger):
    gpio = make_gpio()
    mirror = make_mirror(gpio, logger, interval_ms=5)
    cancel = threading.Event()

    thread = threading.Thread(target=mirror.run, args=(cancel,), daemon=True)
    thread.start()
    assert wait_for(lambda: mirror.step_count >= 3)

    gpio.set_level(BUTTON_PIN, PinLevel.LOW)
    assert wait_for(lambda: gpio.output_level(LED_PIN) is PinLevel.HIGH)

    cancel.set()
    thread.join(1.0)
    assert not thread.is_alive()
