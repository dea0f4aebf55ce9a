import signal
import threading

from button_system import GpioError, MockGPIO
from doorbell_system import ShutdownCoordinator, EXIT_FATAL


class FailingCloseGPIO(MockGPIO):
    def close(self) -> None:
        super().close()
        raise GpioError("device busy")


def make_coordinator(logger, gpio=None):
    gpio = gpio if gpio is not None else MockGPIO()
    gpio.open()
    return ShutdownCoordinator(gpio, logger), gpio


def test_release_closes_gpio_exactly_once(logger):
    shutdown, gpio = make_coordinator(logger)
    assert shutdown.release() is True
    assert shutdown.release() is False
    assert gpio.close_count == 1
    assert not gpio.is_open


def test_concurrent_releases_close_once(logger):
    shutdown, gpio = make_coordinator(logger)
    threads = [threading.Thread(target=shutdown.release) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert gpio.close_count == 1


def test_first_shutdown_request_wins(logger):
    shutdown, _gpio = make_coordinator(logger)
    assert shutdown.exit_code is None
    assert shutdown.request_shutdown("pipeline failed", EXIT_FATAL) is True
    assert shutdown.request_shutdown("stopped", 0) is False
    assert shutdown.exit_code == EXIT_FATAL
    assert shutdown.reason == "pipeline failed"
    assert shutdown.cancel_event.is_set()


def test_request_does_not_release_by_itself(logger):
    shutdown, gpio = make_coordinator(logger)
    shutdown.request_shutdown("stopped", 0)
    assert gpio.is_open
    assert not shutdown.released


def test_signal_sets_interrupted_exit_status(logger):
    shutdown, _gpio = make_coordinator(logger)
    shutdown.install()
    try:
        signal.raise_signal(signal.SIGTERM)
    finally:
        shutdown.uninstall()

    assert shutdown.cancel_event.is_set()
    assert shutdown.exit_code == 128 + signal.SIGTERM


def test_sigint_handler_maps_to_130(logger):
    shutdown, _gpio = make_coordinator(logger)
    shutdown._handle_signal(signal.SIGINT, None)
    assert shutdown.exit_code == 130


def test_uninstall_restores_previous_handler(logger):
    previous = signal.getsignal(signal.SIGTERM)
    shutdown, _gpio = make_coordinator(logger)
    shutdown.install()
    assert signal.getsignal(signal.SIGTERM) != previous
    shutdown.uninstall()
    assert signal.getsignal(signal.SIGTERM) == previous


def test_release_logs_close_failure(logger):
    shutdown, gpio = make_coordinator(logger, FailingCloseGPIO())
    assert shutdown.release() is True
    assert gpio.close_count == 1
    assert shutdown.release() is False
