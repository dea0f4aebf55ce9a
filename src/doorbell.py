#!/usr/bin/env python3
"""
Raspberry Pi MQTT Doorbell

Watches a push button on a GPIO input, debounces it, and publishes
press/release notifications ("ON"/"OFF") to an MQTT topic at most once per
cooldown window. Optionally mirrors the raw button line onto an LED.
"""

import argparse
import logging
import sys
from typing import List, Optional

from button_system import (
    ButtonReader,
    Debouncer,
    GpioError,
    IGpio,
    MockGPIO,
    PinLevel,
    PinSampler,
    Polarity,
    RPiGPIO,
)
from led_system import IndicatorMirror
from notify_system import (
    Dispatcher,
    IPublisher,
    MockPublisher,
    MqttPublisher,
    PublishError,
    PublishThrottle,
)
from doorbell_system import (
    ButtonConfig,
    DoorbellConfig,
    DoorbellManager,
    IndicatorConfig,
    MqttConfig,
    ShutdownCoordinator,
    EXIT_FATAL,
)
from utils import HybridLogger, describe_pin

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="rpi-mqtt-doorbell",
        description="Publish debounced GPIO button presses to an MQTT topic",
    )
    parser.add_argument("--button-gpio-pin", type=int, default=17, help="BCM gpio pin for the button")
    parser.add_argument("--led-gpio-pin", type=int, default=-1, help="BCM gpio pin for the LED (-1 disables it)")
    parser.add_argument("--broker-uri", default="mqtt://127.0.0.1:1883", help="URI of the MQTT broker")
    parser.add_argument("--client-id", default="rpi-mqtt-doorbell", help="client ID for MQTT")
    parser.add_argument("--topic", default="rpi-mqtt-doorbell", help="MQTT topic to publish")
    parser.add_argument("--pull", choices=("up", "down", "off"), default="up", help="pull resistor on the button pin")
    parser.add_argument("--active-high", action="store_true",
                        help="button reads HIGH when pressed (default: pressed pulls the line LOW)")
    parser.add_argument("--sample-interval-ms", type=int, default=100, help="button sampling interval")
    parser.add_argument("--debounce-ms", type=int, default=200, help="quiet period before a change counts")
    parser.add_argument("--throttle-s", type=float, default=10.0, help="minimum seconds between notifications")
    parser.add_argument("--no-retain", action="store_true", help="publish without the MQTT retain flag")
    parser.add_argument("--mock-gpio", action="store_true", help="use in-memory GPIO (no hardware)")
    parser.add_argument("--dry-run", action="store_true", help="log notifications instead of publishing")
    parser.add_argument("--log-level", choices=sorted(LOG_LEVELS), default="info")
    parser.add_argument("--log-dir", default="logs", help="directory for log files ('' for console only)")
    return parser.parse_args(argv)


def create_doorbell_config(args: argparse.Namespace) -> DoorbellConfig:
    """Build configuration from parsed command line arguments"""
    return DoorbellConfig(
        button_config=ButtonConfig(
            pin=args.button_gpio_pin,
            pull=args.pull,
            active_low=not args.active_high,
            sample_interval_ms=args.sample_interval_ms,
            debounce_window_ms=args.debounce_ms,
        ),
        indicator_config=IndicatorConfig(
            pin=None if args.led_gpio_pin == -1 else args.led_gpio_pin,
        ),
        mqtt_config=MqttConfig(
            broker_uri=args.broker_uri,
            client_id=args.client_id,
            topic=args.topic,
            retain=not args.no_retain,
        ),
        throttle_window_s=args.throttle_s,
    )


def create_doorbell_system(config: DoorbellConfig,
                           gpio: IGpio,
                           publisher: IPublisher,
                           shutdown: ShutdownCoordinator,
                           doorbell_logger,
                           level: int = logging.INFO) -> DoorbellManager:
    """
    Open and configure the GPIO, then wire the loops together.

    Args:
        config: Validated DoorbellConfig
        gpio: GPIO capability (not yet opened)
        publisher: Publisher with an established session
        shutdown: Coordinator that will release `gpio`
        doorbell_logger: ClassLogger used to derive component loggers
        level: Log level for the component loggers

    Returns:
        DoorbellManager ready to run

    Raises:
        GpioError: if the GPIO cannot be opened or configured
    """
    config.validate()

    button_logger = doorbell_logger.create_class_logger("ButtonReader", level)
    dispatcher_logger = doorbell_logger.create_class_logger("Dispatcher", level)
    manager_logger = doorbell_logger.create_class_logger("DoorbellManager", level)
    mirror_logger = doorbell_logger.create_class_logger("IndicatorMirror", level)

    button_config = config.button_config
    indicator_config = config.indicator_config
    mqtt_config = config.mqtt_config

    gpio.open()
    gpio.configure_input(button_config.pin, button_config.pull)
    if indicator_config.enabled:
        gpio.configure_output(indicator_config.pin, PinLevel.LOW)

    button_polarity = Polarity(active_low=button_config.active_low)

    button_reader = ButtonReader(
        sampler=PinSampler(gpio, button_config.pin, button_polarity),
        debouncer=Debouncer(button_config.debounce_window_s),
        logger=button_logger,
    )

    dispatcher = Dispatcher(
        publisher=publisher,
        topic=mqtt_config.topic,
        logger=dispatcher_logger,
        retain=mqtt_config.retain,
        payload_on=mqtt_config.payload_on,
        payload_off=mqtt_config.payload_off,
    )

    indicator_mirror = None
    if indicator_config.enabled:
        indicator_mirror = IndicatorMirror(
            gpio=gpio,
            input_pin=button_config.pin,
            output_pin=indicator_config.pin,
            input_polarity=button_polarity,
            output_polarity=Polarity(active_low=indicator_config.active_low),
            logger=mirror_logger,
            interval_ms=indicator_config.interval_ms,
        )

    return DoorbellManager(
        button_reader=button_reader,
        throttle=PublishThrottle(config.throttle_window_s),
        dispatcher=dispatcher,
        shutdown=shutdown,
        logger=manager_logger,
        sample_interval_ms=button_config.sample_interval_ms,
        indicator_mirror=indicator_mirror,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - sets up and runs the doorbell.

    Returns:
        Process exit status (128+signum after a signal, 1 on fatal errors)
    """
    args = parse_args(argv)
    level = LOG_LEVELS[args.log_level]

    main_logger = HybridLogger("Doorbell", log_dir=args.log_dir or None)
    doorbell_logger = main_logger.get_class_logger("Doorbell", level)

    doorbell_logger.info("🔔 RPI MQTT DOORBELL")

    config = create_doorbell_config(args)
    try:
        config.validate()
    except ValueError as e:
        doorbell_logger.error(f"Invalid configuration: {e}")
        main_logger.cleanup()
        return EXIT_FATAL

    button_config = config.button_config
    doorbell_logger.info(
        f"Button: {describe_pin(button_config.pin)}, pull-{button_config.pull}, "
        f"{Polarity(active_low=button_config.active_low)}, "
        f"{button_config.sample_interval_ms}ms sampling, {button_config.debounce_window_ms}ms debounce"
    )
    if config.indicator_enabled:
        doorbell_logger.info(f"Indicator LED: {describe_pin(config.indicator_config.pin)}")
    doorbell_logger.info(
        f"MQTT: {config.mqtt_config.broker_uri} topic '{config.mqtt_config.topic}', "
        f"{config.throttle_window_s}s throttle"
    )

    if args.mock_gpio:
        gpio: IGpio = MockGPIO(doorbell_logger.create_class_logger("MockGPIO", level))
    else:
        gpio = RPiGPIO(doorbell_logger.create_class_logger("RPiGPIO", level))

    publisher_logger = doorbell_logger.create_class_logger("Publisher", level)
    if args.dry_run:
        publisher: IPublisher = MockPublisher(publisher_logger)
    else:
        publisher = MqttPublisher(
            broker_uri=config.mqtt_config.broker_uri,
            client_id=config.mqtt_config.client_id,
            logger=publisher_logger,
            qos=config.mqtt_config.qos,
            connect_timeout_s=config.mqtt_config.connect_timeout_s,
        )

    shutdown = ShutdownCoordinator(gpio, doorbell_logger.create_class_logger("Shutdown", level))

    exit_code = EXIT_FATAL
    # Handlers go in before the GPIO is opened so a signal always reaches release()
    shutdown.install()
    try:
        if isinstance(publisher, MqttPublisher):
            publisher.connect()
        manager = create_doorbell_system(config, gpio, publisher, shutdown, doorbell_logger, level)
        exit_code = manager.run()
    except (GpioError, PublishError) as e:
        doorbell_logger.error(f"Startup failed: {e}", exception=e)
    finally:
        shutdown.release()
        shutdown.uninstall()
        publisher.close()
        doorbell_logger.info("✅ Doorbell shut down")
        main_logger.cleanup()

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
