"""
Doorbell system configuration
"""

from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import urlparse

from utils.gpio_utils import is_valid_bcm_pin, MIN_USER_GPIO, MAX_USER_GPIO

PULL_MODES = ("up", "down", "off")


@dataclass
class ButtonConfig:
    """Button input configuration"""
    pin: int = 17
    pull: str = "up"
    active_low: bool = True  # pull-up button to GND: pressed == LOW
    sample_interval_ms: int = 100
    debounce_window_ms: int = 200

    @property
    def sample_interval_s(self) -> float:
        return self.sample_interval_ms / 1000.0

    @property
    def debounce_window_s(self) -> float:
        return self.debounce_window_ms / 1000.0


@dataclass
class IndicatorConfig:
    """Indicator LED configuration (disabled when pin is None)"""
    pin: Optional[int] = None
    active_low: bool = False
    interval_ms: int = 50

    @property
    def enabled(self) -> bool:
        return self.pin is not None

    @property
    def interval_s(self) -> float:
        return self.interval_ms / 1000.0


@dataclass
class MqttConfig:
    """MQTT session and message configuration"""
    broker_uri: str = "mqtt://127.0.0.1:1883"
    client_id: str = "rpi-mqtt-doorbell"
    topic: str = "rpi-mqtt-doorbell"
    qos: int = 0
    retain: bool = True
    payload_on: str = "ON"
    payload_off: str = "OFF"
    connect_timeout_s: float = 3.0


@dataclass
class DoorbellConfig:
    """Main doorbell configuration"""

    button_config: ButtonConfig = field(default_factory=ButtonConfig)
    indicator_config: IndicatorConfig = field(default_factory=IndicatorConfig)
    mqtt_config: MqttConfig = field(default_factory=MqttConfig)

    # Minimum seconds between two published notifications
    throttle_window_s: float = 10.0

    @property
    def indicator_enabled(self) -> bool:
        return self.indicator_config.enabled

    def validate(self) -> None:
        """Basic validation of configuration"""
        button = self.button_config
        indicator = self.indicator_config
        mqtt_config = self.mqtt_config

        if not is_valid_bcm_pin(button.pin):
            raise ValueError(
                f"Button GPIO pin {button.pin} out of valid range ({MIN_USER_GPIO}-{MAX_USER_GPIO})"
            )
        if button.pull not in PULL_MODES:
            raise ValueError(f"Button pull must be one of {PULL_MODES}, got '{button.pull}'")
        if button.sample_interval_ms <= 0:
            raise ValueError("Sample interval must be positive")
        if button.debounce_window_ms < 0:
            raise ValueError("Debounce window must not be negative")

        if indicator.enabled:
            if not is_valid_bcm_pin(indicator.pin):
                raise ValueError(
                    f"Indicator GPIO pin {indicator.pin} out of valid range ({MIN_USER_GPIO}-{MAX_USER_GPIO})"
                )
            if indicator.pin == button.pin:
                raise ValueError(f"GPIO pin conflict between button and indicator: {button.pin}")
            if indicator.interval_ms <= 0:
                raise ValueError("Indicator interval must be positive")

        if self.throttle_window_s < 0:
            raise ValueError("Throttle window must not be negative")

        if not mqtt_config.topic:
            raise ValueError("MQTT topic must not be empty")
        if mqtt_config.qos not in (0, 1, 2):
            raise ValueError(f"MQTT QoS must be 0, 1 or 2, got {mqtt_config.qos}")
        if mqtt_config.connect_timeout_s <= 0:
            raise ValueError("MQTT connect timeout must be positive")
        parsed = urlparse(mqtt_config.broker_uri)
        if parsed.scheme not in ("mqtt", "tcp") or not parsed.hostname:
            raise ValueError(f"Invalid broker URI '{mqtt_config.broker_uri}' (expected mqtt://host[:port])")
