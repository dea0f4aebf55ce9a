"""
Notify System Module

Cooldown throttling, payload mapping and publishing of button notifications.
"""

from .interfaces import IPublisher, PublishError
from .payload import NotificationPayload
from .publish_throttle import PublishThrottle
from .dispatcher import Dispatcher
from .mqtt_publisher import MqttPublisher, parse_broker_uri
from .mock_publisher import MockPublisher

__all__ = [
    'IPublisher',
    'PublishError',
    'NotificationPayload',
    'PublishThrottle',
    'Dispatcher',
    'MqttPublisher',
    'parse_broker_uri',
    'MockPublisher',
]
