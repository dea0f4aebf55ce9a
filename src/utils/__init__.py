"""
Utilities package - Common utilities for the doorbell system
"""

from .hybrid_logger import HybridLogger, ClassLogger, ColoredFormatter
from .gpio_utils import (
    gpio_to_physical,
    is_valid_bcm_pin,
    describe_pin,
    GPIO_TO_PHYSICAL,
)

__all__ = [
    'HybridLogger',
    'ClassLogger',
    'ColoredFormatter',
    'gpio_to_physical',
    'is_valid_bcm_pin',
    'describe_pin',
    'GPIO_TO_PHYSICAL',
]
