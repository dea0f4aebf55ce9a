"""
GPIO pin helpers for the Raspberry Pi 40-pin header (BCM numbering)
"""

from typing import Optional

# BCM GPIO number -> physical header pin
GPIO_TO_PHYSICAL = {
    0: 27,   1: 28,   2: 3,    3: 5,
    4: 7,    5: 29,   6: 31,   7: 26,
    8: 24,   9: 21,   10: 19,  11: 23,
    12: 32,  13: 33,  14: 8,   15: 10,
    16: 36,  17: 11,  18: 12,  19: 35,
    20: 38,  21: 40,  22: 15,  23: 16,
    24: 18,  25: 22,  26: 37,  27: 13
}

# GPIO 0/1 are reserved for the HAT ID EEPROM
MIN_USER_GPIO = 2
MAX_USER_GPIO = 27


def gpio_to_physical(gpio_num: int) -> Optional[int]:
    """Convert BCM GPIO number to physical pin number"""
    return GPIO_TO_PHYSICAL.get(gpio_num)


def is_valid_bcm_pin(gpio_num: int) -> bool:
    """True if the pin is a user-usable BCM GPIO"""
    return MIN_USER_GPIO <= gpio_num <= MAX_USER_GPIO


def describe_pin(gpio_num: int) -> str:
    """Human-readable pin label for log lines, e.g. 'GPIO17 (pin 11)'"""
    physical = gpio_to_physical(gpio_num)
    if physical is None:
        return f"GPIO{gpio_num}"
    return f"GPIO{gpio_num} (pin {physical})"
