#!/usr/bin/env python3
"""
LED System - indicator output for the doorbell

- IndicatorMirror: copies the raw button line onto an LED pin

Usage:
    from led_system import IndicatorMirror

    mirror = IndicatorMirror(gpio, 17, 27, Polarity(active_low=True), Polarity(), logger)
    mirror.step()
"""

from .indicator_mirror import IndicatorMirror

__all__ = ['IndicatorMirror']
