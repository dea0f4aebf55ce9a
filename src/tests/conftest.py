import logging
import time

import pytest

from utils import ClassLogger


class FakeClock:
    """Manually advanced monotonic clock"""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def wait_for(predicate, timeout: float = 2.0, interval: float = 0.005) -> bool:
    """Poll `predicate` until it is true or `timeout` expires"""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


@pytest.fixture
def logger():
    return ClassLogger(logging.getLogger("doorbell.tests"), "Test", logging.DEBUG)


@pytest.fixture
def clock():
    return FakeClock()
