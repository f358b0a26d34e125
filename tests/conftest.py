import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from aging_map.cache.aging_map import AgingMap
from aging_map.utils.clock import ManualClock


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test to run with asyncio event loop"
    )


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def aging_map(clock):
    """Map with a one second TTL driven by the manual clock."""
    return AgingMap(1.0, clock=clock)
