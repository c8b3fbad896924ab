"""
Pytest Configuration for Target Compass Tests
=============================================

Provides fixtures and configuration for the test suite.
"""

import pytest
import sys
import os

# Add package to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from target_compass.core.config import Config
from target_compass.hardware import MockLocationSource, MockOrientationSource
from target_compass.nav.geodesy import Coordinate

TARGET = Coordinate(13.0453132, 77.5733936)
USER_SOUTH = Coordinate(13.0443132, 77.5733936)   # 0.001 deg south, ~111 m


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


@pytest.fixture
def config():
    """Fresh default configuration, independent of the environment."""
    for key in [k for k in os.environ if k.startswith('TC_')]:
        os.environ.pop(key)
    Config.reset()
    cfg = Config()
    yield cfg
    Config.reset()


@pytest.fixture
def target():
    return TARGET


@pytest.fixture
def user_south():
    return USER_SOUTH


@pytest.fixture
def orientation_source():
    """Mock orientation source with every sensor available."""
    return MockOrientationSource()


@pytest.fixture
def location_source():
    """Mock location source whose initial fix is ~111 m south of the target."""
    return MockLocationSource(initial_fix=USER_SOUTH, clock=lambda: 0.0)
