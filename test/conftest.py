"""
Pytest Configuration for Mailroom Robot Tests
=============================================

Provides fixtures and configuration for the test suite.
"""

import pytest
import sys
import os

# Add package to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mailroom_robots.core.config import Config
from mailroom_robots.core.events import EventBus


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


@pytest.fixture(autouse=True)
def fresh_singletons():
    """Give every test its own config and event bus."""
    Config.reset()
    EventBus.reset()
    yield
    Config.reset()
    EventBus.reset()


@pytest.fixture
def event_bus():
    """Provide the event bus used by the components under test."""
    return EventBus()
