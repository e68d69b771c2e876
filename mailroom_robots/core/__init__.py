"""
Core Module
===========

Contains core functionality shared across the simulation:
- Configuration management
- Delivery robot state machine
- Event system
- Error types
"""

from .config import Config, get_config, load_config
from .events import EventBus, Event, EventType, get_event_bus
from .exceptions import (
    MailroomError,
    ConfigError,
    OverweightError,
    ExcessiveDeliveryError,
    DispatchContractError,
    MailAlreadyDeliveredError,
)
from .state_machine import RobotState, DeliveryRobot

__all__ = [
    'Config',
    'get_config',
    'load_config',
    'EventBus',
    'Event',
    'EventType',
    'get_event_bus',
    'MailroomError',
    'ConfigError',
    'OverweightError',
    'ExcessiveDeliveryError',
    'DispatchContractError',
    'MailAlreadyDeliveredError',
    'RobotState',
    'DeliveryRobot',
]
