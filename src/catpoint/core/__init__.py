"""
Core components of the catpoint security panel.

This package contains:
- sensor: Sensor dataclass and SensorType
- status: AlarmStatus and ArmingStatus enums
- listeners: StatusListener interface and fan-out registry
- repository: SecurityRepository interface and in-memory store
"""

from catpoint.core.sensor import Sensor, SensorType
from catpoint.core.status import AlarmStatus, ArmingStatus
from catpoint.core.listeners import ListenerRegistry, StatusListener
from catpoint.core.repository import InMemorySecurityRepository, SecurityRepository

__all__ = [
    "Sensor",
    "SensorType",
    "AlarmStatus",
    "ArmingStatus",
    "ListenerRegistry",
    "StatusListener",
    "SecurityRepository",
    "InMemorySecurityRepository",
]
