"""
catpoint: Control logic for a home security panel.

This library provides the decision layer of a security system:
- Alarm state machine driven by sensors, arming and camera images
- Cat detection through a pluggable image classifier
- Repository port for panel state, with an in-memory implementation
- Status listeners notified of every alarm, sensor and cat update
"""

from catpoint.core.sensor import Sensor, SensorType
from catpoint.core.status import AlarmStatus, ArmingStatus
from catpoint.core.listeners import ListenerRegistry, StatusListener
from catpoint.core.repository import InMemorySecurityRepository, SecurityRepository
from catpoint.modules.security import SecurityService

__version__ = "0.1.0"

__all__ = [
    "Sensor",
    "SensorType",
    "AlarmStatus",
    "ArmingStatus",
    "ListenerRegistry",
    "StatusListener",
    "SecurityRepository",
    "InMemorySecurityRepository",
    "SecurityService",
]
