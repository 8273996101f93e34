"""
Security module for catpoint.

Decides the alarm status from sensor activity, arming changes and camera
images.

Features:
- Pure transition function (next_alarm_status) over four event types
- SecurityService applying transitions against a SecurityRepository
- Listener fan-out for alarm, sensor and cat updates
- Forced transitions: disarm clears, cat while armed-home alarms
"""

from .service import SecurityService, CAT_CONFIDENCE_THRESHOLD
from .engine import next_alarm_status
from .models import (
    AlarmEvent,
    ArmingChanged,
    CatVerdict,
    SensorActivated,
    SensorDeactivated,
)

__all__ = [
    "SecurityService",
    "CAT_CONFIDENCE_THRESHOLD",
    "next_alarm_status",
    "AlarmEvent",
    "ArmingChanged",
    "CatVerdict",
    "SensorActivated",
    "SensorDeactivated",
]
