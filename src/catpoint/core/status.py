"""
Alarm and arming status enums.

Both are stored by the repository and changed only through the
SecurityService.
"""

from enum import Enum


class AlarmStatus(Enum):
    """Current alert severity, ordered NO_ALARM < PENDING_ALARM < ALARM."""

    NO_ALARM = "no_alarm"
    PENDING_ALARM = "pending_alarm"
    ALARM = "alarm"

    @property
    def description(self) -> str:
        """Human-readable text for status displays."""
        return _ALARM_DESCRIPTIONS[self]


class ArmingStatus(Enum):
    """Whether and how the panel is monitoring."""

    DISARMED = "disarmed"
    ARMED_HOME = "armed_home"
    ARMED_AWAY = "armed_away"

    @property
    def description(self) -> str:
        """Human-readable text for status displays."""
        return _ARMING_DESCRIPTIONS[self]

    @property
    def is_armed(self) -> bool:
        return self is not ArmingStatus.DISARMED


_ALARM_DESCRIPTIONS = {
    AlarmStatus.NO_ALARM: "Cool and Good",
    AlarmStatus.PENDING_ALARM: "I'm in Danger...",
    AlarmStatus.ALARM: "Awooga!",
}

_ARMING_DESCRIPTIONS = {
    ArmingStatus.DISARMED: "Disarmed",
    ArmingStatus.ARMED_HOME: "Armed - At Home",
    ArmingStatus.ARMED_AWAY: "Armed - Away",
}
