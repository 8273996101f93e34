"""The Core Logic Engine for the alarm state machine.

This module contains the pure business logic. It accepts the current alarm
status and an event, and returns the alarm status that must be written, or
None when the alarm status is left untouched.

A returned status is written even when it equals the current one: disarming,
arming with a cat in view, and image verdicts force the status rather than
step it.

Licensed under MIT License
"""

import logging

from catpoint.core.status import AlarmStatus, ArmingStatus

from .models import (
    AlarmEvent,
    ArmingChanged,
    CatVerdict,
    SensorActivated,
    SensorDeactivated,
)

_LOGGER = logging.getLogger(__name__)


def next_alarm_status(current: AlarmStatus, event: AlarmEvent) -> AlarmStatus | None:
    """Calculate the alarm status an event leads to.

    Args:
        current: Alarm status before the event.
        event: One of SensorActivated, SensorDeactivated, CatVerdict, ArmingChanged.

    Returns:
        The alarm status to write, or None for no change.

    Raises:
        TypeError: If event is not a known alarm event.
    """
    if isinstance(event, SensorActivated):
        result = _on_sensor_activated(current, event)
    elif isinstance(event, SensorDeactivated):
        result = _on_sensor_deactivated(current, event)
    elif isinstance(event, CatVerdict):
        result = _on_cat_verdict(event)
    elif isinstance(event, ArmingChanged):
        result = _on_arming_changed(event)
    else:
        raise TypeError(f"Unknown alarm event: {event!r}")

    _LOGGER.debug(
        f"{type(event).__name__}: {current.name} -> "
        f"{result.name if result else 'unchanged'}"
    )
    return result


def _on_sensor_activated(current: AlarmStatus, event: SensorActivated) -> AlarmStatus | None:
    # Disarmed panels ignore sensors entirely
    if event.arming_status == ArmingStatus.DISARMED:
        return None

    if current == AlarmStatus.NO_ALARM:
        return AlarmStatus.PENDING_ALARM
    if current == AlarmStatus.PENDING_ALARM:
        return AlarmStatus.ALARM
    return None


def _on_sensor_deactivated(current: AlarmStatus, event: SensorDeactivated) -> AlarmStatus | None:
    if current == AlarmStatus.PENDING_ALARM and not event.any_sensor_active:
        return AlarmStatus.NO_ALARM
    return None


def _on_cat_verdict(event: CatVerdict) -> AlarmStatus | None:
    # A cat alone only raises the alarm when armed-home
    if event.cat_detected and event.arming_status == ArmingStatus.ARMED_HOME:
        return AlarmStatus.ALARM
    if not event.any_sensor_active:
        return AlarmStatus.NO_ALARM
    return None


def _on_arming_changed(event: ArmingChanged) -> AlarmStatus | None:
    if event.new == ArmingStatus.DISARMED:
        return AlarmStatus.NO_ALARM
    if event.previous == ArmingStatus.DISARMED and event.cat_detected:
        return AlarmStatus.ALARM
    return None
