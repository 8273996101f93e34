"""
Repository port and in-memory implementation.

The repository owns the panel state (alarm status, arming status, cat flag,
sensors), not the behavior. The SecurityService reads it before every
decision and writes every change back to it.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Set
import logging

from catpoint.core.sensor import Sensor, require_bool
from catpoint.core.status import AlarmStatus, ArmingStatus

logger = logging.getLogger(__name__)

STATE_VERSION = 1


class SecurityRepository(ABC):
    """
    Storage contract for the security panel.

    The host application provides a concrete implementation (database,
    preferences file, ...). InMemorySecurityRepository is the reference
    implementation used by tests and the demo.
    """

    @abstractmethod
    def get_alarm_status(self) -> AlarmStatus:
        """Get the stored alarm status."""
        pass

    @abstractmethod
    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        """Persist the alarm status."""
        pass

    @abstractmethod
    def get_arming_status(self) -> ArmingStatus:
        """Get the stored arming status."""
        pass

    @abstractmethod
    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """Persist the arming status."""
        pass

    @abstractmethod
    def get_cat_detected(self) -> bool:
        """Get the last classifier verdict."""
        pass

    @abstractmethod
    def set_cat_detected(self, cat_detected: bool) -> None:
        """Persist the last classifier verdict."""
        pass

    @abstractmethod
    def get_sensors(self) -> Set[Sensor]:
        """Get all known sensors."""
        pass

    @abstractmethod
    def add_sensor(self, sensor: Sensor) -> None:
        """Add a sensor. A sensor with the same identity is not duplicated."""
        pass

    @abstractmethod
    def remove_sensor(self, sensor: Sensor) -> None:
        """Remove a sensor if present."""
        pass

    @abstractmethod
    def update_sensor(self, sensor: Sensor) -> None:
        """Store the sensor's current state, adding it if unknown."""
        pass


class InMemorySecurityRepository(SecurityRepository):
    """
    Keeps the panel state in plain attributes.

    Responsibilities:
    - Store alarm status, arming status, cat flag and the sensor set
    - Upsert sensors by identity (name + type)
    - Dump/restore state as a JSON-friendly dict

    Does NOT decide anything; the SecurityService owns all transitions.
    Host platform is responsible for writing dumps to disk.
    """

    def __init__(
        self,
        alarm_status: AlarmStatus = AlarmStatus.NO_ALARM,
        arming_status: ArmingStatus = ArmingStatus.DISARMED,
        cat_detected: bool = False,
        sensors: Optional[Set[Sensor]] = None,
    ) -> None:
        """
        Initialize the repository.

        Args:
            alarm_status: Initial alarm status
            arming_status: Initial arming status
            cat_detected: Initial cat flag
            sensors: Initial sensors (copied into the repository's own set)
        """
        self._alarm_status = alarm_status
        self._arming_status = arming_status
        self._cat_detected = cat_detected
        self._sensors: Dict[Sensor, Sensor] = {s: s for s in sensors or ()}

    def get_alarm_status(self) -> AlarmStatus:
        return self._alarm_status

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        self._alarm_status = alarm_status
        logger.debug(f"Stored alarm status: {alarm_status.name}")

    def get_arming_status(self) -> ArmingStatus:
        return self._arming_status

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        self._arming_status = arming_status
        logger.debug(f"Stored arming status: {arming_status.name}")

    def get_cat_detected(self) -> bool:
        return self._cat_detected

    def set_cat_detected(self, cat_detected: bool) -> None:
        self._cat_detected = cat_detected

    def get_sensors(self) -> Set[Sensor]:
        return set(self._sensors.values())

    def add_sensor(self, sensor: Sensor) -> None:
        if sensor in self._sensors:
            logger.debug(f"Sensor already present: {sensor.name} ({sensor.sensor_type.value})")
            return
        self._sensors[sensor] = sensor
        logger.info(f"Added sensor: {sensor.name} ({sensor.sensor_type.value})")

    def remove_sensor(self, sensor: Sensor) -> None:
        if self._sensors.pop(sensor, None) is not None:
            logger.info(f"Removed sensor: {sensor.name} ({sensor.sensor_type.value})")

    def update_sensor(self, sensor: Sensor) -> None:
        # Replace whatever object shares the identity
        self._sensors.pop(sensor, None)
        self._sensors[sensor] = sensor

    # State Persistence

    def dump_state(self) -> Dict[str, Any]:
        """
        Dump current state for persistence.

        Returns:
            State dictionary
        """
        sensors = sorted(
            self._sensors.values(),
            key=lambda s: (s.name, s.sensor_type.value),
        )
        return {
            "version": STATE_VERSION,
            "alarm_status": self._alarm_status.value,
            "arming_status": self._arming_status.value,
            "cat_detected": self._cat_detected,
            "sensors": [sensor.to_dict() for sensor in sensors],
        }

    def restore_state(self, state: Dict[str, Any]) -> None:
        """
        Restore state from persistence.

        Keys missing from the dict take the defaults of a fresh panel.

        Args:
            state: State dictionary from dump_state()

        Raises:
            ValueError: If a status or sensor type value is not recognized,
                or a flag is not a bool
            KeyError: If a sensor entry has no name or type
        """
        version = state.get("version", STATE_VERSION)
        if version != STATE_VERSION:
            logger.warning(f"Unknown state version {version}, ignoring")
            return

        # Parse everything before assigning so a bad entry leaves state intact
        alarm_status = AlarmStatus(state.get("alarm_status", AlarmStatus.NO_ALARM.value))
        arming_status = ArmingStatus(state.get("arming_status", ArmingStatus.DISARMED.value))
        cat_detected = require_bool(state.get("cat_detected", False), "cat_detected")
        sensors = [Sensor.from_dict(data) for data in state.get("sensors", [])]

        self._alarm_status = alarm_status
        self._arming_status = arming_status
        self._cat_detected = cat_detected
        self._sensors = {s: s for s in sensors}

        logger.info(
            f"Restored state: {alarm_status.name}/{arming_status.name}, "
            f"{len(self._sensors)} sensors"
        )
