"""SecurityService - Decision layer of the security panel.

This module wraps the alarm state machine engine and integrates it with the
panel's collaborators (SecurityRepository, ImageService, status listeners).
"""

import logging
import threading
from typing import Any, Set

from catpoint.core.listeners import ListenerRegistry, StatusListener
from catpoint.core.repository import SecurityRepository
from catpoint.core.sensor import Sensor
from catpoint.core.status import AlarmStatus, ArmingStatus
from catpoint.modules.image import ImageService

from .engine import next_alarm_status
from .models import (
    AlarmEvent,
    ArmingChanged,
    CatVerdict,
    SensorActivated,
    SensorDeactivated,
)

logger = logging.getLogger(__name__)

CAT_CONFIDENCE_THRESHOLD = 50.0


class SecurityService:
    """
    Receives information about changes to the security system.

    Responsible for forwarding updates to the repository and for making
    every decision about the alarm status:
    - Arming resets sensors; disarming clears the alarm
    - Sensor activity escalates NO_ALARM -> PENDING_ALARM -> ALARM
    - Camera images raise or clear the alarm based on cat detection

    The repository is the single source of truth: state is re-read on every
    call, never cached here.

    Every public operation holds one re-entrant lock, so a host may call the
    service from several threads.
    """

    def __init__(self, repository: SecurityRepository, image_service: ImageService) -> None:
        self._repository = repository
        self._image_service = image_service
        self._listeners = ListenerRegistry()
        self._lock = threading.RLock()

    # Listener Management

    def add_status_listener(self, listener: StatusListener) -> None:
        """Register a listener for alarm, sensor and cat updates."""
        with self._lock:
            self._listeners.add(listener)

    def remove_status_listener(self, listener: StatusListener) -> None:
        """Unregister a listener. Unknown listeners are ignored."""
        with self._lock:
            self._listeners.remove(listener)

    # Operations

    def set_alarm_status(self, status: AlarmStatus) -> None:
        """
        Change the alarm status of the system and notify all listeners.

        Args:
            status: New alarm status (member or value)

        Raises:
            ValueError: If status is not an AlarmStatus
        """
        status = AlarmStatus(status)
        with self._lock:
            self._repository.set_alarm_status(status)
            logger.info(f"Alarm status: {status.name} ({status.description})")
            self._listeners.notify(status)

    def set_arming_status(self, status: ArmingStatus) -> None:
        """
        Set the arming status of the system.

        Disarming always clears the alarm. Arming resets every sensor to
        inactive, and raises the alarm if a cat was seen while disarmed.

        Args:
            status: New arming status (member or value)

        Raises:
            ValueError: If status is not an ArmingStatus
        """
        status = ArmingStatus(status)
        with self._lock:
            previous = self._repository.get_arming_status()
            # The cat flag only matters when arming from disarmed
            cat_detected = (
                status.is_armed
                and previous == ArmingStatus.DISARMED
                and self._repository.get_cat_detected()
            )
            self._apply(ArmingChanged(previous=previous, new=status, cat_detected=cat_detected))

            if status.is_armed:
                self._reset_sensors()

            self._repository.set_arming_status(status)
            logger.info(f"Arming status: {status.name} ({status.description})")

    def change_sensor_activation_status(self, sensor: Sensor, active: bool) -> None:
        """
        Change the activation status of a sensor and update the alarm status if necessary.

        Only a real change (inactive -> active or active -> inactive) can move
        the alarm status; the sensor is stored either way.

        Args:
            sensor: The sensor to change
            active: New activation state

        Raises:
            TypeError: If sensor is not a Sensor or active is not a bool
        """
        _require_sensor(sensor)
        if not isinstance(active, bool):
            raise TypeError(f"active must be a bool, got {type(active).__name__}")

        with self._lock:
            was_active = sensor.active
            sensor.active = active

            if was_active != active:
                logger.debug(f"Sensor {sensor.name}: active {was_active} -> {active}")
                if active:
                    self._apply(SensorActivated(arming_status=self._repository.get_arming_status()))
                else:
                    self._apply(SensorDeactivated(any_sensor_active=self._any_sensor_active()))

            self._repository.update_sensor(sensor)

    def process_image(self, image: Any) -> None:
        """
        Send a camera image to be checked for cats.

        The alarm status is decided against the sensor state from before
        the cat flag is updated; listeners hear the verdict every time.

        Args:
            image: Camera image, passed to the ImageService unchanged
        """
        with self._lock:
            cat = self._image_service.image_contains_cat(image, CAT_CONFIDENCE_THRESHOLD)
            logger.info(f"Image processed: cat_detected={cat}")

            self._apply(
                CatVerdict(
                    cat_detected=cat,
                    arming_status=self._repository.get_arming_status(),
                    any_sensor_active=self._any_sensor_active(),
                )
            )
            self._repository.set_cat_detected(cat)
            self._listeners.cat_detected(cat)

    # Repository Pass-through

    def get_alarm_status(self) -> AlarmStatus:
        with self._lock:
            return self._repository.get_alarm_status()

    def get_arming_status(self) -> ArmingStatus:
        with self._lock:
            return self._repository.get_arming_status()

    def get_sensors(self) -> Set[Sensor]:
        with self._lock:
            return self._repository.get_sensors()

    def add_sensor(self, sensor: Sensor) -> None:
        _require_sensor(sensor)
        with self._lock:
            self._repository.add_sensor(sensor)

    def remove_sensor(self, sensor: Sensor) -> None:
        _require_sensor(sensor)
        with self._lock:
            self._repository.remove_sensor(sensor)

    # Internals

    def _apply(self, event: AlarmEvent) -> None:
        """Run an event through the engine and write the result, if any."""
        next_status = next_alarm_status(self._repository.get_alarm_status(), event)
        if next_status is not None:
            self.set_alarm_status(next_status)

    def _reset_sensors(self) -> None:
        """Deactivate every sensor, then ping listeners once."""
        sensors = list(self._repository.get_sensors())
        for sensor in sensors:
            sensor.active = False
            self._repository.update_sensor(sensor)
        logger.debug(f"Reset {len(sensors)} sensors to inactive")
        self._listeners.sensor_status_changed()

    def _any_sensor_active(self) -> bool:
        return any(sensor.active for sensor in self._repository.get_sensors())


def _require_sensor(sensor: Any) -> None:
    if not isinstance(sensor, Sensor):
        raise TypeError(f"Expected a Sensor, got {type(sensor).__name__}")
