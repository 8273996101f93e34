"""
Status listener port and fan-out registry.

Listeners are observers of the security panel (status displays, sensor
panels, camera views). The registry is a simple, synchronous dispatcher.
"""

from abc import ABC, abstractmethod
from typing import Callable, List
import logging

from catpoint.core.status import AlarmStatus

logger = logging.getLogger(__name__)


class StatusListener(ABC):
    """
    Observer of security panel state changes.

    All callbacks are fire-and-forget: return values are ignored and there
    is no error channel back to the panel.
    """

    @abstractmethod
    def notify(self, alarm_status: AlarmStatus) -> None:
        """
        Called after the alarm status has been written.

        Args:
            alarm_status: The new alarm status
        """
        pass

    @abstractmethod
    def cat_detected(self, cat: bool) -> None:
        """
        Called after every processed camera image.

        Args:
            cat: The classifier verdict
        """
        pass

    @abstractmethod
    def sensor_status_changed(self) -> None:
        """Called once after arming resets all sensors."""
        pass


class ListenerRegistry:
    """
    Identity-based set of status listeners.

    Callbacks are wrapped in try/except to prevent one bad listener from
    interrupting the panel or the remaining listeners.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._listeners: List[StatusListener] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def __contains__(self, listener: object) -> bool:
        return any(existing is listener for existing in self._listeners)

    def add(self, listener: StatusListener) -> None:
        """
        Register a listener. Registering the same object twice is a no-op.

        Args:
            listener: The listener to register
        """
        if listener in self:
            return
        self._listeners.append(listener)
        logger.debug(f"Added status listener {type(listener).__name__}")

    def remove(self, listener: StatusListener) -> None:
        """
        Unregister a listener. Unknown listeners are ignored.

        Args:
            listener: The listener to remove
        """
        self._listeners = [existing for existing in self._listeners if existing is not listener]
        logger.debug(f"Removed status listener {type(listener).__name__}")

    def notify(self, alarm_status: AlarmStatus) -> None:
        """Deliver an alarm status change to every listener."""
        self._dispatch("notify", lambda listener: listener.notify(alarm_status))

    def cat_detected(self, cat: bool) -> None:
        """Deliver a classifier verdict to every listener."""
        self._dispatch("cat_detected", lambda listener: listener.cat_detected(cat))

    def sensor_status_changed(self) -> None:
        """Deliver a sensor status ping to every listener."""
        self._dispatch("sensor_status_changed", lambda listener: listener.sensor_status_changed())

    def _dispatch(self, callback: str, call: Callable[[StatusListener], None]) -> None:
        logger.debug(f"Dispatching {callback} to {len(self._listeners)} listeners")

        # Snapshot: listeners registered at the moment of the call
        for listener in list(self._listeners):
            try:
                call(listener)
            except Exception as e:
                logger.error(
                    f"Error in status listener {type(listener).__name__} "
                    f"for {callback}: {e}",
                    exc_info=True,
                )
