"""Data models for the security module.

The alarm state machine is driven by four kinds of event. Each event
carries the context the transition needs (read from the repository by the
service), so the engine can decide without touching storage.

All event classes are frozen (immutable).

Licensed under MIT License
"""

from dataclasses import dataclass
from typing import Union

from catpoint.core.status import ArmingStatus


@dataclass(frozen=True)
class SensorActivated:
    """A sensor went from inactive to active.

    Attributes:
        arming_status: Arming status at the time of activation.
    """

    arming_status: ArmingStatus


@dataclass(frozen=True)
class SensorDeactivated:
    """A sensor went from active to inactive.

    Attributes:
        any_sensor_active: Whether any known sensor is still active
            (after the change).
    """

    any_sensor_active: bool


@dataclass(frozen=True)
class CatVerdict:
    """The image classifier returned a verdict for a camera image.

    Attributes:
        cat_detected: Classifier verdict.
        arming_status: Arming status when the image was processed.
        any_sensor_active: Whether any sensor was active before the cat
            flag was updated.
    """

    cat_detected: bool
    arming_status: ArmingStatus
    any_sensor_active: bool


@dataclass(frozen=True)
class ArmingChanged:
    """The panel is switching arming status.

    Attributes:
        previous: Arming status stored before the change.
        new: Requested arming status.
        cat_detected: Whether a cat was last seen. Only meaningful when
            previous is DISARMED.
    """

    previous: ArmingStatus
    new: ArmingStatus
    cat_detected: bool = False


AlarmEvent = Union[SensorActivated, SensorDeactivated, CatVerdict, ArmingChanged]
