"""
Sensor dataclass and helpers.

A Sensor is a named, typed input device (door, window, motion) with a
boolean active state.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


def require_bool(value: Any, field: str) -> bool:
    """Return value unchanged if it is a bool, else raise ValueError."""
    if not isinstance(value, bool):
        raise ValueError(f"{field} must be a bool, got {value!r}")
    return value


class SensorType(Enum):
    """Kind of device a sensor represents."""

    DOOR = "door"
    WINDOW = "window"
    MOTION = "motion"


@dataclass(eq=False)
class Sensor:
    """
    A sensor known to the security panel.

    Two sensors are the same sensor when both name and type match, so a
    set of sensors collapses duplicates. The active flag is not part of the
    identity and may change while the sensor sits in a set.

    Attributes:
        name: Human-readable name (e.g., "Front Door")
        sensor_type: Device kind
        active: Whether the sensor is currently tripped
    """

    name: str
    sensor_type: SensorType
    active: bool = False

    def __post_init__(self) -> None:
        # Members and their string values only; anything else is a ValueError
        self.sensor_type = SensorType(self.sensor_type)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sensor):
            return NotImplemented
        return self.name == other.name and self.sensor_type == other.sensor_type

    def __hash__(self) -> int:
        return hash((self.name, self.sensor_type))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict."""
        return {
            "name": self.name,
            "sensor_type": self.sensor_type.value,
            "active": self.active,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Sensor":
        """Deserialize from dict."""
        return cls(
            name=data["name"],
            sensor_type=SensorType(data["sensor_type"]),
            active=require_bool(data.get("active", False), "active"),
        )
