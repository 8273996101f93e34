#!/usr/bin/env python3
"""
Quick example demonstrating catpoint basic usage.

Run with: PYTHONPATH=src python3 example.py
"""

import logging

from catpoint import (
    AlarmStatus,
    ArmingStatus,
    InMemorySecurityRepository,
    SecurityService,
    Sensor,
    SensorType,
    StatusListener,
)
from catpoint.modules.image import MockImageService

logging.basicConfig(level=logging.INFO, format="   %(name)s: %(message)s")


class PrintingListener(StatusListener):
    """Prints every update, standing in for a status display."""

    def notify(self, alarm_status: AlarmStatus) -> None:
        print(f"   → display: {alarm_status.description}")

    def cat_detected(self, cat: bool) -> None:
        print(f"   → camera view: {'cat!' if cat else 'no cat'}")

    def sensor_status_changed(self) -> None:
        print("   → sensor panel refreshed")


print("=" * 60)
print("catpoint Example")
print("=" * 60)

# 1. Panel components
print("\n1. Creating panel components...")
repository = InMemorySecurityRepository()
camera = MockImageService()
service = SecurityService(repository, camera)
service.add_status_listener(PrintingListener())
print("   ✓ Repository, image service and SecurityService created")

# 2. Sensors
print("\n2. Adding sensors...")
door = Sensor("Front Door", SensorType.DOOR)
motion = Sensor("Living Room Motion", SensorType.MOTION)
for sensor in (door, motion):
    service.add_sensor(sensor)
    print(f"   ✓ Added: {sensor.name} ({sensor.sensor_type.value})")

# 3. Arm and trip sensors
print("\n3. Arming away and tripping sensors...")
service.set_arming_status(ArmingStatus.ARMED_AWAY)
service.change_sensor_activation_status(door, True)
print(f"   ✓ Door open: {service.get_alarm_status().name}")
service.change_sensor_activation_status(motion, True)
print(f"   ✓ Motion: {service.get_alarm_status().name}")

# 4. Disarm
print("\n4. Disarming...")
service.set_arming_status(ArmingStatus.DISARMED)
print(f"   ✓ Alarm status: {service.get_alarm_status().name}")

# 5. Cat on camera while armed home
print("\n5. Cat on camera while armed home...")
service.set_arming_status(ArmingStatus.ARMED_HOME)
camera.set_verdict(True)
service.process_image("camera-frame-001")
print(f"   ✓ Alarm status: {service.get_alarm_status().name}")

# 6. State dump for the host to persist
print("\n6. Dumping panel state...")
print(f"   ✓ {repository.dump_state()}")

print("\n" + "=" * 60)
print("Example complete!")
print("=" * 60)
