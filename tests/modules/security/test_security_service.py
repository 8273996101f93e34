"""Tests for SecurityService against a mock repository.

The repository is a Mock so every test can assert exactly which writes the
service made.
"""

import pytest
from unittest.mock import Mock, call

from catpoint import AlarmStatus, ArmingStatus, Sensor, SensorType, StatusListener
from catpoint.core.repository import SecurityRepository
from catpoint.modules.image import MockImageService
from catpoint.modules.security import SecurityService, CAT_CONFIDENCE_THRESHOLD

ARMED_STATUSES = [ArmingStatus.ARMED_HOME, ArmingStatus.ARMED_AWAY]


@pytest.fixture
def door_sensor():
    return Sensor("Front Door", SensorType.DOOR)


@pytest.fixture
def motion_sensor():
    return Sensor("Hallway Motion", SensorType.MOTION)


@pytest.fixture
def sensors(door_sensor, motion_sensor):
    return {door_sensor, motion_sensor}


@pytest.fixture
def repository(sensors):
    """Mock repository: NO_ALARM, ARMED_AWAY, no cat, two inactive sensors."""
    repo = Mock(spec=SecurityRepository)
    repo.get_alarm_status.return_value = AlarmStatus.NO_ALARM
    repo.get_arming_status.return_value = ArmingStatus.ARMED_AWAY
    repo.get_cat_detected.return_value = False
    repo.get_sensors.return_value = sensors
    return repo


@pytest.fixture
def image_service():
    return MockImageService()


@pytest.fixture
def listener():
    return Mock(spec=StatusListener)


@pytest.fixture
def service(repository, image_service, listener):
    svc = SecurityService(repository, image_service)
    svc.add_status_listener(listener)
    return svc


class TestSensorActivation:
    """Alarm escalation and de-escalation from sensor changes."""

    @pytest.mark.parametrize("arming_status", ARMED_STATUSES)
    def test_armed_sensor_activated_goes_pending(
        self, service, repository, door_sensor, arming_status
    ):
        """Armed + NO_ALARM + sensor activated -> PENDING_ALARM."""
        repository.get_arming_status.return_value = arming_status

        service.change_sensor_activation_status(door_sensor, True)

        repository.set_alarm_status.assert_called_once_with(AlarmStatus.PENDING_ALARM)

    @pytest.mark.parametrize("arming_status", ARMED_STATUSES)
    def test_armed_sensor_activated_while_pending_goes_alarm(
        self, service, repository, door_sensor, arming_status
    ):
        """Armed + PENDING_ALARM + sensor activated -> ALARM."""
        repository.get_arming_status.return_value = arming_status
        repository.get_alarm_status.return_value = AlarmStatus.PENDING_ALARM

        service.change_sensor_activation_status(door_sensor, True)

        repository.set_alarm_status.assert_called_once_with(AlarmStatus.ALARM)

    @pytest.mark.parametrize("arming_status", ARMED_STATUSES)
    def test_pending_and_all_sensors_inactive_returns_to_no_alarm(
        self, service, repository, door_sensor, motion_sensor, arming_status
    ):
        """PENDING_ALARM clears only once the last active sensor goes inactive."""
        repository.get_arming_status.return_value = arming_status
        door_sensor.active = True
        motion_sensor.active = True
        repository.get_alarm_status.return_value = AlarmStatus.PENDING_ALARM

        service.change_sensor_activation_status(door_sensor, False)
        repository.set_alarm_status.assert_not_called()

        service.change_sensor_activation_status(motion_sensor, False)
        repository.set_alarm_status.assert_called_once_with(AlarmStatus.NO_ALARM)

    def test_alarm_active_sensor_changes_never_write_alarm_status(
        self, service, repository, door_sensor
    ):
        """ALARM is sticky against sensor activity in both directions."""
        repository.get_alarm_status.return_value = AlarmStatus.ALARM

        service.change_sensor_activation_status(door_sensor, True)
        service.change_sensor_activation_status(door_sensor, False)

        repository.set_alarm_status.assert_not_called()

    def test_different_sensor_activated_while_pending_goes_alarm(
        self, service, repository, door_sensor, motion_sensor
    ):
        """A second sensor tripping during PENDING_ALARM raises the alarm."""
        service.change_sensor_activation_status(motion_sensor, True)
        repository.set_alarm_status.assert_called_once_with(AlarmStatus.PENDING_ALARM)

        repository.get_alarm_status.return_value = AlarmStatus.PENDING_ALARM
        service.change_sensor_activation_status(door_sensor, True)

        assert repository.set_alarm_status.call_args_list == [
            call(AlarmStatus.PENDING_ALARM),
            call(AlarmStatus.ALARM),
        ]

    def test_same_sensor_activated_twice_is_noop(self, service, repository, door_sensor):
        """Re-activating an already active sensor does not escalate."""
        service.change_sensor_activation_status(door_sensor, True)
        repository.get_alarm_status.return_value = AlarmStatus.PENDING_ALARM

        service.change_sensor_activation_status(door_sensor, True)

        repository.set_alarm_status.assert_called_once_with(AlarmStatus.PENDING_ALARM)
        # Still stored on every call
        assert repository.update_sensor.call_count == 2

    def test_deactivate_already_inactive_sensor_makes_no_change(
        self, service, repository, door_sensor
    ):
        """Deactivating an inactive sensor never touches the alarm status."""
        repository.get_alarm_status.return_value = AlarmStatus.PENDING_ALARM

        service.change_sensor_activation_status(door_sensor, False)

        repository.set_alarm_status.assert_not_called()
        repository.update_sensor.assert_called_once_with(door_sensor)

    def test_disarmed_ignores_sensor_activation(self, service, repository, door_sensor):
        """Disarmed panels ignore sensors but still store them."""
        repository.get_arming_status.return_value = ArmingStatus.DISARMED

        service.change_sensor_activation_status(door_sensor, True)

        repository.set_alarm_status.assert_not_called()
        assert door_sensor.active is True
        repository.update_sensor.assert_called_once_with(door_sensor)

    def test_rejects_non_sensor(self, service, repository):
        with pytest.raises(TypeError):
            service.change_sensor_activation_status(None, True)
        repository.update_sensor.assert_not_called()

    def test_rejects_non_bool_active(self, service, repository, door_sensor):
        with pytest.raises(TypeError):
            service.change_sensor_activation_status(door_sensor, "yes")
        assert door_sensor.active is False


class TestProcessImage:
    """Cat detection through the image service."""

    def test_cat_while_armed_home_goes_alarm(
        self, service, repository, image_service, listener
    ):
        """Cat + ARMED_HOME -> ALARM, flag stored, listeners told."""
        repository.get_arming_status.return_value = ArmingStatus.ARMED_HOME
        image_service.set_verdict(True)

        service.process_image("frame-1")

        repository.set_alarm_status.assert_called_once_with(AlarmStatus.ALARM)
        repository.set_cat_detected.assert_called_once_with(True)
        listener.cat_detected.assert_called_once_with(True)

    def test_image_service_gets_fixed_threshold(self, service, image_service):
        service.process_image("frame-1")

        assert image_service.get_calls() == [("frame-1", 50.0)]
        assert CAT_CONFIDENCE_THRESHOLD == 50.0

    def test_no_cat_and_no_active_sensors_goes_no_alarm(
        self, service, repository, image_service, listener
    ):
        """No cat + no active sensors -> NO_ALARM is forced."""
        repository.get_arming_status.return_value = ArmingStatus.ARMED_HOME
        repository.get_alarm_status.return_value = AlarmStatus.ALARM

        service.process_image("frame-1")

        repository.set_alarm_status.assert_called_once_with(AlarmStatus.NO_ALARM)
        repository.set_cat_detected.assert_called_once_with(False)
        listener.cat_detected.assert_called_once_with(False)

    def test_no_cat_with_active_sensor_leaves_alarm(
        self, service, repository, door_sensor
    ):
        door_sensor.active = True
        repository.get_alarm_status.return_value = AlarmStatus.PENDING_ALARM

        service.process_image("frame-1")

        repository.set_alarm_status.assert_not_called()
        repository.set_cat_detected.assert_called_once_with(False)

    def test_cat_while_armed_away_without_active_sensor_goes_no_alarm(
        self, service, repository, image_service
    ):
        """A cat alone does not alarm unless armed-home."""
        repository.get_arming_status.return_value = ArmingStatus.ARMED_AWAY
        image_service.set_verdict(True)

        service.process_image("frame-1")

        repository.set_alarm_status.assert_called_once_with(AlarmStatus.NO_ALARM)
        repository.set_cat_detected.assert_called_once_with(True)

    def test_rule_runs_before_flag_is_stored(self, service, repository, image_service):
        """Order: alarm decision, then cat flag."""
        repository.get_arming_status.return_value = ArmingStatus.ARMED_HOME
        image_service.set_verdict(True)

        service.process_image("frame-1")

        writes = [
            c for c in repository.mock_calls if c[0] in ("set_alarm_status", "set_cat_detected")
        ]
        assert writes == [call.set_alarm_status(AlarmStatus.ALARM), call.set_cat_detected(True)]


class TestArming:
    """Arming and disarming side effects."""

    @pytest.mark.parametrize("alarm_status", list(AlarmStatus))
    def test_disarm_forces_no_alarm(self, service, repository, alarm_status):
        """Disarming clears the alarm from any status with one write."""
        repository.get_alarm_status.return_value = alarm_status

        service.set_arming_status(ArmingStatus.DISARMED)

        repository.set_alarm_status.assert_called_once_with(AlarmStatus.NO_ALARM)
        repository.set_arming_status.assert_called_once_with(ArmingStatus.DISARMED)

    def test_disarm_does_not_reset_sensors(self, service, repository, door_sensor, listener):
        door_sensor.active = True

        service.set_arming_status(ArmingStatus.DISARMED)

        assert door_sensor.active is True
        repository.update_sensor.assert_not_called()
        listener.sensor_status_changed.assert_not_called()

    @pytest.mark.parametrize("arming_status", ARMED_STATUSES)
    def test_arming_resets_all_sensors(
        self, service, repository, sensors, listener, arming_status
    ):
        """Arming deactivates every sensor and pings listeners once."""
        repository.get_arming_status.return_value = ArmingStatus.DISARMED
        for sensor in sensors:
            sensor.active = True

        service.set_arming_status(arming_status)

        assert all(not sensor.active for sensor in sensors)
        assert repository.update_sensor.call_count == len(sensors)
        listener.sensor_status_changed.assert_called_once_with()
        repository.set_arming_status.assert_called_once_with(arming_status)

    @pytest.mark.parametrize("arming_status", ARMED_STATUSES)
    def test_arming_from_disarmed_with_cat_goes_alarm_first(
        self, service, repository, arming_status
    ):
        """ALARM is written before the new arming status is stored."""
        repository.get_arming_status.return_value = ArmingStatus.DISARMED
        repository.get_cat_detected.return_value = True

        service.set_arming_status(arming_status)

        writes = [
            c for c in repository.mock_calls if c[0] in ("set_alarm_status", "set_arming_status")
        ]
        assert writes == [
            call.set_alarm_status(AlarmStatus.ALARM),
            call.set_arming_status(arming_status),
        ]

    def test_rearming_with_cat_does_not_alarm(self, service, repository):
        """The cat rule only applies when arming from disarmed."""
        repository.get_arming_status.return_value = ArmingStatus.ARMED_AWAY
        repository.get_cat_detected.return_value = True

        service.set_arming_status(ArmingStatus.ARMED_HOME)

        repository.set_alarm_status.assert_not_called()
        repository.get_cat_detected.assert_not_called()

    def test_arming_from_disarmed_without_cat_does_not_alarm(self, service, repository):
        repository.get_arming_status.return_value = ArmingStatus.DISARMED

        service.set_arming_status(ArmingStatus.ARMED_HOME)

        repository.set_alarm_status.assert_not_called()

    def test_arming_status_accepts_value(self, service, repository):
        service.set_arming_status("armed_home")

        repository.set_arming_status.assert_called_once_with(ArmingStatus.ARMED_HOME)

    def test_unknown_arming_status_fails_fast(self, service, repository):
        with pytest.raises(ValueError):
            service.set_arming_status("armed_night")
        repository.set_arming_status.assert_not_called()


class TestAlarmStatusAndListeners:
    """Direct alarm writes and listener management."""

    def test_set_alarm_status_persists_and_notifies(self, service, repository, listener):
        service.set_alarm_status(AlarmStatus.PENDING_ALARM)

        repository.set_alarm_status.assert_called_once_with(AlarmStatus.PENDING_ALARM)
        listener.notify.assert_called_once_with(AlarmStatus.PENDING_ALARM)

    def test_unknown_alarm_status_fails_fast(self, service, repository):
        with pytest.raises(ValueError):
            service.set_alarm_status(ArmingStatus.DISARMED)
        repository.set_alarm_status.assert_not_called()

    def test_all_listeners_notified(self, service, listener):
        second = Mock(spec=StatusListener)
        service.add_status_listener(second)

        service.set_alarm_status(AlarmStatus.ALARM)

        listener.notify.assert_called_once_with(AlarmStatus.ALARM)
        second.notify.assert_called_once_with(AlarmStatus.ALARM)

    def test_listener_added_twice_notified_once(self, service, listener):
        service.add_status_listener(listener)

        service.set_alarm_status(AlarmStatus.ALARM)

        listener.notify.assert_called_once_with(AlarmStatus.ALARM)

    def test_removed_listener_not_notified(self, service, listener):
        service.remove_status_listener(listener)

        service.set_alarm_status(AlarmStatus.ALARM)

        listener.notify.assert_not_called()


class TestPassThrough:
    """Accessors read straight from the repository."""

    def test_getters(self, service, repository, sensors):
        repository.get_alarm_status.return_value = AlarmStatus.PENDING_ALARM

        assert service.get_alarm_status() == AlarmStatus.PENDING_ALARM
        assert service.get_arming_status() == ArmingStatus.ARMED_AWAY
        assert service.get_sensors() == sensors

    def test_add_and_remove_sensor(self, service, repository):
        window = Sensor("Kitchen Window", SensorType.WINDOW)

        service.add_sensor(window)
        service.remove_sensor(window)

        repository.add_sensor.assert_called_once_with(window)
        repository.remove_sensor.assert_called_once_with(window)

    def test_add_sensor_with_string_type_matches_enum_sensor(self, service, repository):
        service.add_sensor(Sensor("Front Door", "door"))

        stored = repository.add_sensor.call_args.args[0]
        assert stored.sensor_type is SensorType.DOOR
        assert stored == Sensor("Front Door", SensorType.DOOR)

    def test_unknown_sensor_type_fails_before_any_write(self, service, repository):
        with pytest.raises(ValueError):
            service.add_sensor(Sensor("Garage", "garage_door"))

        repository.add_sensor.assert_not_called()
        repository.update_sensor.assert_not_called()

    def test_add_sensor_rejects_non_sensor(self, service, repository):
        with pytest.raises(TypeError):
            service.add_sensor("Front Door")
        repository.add_sensor.assert_not_called()
