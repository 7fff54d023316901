"""
Unit tests for domain entities and their validation rules.
"""

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from holter_clinic.core.exceptions import ValidationError
from holter_clinic.domain.entities import (
    AppointmentStatus,
    Cable,
    Device,
    DeviceStatus,
    HolterKind,
    Patient,
)


class TestDevice:
    def test_string_enums_are_coerced(self):
        device = Device(id="HP-1", kind="Pressure", serial_number="P-001", status="InUse")

        assert device.kind is HolterKind.PRESSURE
        assert device.status is DeviceStatus.IN_USE

    def test_blank_serial_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Device(id="HR-1", kind=HolterKind.RHYTHM, serial_number="   ")

        assert exc_info.value.field == "serial_number"

    def test_cable_requires_id(self):
        with pytest.raises(ValidationError):
            Cable(id="", serial_number="C-1")


class TestPatient:
    def test_display_name_includes_record_number(self, domain_patient):
        assert domain_patient.display_name == "Sarah Mitchell (P001)"

    @pytest.mark.parametrize("age", [0, -3, True, "45"])
    def test_invalid_age_is_rejected(self, valid_patient_data, age):
        valid_patient_data["age"] = age

        with pytest.raises(ValidationError):
            Patient(**valid_patient_data)

    def test_missing_mobile_phone_is_rejected(self, valid_patient_data):
        valid_patient_data["mobile_phone"] = ""

        with pytest.raises(ValidationError):
            Patient(**valid_patient_data)


class TestAppointment:
    def test_valid_appointment(self, appointment_factory):
        appointment = appointment_factory(status="Overdue")

        assert appointment.status is AppointmentStatus.OVERDUE
        assert appointment.return_date == datetime(2024, 7, 22, 10, 0)

    @pytest.mark.parametrize("duration", [0, -1, 1.5, True])
    def test_duration_must_be_positive_integer(self, appointment_factory, duration):
        with pytest.raises(ValidationError):
            appointment_factory(
                duration_days=duration, return_date=datetime(2024, 7, 22, 10, 0)
            )

    def test_return_before_install_is_rejected(self, appointment_factory):
        with pytest.raises(ValidationError) as exc_info:
            appointment_factory(return_date=datetime(2024, 7, 19, 10, 0))

        assert exc_info.value.field == "return_date"

    def test_aware_timestamps_are_stored_naive(self, appointment_factory):
        appointment = appointment_factory(
            install_date=datetime(2024, 7, 20, 10, 0, tzinfo=timezone.utc),
            return_date=datetime(2024, 7, 22, 10, 0, tzinfo=timezone.utc),
        )

        assert appointment.install_date.tzinfo is None
        assert appointment.return_date.tzinfo is None
        assert appointment.return_date - appointment.install_date == timedelta(days=2)

    def test_rebuilding_revalidates_mutated_record(self, appointment_factory):
        appointment = appointment_factory()
        appointment.return_date = datetime(2024, 6, 1, 10, 0)

        with pytest.raises(ValidationError):
            replace(appointment)

    def test_overlap_is_half_open(self, appointment_factory):
        appointment = appointment_factory()

        # Starts exactly when the existing booking returns
        assert not appointment.overlaps(
            datetime(2024, 7, 22, 10, 0), datetime(2024, 7, 23, 10, 0)
        )
        # Ends exactly when the existing booking is installed
        assert not appointment.overlaps(
            datetime(2024, 7, 19, 10, 0), datetime(2024, 7, 20, 10, 0)
        )
        assert appointment.overlaps(
            datetime(2024, 7, 21, 10, 0), datetime(2024, 7, 23, 10, 0)
        )

    @pytest.mark.parametrize(
        "status,blocks,holds",
        [
            (AppointmentStatus.SCHEDULED, True, True),
            (AppointmentStatus.ACTIVE, True, True),
            (AppointmentStatus.OVERDUE, True, True),
            (AppointmentStatus.RETURNED, False, True),
            (AppointmentStatus.COMPLETED, False, False),
        ],
    )
    def test_status_semantics(self, appointment_factory, status, blocks, holds):
        appointment = appointment_factory(status=status)

        assert appointment.blocks_resources is blocks
        assert appointment.holds_resources is holds
