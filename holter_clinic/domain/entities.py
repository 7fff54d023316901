"""
Domain entities - Pure business logic, no framework dependencies.

Following SOLID principles:
- Single Responsibility: Each entity represents one clinic concept
- Open/Closed: Entities can be extended without modification
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from ..core.config import to_clinic_time
from ..core.exceptions import ValidationError


class HolterKind(str, Enum):
    """Kind of Holter monitor."""

    RHYTHM = "Rhythm"
    PRESSURE = "Pressure"


class DeviceStatus(str, Enum):
    AVAILABLE = "Available"
    IN_USE = "InUse"
    BROKEN = "Broken"


class AppointmentStatus(str, Enum):
    """Lifecycle of an appointment.

    ACTIVE is reserved: no engine operation transitions into it.
    """

    SCHEDULED = "Scheduled"
    ACTIVE = "Active"
    OVERDUE = "Overdue"
    RETURNED = "Returned"
    COMPLETED = "Completed"


# Statuses whose reservations no longer block a holter or cable
NON_BLOCKING_STATUSES = frozenset(
    {AppointmentStatus.COMPLETED, AppointmentStatus.RETURNED}
)

ADDITIONAL_SERVICES = (
    "ECG",
    "Echo",
    "Exercise test",
    "Analysis",
    "Pressure Holter",
)


def _require_text(value: str, field_name: str, label: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} is required", field_name)


@dataclass
class Device:
    """A rhythm or pressure monitor in the clinic fleet."""

    id: str = ""
    kind: HolterKind = HolterKind.RHYTHM
    serial_number: str = ""
    status: DeviceStatus = DeviceStatus.AVAILABLE

    def __post_init__(self):
        """Validate domain rules."""
        _require_text(self.id, "id", "Device id")
        _require_text(self.serial_number, "serial_number", "Serial number")
        self.kind = HolterKind(self.kind)
        self.status = DeviceStatus(self.status)


@dataclass
class Cable:
    """A patient cable; shares the device lifecycle without a kind."""

    id: str = ""
    serial_number: str = ""
    status: DeviceStatus = DeviceStatus.AVAILABLE

    def __post_init__(self):
        _require_text(self.id, "id", "Cable id")
        _require_text(self.serial_number, "serial_number", "Serial number")
        self.status = DeviceStatus(self.status)


@dataclass
class Patient:
    """Domain entity representing a registered patient."""

    id: str = ""
    name: str = ""
    record_number: str = ""
    mobile_phone: str = ""
    landline_phone: str = ""
    age: Optional[int] = None

    def __post_init__(self):
        """Validate business rules."""
        _require_text(self.id, "id", "Patient id")
        _require_text(self.name, "name", "Patient name")
        _require_text(self.record_number, "record_number", "Record number")
        _require_text(self.mobile_phone, "mobile_phone", "Mobile phone")
        if self.age is not None:
            if isinstance(self.age, bool) or not isinstance(self.age, int):
                raise ValidationError("Age must be an integer", "age")
            if self.age <= 0:
                raise ValidationError("Age must be positive", "age")

    @property
    def display_name(self) -> str:
        return f"{self.name} ({self.record_number})"


@dataclass
class Appointment:
    """Domain entity for a Holter loan booked against a device and a cable."""

    id: str = ""
    patient_id: str = ""
    holter_id: str = ""
    cable_id: str = ""
    install_date: Optional[datetime] = None
    duration_days: int = 1
    return_date: Optional[datetime] = None
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    additional_services: List[str] = field(default_factory=list)
    notes: Optional[str] = None

    def __post_init__(self):
        """Validate business rules."""
        _require_text(self.id, "id", "Appointment id")
        _require_text(self.patient_id, "patient_id", "Patient id")
        _require_text(self.holter_id, "holter_id", "Holter id")
        _require_text(self.cable_id, "cable_id", "Cable id")
        if (
            isinstance(self.duration_days, bool)
            or not isinstance(self.duration_days, int)
            or self.duration_days < 1
        ):
            raise ValidationError("Duration must be at least one day", "duration_days")
        if not isinstance(self.install_date, datetime):
            raise ValidationError("Install date must be a datetime", "install_date")
        if not isinstance(self.return_date, datetime):
            raise ValidationError("Return date must be a datetime", "return_date")
        # Stored timestamps are naive clinic wall-clock values
        self.install_date = to_clinic_time(self.install_date)
        self.return_date = to_clinic_time(self.return_date)
        if self.return_date < self.install_date:
            raise ValidationError(
                "Return date cannot be before install date", "return_date"
            )
        self.status = AppointmentStatus(self.status)
        self.additional_services = list(self.additional_services or [])

    @property
    def blocks_resources(self) -> bool:
        """Whether this appointment still reserves its holter and cable interval."""
        return self.status not in NON_BLOCKING_STATUSES

    @property
    def holds_resources(self) -> bool:
        """Whether the holter and cable should read InUse because of this booking."""
        return self.status != AppointmentStatus.COMPLETED

    def overlaps(self, start: datetime, end: datetime) -> bool:
        """Half-open interval test: [install, return) against [start, end)."""
        return self.install_date < end and self.return_date > start


@dataclass
class Notification:
    """Overdue-return notice created once per appointment."""

    id: str = ""
    appointment_id: str = ""
    message: str = ""
    created_at: Optional[datetime] = None
