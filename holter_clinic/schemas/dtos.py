"""
Data Transfer Objects (DTOs) and validation schemas.

Following SOLID principles:
- Single Responsibility: Each schema validates one specific data contract
- Open/Closed: Schemas can be extended without modification
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import List, Optional, Union

from ..core.config import to_clinic_time
from ..core.exceptions import ValidationError
from ..domain.entities import (
    ADDITIONAL_SERVICES,
    Appointment,
    Cable,
    Device,
    Notification,
)

ReturnTime = Union[time, str, None]


def parse_return_time(value: ReturnTime) -> Optional[time]:
    """Parse a return-time override given as ``datetime.time`` or ``"HH:MM"``."""
    if value is None or value == "":
        return None
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) == 2 and all(part.isdigit() for part in parts):
            hour, minute = int(parts[0]), int(parts[1])
            if 0 <= hour < 24 and 0 <= minute < 60:
                return time(hour, minute)
    raise ValidationError(
        f"Invalid return time '{value}', expected HH:MM", "return_time_override"
    )


def normalize_install_date(value: object) -> datetime:
    """Coerce an install timestamp to naive clinic wall-clock time.

    A bare ``date`` means midnight of that day.
    """
    if isinstance(value, datetime):
        return to_clinic_time(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raise ValidationError("Install date must be a valid date/time", "install_date")


def normalize_day(value: Union[date, str]) -> str:
    """Return the ISO ``YYYY-MM-DD`` key of a calendar day."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()).isoformat()
        except ValueError:
            pass
    raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD", "date")


def validate_duration(duration_days: object) -> int:
    if (
        isinstance(duration_days, bool)
        or not isinstance(duration_days, int)
        or duration_days < 1
    ):
        raise ValidationError("Duration must be at least one day", "duration_days")
    return duration_days


@dataclass
class BookingRequest:
    """DTO for appointment booking requests."""

    patient_id: str
    holter_id: str
    cable_id: str
    install_date: datetime
    duration_days: int
    additional_services: List[str] = field(default_factory=list)
    return_time_override: ReturnTime = None

    def validate(self) -> None:
        """Validate the request data and normalize timestamps in place."""
        for field_name in ("patient_id", "holter_id", "cable_id"):
            value = getattr(self, field_name)
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(f"{field_name} is required", field_name)
        validate_duration(self.duration_days)
        self.install_date = normalize_install_date(self.install_date)
        self.return_time_override = parse_return_time(self.return_time_override)
        services = list(dict.fromkeys(self.additional_services or []))
        unknown = [service for service in services if service not in ADDITIONAL_SERVICES]
        if unknown:
            raise ValidationError(
                f"Unknown additional service(s): {', '.join(map(str, unknown))}",
                "additional_services",
            )
        self.additional_services = services


@dataclass
class PatientRegistrationRequest:
    """DTO for patient registration requests."""

    name: str
    record_number: str
    mobile_phone: str
    landline_phone: str = ""
    age: Optional[int] = None

    def validate(self) -> None:
        """Validate the request data."""
        if not self.name or not self.name.strip():
            raise ValidationError("Patient name is required", "name")
        if not self.record_number or not self.record_number.strip():
            raise ValidationError("Record number is required", "record_number")
        if not self.mobile_phone or not self.mobile_phone.strip():
            raise ValidationError("Mobile phone is required", "mobile_phone")
        if self.age is not None and (
            isinstance(self.age, bool) or not isinstance(self.age, int) or self.age <= 0
        ):
            raise ValidationError("Age must be a positive integer", "age")


@dataclass
class AvailableResources:
    """Holters and cables free for a requested interval."""

    holters: List[Device]
    cables: List[Cable]

    @property
    def holter_ids(self) -> List[str]:
        return [holter.id for holter in self.holters]

    @property
    def cable_ids(self) -> List[str]:
        return [cable.id for cable in self.cables]


@dataclass
class ReportRow:
    """One line of the appointments report."""

    appointment_id: str
    patient: str
    install_date: datetime
    return_date: datetime
    holter_cable: str
    status: str
    services: str

    def as_csv_record(self) -> dict:
        return {
            "appointment_id": self.appointment_id,
            "patient": self.patient,
            "install_date": self.install_date.strftime("%Y-%m-%d %H:%M"),
            "return_date": self.return_date.strftime("%Y-%m-%d %H:%M"),
            "holter_cable": self.holter_cable,
            "status": self.status,
            "services": self.services,
        }


@dataclass
class DashboardSummary:
    """Counters shown on the clinic dashboard."""

    available_holters: int
    available_cables: int
    open_appointments: int
    todays_installations: List[Appointment]
    todays_returns: List[Appointment]
    recent_notifications: List[Notification]
