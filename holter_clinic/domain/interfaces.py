"""
Abstract interfaces for repositories following Interface Segregation Principle.

These interfaces define contracts without implementation details,
enabling dependency injection and easier testing.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .entities import Appointment, Cable, Device, Notification, Patient


class ISequenceSource(ABC):
    """Hands out monotonically increasing numbers used to build ids."""

    @abstractmethod
    def next_sequence(self, prefix: str) -> int:
        """Return the next unused number for ids starting with ``prefix``."""
        pass


class IDeviceReader(ABC):
    """Interface for holter read operations."""

    @abstractmethod
    def get_by_id(self, device_id: str) -> Optional[Device]:
        """Get device by ID."""
        pass

    @abstractmethod
    def list_all(self) -> List[Device]:
        """Get all devices in registration order."""
        pass


class IDeviceWriter(ISequenceSource):
    """Interface for holter write operations."""

    @abstractmethod
    def add(self, device: Device) -> Device:
        pass

    @abstractmethod
    def update(self, device: Device) -> Device:
        pass

    @abstractmethod
    def delete(self, device_id: str) -> bool:
        pass


class IDeviceRepository(IDeviceReader, IDeviceWriter):
    """Complete holter repository interface."""

    pass


class ICableReader(ABC):
    """Interface for cable read operations."""

    @abstractmethod
    def get_by_id(self, cable_id: str) -> Optional[Cable]:
        pass

    @abstractmethod
    def list_all(self) -> List[Cable]:
        pass


class ICableWriter(ISequenceSource):
    """Interface for cable write operations."""

    @abstractmethod
    def add(self, cable: Cable) -> Cable:
        pass

    @abstractmethod
    def update(self, cable: Cable) -> Cable:
        pass

    @abstractmethod
    def delete(self, cable_id: str) -> bool:
        pass


class ICableRepository(ICableReader, ICableWriter):
    """Complete cable repository interface."""

    pass


class IPatientRepository(ISequenceSource):
    """Patients are registered once and never mutated."""

    @abstractmethod
    def get_by_id(self, patient_id: str) -> Optional[Patient]:
        pass

    @abstractmethod
    def list_all(self) -> List[Patient]:
        pass

    @abstractmethod
    def add(self, patient: Patient) -> Patient:
        pass


class IAppointmentReader(ABC):
    """Interface for appointment read operations."""

    @abstractmethod
    def get_by_id(self, appointment_id: str) -> Optional[Appointment]:
        """Get appointment by ID."""
        pass

    @abstractmethod
    def list_all(self) -> List[Appointment]:
        """Get all appointments in booking order."""
        pass

    @abstractmethod
    def get_by_resource(self, resource_id: str, is_cable: bool) -> List[Appointment]:
        """Get every appointment referencing a holter (or a cable)."""
        pass


class IAppointmentWriter(ISequenceSource):
    """Interface for appointment write operations."""

    @abstractmethod
    def add(self, appointment: Appointment) -> Appointment:
        """Store a new appointment."""
        pass

    @abstractmethod
    def update(self, appointment: Appointment) -> Appointment:
        """Replace an existing appointment record."""
        pass


class IAppointmentRepository(IAppointmentReader, IAppointmentWriter):
    """Complete appointment repository interface."""

    pass


class INotificationRepository(ISequenceSource):
    """Append-only, most-recent-first notification store."""

    @abstractmethod
    def list_all(self) -> List[Notification]:
        pass

    @abstractmethod
    def add_first(self, notification: Notification) -> Notification:
        """Insert at the front of the list."""
        pass

    @abstractmethod
    def has_for_appointment(self, appointment_id: str) -> bool:
        pass


class IBlockedDateRepository(ABC):
    """Calendar days (ISO strings) on which installs are refused."""

    @abstractmethod
    def list_all(self) -> List[str]:
        pass

    @abstractmethod
    def contains(self, day: str) -> bool:
        pass

    @abstractmethod
    def add(self, day: str) -> None:
        pass

    @abstractmethod
    def remove(self, day: str) -> None:
        pass
