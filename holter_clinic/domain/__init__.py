"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Domain entities with business rules
- interfaces.py: Repository contracts

Following SOLID principles:
- Single Responsibility: Each module has one purpose
- Dependency Inversion: Interfaces define contracts
"""

from .entities import (
    ADDITIONAL_SERVICES,
    Appointment,
    AppointmentStatus,
    Cable,
    Device,
    DeviceStatus,
    HolterKind,
    Notification,
    Patient,
)
from .interfaces import (
    IAppointmentReader,
    IAppointmentRepository,
    IAppointmentWriter,
    IBlockedDateRepository,
    ICableReader,
    ICableRepository,
    ICableWriter,
    IDeviceReader,
    IDeviceRepository,
    IDeviceWriter,
    INotificationRepository,
    IPatientRepository,
)

__all__ = [
    # Domain entities
    "Device",
    "Cable",
    "Patient",
    "Appointment",
    "Notification",
    "HolterKind",
    "DeviceStatus",
    "AppointmentStatus",
    "ADDITIONAL_SERVICES",
    # Repository interfaces
    "IDeviceRepository",
    "ICableRepository",
    "IPatientRepository",
    "IAppointmentRepository",
    "INotificationRepository",
    "IBlockedDateRepository",
    # Segregated interfaces
    "IDeviceReader",
    "IDeviceWriter",
    "ICableReader",
    "ICableWriter",
    "IAppointmentReader",
    "IAppointmentWriter",
]
