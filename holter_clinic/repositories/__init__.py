# Repositories package initialization
# In-memory implementations of the domain repository interfaces

from .appointment_repo import AppointmentRepository
from .inventory_repository import CableRepository, DeviceRepository
from .notification_repo import BlockedDateRepository, NotificationRepository
from .patient_repo import PatientRepository

__all__ = [
    "AppointmentRepository",
    "BlockedDateRepository",
    "CableRepository",
    "DeviceRepository",
    "NotificationRepository",
    "PatientRepository",
]
