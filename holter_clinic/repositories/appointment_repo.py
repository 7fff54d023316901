"""
Appointment repository implementation following SOLID principles.
"""

from typing import List, Optional

from ..domain.entities import Appointment
from ..domain.interfaces import IAppointmentRepository
from .base import InMemoryRepository


class AppointmentRepository(InMemoryRepository[Appointment], IAppointmentRepository):
    """In-memory appointment store.

    Appointments are never physically deleted; the lifecycle is expressed
    through ``status`` alone.
    """

    def __init__(self, appointments: Optional[List[Appointment]] = None) -> None:
        super().__init__(appointments)

    def get_by_resource(self, resource_id: str, is_cable: bool) -> List[Appointment]:
        """Get every appointment referencing a holter (or a cable)."""
        attribute = "cable_id" if is_cable else "holter_id"
        return [
            appointment
            for appointment in self._items.values()
            if getattr(appointment, attribute) == resource_id
        ]

    def add(self, appointment: Appointment) -> Appointment:
        """Store a new appointment."""
        if appointment.id in self._items:
            raise ValueError(f"Appointment '{appointment.id}' already exists")
        return self._store(appointment)

    def update(self, appointment: Appointment) -> Appointment:
        """Replace an existing appointment record."""
        if appointment.id not in self._items:
            raise ValueError("Appointment not found")
        self._items[appointment.id] = appointment
        return appointment
