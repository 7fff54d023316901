"""
Booking service following SOLID principles.
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import List, Optional, Union

from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..domain.entities import Appointment, AppointmentStatus
from ..domain.interfaces import (
    IAppointmentRepository,
    IBlockedDateRepository,
    IPatientRepository,
)
from ..schemas.dtos import (
    AvailableResources,
    BookingRequest,
    ReturnTime,
    normalize_install_date,
    parse_return_time,
    validate_duration,
)
from .availability import compute_return_date, find_conflict
from .inventory_service import InventoryService

logger = logging.getLogger(__name__)


class BookingService:
    """Application service for the appointment lifecycle.

    Keeps holter/cable status synchronized with bookings:
    - ``book`` is the only path that sets resources InUse
    - ``release`` is the only path that sets them back to Available
    """

    def __init__(
        self,
        appointment_repo: IAppointmentRepository,
        patient_repo: IPatientRepository,
        blocked_date_repo: IBlockedDateRepository,
        inventory: InventoryService,
    ):
        self.appointment_repo = appointment_repo
        self.patient_repo = patient_repo
        self.blocked_date_repo = blocked_date_repo
        self.inventory = inventory

    def book(self, request: BookingRequest) -> Appointment:
        """Create a new appointment with business rule validation.

        Business Rules:
        - Duration of at least one day
        - Patient, holter and cable must exist
        - Install day must not be blocked
        - Neither the holter nor the cable may be reserved for an
          overlapping interval by a Scheduled/Active/Overdue appointment

        Every check runs before anything is stored.
        """
        request.validate()

        if self.patient_repo.get_by_id(request.patient_id) is None:
            raise ValidationError(
                f"Patient '{request.patient_id}' does not exist", "patient_id"
            )
        if self.inventory.get_device(request.holter_id) is None:
            raise ValidationError(
                f"Holter '{request.holter_id}' does not exist", "holter_id"
            )
        if self.inventory.get_cable(request.cable_id) is None:
            raise ValidationError(
                f"Cable '{request.cable_id}' does not exist", "cable_id"
            )

        install_day = request.install_date.date().isoformat()
        if self.blocked_date_repo.contains(install_day):
            raise ValidationError(
                f"The physician is not available on {install_day}", "install_date"
            )

        return_date = compute_return_date(
            request.install_date, request.duration_days, request.return_time_override
        )

        for resource_id, is_cable in (
            (request.holter_id, False),
            (request.cable_id, True),
        ):
            conflict = find_conflict(
                self.appointment_repo,
                resource_id,
                is_cable,
                request.install_date,
                return_date,
            )
            if conflict is not None:
                label = "Cable" if is_cable else "Holter"
                logger.warning(
                    "Booking rejected: resource already reserved",
                    extra={
                        "context": {
                            "resource_id": resource_id,
                            "conflicting_appointment_id": conflict.id,
                        }
                    },
                )
                raise ConflictError(
                    f"{label} '{resource_id}' is already booked by appointment "
                    f"'{conflict.id}' until {conflict.return_date:%Y-%m-%d %H:%M}",
                    resource_id=resource_id,
                    appointment_id=conflict.id,
                )

        appointment = Appointment(
            id=f"APP-{self.appointment_repo.next_sequence('APP-')}",
            patient_id=request.patient_id,
            holter_id=request.holter_id,
            cable_id=request.cable_id,
            install_date=request.install_date,
            duration_days=request.duration_days,
            return_date=return_date,
            status=AppointmentStatus.SCHEDULED,
            additional_services=request.additional_services,
        )
        self.appointment_repo.add(appointment)
        self.inventory.mark_in_use(appointment.holter_id, appointment.cable_id)

        logger.info(
            "Appointment booked",
            extra={
                "context": {
                    "appointment_id": appointment.id,
                    "holter_id": appointment.holter_id,
                    "cable_id": appointment.cable_id,
                    "install_date": appointment.install_date.isoformat(),
                    "return_date": appointment.return_date.isoformat(),
                }
            },
        )
        return appointment

    def list_available_resources(
        self,
        install_date: datetime,
        duration_days: int,
        return_time_override: ReturnTime = None,
    ) -> AvailableResources:
        """Holters and cables with no blocking reservation in the interval.

        Decided purely by the overlap predicate, never by the stored status.
        """
        start = normalize_install_date(install_date)
        end = compute_return_date(
            start, validate_duration(duration_days), parse_return_time(return_time_override)
        )
        holters = [
            holter
            for holter in self.inventory.list_devices()
            if find_conflict(self.appointment_repo, holter.id, False, start, end) is None
        ]
        cables = [
            cable
            for cable in self.inventory.list_cables()
            if find_conflict(self.appointment_repo, cable.id, True, start, end) is None
        ]
        return AvailableResources(holters=holters, cables=cables)

    def edit_appointment(self, appointment: Appointment) -> Appointment:
        """Replace the full appointment record.

        The record is rebuilt so field rules (duration, return not before
        install, clinic-local timestamps) hold for edits made after
        construction. Overlap is not re-validated and resource status is
        left untouched.
        """
        if not isinstance(appointment, Appointment):
            raise ValidationError("An Appointment record is required", "appointment")
        appointment = replace(appointment)
        if self.appointment_repo.get_by_id(appointment.id) is None:
            raise NotFoundError("Appointment", appointment.id)
        return self.appointment_repo.update(appointment)

    def update_status(
        self, appointment_id: str, status: Union[AppointmentStatus, str]
    ) -> Appointment:
        """Set the status directly; no transition check is applied."""
        try:
            status = AppointmentStatus(status)
        except ValueError as e:
            raise ValidationError(f"Unknown status '{status}'", "status") from e
        appointment = self.appointment_repo.get_by_id(appointment_id)
        if appointment is None:
            raise NotFoundError("Appointment", appointment_id)
        appointment.status = status
        return self.appointment_repo.update(appointment)

    def release(self, appointment_id: str) -> None:
        """Hand the holter back: complete the appointment, free its resources."""
        appointment = self.appointment_repo.get_by_id(appointment_id)
        if appointment is None:
            logger.warning(
                "Release requested for unknown appointment",
                extra={"context": {"appointment_id": appointment_id}},
            )
            return

        appointment.status = AppointmentStatus.COMPLETED
        self.appointment_repo.update(appointment)
        self.inventory.mark_available(appointment.holter_id, appointment.cable_id)

        logger.info(
            "Holter released",
            extra={
                "context": {
                    "appointment_id": appointment.id,
                    "holter_id": appointment.holter_id,
                    "cable_id": appointment.cable_id,
                }
            },
        )

    def get_appointment(self, appointment_id: str) -> Optional[Appointment]:
        return self.appointment_repo.get_by_id(appointment_id)

    def list_appointments(self) -> List[Appointment]:
        return self.appointment_repo.list_all()
