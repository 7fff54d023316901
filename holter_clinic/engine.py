"""
Inventory-appointment consistency engine.

``HolterEngine`` owns the clinic's collections (holters, cables, patients,
appointments, notifications and blocked dates) and is the only way to mutate
them. Every public method takes the engine lock, so a background overdue scan
and caller operations never interleave, and returns deep copies so callers
cannot change state behind the engine's back.
"""

import copy
import dataclasses
import functools
import logging
import os
import threading
from datetime import date, datetime, time
from typing import IO, Iterable, List, Optional, Union

from .core.config import clinic_now
from .domain.entities import (
    Appointment,
    AppointmentStatus,
    Cable,
    Device,
    DeviceStatus,
    HolterKind,
    Notification,
    Patient,
)
from .repositories import (
    AppointmentRepository,
    BlockedDateRepository,
    CableRepository,
    DeviceRepository,
    NotificationRepository,
    PatientRepository,
)
from .schemas.dtos import (
    AvailableResources,
    BookingRequest,
    DashboardSummary,
    PatientRegistrationRequest,
    ReportRow,
    normalize_day,
)
from .services.booking_service import BookingService
from .services.calendar_service import BlockedDateService
from .services.inventory_service import InventoryService
from .services.overdue_service import OverdueService
from .services.patient_service import PatientService
from .services.report_service import ReportService

logger = logging.getLogger(__name__)


def _serialized(method):
    """Run the method under the engine lock and hand back a private copy."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return copy.deepcopy(method(self, *args, **kwargs))

    return wrapper


class HolterEngine:
    def __init__(
        self,
        devices: Optional[Iterable[Device]] = None,
        cables: Optional[Iterable[Cable]] = None,
        patients: Optional[Iterable[Patient]] = None,
        appointments: Optional[Iterable[Appointment]] = None,
        notifications: Optional[Iterable[Notification]] = None,
        blocked_dates: Optional[Iterable[Union[date, str]]] = None,
    ):
        self._lock = threading.RLock()

        # Initial data is copied so the caller keeps no handle on engine state
        self._device_repo = DeviceRepository(copy.deepcopy(list(devices or [])))
        self._cable_repo = CableRepository(copy.deepcopy(list(cables or [])))
        self._patient_repo = PatientRepository(copy.deepcopy(list(patients or [])))
        # Rebuilt so records mutated after construction are validated again
        self._appointment_repo = AppointmentRepository(
            [dataclasses.replace(a) for a in copy.deepcopy(list(appointments or []))]
        )
        self._notification_repo = NotificationRepository(
            copy.deepcopy(list(notifications or []))
        )
        self._blocked_date_repo = BlockedDateRepository(
            [normalize_day(day) for day in blocked_dates or []]
        )

        self.inventory = InventoryService(
            self._device_repo, self._cable_repo, self._appointment_repo
        )
        self.patient_service = PatientService(self._patient_repo)
        self.calendar = BlockedDateService(self._blocked_date_repo)
        self.booking = BookingService(
            self._appointment_repo,
            self._patient_repo,
            self._blocked_date_repo,
            self.inventory,
        )
        self.overdue = OverdueService(
            self._appointment_repo, self._notification_repo, self.patient_service
        )
        self.reports = ReportService(
            self._appointment_repo,
            self._notification_repo,
            self.patient_service,
            self.inventory,
        )

        self._sync_initial_status()

    def _sync_initial_status(self) -> None:
        """Mark resources referenced by not-yet-completed appointments InUse."""
        for appointment in self._appointment_repo.list_all():
            if appointment.holds_resources:
                self.inventory.mark_in_use(appointment.holter_id, appointment.cable_id)

    # ------------------------------------------------------------------
    # Device & cable registry
    # ------------------------------------------------------------------

    @_serialized
    def add_device(self, kind: Union[HolterKind, str]) -> Device:
        return self.inventory.add_device(kind)

    @_serialized
    def add_cable(self) -> Cable:
        return self.inventory.add_cable()

    @_serialized
    def rename_serial(self, resource_id: str, new_serial: str, is_cable: bool) -> None:
        self.inventory.rename_serial(resource_id, new_serial, is_cable)

    @_serialized
    def remove_resource(self, resource_id: str, is_cable: bool) -> None:
        self.inventory.remove_resource(resource_id, is_cable)

    # ------------------------------------------------------------------
    # Patients
    # ------------------------------------------------------------------

    @_serialized
    def register_patient(
        self,
        name: str,
        record_number: str,
        mobile_phone: str,
        landline_phone: str = "",
        age: Optional[int] = None,
    ) -> Patient:
        return self.patient_service.register_patient(
            PatientRegistrationRequest(
                name=name,
                record_number=record_number,
                mobile_phone=mobile_phone,
                landline_phone=landline_phone,
                age=age,
            )
        )

    # ------------------------------------------------------------------
    # Booking lifecycle
    # ------------------------------------------------------------------

    @_serialized
    def book(
        self,
        patient_id: str,
        holter_id: str,
        cable_id: str,
        install_date: datetime,
        duration_days: int,
        additional_services: Optional[Iterable[str]] = None,
        return_time_override: Union[time, str, None] = None,
    ) -> Appointment:
        return self.booking.book(
            BookingRequest(
                patient_id=patient_id,
                holter_id=holter_id,
                cable_id=cable_id,
                install_date=install_date,
                duration_days=duration_days,
                additional_services=list(additional_services or []),
                return_time_override=return_time_override,
            )
        )

    @_serialized
    def edit_appointment(self, appointment: Appointment) -> Appointment:
        return self.booking.edit_appointment(copy.deepcopy(appointment))

    @_serialized
    def update_status(
        self, appointment_id: str, status: Union[AppointmentStatus, str]
    ) -> Appointment:
        return self.booking.update_status(appointment_id, status)

    @_serialized
    def release(self, appointment_id: str) -> None:
        self.booking.release(appointment_id)

    @_serialized
    def scan_overdue(self, now: Optional[datetime] = None) -> List[Notification]:
        return self.overdue.scan_overdue(now or clinic_now())

    @_serialized
    def list_available_resources(
        self,
        install_date: datetime,
        duration_days: int,
        return_time_override: Union[time, str, None] = None,
    ) -> AvailableResources:
        return self.booking.list_available_resources(
            install_date, duration_days, return_time_override
        )

    # ------------------------------------------------------------------
    # Blocked dates
    # ------------------------------------------------------------------

    @_serialized
    def add_blocked_date(self, day: Union[date, str]) -> None:
        self.calendar.add_blocked_date(day)

    @_serialized
    def remove_blocked_date(self, day: Union[date, str]) -> None:
        self.calendar.remove_blocked_date(day)

    # ------------------------------------------------------------------
    # Read-only snapshots
    # ------------------------------------------------------------------

    @_serialized
    def devices(self) -> List[Device]:
        return self.inventory.list_devices()

    @_serialized
    def cables(self) -> List[Cable]:
        return self.inventory.list_cables()

    @_serialized
    def patients(self) -> List[Patient]:
        return self.patient_service.list_patients()

    @_serialized
    def appointments(self) -> List[Appointment]:
        return self.booking.list_appointments()

    @_serialized
    def get_appointment(self, appointment_id: str) -> Optional[Appointment]:
        return self.booking.get_appointment(appointment_id)

    @_serialized
    def notifications(self) -> List[Notification]:
        return self._notification_repo.list_all()

    @_serialized
    def blocked_dates(self) -> List[str]:
        return self.calendar.list_blocked_dates()

    @_serialized
    def report_rows(self, search_term: str = "") -> List[ReportRow]:
        return self.reports.report_rows(search_term)

    def export_report(
        self, target: Union[str, os.PathLike, IO[str]], search_term: str = ""
    ) -> int:
        """Write the (optionally filtered) report as CSV; returns the row count."""
        with self._lock:
            rows = self.reports.report_rows(search_term)
            return self.reports.export_csv(rows, target)

    @_serialized
    def handover_queue(self) -> List[Appointment]:
        return self.reports.handover_queue()

    @_serialized
    def dashboard_summary(self, now: datetime) -> DashboardSummary:
        return self.reports.dashboard_summary(now)

    def resource_status_consistent(self) -> bool:
        """Check the stored InUse flags against the appointment collection.

        A holter or cable (not Broken) must be InUse exactly when some
        not-yet-completed appointment references it.
        """
        with self._lock:
            referenced_holters = set()
            referenced_cables = set()
            for appointment in self._appointment_repo.list_all():
                if appointment.holds_resources:
                    referenced_holters.add(appointment.holter_id)
                    referenced_cables.add(appointment.cable_id)

            for resources, referenced in (
                (self._device_repo.list_all(), referenced_holters),
                (self._cable_repo.list_all(), referenced_cables),
            ):
                for resource in resources:
                    if resource.status == DeviceStatus.BROKEN:
                        continue
                    if (resource.status == DeviceStatus.IN_USE) != (
                        resource.id in referenced
                    ):
                        logger.warning(
                            "Stored resource status disagrees with bookings",
                            extra={
                                "context": {
                                    "resource_id": resource.id,
                                    "status": resource.status.value,
                                }
                            },
                        )
                        return False
            return True
