"""
Report service for tabular views and CSV export of appointments.
Following SOLID principles with single responsibility for reporting.
"""

import csv
import logging
import os
from datetime import datetime
from typing import IO, List, Union

from ..core.config import to_clinic_time
from ..domain.entities import Appointment, AppointmentStatus, DeviceStatus
from ..domain.interfaces import IAppointmentReader, INotificationRepository
from ..schemas.dtos import DashboardSummary, ReportRow
from .inventory_service import InventoryService
from .patient_service import PatientService

logger = logging.getLogger(__name__)

DELETED_PATIENT = "Deleted (N/A)"

CSV_FIELDS = [
    "appointment_id",
    "patient",
    "install_date",
    "return_date",
    "holter_cable",
    "status",
    "services",
]

_OPEN_STATUSES = (AppointmentStatus.SCHEDULED, AppointmentStatus.ACTIVE)


class ReportService:
    """
    Service responsible for read-only views over the engine's collections.

    Single Responsibility: build report rows, the handover queue and the
    dashboard counters; write CSV exports.
    """

    def __init__(
        self,
        appointment_repo: IAppointmentReader,
        notification_repo: INotificationRepository,
        patients: PatientService,
        inventory: InventoryService,
    ):
        self.appointment_repo = appointment_repo
        self.notification_repo = notification_repo
        self.patients = patients
        self.inventory = inventory

    def report_rows(self, search_term: str = "") -> List[ReportRow]:
        """
        Build one report row per appointment.

        Args:
            search_term: Substring matched against patient name or record
                number; empty matches everything

        Returns:
            Rows in booking order
        """
        term = (search_term or "").strip().lower()
        rows: List[ReportRow] = []
        for appointment in self.appointment_repo.list_all():
            patient = self.patients.get_patient(appointment.patient_id)
            if term:
                if patient is None:
                    continue
                if (
                    term not in patient.name.lower()
                    and term not in patient.record_number.lower()
                ):
                    continue
            rows.append(self._to_row(appointment, patient))
        return rows

    def _to_row(self, appointment: Appointment, patient) -> ReportRow:
        holter = self.inventory.serial_for(appointment.holter_id, is_cable=False)
        cable = self.inventory.serial_for(appointment.cable_id, is_cable=True)
        return ReportRow(
            appointment_id=appointment.id,
            patient=patient.display_name if patient else DELETED_PATIENT,
            install_date=appointment.install_date,
            return_date=appointment.return_date,
            holter_cable=f"{holter} / {cable}",
            status=appointment.status.value,
            services=", ".join(appointment.additional_services) or "-",
        )

    def export_csv(
        self, rows: List[ReportRow], target: Union[str, os.PathLike, IO[str]]
    ) -> int:
        """
        Write report rows as CSV.

        Files get a UTF-8 byte order mark so spreadsheet applications detect
        the encoding; text streams are written as-is.

        Returns:
            Number of data rows written
        """
        records = [row.as_csv_record() for row in rows]

        if isinstance(target, (str, os.PathLike)):
            with open(target, "w", newline="", encoding="utf-8-sig") as csvfile:
                self._write(csvfile, records)
            logger.info(
                f"Wrote {len(records)} report rows to {os.fspath(target)}",
                extra={"context": {"row_count": len(records)}},
            )
        else:
            self._write(target, records)
        return len(records)

    @staticmethod
    def _write(stream: IO[str], records: List[dict]) -> None:
        writer = csv.DictWriter(stream, fieldnames=CSV_FIELDS)
        writer.writeheader()
        writer.writerows(records)

    def handover_queue(self) -> List[Appointment]:
        """Appointments still holding a holter, soonest return first."""
        pending = [
            appointment
            for appointment in self.appointment_repo.list_all()
            if appointment.status != AppointmentStatus.COMPLETED
        ]
        return sorted(pending, key=lambda appointment: appointment.return_date)

    def dashboard_summary(self, now: datetime, recent_limit: int = 5) -> DashboardSummary:
        today = to_clinic_time(now).date()
        appointments = self.appointment_repo.list_all()
        return DashboardSummary(
            available_holters=sum(
                1
                for holter in self.inventory.list_devices()
                if holter.status == DeviceStatus.AVAILABLE
            ),
            available_cables=sum(
                1
                for cable in self.inventory.list_cables()
                if cable.status == DeviceStatus.AVAILABLE
            ),
            open_appointments=sum(
                1 for appointment in appointments if appointment.status in _OPEN_STATUSES
            ),
            todays_installations=[
                appointment
                for appointment in appointments
                if appointment.install_date.date() == today
            ],
            todays_returns=[
                appointment
                for appointment in appointments
                if appointment.return_date.date() == today
            ],
            recent_notifications=self.notification_repo.list_all()[: max(recent_limit, 0)],
        )
