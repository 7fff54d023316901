"""
Overdue return detection.

The scan runs once at startup and then on a recurring timer, so it must be
idempotent: an appointment is notified at most once, however many times the
scan sees it.
"""

import logging
import time
from datetime import datetime
from typing import List

from ..core.config import to_clinic_time
from ..core.logging_config import log_performance
from ..domain.entities import AppointmentStatus, Notification
from ..domain.interfaces import IAppointmentRepository, INotificationRepository
from .patient_service import PatientService

logger = logging.getLogger(__name__)

OVERDUE_MESSAGE = (
    "Return deadline for patient {patient_name} has passed. "
    "Please call the patient to follow up on the Holter return."
)


class OverdueService:
    def __init__(
        self,
        appointment_repo: IAppointmentRepository,
        notification_repo: INotificationRepository,
        patients: PatientService,
    ):
        self.appointment_repo = appointment_repo
        self.notification_repo = notification_repo
        self.patients = patients

    def scan_overdue(self, now: datetime) -> List[Notification]:
        """Flag Scheduled appointments whose return date is before ``now``.

        Returns only the notifications created by this call, oldest first;
        they are stored most-recent-first.
        """
        started = time.perf_counter()
        now = to_clinic_time(now)
        created: List[Notification] = []

        for appointment in self.appointment_repo.list_all():
            if appointment.status != AppointmentStatus.SCHEDULED:
                continue
            if not appointment.return_date < now:
                continue

            if not self.notification_repo.has_for_appointment(appointment.id):
                number = self.notification_repo.next_sequence("N-")
                notification = Notification(
                    id=f"N-{number}",
                    appointment_id=appointment.id,
                    message=OVERDUE_MESSAGE.format(
                        patient_name=self.patients.name_for(appointment.patient_id)
                    ),
                    created_at=now,
                )
                self.notification_repo.add_first(notification)
                created.append(notification)

            appointment.status = AppointmentStatus.OVERDUE
            self.appointment_repo.update(appointment)
            logger.info(
                "Appointment marked overdue",
                extra={
                    "context": {
                        "appointment_id": appointment.id,
                        "return_date": appointment.return_date.isoformat(),
                    }
                },
            )

        log_performance(
            "scan_overdue",
            (time.perf_counter() - started) * 1000,
            new_notifications=len(created),
        )
        return created
