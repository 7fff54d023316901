"""
Reservation interval arithmetic shared by booking and availability listing.

Both the conflict check in ``BookingService.book`` and the candidate listing
in ``BookingService.list_available_resources`` go through ``find_conflict`` so
the two paths cannot disagree.
"""

from datetime import datetime, time, timedelta
from typing import Optional

from ..domain.entities import Appointment
from ..domain.interfaces import IAppointmentReader


def compute_return_date(
    install_date: datetime,
    duration_days: int,
    return_time: Optional[time] = None,
) -> datetime:
    """Add calendar days to the install timestamp, keeping its time of day.

    When ``return_time`` is given it replaces hour and minute of the result.

    >>> compute_return_date(datetime(2024, 7, 20, 10, 0), 2)
    datetime.datetime(2024, 7, 22, 10, 0)
    """
    return_date = install_date + timedelta(days=duration_days)
    if return_time is not None:
        return_date = return_date.replace(
            hour=return_time.hour, minute=return_time.minute, second=0, microsecond=0
        )
    return return_date


def find_conflict(
    appointments: IAppointmentReader,
    resource_id: str,
    is_cable: bool,
    start: datetime,
    end: datetime,
) -> Optional[Appointment]:
    """Return the first blocking appointment overlapping ``[start, end)``.

    Completed and Returned appointments never block. Touching boundaries
    (``existing.return_date == start``) do not overlap.
    """
    for appointment in appointments.get_by_resource(resource_id, is_cable):
        if not appointment.blocks_resources:
            continue
        if appointment.overlaps(start, end):
            return appointment
    return None
