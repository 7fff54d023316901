"""
Initial clinic data.

``build_fleet`` creates the holter and cable inventory the clinic starts
with. ``demo_patients`` and ``demo_appointments`` provide a small data set
placed around a given day so dashboards and reports have something to show.
"""

from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional, Tuple

from .core.config import get_initial_fleet_sizes
from .domain.entities import (
    Appointment,
    AppointmentStatus,
    Cable,
    Device,
    DeviceStatus,
    HolterKind,
    Patient,
)
from .services.availability import compute_return_date


def build_fleet(sizes: Optional[Dict[str, int]] = None) -> Tuple[List[Device], List[Cable]]:
    """Create the starting inventory, every item Available.

    Args:
        sizes: ``{"rhythm": n, "pressure": n, "cables": n}``; read from the
            environment when omitted
    """
    sizes = sizes or get_initial_fleet_sizes()

    devices = [
        Device(
            id=f"HR-{number}",
            kind=HolterKind.RHYTHM,
            serial_number=f"R-{number:03d}",
            status=DeviceStatus.AVAILABLE,
        )
        for number in range(1, sizes.get("rhythm", 0) + 1)
    ]
    devices += [
        Device(
            id=f"HP-{number}",
            kind=HolterKind.PRESSURE,
            serial_number=f"P-{number:03d}",
            status=DeviceStatus.AVAILABLE,
        )
        for number in range(1, sizes.get("pressure", 0) + 1)
    ]
    cables = [
        Cable(id=f"CBL-{number}", serial_number=f"C-{number}")
        for number in range(1, sizes.get("cables", 0) + 1)
    ]
    return devices, cables


def demo_patients() -> List[Patient]:
    return [
        Patient(
            id="p1",
            name="Sarah Mitchell",
            record_number="P001",
            mobile_phone="0912-111-1111",
            landline_phone="021-5555-0101",
            age=45,
        ),
        Patient(
            id="p2",
            name="Daniel Brooks",
            record_number="P002",
            mobile_phone="0912-222-2222",
            age=32,
        ),
        Patient(
            id="p3",
            name="Emily Carter",
            record_number="P003",
            mobile_phone="0912-333-3333",
            landline_phone="021-5555-0303",
            age=58,
        ),
        Patient(
            id="p4",
            name="James Walker",
            record_number="P004",
            mobile_phone="0912-444-4444",
            age=29,
        ),
        Patient(
            id="p5",
            name="Linda Harris",
            record_number="P005",
            mobile_phone="0912-555-5555",
            age=65,
        ),
    ]


def _appointment(
    appointment_id: str,
    patient_id: str,
    holter_id: str,
    cable_id: str,
    install_date: datetime,
    duration_days: int,
    status: AppointmentStatus,
    services: List[str],
) -> Appointment:
    return Appointment(
        id=appointment_id,
        patient_id=patient_id,
        holter_id=holter_id,
        cable_id=cable_id,
        install_date=install_date,
        duration_days=duration_days,
        return_date=compute_return_date(install_date, duration_days),
        status=status,
        additional_services=services,
    )


def demo_appointments(today: date) -> List[Appointment]:
    """Five bookings around ``today``: one finished, one past due, three open."""
    morning = datetime.combine(today, time(9, 0))
    return [
        _appointment(
            "APP-1", "p1", "HR-15", "CBL-25",
            morning - timedelta(days=7), 2, AppointmentStatus.COMPLETED, ["ECG"],
        ),
        # Return was yesterday; the first overdue scan flags it
        _appointment(
            "APP-2", "p3", "HR-1", "CBL-1",
            morning - timedelta(days=3), 2, AppointmentStatus.SCHEDULED, ["Echo"],
        ),
        _appointment(
            "APP-3", "p4", "HP-1", "CBL-2",
            morning - timedelta(days=2), 5, AppointmentStatus.SCHEDULED,
            ["Exercise test", "Analysis"],
        ),
        _appointment(
            "APP-4", "p2", "HR-2", "CBL-3",
            datetime.combine(today, time(10, 0)), 1, AppointmentStatus.SCHEDULED, [],
        ),
        _appointment(
            "APP-5", "p5", "HR-3", "CBL-4",
            morning + timedelta(days=2), 3, AppointmentStatus.SCHEDULED,
            ["Pressure Holter"],
        ),
    ]
