# Services package initialization
# This file makes the services directory a Python package
# and allows importing service modules

from . import availability
from . import booking_service
from . import calendar_service
from . import inventory_service
from . import overdue_service
from . import patient_service
from . import report_service
from . import scheduler_service

__all__ = [
    "availability",
    "booking_service",
    "calendar_service",
    "inventory_service",
    "overdue_service",
    "patient_service",
    "report_service",
    "scheduler_service",
]
