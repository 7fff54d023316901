"""
Schemas package - Data Transfer Objects and validation.

This package contains DTOs that define the engine's input and output
contracts and handle validation following SOLID principles.
"""

from .dtos import (
    AvailableResources,
    BookingRequest,
    DashboardSummary,
    PatientRegistrationRequest,
    ReportRow,
)

__all__ = [
    # Requests
    "BookingRequest",
    "PatientRegistrationRequest",
    # Responses
    "AvailableResources",
    "DashboardSummary",
    "ReportRow",
]
