"""
Custom exceptions for the Holter clinic engine.
Following SOLID principles - centralized error handling.
"""

from typing import Optional


class HolterClinicError(Exception):
    """Base class for every error raised by the engine."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(HolterClinicError, ValueError):
    """Malformed or missing input (empty serial, bad duration, unknown ids)."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class ConflictError(HolterClinicError):
    """
    Raised when a booking would overlap an existing reservation of the
    same holter or cable, or when a resource still in use is removed.
    """

    def __init__(
        self,
        message: str,
        resource_id: Optional[str] = None,
        appointment_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.resource_id = resource_id
        self.appointment_id = appointment_id


class NotFoundError(HolterClinicError, LookupError):
    """An operation referenced an id that does not exist."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} '{entity_id}' not found")
        self.entity = entity
        self.entity_id = entity_id
