from typing import List, Optional

from ..domain.entities import Patient
from ..domain.interfaces import IPatientRepository
from .base import InMemoryRepository


class PatientRepository(InMemoryRepository[Patient], IPatientRepository):
    """Patients are never mutated or deleted, so only ``add`` is exposed."""

    def __init__(self, patients: Optional[List[Patient]] = None) -> None:
        super().__init__(patients)

    def add(self, patient: Patient) -> Patient:
        if patient.id in self._items:
            raise ValueError(f"Patient '{patient.id}' already exists")
        return self._store(patient)
