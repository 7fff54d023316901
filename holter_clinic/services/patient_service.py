import logging
from typing import List, Optional

from ..domain.entities import Patient
from ..domain.interfaces import IPatientRepository
from ..schemas.dtos import PatientRegistrationRequest

logger = logging.getLogger(__name__)

UNKNOWN_PATIENT = "Unknown"


class PatientService:
    def __init__(self, repository: IPatientRepository):
        self.repository = repository

    def register_patient(self, request: PatientRegistrationRequest) -> Patient:
        """Register a new patient.

        Record numbers are clinic identifiers and are not checked for
        uniqueness.
        """
        request.validate()
        patient = Patient(
            id=f"p{self.repository.next_sequence('p')}",
            name=request.name.strip(),
            record_number=request.record_number.strip(),
            mobile_phone=request.mobile_phone.strip(),
            landline_phone=(request.landline_phone or "").strip(),
            age=request.age,
        )
        self.repository.add(patient)
        logger.info("Patient registered", extra={"context": {"patient_id": patient.id}})
        return patient

    def get_patient(self, patient_id: str) -> Optional[Patient]:
        return self.repository.get_by_id(patient_id)

    def list_patients(self) -> List[Patient]:
        return self.repository.list_all()

    def name_for(self, patient_id: str) -> str:
        patient = self.repository.get_by_id(patient_id)
        return patient.name if patient else UNKNOWN_PATIENT
