"""
Unit tests for PatientService and BlockedDateService.
"""

from datetime import date, datetime

import pytest

from holter_clinic.core.exceptions import ValidationError
from holter_clinic.repositories import BlockedDateRepository, PatientRepository
from holter_clinic.schemas.dtos import PatientRegistrationRequest
from holter_clinic.services.calendar_service import BlockedDateService
from holter_clinic.services.patient_service import UNKNOWN_PATIENT, PatientService
from tests.factories.repository_factories import PatientRepositoryFactory


class TestPatientService:
    def test_register_assigns_next_id(self, domain_patient):
        service = PatientService(PatientRepository([domain_patient]))

        patient = service.register_patient(
            PatientRegistrationRequest(
                name=" Emily Carter ",
                record_number="P003",
                mobile_phone="0912-333-3333",
                age=58,
            )
        )

        assert patient.id == "p2"
        assert patient.name == "Emily Carter"
        assert service.get_patient("p2") is patient

    def test_register_rejects_missing_name(self):
        repo = PatientRepositoryFactory.create_mock_full()
        service = PatientService(repo)

        with pytest.raises(ValidationError) as exc_info:
            service.register_patient(
                PatientRegistrationRequest(
                    name="", record_number="P009", mobile_phone="0912"
                )
            )

        assert exc_info.value.field == "name"
        repo.add.assert_not_called()

    def test_duplicate_record_numbers_are_allowed(self):
        service = PatientService(PatientRepository())
        request = PatientRegistrationRequest(
            name="A", record_number="P001", mobile_phone="1"
        )

        first = service.register_patient(request)
        second = service.register_patient(request)

        assert first.id != second.id

    def test_name_for_unknown_patient(self):
        service = PatientService(PatientRepository())

        assert service.name_for("p404") == UNKNOWN_PATIENT


class TestBlockedDateService:
    @pytest.fixture
    def service(self) -> BlockedDateService:
        return BlockedDateService(BlockedDateRepository(["2024-07-18"]))

    def test_add_accepts_date_and_string(self, service):
        service.add_blocked_date(date(2024, 7, 19))
        service.add_blocked_date("2024-07-25")

        assert service.list_blocked_dates() == [
            "2024-07-18",
            "2024-07-19",
            "2024-07-25",
        ]

    def test_add_is_idempotent(self, service):
        service.add_blocked_date("2024-07-18")

        assert service.list_blocked_dates() == ["2024-07-18"]

    def test_datetime_counts_as_its_day(self, service):
        assert service.is_blocked(datetime(2024, 7, 18, 16, 45))

    def test_remove_missing_day_is_noop(self, service):
        service.remove_blocked_date("2024-01-01")
        service.remove_blocked_date("2024-07-18")

        assert service.list_blocked_dates() == []

    def test_malformed_day_is_rejected(self, service):
        with pytest.raises(ValidationError):
            service.add_blocked_date("18/07/2024")
