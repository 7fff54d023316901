"""
Unit tests for return-date arithmetic and the shared conflict predicate.
"""

from datetime import datetime, time

import pytest

from holter_clinic.domain.entities import AppointmentStatus
from holter_clinic.services.availability import compute_return_date, find_conflict
from tests.factories.repository_factories import AppointmentRepositoryFactory


@pytest.fixture
def mock_reader():
    return AppointmentRepositoryFactory.create_mock_reader()


class TestComputeReturnDate:
    def test_keeps_install_time_of_day(self):
        result = compute_return_date(datetime(2024, 7, 20, 10, 0), 2)

        assert result == datetime(2024, 7, 22, 10, 0)

    def test_override_replaces_hour_and_minute(self):
        result = compute_return_date(
            datetime(2024, 7, 20, 10, 15, 42), 1, time(18, 30)
        )

        assert result == datetime(2024, 7, 21, 18, 30)

    def test_crosses_month_boundary(self):
        assert compute_return_date(datetime(2024, 7, 30, 9, 0), 3) == datetime(
            2024, 8, 2, 9, 0
        )


class TestFindConflict:
    def test_overlapping_scheduled_appointment_conflicts(
        self, mock_reader, appointment_factory
    ):
        existing = appointment_factory()
        mock_reader.get_by_resource.return_value = [existing]

        result = find_conflict(
            mock_reader,
            "HR-1",
            False,
            datetime(2024, 7, 21, 10, 0),
            datetime(2024, 7, 23, 10, 0),
        )

        assert result is existing
        mock_reader.get_by_resource.assert_called_once_with("HR-1", False)

    @pytest.mark.parametrize(
        "status", [AppointmentStatus.COMPLETED, AppointmentStatus.RETURNED]
    )
    def test_finished_appointments_never_block(
        self, mock_reader, appointment_factory, status
    ):
        mock_reader.get_by_resource.return_value = [appointment_factory(status=status)]

        assert (
            find_conflict(
                mock_reader,
                "HR-1",
                False,
                datetime(2024, 7, 21, 10, 0),
                datetime(2024, 7, 23, 10, 0),
            )
            is None
        )

    def test_overdue_appointment_still_blocks(self, mock_reader, appointment_factory):
        existing = appointment_factory(status=AppointmentStatus.OVERDUE)
        mock_reader.get_by_resource.return_value = [existing]

        assert (
            find_conflict(
                mock_reader,
                "CBL-1",
                True,
                datetime(2024, 7, 20, 12, 0),
                datetime(2024, 7, 21, 12, 0),
            )
            is existing
        )

    def test_touching_boundary_is_free(self, mock_reader, appointment_factory):
        mock_reader.get_by_resource.return_value = [appointment_factory()]

        assert (
            find_conflict(
                mock_reader,
                "HR-1",
                False,
                datetime(2024, 7, 22, 10, 0),
                datetime(2024, 7, 23, 10, 0),
            )
            is None
        )
