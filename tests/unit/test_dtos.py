"""
Unit tests for request DTO parsing helpers.
"""

from datetime import date, datetime, time, timedelta, timezone

import pytest

from holter_clinic.core.exceptions import ValidationError
from holter_clinic.schemas.dtos import (
    BookingRequest,
    normalize_day,
    normalize_install_date,
    parse_return_time,
)


class TestParseReturnTime:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("18:30", time(18, 30)),
            (" 07:05 ", time(7, 5)),
            (time(9, 15, 30), time(9, 15)),
            (None, None),
            ("", None),
        ],
    )
    def test_valid_values(self, value, expected):
        assert parse_return_time(value) == expected

    @pytest.mark.parametrize("value", ["24:00", "9", "ab:cd", "12:60", 1830])
    def test_malformed_values(self, value):
        with pytest.raises(ValidationError) as exc_info:
            parse_return_time(value)

        assert exc_info.value.field == "return_time_override"


class TestNormalizeInstallDate:
    def test_naive_datetime_is_kept(self):
        moment = datetime(2024, 7, 20, 10, 0)

        assert normalize_install_date(moment) == moment

    def test_aware_datetime_becomes_naive(self):
        moment = datetime(2024, 7, 20, 10, 0, tzinfo=timezone(timedelta(hours=2)))

        result = normalize_install_date(moment)

        assert result.tzinfo is None

    def test_date_means_midnight(self):
        assert normalize_install_date(date(2024, 7, 20)) == datetime(2024, 7, 20)

    def test_rejects_strings(self):
        with pytest.raises(ValidationError):
            normalize_install_date("2024-07-20T10:00")


def test_normalize_day_variants():
    assert normalize_day(date(2024, 7, 18)) == "2024-07-18"
    assert normalize_day(datetime(2024, 7, 18, 23, 59)) == "2024-07-18"
    assert normalize_day(" 2024-07-18 ") == "2024-07-18"


def test_booking_request_validate_normalizes_in_place():
    request = BookingRequest(
        patient_id="p1",
        holter_id="HR-1",
        cable_id="CBL-1",
        install_date=date(2024, 7, 20),
        duration_days=1,
        additional_services=None,
        return_time_override="08:00",
    )

    request.validate()

    assert request.install_date == datetime(2024, 7, 20)
    assert request.return_time_override == time(8, 0)
    assert request.additional_services == []


def test_booking_request_services_come_from_catalogue():
    request = BookingRequest(
        patient_id="p1",
        holter_id="HR-1",
        cable_id="CBL-1",
        install_date=datetime(2024, 7, 20),
        duration_days=1,
        additional_services=["Echo", "ECG", "Echo"],
    )
    request.validate()

    assert request.additional_services == ["Echo", "ECG"]

    request.additional_services = ["ECG", "Massage"]
    with pytest.raises(ValidationError) as exc_info:
        request.validate()

    assert exc_info.value.field == "additional_services"


def test_booking_request_requires_ids():
    request = BookingRequest(
        patient_id=" ",
        holter_id="HR-1",
        cable_id="CBL-1",
        install_date=datetime(2024, 7, 20),
        duration_days=1,
    )

    with pytest.raises(ValidationError) as exc_info:
        request.validate()

    assert exc_info.value.field == "patient_id"
