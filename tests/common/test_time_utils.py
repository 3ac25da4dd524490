from __future__ import annotations

from datetime import date

import pytest

from src.factory_worklog.factory_worklog.common.time_utils import (
    AM,
    PM,
    duration,
    format_minutes,
    generate_id,
    minutes_since_midnight,
    to_12_hour,
    to_24_hour,
    today_display,
)
from src.factory_worklog.factory_worklog.common import time_utils
from src.factory_worklog.factory_worklog.common.validators import normalize_digits, require_hh_mm
from src.factory_worklog.factory_worklog.core.exceptions import ValidationError
from src.factory_worklog.factory_worklog.records.model import new_empty_record


@pytest.mark.parametrize(
    "start,end,expected",
    [
        ("08:00", "16:00", "08:00"),
        ("22:00", "02:00", "04:00"),
        ("", "10:00", "00:00"),
        ("10:00", "", "00:00"),
        ("08:15", "08:15", "00:00"),
        ("07:45", "16:20", "08:35"),
    ],
)
def test_duration(start, end, expected):
    assert duration(start, end) == expected


def test_duration_is_monotonic_in_end_on_the_same_day():
    start = "06:30"
    previous = -1
    for end_min in range(minutes_since_midnight(start) + 1, 24 * 60, 17):
        value = minutes_since_midnight(duration(start, format_minutes(end_min)))
        assert value > previous
        previous = value


@pytest.mark.parametrize("value", ["", None, "abc", "12", "25:00", "-01:30", "10:75"])
def test_minutes_since_midnight_invalid_is_zero(value):
    assert minutes_since_midnight(value) == 0


def test_minutes_since_midnight():
    assert minutes_since_midnight("13:05") == 13 * 60 + 5


def test_12_hour_picker_conversion():
    assert to_12_hour("00:30") == (12, 30, AM)
    assert to_12_hour("12:00") == (12, 0, PM)
    assert to_12_hour("16:45") == (4, 45, PM)
    assert to_12_hour("") == (8, 0, AM)

    assert to_24_hour(12, 30, AM) == "00:30"
    assert to_24_hour(12, 0, PM) == "12:00"
    assert to_24_hour(4, 5, PM) == "16:05"


def test_generate_id_is_short_and_unique():
    ids = {generate_id() for _ in range(500)}
    assert len(ids) == 500
    assert all(len(i) == 9 and i.isalnum() for i in ids)


def test_normalize_digits_handles_persian_and_arabic_indic():
    assert normalize_digits("۴۷") == "47"
    assert normalize_digits("٤٧") == "47"
    assert normalize_digits("1۲3") == "123"


def test_require_hh_mm_pads_and_rejects_garbage():
    assert require_hh_mm("8:05", "entryTime") == "08:05"
    with pytest.raises(ValidationError):
        require_hh_mm("25:00", "entryTime")
    with pytest.raises(ValidationError):
        require_hh_mm("soon", "entryTime")


def test_out_of_range_stored_times_do_not_leak_into_durations():
    assert duration("25:00", "10:00") == "10:00"
    assert duration("-01:30", "02:00") == "02:00"


class _Nowruz1402(date):
    @classmethod
    def today(cls):
        return cls(2023, 3, 21)


def test_new_record_defaults_to_todays_jalali_date(monkeypatch):
    monkeypatch.setattr(time_utils, "date", _Nowruz1402)

    assert today_display() == "1402/01/01"
    assert new_empty_record().date == "1402/01/01"
