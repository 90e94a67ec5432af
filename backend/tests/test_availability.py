import pytest

from conftest import CENTER_HOURS, MONDAY, SATURDAY, SUNDAY
from roomhub.scheduling import (
    ClosedDay,
    InvalidRange,
    OutOfHours,
    is_open_on,
    timetable_range,
    validate_window,
)


def test_closed_day_is_rejected():
    with pytest.raises(ClosedDay):
        validate_window({"sunday": {"closed": True}}, SUNDAY, "10:00", "11:00")


def test_out_of_hours_is_rejected():
    hours = {"monday": {"open": "08:00", "close": "18:00", "closed": False}}
    with pytest.raises(OutOfHours) as excinfo:
        validate_window(hours, MONDAY, "07:00", "09:00")
    assert str(excinfo.value) == "Booking must be between 08:00 and 18:00"


def test_opening_bounds_are_inclusive():
    hours = {"monday": {"open": "08:00", "close": "18:00", "closed": False}}
    validate_window(hours, MONDAY, "08:00", "18:00")


def test_late_end_is_rejected():
    with pytest.raises(OutOfHours):
        validate_window(CENTER_HOURS, SATURDAY, "15:00", "16:30")


def test_missing_day_counts_as_closed():
    with pytest.raises(ClosedDay):
        validate_window({"monday": {"open": "08:00", "close": "18:00"}}, SUNDAY, "10:00", "11:00")


def test_day_without_closed_flag_is_open():
    validate_window({"monday": {"open": "08:00", "close": "18:00"}}, MONDAY, "09:00", "10:00")


@pytest.mark.parametrize("start, end", [("10:00", "10:00"), ("11:00", "10:00")])
def test_empty_or_inverted_range_is_rejected(start, end):
    with pytest.raises(InvalidRange):
        validate_window(CENTER_HOURS, MONDAY, start, end)


@pytest.mark.parametrize("start, end", [("25:00", "26:00"), ("09:60", "10:00")])
def test_impossible_clock_time_is_rejected(start, end):
    with pytest.raises(InvalidRange):
        validate_window(CENTER_HOURS, MONDAY, start, end)


def test_no_hours_configured_only_checks_range():
    validate_window(None, SUNDAY, "06:00", "23:00")
    validate_window({}, SUNDAY, "06:00", "23:00")
    with pytest.raises(InvalidRange):
        validate_window(None, SUNDAY, "12:00", "11:00")


def test_is_open_on():
    window = is_open_on(CENTER_HOURS, SATURDAY)
    assert window.open
    assert (window.open_time, window.close_time) == ("09:00", "16:00")
    assert not is_open_on(CENTER_HOURS, SUNDAY).open


def test_timetable_range():
    assert timetable_range(CENTER_HOURS) == (8, 18)
    assert timetable_range(None) == (8, 19)
    assert timetable_range({}) == (8, 19)
    assert timetable_range({"sunday": {"closed": True}}) == (8, 21)
    assert timetable_range({"friday": {"open": "07:30", "close": "20:45"}}) == (7, 20)
