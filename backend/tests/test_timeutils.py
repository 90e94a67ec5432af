from datetime import date
from decimal import Decimal

import pytest

from roomhub.scheduling.timeutils import (
    FRENCH_DAY_NAMES,
    format_decimal_hour,
    duration_hours,
    localized_day_to_key,
    normalize_hhmm,
    parse_hhmm,
    shift_interval,
    to_decimal_hour,
    week_days,
    week_number,
    week_range,
    weekday_key,
)


@pytest.mark.parametrize(
    "french, english",
    [
        ("lundi", "monday"),
        ("mardi", "tuesday"),
        ("mercredi", "wednesday"),
        ("jeudi", "thursday"),
        ("vendredi", "friday"),
        ("samedi", "saturday"),
        ("dimanche", "sunday"),
    ],
)
def test_french_day_names_map_to_storage_keys(french, english):
    assert localized_day_to_key(french) == english
    assert localized_day_to_key(french.capitalize()) == english


def test_french_day_table_is_complete():
    assert len(FRENCH_DAY_NAMES) == 7
    assert set(FRENCH_DAY_NAMES.values()) == {
        "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
    }


def test_unknown_day_name_raises():
    with pytest.raises(KeyError):
        localized_day_to_key("funday")


def test_parse_hhmm():
    assert parse_hhmm("00:00") == 0
    assert parse_hhmm("09:30") == 570
    assert parse_hhmm("24:00") == 1440


@pytest.mark.parametrize("value", ["9h30", "25:00", "10:60", "24:30", "", "abc"])
def test_parse_hhmm_rejects_garbage(value):
    with pytest.raises(ValueError):
        parse_hhmm(value)


def test_normalize_pads_hours():
    assert normalize_hhmm("9:05") == "09:05"


def test_decimal_hours():
    assert to_decimal_hour("09:30") == 9.5
    assert format_decimal_hour(13.75) == "13:45"
    assert format_decimal_hour(8.999) == "09:00"


def test_duration_hours_is_exact():
    assert duration_hours("09:00", "11:30") == Decimal("2.5")


def test_shift_interval_keeps_duration():
    assert shift_interval("09:00", "10:30", "14:15") == ("14:15", "15:45")


def test_shift_interval_past_midnight_fails():
    with pytest.raises(ValueError):
        shift_interval("09:00", "12:00", "23:00")


def test_week_helpers():
    wednesday = date(2030, 1, 9)
    days = week_days(wednesday)
    assert days[0] == date(2030, 1, 7)
    assert days[-1] == date(2030, 1, 13)
    assert [weekday_key(d) for d in days][0] == "monday"
    assert week_range(wednesday) == (date(2030, 1, 7), date(2030, 1, 13))
    assert week_number(wednesday) == 2
