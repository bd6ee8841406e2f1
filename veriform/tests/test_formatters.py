from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from veriform.filling.actions import Formatted, FormattedWithFallback
from veriform.filling.formatters import format_boolean, format_date, format_value, stringify


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (True, True),
        ("true", True),
        ("TRUE", True),
        (False, False),
        ("false", False),
        ("yes", False),
        (1, False),
        (None, False),
        ("", False),
    ],
)
def test_boolean_fields_are_true_only_for_true_text(raw, expected):
    assert format_boolean(raw) == Formatted(expected)


def test_iso_timestamp_is_rendered_as_calendar_date():
    assert format_date("2020-01-15T00:00:00Z") == Formatted("2020-01-15")


def test_offset_timestamp_is_converted_to_utc_before_truncation():
    assert format_date("2020-01-15T23:30:00-05:00") == Formatted("2020-01-16")


def test_plain_date_string_is_accepted():
    assert format_date("1990-07-04").value == "1990-07-04"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("March 2020", "2020-03-01"), ("15 March", "2000-03-15"), ("July 4, 1990", "1990-07-04")],
)
def test_free_form_dates_do_not_depend_on_todays_date(raw, expected):
    assert format_date(raw) == Formatted(expected)


def test_epoch_milliseconds_are_accepted():
    assert format_date(0) == Formatted("1970-01-01")
    assert format_date(86_400_000) == Formatted("1970-01-02")


def test_date_and_datetime_objects_are_accepted():
    assert format_date(date(2001, 2, 3)) == Formatted("2001-02-03")
    aware = datetime(2001, 2, 3, 22, 0, tzinfo=timezone(timedelta(hours=-4)))
    assert format_date(aware) == Formatted("2001-02-04")


@pytest.mark.parametrize("raw", ["not-a-date", "", None, True, ["2020-01-01"]])
def test_unparsable_dates_fall_back_to_raw_value(raw):
    result = format_date(raw)

    assert isinstance(result, FormattedWithFallback)
    assert result.fell_back is True
    assert result.value == raw


def test_format_value_dispatches_by_field_name():
    assert format_value("birthDate", "2020-01-15T00:00:00Z").value == "2020-01-15"
    assert format_value("expiryDate", "2031-12-31").value == "2031-12-31"
    assert format_value("isAgeOver18", "true").value is True
    assert format_value("firstName", "Anna") == Formatted("Anna")
    assert format_value("documentNumber", 12345) == Formatted("12345")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(True, "true"), (False, "false"), (None, ""), (42, "42"), (1.5, "1.5"), ("Anna", "Anna")],
)
def test_stringify_renders_json_scalars(raw, expected):
    assert stringify(raw) == expected
