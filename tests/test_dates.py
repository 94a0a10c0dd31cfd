"""Tests for date parsing, age checks, and end of training."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

import pytest
from dateutil.relativedelta import relativedelta

from applicant_import.model import ApplicantBuilder, Field, end_of_training, format_date, is_adult, parse_date


def _training(start: str | None, months: int | None) -> Any:
    builder = ApplicantBuilder()
    if start is not None:
        builder.set(Field.START_OF_TRAINING, start)
    if months is not None:
        builder.set(Field.DURATION_OF_TRAINING, months)
    return builder.build()


def _born(birthday: str) -> Any:
    return ApplicantBuilder().set(Field.BIRTHDAY, birthday).build()


class TestParseDate:
    """Tests for parse_date and format_date."""

    def test_parses_without_leading_zeros(self) -> None:
        """Single-digit day and month are accepted."""
        assert parse_date("1.8.2014") == date(2014, 8, 1)

    @pytest.mark.parametrize("text", ["", "   ", None, "1-1-2012", "31.02.2014", "morgen"])
    def test_invalid_input(self, text: str | None) -> None:
        """Empty or malformed input gives None."""
        assert parse_date(text) is None

    def test_format_pads(self) -> None:
        """Formatting always uses two-digit day and month."""
        assert format_date(date(2016, 2, 9)) == "09.02.2016"


class TestEndOfTraining:
    """Tests for end_of_training."""

    @pytest.mark.parametrize(
        ("start", "months", "expected"),
        [
            ("01.09.1999", 36, "31.08.2002"),
            ("1.8.2014", 30, "31.01.2017"),
            ("01.9.2012", 42, "29.02.2016"),
        ],
    )
    def test_end_date(self, start: str, months: int, expected: str) -> None:
        """Start plus duration minus one day."""
        assert end_of_training(_training(start, months)) == expected

    @pytest.mark.parametrize(
        ("start", "months"),
        [("1-1-2012", 36), ("01.08.2014", 0), (None, 36), ("01.08.2014", None), ("", 12)],
    )
    def test_missing_or_invalid(self, start: str | None, months: int | None) -> None:
        """Missing, zero, or unparseable input gives an empty string."""
        assert end_of_training(_training(start, months)) == ""


class TestIsAdult:
    """Tests for is_adult relative to the current date."""

    def test_one_day_past_eighteenth_birthday(self) -> None:
        """Eighteen years and one day ago is adult."""
        birthday = date.today() - relativedelta(years=18) - timedelta(days=1)
        assert is_adult(_born(format_date(birthday)))

    def test_one_day_before_eighteenth_birthday(self) -> None:
        """Eighteen years minus one day ago is not adult."""
        birthday = date.today() - relativedelta(years=18) + timedelta(days=1)
        assert not is_adult(_born(format_date(birthday)))

    def test_explicit_reference_date(self) -> None:
        """The reference date can be passed in."""
        applicant = _born("12.03.1990")
        assert is_adult(applicant, today=date(2008, 3, 13))
        assert not is_adult(applicant, today=date(2008, 3, 12))

    @pytest.mark.parametrize("birthday", ["", "unbekannt", "1990-03-12"])
    def test_unparseable_birthday(self, birthday: str) -> None:
        """Unparseable birthdays are never adult."""
        assert not is_adult(_born(birthday))

    def test_missing_birthday(self) -> None:
        """A record without birthday is not adult."""
        assert not is_adult(ApplicantBuilder().build())
