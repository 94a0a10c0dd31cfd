"""Tests for the field registry and enumerations."""

from __future__ import annotations

import pytest

from applicant_import.model import (
    Degree,
    Field,
    FieldType,
    Religion,
    School,
    default_value,
    is_required,
    label,
    matches_type,
    type_of,
)

OPTIONAL_FIELDS = {
    Field.SPECIALIZATION,
    Field.FAX,
    Field.SCHOOL_ATTENDANCE_BEGIN,
    Field.SCHOOL_ATTENDANCE_END,
    Field.SCHOOL_ATTENDANCE_YEARS,
    Field.COMPANY_FAX,
    Field.NOTES,
    Field.SCHOOL_OTHER_TYPE,
    Field.SCHOOL_SPECIALIZATION,
    Field.DEGREE_ADDITIONAL_INFORMATION,
}


class TestRegistry:
    """Tests for registry lookups."""

    def test_field_count(self) -> None:
        """The registry holds 37 distinct fields."""
        assert len(Field) == 37

    @pytest.mark.parametrize("field", list(Field))
    def test_lookups_are_stable(self, field: Field) -> None:
        """Repeated queries return the same answers."""
        assert type_of(field) is type_of(field)
        assert is_required(field) == is_required(field)
        assert label(field) == label(field)

    def test_required_flags(self) -> None:
        """Exactly the fax, note, and supplementary school fields are optional."""
        optional = {field for field in Field if not is_required(field)}
        assert optional == OPTIONAL_FIELDS

    def test_labels_are_unique(self) -> None:
        """Each field has its own German label."""
        labels = [label(field) for field in Field]
        assert len(set(labels)) == len(labels)

    def test_selected_types(self) -> None:
        """Non-text fields declare their value types."""
        assert type_of(Field.RETRAINING) is FieldType.BOOLEAN
        assert type_of(Field.DURATION_OF_TRAINING) is FieldType.INTEGER
        assert type_of(Field.NATIONALITY) is FieldType.INTEGER
        assert type_of(Field.SCHOOL_ATTENDANCE_YEARS) is FieldType.INTEGER
        assert type_of(Field.GENDER) is FieldType.CHARACTER
        assert type_of(Field.RELIGION) is FieldType.RELIGION
        assert type_of(Field.DEGREE) is FieldType.DEGREE
        assert type_of(Field.SCHOOL) is FieldType.SCHOOL
        assert type_of(Field.ZIP_CODE) is FieldType.TEXT

    def test_property_access_matches_functions(self) -> None:
        """Enum properties and module functions agree."""
        assert Field.BIRTHDAY.label == label(Field.BIRTHDAY) == "Geburtstag"
        assert Field.FAX.required is False


class TestDefaults:
    """Tests for default values of unset fields."""

    @pytest.mark.parametrize(
        ("field", "expected"),
        [
            (Field.FIRST_NAME, ""),
            (Field.DURATION_OF_TRAINING, 0),
            (Field.RETRAINING, False),
            (Field.GENDER, "m"),
            (Field.RELIGION, Religion.OHNE_ANGABE),
            (Field.DEGREE, Degree.SONSTIGER_ABSCHLUSS),
            (Field.SCHOOL, School.SONSTIGES),
        ],
    )
    def test_default_value(self, field: Field, expected: object) -> None:
        """Each type has its neutral default."""
        assert default_value(field) == expected

    @pytest.mark.parametrize("field", list(Field))
    def test_default_matches_type(self, field: Field) -> None:
        """Defaults are valid values of their field."""
        assert matches_type(field, default_value(field))


class TestMatchesType:
    """Tests for value type checks."""

    def test_bool_is_not_an_integer(self) -> None:
        """``True`` is rejected for integer fields."""
        assert not matches_type(Field.DURATION_OF_TRAINING, True)
        assert matches_type(Field.DURATION_OF_TRAINING, 36)

    def test_character_needs_length_one(self) -> None:
        """Gender accepts single characters only."""
        assert matches_type(Field.GENDER, "w")
        assert not matches_type(Field.GENDER, "")
        assert not matches_type(Field.GENDER, "mw")

    def test_enumeration_members(self) -> None:
        """Enumeration fields accept only their own members."""
        assert matches_type(Field.DEGREE, Degree.FACHHOCHSCHULREIFE)
        assert not matches_type(Field.DEGREE, School.REALSCHULE)
        assert not matches_type(Field.RELIGION, 3)

    def test_text_rejects_numbers(self) -> None:
        """Zip codes are text to keep leading zeros."""
        assert matches_type(Field.ZIP_CODE, "01067")
        assert not matches_type(Field.ZIP_CODE, 1067)


class TestEnumerations:
    """Tests for enumeration codes."""

    def test_religion_codes(self) -> None:
        """Religion codes match BBS-Planung."""
        assert [religion.code for religion in Religion] == [0, 1, 3, 5, 6, 7, 8]
        assert Religion.from_code(6) is Religion.ISLAMISCH

    def test_religion_from_name_is_case_insensitive(self) -> None:
        """Display names are matched after trimming and case folding."""
        assert Religion.from_name(" katholisch ") is Religion.KATHOLISCH
        assert Religion.from_name("Keine") is Religion.KEINE
        assert Religion.from_name("pastafarian") is None

    def test_degree_and_school_codes(self) -> None:
        """Degree and school members carry two-letter ids."""
        assert Degree.SEKUNDAR_I_HAUPTSCHULE.code == "HK"
        assert Degree.SONSTIGER_ABSCHLUSS.code == "XS"
        assert School.OBERSCHULE.code == "OS"
        assert School.SONSTIGES.code == "XS"
        assert all(len(school.code) == 2 for school in School)
