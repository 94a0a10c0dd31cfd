"""Tests for applicant records and the record builder.

Tests cover:
1. Builder argument checks and chaining
2. Snapshot semantics of build()
3. get/was_set for present, empty, and missing fields
4. Plausibility, invalid fields, and the review comment
"""

from __future__ import annotations

from typing import Any

import pytest

from applicant_import.errors import InvalidArgumentError, ValidationFailure
from applicant_import.model import REVIEW_COMMENT_PREFIX, ApplicantBuilder, Field, Religion

REQUIRED_FIELDS = [field for field in Field if field.required]


class TestApplicantBuilder:
    """Tests for ApplicantBuilder.set and build."""

    def test_set_is_chainable(self) -> None:
        """set returns the builder itself."""
        builder = ApplicantBuilder()
        assert builder.set(Field.FIRST_NAME, "Erika") is builder

    def test_set_rejects_none_value(self) -> None:
        """A None value is a programming error."""
        with pytest.raises(InvalidArgumentError):
            ApplicantBuilder().set(Field.FIRST_NAME, None)

    def test_set_rejects_none_field(self) -> None:
        """A None field is a programming error."""
        with pytest.raises(InvalidArgumentError):
            ApplicantBuilder().set(None, "Erika")  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            (Field.FIRST_NAME, 42),
            (Field.DURATION_OF_TRAINING, "36"),
            (Field.DURATION_OF_TRAINING, True),
            (Field.RETRAINING, "ja"),
            (Field.GENDER, "male"),
            (Field.RELIGION, 3),
        ],
    )
    def test_set_rejects_type_mismatch(self, field: Field, value: Any) -> None:
        """Values must match the declared field type."""
        with pytest.raises(InvalidArgumentError):
            ApplicantBuilder().set(field, value)

    def test_invalid_argument_is_value_error(self) -> None:
        """Callers may catch the builder error as ValueError."""
        with pytest.raises(ValueError, match="FIRST_NAME"):
            ApplicantBuilder().set(Field.FIRST_NAME, 1)

    def test_set_overwrites(self) -> None:
        """A second set replaces the first value."""
        applicant = ApplicantBuilder().set(Field.CITY, "Bremen").set(Field.CITY, "Osnabrück").build()
        assert applicant.get(Field.CITY) == "Osnabrück"

    def test_set_file_name_rejects_none(self) -> None:
        """The file name must be a string."""
        with pytest.raises(InvalidArgumentError):
            ApplicantBuilder().set_file_name(None)  # type: ignore[arg-type]

    def test_build_is_a_snapshot(self) -> None:
        """Later builder changes do not affect built records."""
        builder = ApplicantBuilder().set(Field.FIRST_NAME, "Erika")
        first = builder.build()
        builder.set(Field.FIRST_NAME, "Max")

        assert first.get(Field.FIRST_NAME) == "Erika"
        assert builder.build().get(Field.FIRST_NAME) == "Max"

    def test_values_are_read_only(self) -> None:
        """The record exposes an immutable mapping."""
        applicant = ApplicantBuilder().set(Field.FIRST_NAME, "Erika").build()
        with pytest.raises(TypeError):
            applicant.values[Field.FIRST_NAME] = "Max"  # type: ignore[index]


class TestApplicantAccess:
    """Tests for get, was_set, and string conversion."""

    def test_missing_field_returns_default(self) -> None:
        """Unset fields report their type default but not as set."""
        applicant = ApplicantBuilder().build()

        assert applicant.get(Field.RELIGION) is Religion.OHNE_ANGABE
        assert applicant.get(Field.DURATION_OF_TRAINING) == 0
        assert not applicant.was_set(Field.RELIGION)

    def test_empty_field_is_set(self) -> None:
        """An empty string is distinguishable from a missing value."""
        applicant = ApplicantBuilder().set(Field.FAX, "").build()

        assert applicant.was_set(Field.FAX)
        assert applicant.get(Field.FAX) == ""

    def test_str_is_full_name(self, complete_applicant: Any) -> None:
        """str() gives first and last name."""
        assert str(complete_applicant) == "Erika Mustermann"

    def test_file_name(self, complete_applicant: Any) -> None:
        """The source document identifier is kept."""
        assert complete_applicant.file_name == "erika.pdf"

    def test_equality(self, applicant_factory: Any) -> None:
        """Records with the same values and file name are equal."""
        assert applicant_factory() == applicant_factory()
        assert applicant_factory() != applicant_factory(first_name="Max")


class TestPlausibility:
    """Tests for check_plausibility, invalid_fields, and validate."""

    def test_complete_record_is_plausible(self, complete_applicant: Any) -> None:
        """All required fields filled means plausible."""
        assert complete_applicant.check_plausibility()
        assert complete_applicant.invalid_fields() == ()
        assert complete_applicant.validate() is None

    @pytest.mark.parametrize("field", REQUIRED_FIELDS, ids=lambda f: f.name)
    def test_missing_required_field(self, applicant_factory: Any, field: Field) -> None:
        """Removing any required field makes the record implausible."""
        applicant = applicant_factory(**{field.name.lower(): None})

        assert not applicant.check_plausibility()
        assert applicant.invalid_fields() == (field,)

    @pytest.mark.parametrize(
        "field",
        [field for field in REQUIRED_FIELDS if field.field_type.value == "text"],
        ids=lambda f: f.name,
    )
    def test_empty_required_text_field(self, applicant_factory: Any, field: Field) -> None:
        """An empty required text field makes the record implausible."""
        applicant = applicant_factory(**{field.name.lower(): ""})

        assert not applicant.check_plausibility()
        assert field in applicant.invalid_fields()

    def test_optional_fields_may_be_missing(self, applicant_factory: Any) -> None:
        """Optional fields do not affect plausibility."""
        applicant = applicant_factory(specialization=None, fax=None, notes=None)
        assert applicant.check_plausibility()

    def test_invalid_fields_in_registry_order(self, applicant_factory: Any) -> None:
        """Invalid fields are reported in registry order."""
        applicant = applicant_factory(email=None, first_name="", phone=None)
        assert applicant.invalid_fields() == (Field.FIRST_NAME, Field.PHONE, Field.EMAIL)

    def test_review_comment_lists_labels(self, applicant_factory: Any) -> None:
        """The review comment names the invalid fields by label."""
        applicant = applicant_factory(first_name="", phone=None)
        assert applicant.build_review_comment() == "Bitte die folgenden Felder überprüfen: Vorname, Telefon"

    def test_review_comment_without_problems(self, complete_applicant: Any) -> None:
        """A complete record yields the KEINE comment."""
        assert complete_applicant.build_review_comment() == REVIEW_COMMENT_PREFIX + "KEINE"

    def test_validate_returns_failure(self, applicant_factory: Any) -> None:
        """validate describes the problem as a value."""
        applicant = applicant_factory(city=None)
        failure = applicant.validate()

        assert isinstance(failure, ValidationFailure)
        assert failure.applicant is applicant
        assert failure.invalid_fields == (Field.CITY,)
        assert failure.message.endswith("Ort")

    def test_implausible_record_is_logged(self, applicant_factory: Any, caplog: pytest.LogCaptureFixture) -> None:
        """Each missing field is logged as a warning."""
        applicant = applicant_factory(city=None)
        with caplog.at_level("WARNING", logger="applicant_import.model.applicant"):
            applicant.check_plausibility()
        assert "CITY" in caplog.text
