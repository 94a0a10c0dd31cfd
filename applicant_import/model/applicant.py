"""Applicant records and their builder.

An :class:`Applicant` is an immutable snapshot of field values taken from one
registration form. Records are created through :class:`ApplicantBuilder`,
which enforces the declared type of every field at ``set`` time.

Example
-------
>>> builder = ApplicantBuilder()
>>> _ = builder.set(Field.FIRST_NAME, "Erika").set(Field.LAST_NAME, "Mustermann")
>>> applicant = builder.set_file_name("erika.pdf").build()
>>> str(applicant)
'Erika Mustermann'
>>> applicant.was_set(Field.BIRTHDAY)
False
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from applicant_import.config import setup_logging
from applicant_import.errors import InvalidArgumentError, ValidationFailure
from applicant_import.model.fields import Field, default_value, matches_type

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = setup_logging(__name__)

__all__ = ["REVIEW_COMMENT_PREFIX", "Applicant", "ApplicantBuilder"]

REVIEW_COMMENT_PREFIX = "Bitte die folgenden Felder überprüfen: "
_NO_INVALID_FIELDS = "KEINE"


class Applicant:
    """Immutable mapping of registry fields to values for one applicant.

    Attributes
    ----------
    file_name : str
        Identifier of the source document (usually the PDF file name).
    """

    __slots__ = ("_values", "file_name")

    def __init__(self, values: Mapping[Field, Any], file_name: str = "") -> None:
        self._values: Mapping[Field, Any] = MappingProxyType(dict(values))
        self.file_name = file_name

    def get(self, field: Field) -> Any:
        """Return the stored value, or the type default when ``field`` is unset."""
        if field in self._values:
            return self._values[field]
        return default_value(field)

    def was_set(self, field: Field) -> bool:
        """Return whether a value was stored for ``field``."""
        return field in self._values

    @property
    def values(self) -> Mapping[Field, Any]:
        """Read-only view of the stored values."""
        return self._values

    # -------------------------------------------------------------------------
    # Plausibility
    # -------------------------------------------------------------------------

    def invalid_fields(self) -> tuple[Field, ...]:
        """Return required fields that are unset or empty, in registry order."""
        return tuple(
            field
            for field in Field
            if field.required and (field not in self._values or self._values[field] in ("", None))
        )

    def check_plausibility(self) -> bool:
        """Check that every required field holds a non-empty value.

        Returns
        -------
        bool
            ``False`` if any stored value is ``None`` or a required field is
            unset or ``""``. Each problem is logged at WARNING level.
        """
        plausible = True
        for field, value in self._values.items():
            if value is None:
                logger.warning("%s: field %s holds no value", self.file_name, field.name)
                plausible = False
        for field in self.invalid_fields():
            logger.warning("%s: required field %s is missing or empty", self.file_name, field.name)
            plausible = False
        return plausible

    def build_review_comment(self) -> str:
        """Return the comment asking the reviewer to check invalid fields.

        Example
        -------
        ``"Bitte die folgenden Felder überprüfen: Vorname, Telefon"``, or
        ``"Bitte die folgenden Felder überprüfen: KEINE"`` for a complete record.
        """
        labels = [field.label for field in self.invalid_fields()]
        return REVIEW_COMMENT_PREFIX + (", ".join(labels) if labels else _NO_INVALID_FIELDS)

    def validate(self) -> ValidationFailure | None:
        """Return a :class:`ValidationFailure` for an implausible record, else ``None``."""
        if self.check_plausibility():
            return None
        return ValidationFailure(
            applicant=self,
            invalid_fields=self.invalid_fields(),
            message=self.build_review_comment(),
        )

    # -------------------------------------------------------------------------
    # Dunder helpers
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.get(Field.FIRST_NAME)} {self.get(Field.LAST_NAME)}"

    def __repr__(self) -> str:
        return f"Applicant({str(self)!r}, file_name={self.file_name!r}, fields={len(self._values)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Applicant):
            return NotImplemented
        return self.file_name == other.file_name and dict(self._values) == dict(other._values)

    def __hash__(self) -> int:
        return hash((self.file_name, frozenset(self._values.items())))


class ApplicantBuilder:
    """Accumulates field values and produces :class:`Applicant` snapshots.

    The builder stays usable after :meth:`build`; later changes do not affect
    records already built.
    """

    def __init__(self) -> None:
        self._values: dict[Field, Any] = {}
        self._file_name = ""

    def set(self, field: Field, value: Any) -> ApplicantBuilder:
        """Store ``value`` under ``field``, replacing any previous value.

        Parameters
        ----------
        field : Field
            Registry field.
        value : Any
            Value matching the field's declared type.

        Returns
        -------
        ApplicantBuilder
            ``self``, so calls can be chained.

        Raises
        ------
        InvalidArgumentError
            If ``field`` or ``value`` is ``None`` or the value does not match
            the declared type.
        """
        if field is None:
            msg = "Field must not be None"
            raise InvalidArgumentError(msg)
        if value is None:
            msg = f"Value for {field.name} must not be None"
            raise InvalidArgumentError(msg)
        if not matches_type(field, value):
            msg = (
                f"Value {value!r} ({type(value).__name__}) does not match "
                f"type {field.field_type.value} of {field.name}"
            )
            raise InvalidArgumentError(msg)
        self._values[field] = value
        return self

    def set_file_name(self, name: str) -> ApplicantBuilder:
        """Record the source document identifier."""
        if name is None:
            msg = "File name must not be None"
            raise InvalidArgumentError(msg)
        self._file_name = name
        return self

    def has_values(self) -> bool:
        """Return whether at least one field was stored."""
        return bool(self._values)

    def build(self) -> Applicant:
        """Return an immutable snapshot of the values stored so far."""
        return Applicant(self._values, self._file_name)
