"""Registry of the data fields carried by an applicant record.

Each :class:`Field` member declares the Python type of its value, whether the
field must be filled for a record to be plausible, and the German label shown
in review comments.

Example
-------
>>> Field.BIRTHDAY.label
'Geburtstag'
>>> type_of(Field.DURATION_OF_TRAINING)
<FieldType.INTEGER: 'integer'>
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from applicant_import.model.enums import Degree, Religion, School

__all__ = [
    "Field",
    "FieldType",
    "default_value",
    "is_required",
    "label",
    "matches_type",
    "type_of",
]


class FieldType(Enum):
    """Declared value type of a registry field."""

    TEXT = "text"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    CHARACTER = "character"
    RELIGION = "religion"
    DEGREE = "degree"
    SCHOOL = "school"


_T = FieldType


class Field(Enum):
    """Data fields of an applicant record as ``(type, required, label)``."""

    FIRST_NAME = (_T.TEXT, True, "Vorname")
    LAST_NAME = (_T.TEXT, True, "Nachname")
    VOCATION = (_T.TEXT, True, "Ausbildungsberuf")
    SPECIALIZATION = (_T.TEXT, False, "Vertiefungsrichtung")
    ADDRESS = (_T.TEXT, True, "Adresse")
    RETRAINING = (_T.BOOLEAN, True, "Umschüler")
    START_OF_TRAINING = (_T.TEXT, True, "Ausbildungsbeginn")
    DURATION_OF_TRAINING = (_T.INTEGER, True, "Ausbildungsdauer")
    BIRTHDAY = (_T.TEXT, True, "Geburtstag")
    BIRTHPLACE = (_T.TEXT, True, "Geburtsort")
    RELIGION = (_T.RELIGION, True, "Konfession")
    ZIP_CODE = (_T.TEXT, True, "PLZ")
    CITY = (_T.TEXT, True, "Ort")
    PHONE = (_T.TEXT, True, "Telefon")
    FAX = (_T.TEXT, False, "Fax")
    EMAIL = (_T.TEXT, True, "E-Mail")
    NATIONALITY = (_T.INTEGER, True, "Staatsangehörigkeit")
    NAME_OF_LEGAL_GUARDIAN = (_T.TEXT, True, "Name der Erziehungsberechtigten")
    ADDRESS_OF_LEGAL_GUARDIAN = (_T.TEXT, True, "Adresse der Erziehungsberechtigten")
    PHONE_OF_LEGAL_GUARDIAN = (_T.TEXT, True, "Telefon der Erziehungsberechtigten")
    GENDER = (_T.CHARACTER, True, "Geschlecht")
    SCHOOL_ATTENDANCE_BEGIN = (_T.TEXT, False, "Beginn des Schulbesuch")
    SCHOOL_ATTENDANCE_END = (_T.TEXT, False, "Ende des Schulbesuch")
    SCHOOL_ATTENDANCE_YEARS = (_T.INTEGER, False, "Jahre des Schulbesuch")
    COMPANY_NAME = (_T.TEXT, True, "Name des Betrieb")
    COMPANY_ADDRESS = (_T.TEXT, True, "Adresse des Betrieb")
    COMPANY_ZIP_CODE = (_T.TEXT, True, "PLZ des Betrieb")
    COMPANY_CITY = (_T.TEXT, True, "Ort des Betrieb")
    COMPANY_TELEPHONE = (_T.TEXT, True, "Telefon des Betrieb")
    COMPANY_FAX = (_T.TEXT, False, "Fax des Betrieb")
    COMPANY_CONTACT_PERSON = (_T.TEXT, True, "Ansprechpartner des Betrieb")
    COMPANY_CONTACT_MAIL = (_T.TEXT, True, "Kontakt des Betrieb")
    NOTES = (_T.TEXT, False, "Bemerkungen")
    SCHOOL = (_T.SCHOOL, True, "Schulart")
    SCHOOL_OTHER_TYPE = (_T.TEXT, False, "Sonstige Schule")
    SCHOOL_SPECIALIZATION = (_T.TEXT, False, "Fachrichtung")
    DEGREE = (_T.DEGREE, True, "Erreichter Abschluss")
    DEGREE_ADDITIONAL_INFORMATION = (_T.TEXT, False, "Sonstiges Abschluss")

    @property
    def field_type(self) -> FieldType:
        """Declared value type."""
        return self.value[0]

    @property
    def required(self) -> bool:
        """Whether the field must be set and non-empty."""
        return self.value[1]

    @property
    def label(self) -> str:
        """German label used in review comments."""
        return self.value[2]


del _T


# =============================================================================
# Type checks and defaults
# =============================================================================

_DEFAULTS: dict[FieldType, Any] = {
    FieldType.TEXT: "",
    FieldType.INTEGER: 0,
    FieldType.BOOLEAN: False,
    FieldType.CHARACTER: "m",
    FieldType.RELIGION: Religion.OHNE_ANGABE,
    FieldType.DEGREE: Degree.SONSTIGER_ABSCHLUSS,
    FieldType.SCHOOL: School.SONSTIGES,
}

_ENUM_TYPES: dict[FieldType, type[Enum]] = {
    FieldType.RELIGION: Religion,
    FieldType.DEGREE: Degree,
    FieldType.SCHOOL: School,
}


def type_of(field: Field) -> FieldType:
    """Return the declared value type of ``field``."""
    return field.field_type


def is_required(field: Field) -> bool:
    """Return whether ``field`` must be filled for a plausible record."""
    return field.required


def label(field: Field) -> str:
    """Return the German label of ``field``."""
    return field.label


def default_value(field: Field) -> Any:
    """Return the value reported for ``field`` when it was never set.

    Parameters
    ----------
    field : Field
        Registry field.

    Returns
    -------
    Any
        ``""`` for text, ``0`` for integers, ``False`` for booleans, ``"m"``
        for characters, and the neutral member for enumerations.
    """
    return _DEFAULTS[field.field_type]


def matches_type(field: Field, value: object) -> bool:
    """Check whether ``value`` is acceptable for ``field``'s declared type.

    ``bool`` is rejected for integer fields even though it subclasses ``int``.
    Character fields accept a string of exactly one character.
    """
    field_type = field.field_type
    if field_type is FieldType.TEXT:
        return isinstance(value, str)
    if field_type is FieldType.INTEGER:
        return isinstance(value, int) and not isinstance(value, bool)
    if field_type is FieldType.BOOLEAN:
        return isinstance(value, bool)
    if field_type is FieldType.CHARACTER:
        return isinstance(value, str) and len(value) == 1
    return isinstance(value, _ENUM_TYPES[field_type])
