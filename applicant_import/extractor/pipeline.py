"""Decode raw form field pairs into applicant records.

The pipeline receives the ``(qualified name, raw value)`` pairs of one
registration form and turns them into an :class:`Applicant`. Each pair is
handled by at most one rule:

* Control buttons (``"Formular drucken"``, ``"Senden"``) are skipped.
* Plain text fields listed in ``field_names`` are copied verbatim; ``None``
  and the stray byte-order-mark literal ``"þÿ"`` become ``""``.
* Special fields (retraining, gender, training duration, religion,
  nationality, degree, previous school, years of school attendance) have
  dedicated decoders.
* Unknown names are ignored.

A :class:`FieldDecodeError` from any decoder is logged and leaves the field
unset; the remaining pairs are still processed.

Example
-------
>>> outcome = extract_applicant([("Vorname", "Erika"), ("Umschueler", "UmschuelerNein")], "erika.pdf")
>>> outcome.kind
<OutcomeKind.APPLICANT: 'applicant'>
>>> outcome.applicant.get(Field.RETRAINING)
False
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import TYPE_CHECKING, Any

from applicant_import.config import get_extraction_config, setup_logging
from applicant_import.errors import FieldDecodeError
from applicant_import.model.applicant import Applicant, ApplicantBuilder
from applicant_import.model.enums import Degree, Religion, School
from applicant_import.model.fields import Field
from applicant_import.reference.converters import default_reference_data

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from applicant_import.reference.converters import NationalityConverter

logger = setup_logging(__name__)

__all__ = [
    "ExtractionOutcome",
    "FormRules",
    "OutcomeKind",
    "decode_degree",
    "decode_duration",
    "decode_gender",
    "decode_nationality",
    "decode_religion",
    "decode_retraining",
    "decode_school",
    "decode_school_years",
    "decode_text",
    "extract_applicant",
    "get_form_rules",
]

MONTHS_PER_YEAR = 12


# =============================================================================
# Outcome Types
# =============================================================================


class OutcomeKind(Enum):
    """Classification of one processed document."""

    APPLICANT = "applicant"
    EMPTY = "empty"
    UNREADABLE = "unreadable"


@dataclass(frozen=True)
class ExtractionOutcome:
    """Result of decoding one document.

    ``applicant`` is set only for :attr:`OutcomeKind.APPLICANT`.
    """

    kind: OutcomeKind
    document_id: str
    applicant: Applicant | None = None

    @property
    def is_applicant(self) -> bool:
        """Whether the document yielded a record."""
        return self.kind is OutcomeKind.APPLICANT


# =============================================================================
# Form Rules
# =============================================================================


@dataclass(frozen=True)
class FormRules:
    """Decoding rules read from ``config/extraction.json``.

    Attributes
    ----------
    field_names : Mapping[str, Field]
        Plain text form names and the fields they fill.
    ignored_values : frozenset[str]
        Values that mark a control button rather than data.
    bom_literal : str
        Byte-order mark text some form versions store instead of an empty value.
    special_fields : Mapping[str, str]
        Rule key (``"gender"``, ``"religion"``, ...) to form field name.
    retraining_choices : Mapping[str, bool]
        Radio button states of the retraining field.
    gender_choices : frozenset[str]
        Accepted gender characters.
    missing_sentinel : str
        Value of an unselected combo box.
    religion_codes, degree_codes, school_codes : Mapping
        Form code tables resolved to enumeration members.
    """

    field_names: Mapping[str, Field]
    ignored_values: frozenset[str] = frozenset()
    bom_literal: str = "þÿ"
    special_fields: Mapping[str, str] = field(default_factory=dict)
    retraining_choices: Mapping[str, bool] = field(default_factory=dict)
    gender_choices: frozenset[str] = frozenset({"m", "w"})
    missing_sentinel: str = "-1"
    religion_codes: Mapping[int, Religion] = field(default_factory=dict)
    degree_codes: Mapping[str, Degree] = field(default_factory=dict)
    school_codes: Mapping[str, School] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> FormRules:
        """Build rules from a parsed ``extraction.json`` document.

        Raises
        ------
        KeyError
            If the configuration names an unknown field or enumeration member.
        """
        names = {
            name: Field[target]
            for name, target in config.get("field_names", {}).items()
            if not name.startswith("_")
        }
        choices = config.get("choices", {})
        tables = config.get("code_tables", {})
        return cls(
            field_names=names,
            ignored_values=frozenset(config.get("ignored_values", [])),
            bom_literal=config.get("bom_literal", "þÿ"),
            special_fields=dict(config.get("special_fields", {})),
            retraining_choices=dict(choices.get("retraining", {})),
            gender_choices=frozenset(choices.get("gender", ["m", "w"])),
            missing_sentinel=config.get("missing_sentinel", "-1"),
            religion_codes={int(code): Religion[name] for code, name in tables.get("religion", {}).items()},
            degree_codes={code: Degree[name] for code, name in tables.get("degree", {}).items()},
            school_codes={code: School[name] for code, name in tables.get("school", {}).items()},
        )


_form_rules_cache: FormRules | None = None


def get_form_rules() -> FormRules:
    """Return the rules from ``config/extraction.json`` (cached)."""
    global _form_rules_cache
    if _form_rules_cache is None:
        _form_rules_cache = FormRules.from_config(get_extraction_config())
    return _form_rules_cache


# =============================================================================
# Decoders
# =============================================================================


def _is_blank(raw: str | None) -> bool:
    return raw is None or not raw.strip()


def decode_text(raw: str | None, rules: FormRules) -> str:
    """Return a plain text value; ``None`` and the BOM literal become ``""``."""
    if raw is None or raw == rules.bom_literal:
        return ""
    return raw


def decode_retraining(raw: str | None, rules: FormRules) -> bool:
    """Decode the retraining radio button state."""
    if raw in rules.retraining_choices:
        return rules.retraining_choices[raw]
    raise FieldDecodeError(Field.RETRAINING, raw, "unknown retraining choice")


def decode_gender(raw: str | None, rules: FormRules) -> str:
    """Decode the gender radio button state (``"m"`` or ``"w"``)."""
    if raw in rules.gender_choices:
        return raw
    raise FieldDecodeError(Field.GENDER, raw, "unknown gender choice")


def decode_duration(raw: str | None, rules: FormRules) -> int:
    """Convert a training duration in years to whole months.

    The form uses a decimal comma (``"3,5"`` is 42 months). The result is
    truncated toward zero. The unselected sentinel, ``None``, and blank input
    give ``0``.
    """
    if _is_blank(raw) or raw == rules.missing_sentinel:
        return 0
    try:
        years = Decimal(raw.strip().replace(",", "."))
    except InvalidOperation as e:
        raise FieldDecodeError(Field.DURATION_OF_TRAINING, raw, "not a decimal number") from e
    if not years.is_finite():
        raise FieldDecodeError(Field.DURATION_OF_TRAINING, raw, "not a finite number")
    return int(years * MONTHS_PER_YEAR)


def decode_religion(raw: str | None, rules: FormRules) -> Religion:
    """Decode the denomination combo box.

    The box normally stores a numeric code. Some form versions store the
    display name instead, which is matched against the member names; an
    unknown name falls back to :attr:`Religion.OHNE_ANGABE`. A numeric code
    outside the code table is a decode error.
    """
    if _is_blank(raw) or raw == rules.missing_sentinel:
        return Religion.OHNE_ANGABE
    text = raw.strip()
    try:
        code = int(text)
    except ValueError:
        religion = Religion.from_name(text)
        if religion is None:
            logger.info("Unknown denomination %r, using %s", text, Religion.OHNE_ANGABE.name)
            return Religion.OHNE_ANGABE
        return religion
    if code not in rules.religion_codes:
        raise FieldDecodeError(Field.RELIGION, raw, "unknown denomination code")
    return rules.religion_codes[code]


def decode_nationality(raw: str | None, converter: NationalityConverter) -> int:
    """Decode nationality as a state number, guessing from free text if needed."""
    if raw is None:
        return 0
    try:
        return int(raw.strip())
    except ValueError:
        return converter.convert(raw)


def decode_degree(raw: str | None, rules: FormRules) -> Degree:
    """Map the degree form code; unknown codes fall back to ``SONSTIGER_ABSCHLUSS``."""
    if raw is None:
        return Degree.SONSTIGER_ABSCHLUSS
    if raw not in rules.degree_codes:
        logger.warning("Invalid degree: %s", raw)
        return Degree.SONSTIGER_ABSCHLUSS
    return rules.degree_codes[raw]


def decode_school(raw: str | None, rules: FormRules) -> School:
    """Map the school form code; unknown codes fall back to ``SONSTIGES``."""
    if raw is None:
        return School.SONSTIGES
    if raw not in rules.school_codes:
        logger.warning("Invalid school type: %s", raw)
        return School.SONSTIGES
    return rules.school_codes[raw]


def decode_school_years(raw: str | None, rules: FormRules) -> int | None:
    """Decode the number of school years; blank input leaves the field unset."""
    if _is_blank(raw):
        return None
    try:
        return int(raw.strip())
    except ValueError as e:
        raise FieldDecodeError(Field.SCHOOL_ATTENDANCE_YEARS, raw, "not an integer") from e


# =============================================================================
# Pipeline
# =============================================================================


def _special_decoders(
    rules: FormRules,
    nationality_converter: NationalityConverter,
) -> dict[str, tuple[Field, Callable[[str | None], Any]]]:
    """Map special form names to their target field and decoder."""
    by_rule: dict[str, tuple[Field, Callable[[str | None], Any]]] = {
        "retraining": (Field.RETRAINING, lambda raw: decode_retraining(raw, rules)),
        "gender": (Field.GENDER, lambda raw: decode_gender(raw, rules)),
        "duration": (Field.DURATION_OF_TRAINING, lambda raw: decode_duration(raw, rules)),
        "religion": (Field.RELIGION, lambda raw: decode_religion(raw, rules)),
        "nationality": (Field.NATIONALITY, lambda raw: decode_nationality(raw, nationality_converter)),
        "degree": (Field.DEGREE, lambda raw: decode_degree(raw, rules)),
        "school": (Field.SCHOOL, lambda raw: decode_school(raw, rules)),
        "school_years": (Field.SCHOOL_ATTENDANCE_YEARS, lambda raw: decode_school_years(raw, rules)),
    }
    return {form_name: by_rule[key] for key, form_name in rules.special_fields.items() if key in by_rule}


def extract_applicant(
    fields: Iterable[tuple[str, str | None]] | None,
    document_id: str,
    *,
    nationality_converter: NationalityConverter | None = None,
    field_names: Mapping[str, Field] | None = None,
) -> ExtractionOutcome:
    """Decode the form field pairs of one document.

    Parameters
    ----------
    fields : Iterable[tuple[str, str | None]] | None
        Ordered ``(qualified name, raw value)`` pairs, or ``None`` when the
        document has no form.
    document_id : str
        Source identifier stored as the record's file name.
    nationality_converter : NationalityConverter, optional
        Used to guess state numbers from free-text nationalities. Defaults
        to the shared converter from :func:`default_reference_data`.
    field_names : Mapping[str, Field], optional
        Overrides the plain text name mapping from configuration.

    Returns
    -------
    ExtractionOutcome
        ``UNREADABLE`` if ``fields`` is ``None``, ``EMPTY`` if no pair
        produced a value, ``APPLICANT`` otherwise.
    """
    if fields is None:
        logger.warning("%s: no form data found", document_id)
        return ExtractionOutcome(OutcomeKind.UNREADABLE, document_id)

    rules = get_form_rules()
    if nationality_converter is None:
        nationality_converter = default_reference_data().nationality
    text_fields = rules.field_names if field_names is None else field_names
    special = _special_decoders(rules, nationality_converter)

    builder = ApplicantBuilder().set_file_name(document_id)
    for name, raw in fields:
        if raw in rules.ignored_values:
            continue
        if name in special:
            target, decoder = special[name]
            try:
                value = decoder(raw)
            except FieldDecodeError as e:
                logger.warning("%s: %s", document_id, e)
                continue
            if value is not None:
                builder.set(target, value)
        elif name in text_fields:
            builder.set(text_fields[name], decode_text(raw, rules))
        logger.debug("%s: %s = %r", document_id, name, raw)

    if not builder.has_values():
        logger.info("%s: form contains no applicant data", document_id)
        return ExtractionOutcome(OutcomeKind.EMPTY, document_id)

    applicant = builder.build()
    logger.info("Added applicant registration: %s", applicant)
    return ExtractionOutcome(OutcomeKind.APPLICANT, document_id, applicant)
