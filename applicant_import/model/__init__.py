"""Applicant record model: field registry, enumerations, records, and dates."""

from applicant_import.model.applicant import REVIEW_COMMENT_PREFIX, Applicant, ApplicantBuilder
from applicant_import.model.dates import end_of_training, format_date, is_adult, parse_date
from applicant_import.model.enums import Degree, Religion, School
from applicant_import.model.fields import (
    Field,
    FieldType,
    default_value,
    is_required,
    label,
    matches_type,
    type_of,
)

__all__ = [
    "REVIEW_COMMENT_PREFIX",
    # Records
    "Applicant",
    "ApplicantBuilder",
    # Enumerations
    "Degree",
    # Registry
    "Field",
    "FieldType",
    "Religion",
    "School",
    "default_value",
    # Dates
    "end_of_training",
    "format_date",
    "is_adult",
    "is_required",
    "label",
    "matches_type",
    "parse_date",
    "type_of",
]
