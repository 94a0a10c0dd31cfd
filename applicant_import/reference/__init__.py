"""Reference tables and the converters built on them."""

from applicant_import.reference.converters import (
    NationalityConverter,
    PostalConverter,
    ReferenceData,
    VocationConverter,
    best_match,
    default_reference_data,
)
from applicant_import.reference.tables import ReferenceTable, load_reference_csv, open_dataset

__all__ = [
    "NationalityConverter",
    "PostalConverter",
    "ReferenceData",
    "ReferenceTable",
    "VocationConverter",
    "best_match",
    "default_reference_data",
    "load_reference_csv",
    "open_dataset",
]
