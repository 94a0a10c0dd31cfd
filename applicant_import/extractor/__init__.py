"""Extractor module for reading registration forms and decoding applicants.

Key exports:
    extract_applicant: Decode the field pairs of one form into an applicant
    ExtractionOutcome: Applicant, empty form, or unreadable document
    read_form_fields: pypdf adapter producing field pairs from a PDF
    import_directory: Decode every PDF form in a directory
    ImportWorker: Background import with progress reporting
"""

from applicant_import.extractor.importer import (
    ImportProgress,
    ImportResult,
    ImportWorker,
    find_form_files,
    import_directory,
)
from applicant_import.extractor.pdf_form import dump_form_fields, normalize_value, read_form_fields
from applicant_import.extractor.pipeline import (
    ExtractionOutcome,
    FormRules,
    OutcomeKind,
    extract_applicant,
    get_form_rules,
)

__all__ = [
    # Outcomes
    "ExtractionOutcome",
    "FormRules",
    # Import
    "ImportProgress",
    "ImportResult",
    "ImportWorker",
    "OutcomeKind",
    "dump_form_fields",
    # Pipeline
    "extract_applicant",
    "find_form_files",
    "get_form_rules",
    "import_directory",
    "normalize_value",
    # Form reading
    "read_form_fields",
]
