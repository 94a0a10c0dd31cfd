"""Pytest configuration for applicant_import tests.

This module provides:
- Builders for complete and partial applicant records
- In-memory reference data so converter results are predictable
- A reference data bundle backed by the bundled CSV files
- A writer for small AcroForm PDFs built with pypdf
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv
from pypdf import PdfWriter
from pypdf.generic import ArrayObject, DictionaryObject, NameObject, TextStringObject

from applicant_import.model import ApplicantBuilder, Degree, Field, Religion, School
from applicant_import.reference import (
    NationalityConverter,
    PostalConverter,
    ReferenceData,
    ReferenceTable,
    VocationConverter,
)

PROJECT_ROOT = Path(__file__).parent.parent
load_dotenv(PROJECT_ROOT / ".env")


COMPLETE_VALUES: dict[Field, Any] = {
    Field.FIRST_NAME: "Erika",
    Field.LAST_NAME: "Mustermann",
    Field.VOCATION: "Tischlerin",
    Field.SPECIALIZATION: "",
    Field.ADDRESS: "Hauptstraße 5",
    Field.RETRAINING: False,
    Field.START_OF_TRAINING: "01.08.2014",
    Field.DURATION_OF_TRAINING: 36,
    Field.BIRTHDAY: "12.03.1990",
    Field.BIRTHPLACE: "Osnabrück",
    Field.RELIGION: Religion.KATHOLISCH,
    Field.ZIP_CODE: "49074",
    Field.CITY: "Osnabrück",
    Field.PHONE: "0541 12345",
    Field.EMAIL: "erika@example.org",
    Field.NATIONALITY: 0,
    Field.NAME_OF_LEGAL_GUARDIAN: "Max Mustermann",
    Field.ADDRESS_OF_LEGAL_GUARDIAN: "Nebenweg 2, 49080 Osnabrück",
    Field.PHONE_OF_LEGAL_GUARDIAN: "0541 54321",
    Field.GENDER: "w",
    Field.COMPANY_NAME: "Holzwerk GmbH",
    Field.COMPANY_ADDRESS: "Industriestraße 9",
    Field.COMPANY_ZIP_CODE: "49076",
    Field.COMPANY_CITY: "Osnabrück",
    Field.COMPANY_TELEPHONE: "0541 99999",
    Field.COMPANY_CONTACT_PERSON: "Herr Meyer",
    Field.COMPANY_CONTACT_MAIL: "meyer@holzwerk.example",
    Field.SCHOOL: School.REALSCHULE,
    Field.DEGREE: Degree.SEKUNDAR_I_REALSCHULE,
}


def build_applicant(values: dict[Field, Any] | None = None, file_name: str = "erika.pdf", **overrides: Any) -> Any:
    """Build an applicant from ``values`` with keyword overrides by field name.

    An override of ``None`` removes the field.
    """
    merged = dict(COMPLETE_VALUES if values is None else values)
    for name, value in overrides.items():
        field = Field[name.upper()]
        if value is None:
            merged.pop(field, None)
        else:
            merged[field] = value
    builder = ApplicantBuilder().set_file_name(file_name)
    for field, value in merged.items():
        builder.set(field, value)
    return builder.build()


@pytest.fixture
def complete_applicant() -> Any:
    """Applicant with every required field filled."""
    return build_applicant()


@pytest.fixture
def applicant_factory() -> Any:
    """Return :func:`build_applicant` for tests that need variations."""
    return build_applicant


def make_table(name: str, entries: dict[Any, str]) -> ReferenceTable[Any]:
    """Reference table served from memory."""
    return ReferenceTable(name, lambda: dict(entries))


@pytest.fixture
def small_reference() -> ReferenceData:
    """Reference data with a handful of entries per table."""
    return ReferenceData(
        nationality=NationalityConverter(
            make_table("nationality", {"Deutschland": "0", "Frankreich": "129", "Türkei": "163", "Italien": "137"})
        ),
        vocation=VocationConverter(
            make_table(
                "vocation",
                {
                    "Tischler(in)": "TIS",
                    "Elektroniker(in) - Energie- und Gebäudetechnik -": "EEG",
                    "Informationselektroniker(in)": "EIN",
                },
            )
        ),
        postal=PostalConverter(make_table("postal", {49074: "404", 49076: "404", 38300: "158"})),
    )


@pytest.fixture
def bundled_reference() -> ReferenceData:
    """Fresh reference data backed by the bundled CSV files."""
    return ReferenceData.from_config()


# =============================================================================
# AcroForm PDFs
# =============================================================================


def _form_field(name: Any, field_type: str = "/Tx", value: Any = None) -> DictionaryObject:
    """Build a terminal field dictionary; ``name`` may be a non-string object."""
    entries: dict[Any, Any] = {
        NameObject("/T"): TextStringObject(name) if isinstance(name, str) else name,
        NameObject("/FT"): NameObject(field_type),
    }
    if value is not None:
        entries[NameObject("/V")] = value
    return DictionaryObject(entries)


@pytest.fixture
def write_form(tmp_path: Path) -> Any:
    """Return a writer for one-page PDFs whose AcroForm lists the given fields.

    Fields are ``(name, field type, value)`` tuples or ready field
    dictionaries, stored as indirect objects unless ``indirect=False``.
    """

    def write(file_name: str, fields: list[Any], *, indirect: bool = True) -> Path:
        writer = PdfWriter()
        writer.add_blank_page(width=595, height=842)
        entries = [entry if isinstance(entry, DictionaryObject) else _form_field(*entry) for entry in fields]
        if indirect:
            entries = [writer._add_object(entry) for entry in entries]
        writer._root_object[NameObject("/AcroForm")] = DictionaryObject(
            {NameObject("/Fields"): ArrayObject(entries)}
        )
        path = tmp_path / file_name
        with path.open("wb") as f:
            writer.write(f)
        return path

    return write
