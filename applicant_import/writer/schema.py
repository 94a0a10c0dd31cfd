"""Column layout of the BBS-Planung applicant import file.

The import format has a fixed header of 155 columns. :data:`EXPORT_SCHEMA`
lists one :class:`Cell` per column in header order; each cell turns a
:class:`RowContext` (one applicant plus its running index) into text. Most
columns are reserved by BBS-Planung and stay blank.

Column groups
-------------
* Identification: ``SNR`` .. ``NR_SCHÜLER``
* Personal data: ``NNAME`` .. ``FAMSTAND``
* School and training: ``SFO`` .. ``BAFOEG``
* Legal guardians: ``E_ANREDE`` .. ``E_EMAIL2``
* Company: ``BETRIEB_NR`` .. ``BETRIEB_NR4``
* Miscellaneous: ``BEMERK`` .. ``TEL_HANDY``
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING

from applicant_import.model.dates import end_of_training, is_adult
from applicant_import.model.fields import Field

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date

    from applicant_import.model.applicant import Applicant
    from applicant_import.reference.converters import ReferenceData

__all__ = [
    "EXPORT_HEADER",
    "EXPORT_SCHEMA",
    "Cell",
    "RowContext",
    "blank",
    "build_comment",
    "build_row",
    "constant",
    "value_of",
]


# =============================================================================
# Row Context
# =============================================================================


@dataclass(frozen=True)
class RowContext:
    """Inputs available to every cell of one export row.

    Derived values used by several cells (vocation code, county code, age)
    are computed once per row.
    """

    applicant: Applicant
    index: int
    reference: ReferenceData
    school_number: str
    today: date | None = None

    def text(self, field: Field) -> str:
        """Return the applicant's value for ``field`` as text."""
        return str(self.applicant.get(field))

    @cached_property
    def vocation_code(self) -> str:
        """Short code of the vocation, matched on vocation and specialization."""
        name = f"{self.text(Field.VOCATION)} {self.text(Field.SPECIALIZATION)}"
        return self.reference.vocation.convert(name)

    @cached_property
    def county_code(self) -> str:
        """County code resolved from the applicant's postal code."""
        return self.reference.postal.convert_text(self.text(Field.ZIP_CODE))

    @cached_property
    def adult(self) -> bool:
        """Whether the applicant is of age on the export date."""
        return is_adult(self.applicant, self.today)


# =============================================================================
# Cell Rules
# =============================================================================


@dataclass(frozen=True)
class Cell:
    """One export column: header ``name`` and the rule producing its text."""

    name: str
    produce: Callable[[RowContext], str]


def constant(name: str, value: str) -> Cell:
    """Cell with the same text in every row."""
    return Cell(name, lambda _ctx: value)


def blank(name: str) -> Cell:
    """Cell reserved by BBS-Planung and left empty."""
    return constant(name, "")


def value_of(name: str, field: Field) -> Cell:
    """Cell copying an applicant field verbatim."""
    return Cell(name, lambda ctx: ctx.text(field))


def _blanks(*names: str) -> tuple[Cell, ...]:
    return tuple(blank(name) for name in names)


def build_comment(applicant: Applicant) -> str:
    """Assemble the ``BEMERK`` review comment from vocation and company data.

    Example
    -------
    ``"Beruf: Tischler(in) ; Betrieb: Holz GmbH, Weg 1 49074 Osnabrück;
    Ansprechpartner: Herr Meyer, meyer@holz.de; Datei: anmeldung.pdf"``
    """

    def text(field: Field) -> str:
        return str(applicant.get(field))

    return (
        f"Beruf: {text(Field.VOCATION)} {text(Field.SPECIALIZATION)}; "
        f"Betrieb: {text(Field.COMPANY_NAME)}, {text(Field.COMPANY_ADDRESS)} "
        f"{text(Field.COMPANY_ZIP_CODE)} {text(Field.COMPANY_CITY)}; "
        f"Ansprechpartner: {text(Field.COMPANY_CONTACT_PERSON)}, {text(Field.COMPANY_CONTACT_MAIL)}; "
        f"Datei: {applicant.file_name}"
    )


def _gender(ctx: RowContext) -> str:
    return "1" if ctx.applicant.get(Field.GENDER) == "m" else "2"


def _nationality(ctx: RowContext) -> str:
    return f"{ctx.applicant.get(Field.NATIONALITY):03d}"


def _duration(ctx: RowContext) -> str:
    if not ctx.applicant.was_set(Field.DURATION_OF_TRAINING):
        return ""
    return str(ctx.applicant.get(Field.DURATION_OF_TRAINING))


def _guardian(adult_field: Field | None, minor_field: Field | None) -> Callable[[RowContext], str]:
    """Guardian contact cell.

    For adults the guardian's own entries are used; for minors the guardian
    is assumed to live with the applicant, so the applicant's address is used.
    ``None`` leaves the cell blank in that case.
    """

    def produce(ctx: RowContext) -> str:
        source = adult_field if ctx.adult else minor_field
        return "" if source is None else ctx.text(source)

    return produce


# =============================================================================
# Schema
# =============================================================================

_IDENTIFICATION = (
    Cell("SNR", lambda ctx: ctx.school_number),
    blank("KL_NAME"),
    Cell("LFD", lambda ctx: str(ctx.index)),
    blank("STATUS"),
    Cell("NR_SCHÜLER", lambda ctx: str(ctx.index)),
)

_PERSONAL = (
    value_of("NNAME", Field.LAST_NAME),
    value_of("VNAME", Field.FIRST_NAME),
    value_of("GEBDAT", Field.BIRTHDAY),
    value_of("GEBORT", Field.BIRTHPLACE),
    value_of("STR", Field.ADDRESS),
    value_of("PLZ", Field.ZIP_CODE),
    value_of("ORT", Field.CITY),
    value_of("TEL", Field.PHONE),
    blank("FAX"),
    Cell("LDK", lambda ctx: ctx.county_code),
    blank("LDK_Z"),
    Cell("LANDKREIS", lambda ctx: ctx.county_code),
    value_of("EMAIL", Field.EMAIL),
    Cell("GESCHLECHT", _gender),
    Cell("KONF", lambda ctx: str(ctx.applicant.get(Field.RELIGION).code)),
    blank("KONF_TEXT"),
    Cell("STAAT", _nationality),
    blank("FAMSTAND"),
)

_SCHOOL = (
    constant("SFO", "BS"),
    Cell("TAKURZ", lambda ctx: ctx.vocation_code),
    constant("KLST", "1"),
    constant("ORG", "A"),
    constant("DAUER", "0"),
    *_blanks("TAKLSTORG", "SFOTEXT", "TALANG", "ORG_N", "A", "BG"),
    constant("BG_SFO", "BS"),
    Cell("BG_BFELD", lambda ctx: ctx.vocation_code[0:1]),
    Cell("BG_FREI", lambda ctx: ctx.vocation_code[1:3]),
    constant("BG_KLST", "1"),
    constant("BG_ORG", "A"),
    constant("BG_DAUER", "0"),
    *_blanks("P_FAKTOR", "KO", "EINTR_DAT"),
    value_of("AUSB_BEGDAT", Field.START_OF_TRAINING),
    Cell("A_DAUER", _duration),
    Cell("A_ENDEDAT", lambda ctx: end_of_training(ctx.applicant)),
    *_blanks("ANRECH_BGJ", "WIEDERHOL"),
    Cell("ABSCHLUSS", lambda ctx: ctx.applicant.get(Field.DEGREE).code),
    Cell("HERKUNFT", lambda ctx: ctx.applicant.get(Field.SCHOOL).code),
    *_blanks("HER_ZUSATZ", "FH_Z", "SCHULPFLICHT", "N_DE", "HER_B", "BL_SOLL", "LM_M", "LM_Z", "LM_DAT"),
    Cell("UM", lambda ctx: "J" if ctx.applicant.get(Field.RETRAINING) else "N"),
    *_blanks("A_AMT", "A_BEZIRK", "BETRAG", "BETRAG_G", "BAFOEG"),
)

_GUARDIAN = (
    blank("E_ANREDE"),
    value_of("E_NNAME", Field.NAME_OF_LEGAL_GUARDIAN),
    blank("E_VNAME"),
    Cell("E_STR", _guardian(Field.ADDRESS_OF_LEGAL_GUARDIAN, Field.ADDRESS)),
    Cell("E_PLZ", _guardian(None, Field.ZIP_CODE)),
    Cell("E_ORT", _guardian(None, Field.CITY)),
    Cell("E_TEL", _guardian(Field.PHONE_OF_LEGAL_GUARDIAN, Field.PHONE)),
    blank("E_FAX"),
    *_blanks("E_LDK", "E_EMAIL"),
    *_blanks("E_ANREDE2", "E_NNAME2", "E_VNAME2", "E_STR2", "E_PLZ2", "E_ORT2"),
    *_blanks("E_TEL2", "E_FAX2", "E_LDK2", "E_EMAIL2"),
)

_COMPANY = (
    value_of("BETRIEB_NR", Field.COMPANY_NAME),
    value_of("BETRIEB_NR2", Field.COMPANY_CONTACT_PERSON),
    value_of("BETRIEB_NR3", Field.COMPANY_ADDRESS),
    Cell("BETRIEB_NR4", lambda ctx: f"{ctx.text(Field.COMPANY_ZIP_CODE)} {ctx.text(Field.COMPANY_CITY)}"),
)

_PRIORITIES = tuple(
    blank(f"PRIO{rank}{suffix}") for rank in range(1, 6) for suffix in ("", "_SNR", "_KOR", "_RANG", "_ZU")
)

_MISCELLANEOUS = (
    Cell("BEMERK", lambda ctx: build_comment(ctx.applicant)),
    *_blanks(*(f"KENNUNG{n}" for n in range(1, 7))),
    *_blanks("DATUM1", "DATUM2", "LML1", "BEW_W", "BEW_E"),
    *_PRIORITIES,
    *_blanks(*(f"VN{n}" for n in range(1, 13))),
    *_blanks("VN_S", *(f"VN_S{n}" for n in range(1, 6))),
    *_blanks("ZUSAGE", "ZUSAGE_BG", "ZUSAGE_SNR", "AS", "SNR1", "SNR2"),
    *_blanks("ZU", "MARKE", "FEHLER", "IDENT", "TEL_HANDY"),
)

EXPORT_SCHEMA: tuple[Cell, ...] = (
    *_IDENTIFICATION,
    *_PERSONAL,
    *_SCHOOL,
    *_GUARDIAN,
    *_COMPANY,
    *_MISCELLANEOUS,
)

EXPORT_HEADER: tuple[str, ...] = tuple(cell.name for cell in EXPORT_SCHEMA)


def build_row(ctx: RowContext) -> tuple[str, ...]:
    """Produce the text cells of one export row in header order."""
    return tuple(cell.produce(ctx) for cell in EXPORT_SCHEMA)
