"""Export applicants to the BBS-Planung applicant import file.

The exporter turns applicant records into rows of :data:`EXPORT_SCHEMA` and
writes them as a ``;``-delimited, CRLF-terminated, ISO-8859-15 encoded text
file with a header row. Failures are collected per row:

* Implausible records are skipped (unless ``include_invalid``) and reported
  as :class:`ValidationFailure`.
* A row that cannot be computed or encoded is reported as
  :class:`RowExportError` and does not consume a running index.
* A failure writing the file is reported as a :class:`RowExportError` without
  applicant; nothing counts as exported then and no partial file is left.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import pandas as pd

from applicant_import.config import (
    get_export_delimiter,
    get_export_encoding,
    get_export_line_terminator,
    get_school_number,
    setup_logging,
)
from applicant_import.errors import RowExportError, ValidationFailure
from applicant_import.reference.converters import default_reference_data
from applicant_import.writer.schema import EXPORT_HEADER, RowContext, build_row

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date

    from applicant_import.model.applicant import Applicant
    from applicant_import.reference.converters import ReferenceData

logger = setup_logging(__name__)

__all__ = [
    "ExportResult",
    "export_applicants",
    "format_export_summary",
    "write_export",
]


@dataclass
class ExportResult:
    """Rows produced by an export run and everything that was left out.

    Attributes
    ----------
    rows : list[tuple[str, ...]]
        Exported rows in order, without the header.
    errors : list[RowExportError]
        Rows that failed, plus a file-level failure if writing failed.
    skipped : list[ValidationFailure]
        Implausible records left out of the export.
    exported_count : int
        Number of rows in the written file (``0`` if writing failed).
    """

    rows: list[tuple[str, ...]] = field(default_factory=list)
    errors: list[RowExportError] = field(default_factory=list)
    skipped: list[ValidationFailure] = field(default_factory=list)
    exported_count: int = 0

    @property
    def ok(self) -> bool:
        """Whether every record was exported without error."""
        return not self.errors and not self.skipped

    def to_frame(self) -> pd.DataFrame:
        """Return the rows as a DataFrame with the export header as columns."""
        return pd.DataFrame(self.rows, columns=list(EXPORT_HEADER), dtype=str)


def _check_encodable(row: tuple[str, ...], encoding: str) -> None:
    """Raise :class:`UnicodeEncodeError` if a cell has no representation in ``encoding``."""
    for cell in row:
        cell.encode(encoding)


def export_applicants(
    applicants: Iterable[Applicant],
    *,
    include_invalid: bool = False,
    reference: ReferenceData | None = None,
    today: date | None = None,
) -> ExportResult:
    """Compute the export rows for ``applicants``.

    Parameters
    ----------
    applicants : Iterable[Applicant]
        Records in export order.
    include_invalid : bool, optional
        Export records that fail the plausibility check too.
    reference : ReferenceData, optional
        Converters for county and vocation codes; defaults to the shared
        instance.
    today : date, optional
        Reference date for the age check of the guardian block.

    Returns
    -------
    ExportResult
        Rows, row errors, and skipped records. ``exported_count`` equals the
        number of rows.
    """
    reference = reference or default_reference_data()
    school_number = get_school_number()
    encoding = get_export_encoding()
    result = ExportResult()

    index = 1
    for applicant in applicants:
        if not include_invalid:
            failure = applicant.validate()
            if failure is not None:
                logger.info("Skipping %s (%s): %s", applicant, applicant.file_name, failure.message)
                result.skipped.append(failure)
                continue
        ctx = RowContext(applicant, index, reference, school_number, today)
        try:
            row = build_row(ctx)
            _check_encodable(row, encoding)
        except UnicodeEncodeError as e:
            message = f"Zeichen nicht in {encoding} darstellbar: {e.object[e.start:e.end]!r}"
            logger.warning("Could not export %s (%s): %s", applicant, applicant.file_name, message)
            result.errors.append(RowExportError(applicant, message))
            continue
        except Exception as e:
            logger.error("Could not export %s (%s): %s", applicant, applicant.file_name, e)
            result.errors.append(RowExportError(applicant, str(e)))
            continue
        result.rows.append(row)
        index += 1

    result.exported_count = len(result.rows)
    return result


def write_export(
    path: Path | str,
    applicants: Iterable[Applicant],
    *,
    include_invalid: bool = False,
    reference: ReferenceData | None = None,
    today: date | None = None,
) -> ExportResult:
    """Compute the export rows and write them to ``path``.

    Parameters
    ----------
    path : Path | str
        Output file, replaced only once the complete export is written.
    applicants : Iterable[Applicant]
        Records in export order.
    include_invalid : bool, optional
        Export records that fail the plausibility check too.
    reference : ReferenceData, optional
        Converters for county and vocation codes.
    today : date, optional
        Reference date for the age check of the guardian block.

    Returns
    -------
    ExportResult
        As :func:`export_applicants`; on a write failure ``exported_count`` is
        ``0``, a file-level :class:`RowExportError` is appended, and ``path``
        keeps its previous content.
    """
    path = Path(path)
    result = export_applicants(
        applicants,
        include_invalid=include_invalid,
        reference=reference,
        today=today,
    )

    partial = path.with_name(f"{path.name}.part")
    try:
        result.to_frame().to_csv(
            partial,
            sep=get_export_delimiter(),
            lineterminator=get_export_line_terminator(),
            encoding=get_export_encoding(),
            index=False,
        )
        partial.replace(path)
    except OSError as e:
        partial.unlink(missing_ok=True)
        logger.error("Could not write export file %s: %s", path, e)
        result.errors.append(RowExportError(None, str(e)))
        result.exported_count = 0
        return result

    logger.info("%d applicant(s) exported to %s", result.exported_count, path)
    return result


def format_export_summary(result: ExportResult) -> str:
    """Format an export result for display.

    Lists the number of exported applicants followed by the skipped records
    with their review comments and the failed rows.
    """
    lines = [f"{result.exported_count} Bewerber exportiert."]

    if result.skipped:
        lines.append("")
        lines.append(f"Nicht exportiert wegen fehlender Angaben ({len(result.skipped)}):")
        lines.extend(
            f"  {failure.applicant} ({failure.applicant.file_name}): {failure.message}" for failure in result.skipped
        )

    if result.errors:
        lines.append("")
        lines.append(f"Fehler beim Export ({len(result.errors)}):")
        lines.extend(f"  {error.describe()}" for error in result.errors)

    return "\n".join(lines)
