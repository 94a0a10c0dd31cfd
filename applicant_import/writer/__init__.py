"""Writer module for the BBS-Planung applicant import file."""

from applicant_import.writer.exporter import (
    ExportResult,
    export_applicants,
    format_export_summary,
    write_export,
)
from applicant_import.writer.schema import (
    EXPORT_HEADER,
    EXPORT_SCHEMA,
    Cell,
    RowContext,
    blank,
    build_comment,
    build_row,
    constant,
    value_of,
)

__all__ = [
    "EXPORT_HEADER",
    "EXPORT_SCHEMA",
    "Cell",
    "ExportResult",
    "RowContext",
    "blank",
    "build_comment",
    "build_row",
    "constant",
    "export_applicants",
    "format_export_summary",
    "value_of",
    "write_export",
]
