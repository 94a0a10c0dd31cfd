#!/usr/bin/env python3
"""Applicant export orchestrator - import registration forms, then export.

This module runs the complete workflow:
1. Scan a directory for PDF registration forms
2. Decode every form into an applicant record (background worker)
3. Check plausibility and export to the BBS-Planung import file
4. Print a summary of exported, skipped, and failed applicants

Usage (from project root):
    python -m applicant_import.main_export anmeldungen/
    python -m applicant_import.main_export anmeldungen/ -o export/Bewerber.txt
    python -m applicant_import.main_export anmeldungen/ --include-invalid
    python -m applicant_import.main_export anmeldungen/ --dump-fields felder.txt

CLI Flags:
    directory               Directory holding the PDF forms (not searched recursively)
    --output, -o            Export file (default: DATA_DIR/Bewerber_Aus_Nebenstelle.txt)
    --include-invalid       Also export applicants with missing required fields
    --dump-fields FILE      Write a listing of all form fields to FILE
    --quiet                 Suppress progress and summary output
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from applicant_import.config import get_default_export_path, setup_logging
from applicant_import.extractor import ImportProgress, ImportWorker, dump_form_fields, find_form_files
from applicant_import.writer import format_export_summary, write_export

logger = setup_logging(__name__)


def _print_progress(event: ImportProgress) -> None:
    print(f"\r  Formulare gelesen: {event.current}/{event.total}", end="", flush=True)


def run_export(
    directory: Path,
    output: Path,
    *,
    include_invalid: bool = False,
    dump_fields: Path | None = None,
    verbose: bool = True,
) -> int:
    """Import all forms in ``directory`` and write the export file.

    Parameters
    ----------
    directory : Path
        Directory holding the PDF registration forms.
    output : Path
        Export file to write.
    include_invalid : bool, optional
        Export applicants that fail the plausibility check.
    dump_fields : Path, optional
        Also write a listing of every form field to this file.
    verbose : bool, optional
        Print progress and the export summary.

    Returns
    -------
    int
        ``0`` when the export file was written; ``1`` otherwise.
    """
    if not directory.is_dir():
        logger.error("Not a directory: %s", directory)
        return 1

    if dump_fields is not None:
        dump_form_fields(find_form_files(directory), dump_fields)

    with ImportWorker(directory, on_progress=_print_progress if verbose else None) as worker:
        imported = worker.result()
    if verbose:
        print()

    for name in imported.unreadable:
        logger.warning("Unreadable or no form: %s", name)
    for name in imported.empty:
        logger.warning("Form without applicant data: %s", name)

    result = write_export(output, imported.applicants, include_invalid=include_invalid)

    if verbose:
        print(format_export_summary(result))

    file_failed = any(error.applicant is None for error in result.errors)
    return 1 if file_failed else 0


# =============================================================================
# CLI
# =============================================================================


def main(argv: list[str] | None = None) -> int:
    """Parse CLI flags and run the export.

    Returns
    -------
    int
        ``0`` when the export file was written; ``1`` otherwise.
    """
    parser = argparse.ArgumentParser(
        description="Import applicant registration forms and export them for BBS-Planung.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m applicant_import.main_export anmeldungen/
  python -m applicant_import.main_export anmeldungen/ -o Bewerber.txt --include-invalid
        """,
    )
    parser.add_argument("directory", type=Path, help="Directory holding the PDF forms")
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Export file (default: DATA_DIR/Bewerber_Aus_Nebenstelle.txt)",
    )
    parser.add_argument(
        "--include-invalid",
        action="store_true",
        help="Also export applicants with missing required fields",
    )
    parser.add_argument("--dump-fields", type=Path, metavar="FILE", help="Write a listing of all form fields")
    parser.add_argument("--quiet", action="store_true", help="Don't print progress and summary")

    args = parser.parse_args(argv)

    return run_export(
        args.directory,
        args.output or get_default_export_path(),
        include_invalid=args.include_invalid,
        dump_fields=args.dump_fields,
        verbose=not args.quiet,
    )


if __name__ == "__main__":
    sys.exit(main())
