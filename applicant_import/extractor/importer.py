"""Import every registration form in a directory.

:func:`import_directory` scans a directory (not its subdirectories) for PDF
files, decodes each form, and sorts the outcomes into applicants, empty forms,
and unreadable files. :class:`ImportWorker` runs the same import on a
background thread and reports progress.
"""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from applicant_import.config import setup_logging
from applicant_import.extractor.pdf_form import read_form_fields
from applicant_import.extractor.pipeline import OutcomeKind, extract_applicant
from applicant_import.reference.converters import default_reference_data

if TYPE_CHECKING:
    from collections.abc import Callable

    from applicant_import.model.applicant import Applicant
    from applicant_import.reference.converters import ReferenceData

logger = setup_logging(__name__)

__all__ = [
    "ImportProgress",
    "ImportResult",
    "ImportWorker",
    "find_form_files",
    "import_directory",
]

PDF_SUFFIX = ".pdf"


@dataclass(frozen=True)
class ImportProgress:
    """Progress event: ``current`` of ``total`` files processed."""

    current: int
    total: int

    @property
    def fraction(self) -> float:
        """Share of processed files between 0.0 and 1.0."""
        return self.current / self.total if self.total else 1.0


@dataclass
class ImportResult:
    """Outcome of importing a directory.

    Attributes
    ----------
    applicants : list[Applicant]
        Records in file name order.
    empty : list[str]
        File names of forms without any applicant data.
    unreadable : list[str]
        File names that could not be opened or had no form.
    """

    applicants: list[Applicant] = field(default_factory=list)
    empty: list[str] = field(default_factory=list)
    unreadable: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Number of files processed."""
        return len(self.applicants) + len(self.empty) + len(self.unreadable)


def find_form_files(directory: Path) -> list[Path]:
    """Return the PDF files directly inside ``directory``, sorted by name.

    The suffix check is case-insensitive. Subdirectories are not searched.
    """
    return sorted(
        path for path in directory.iterdir() if path.is_file() and path.suffix.lower() == PDF_SUFFIX
    )


def import_directory(
    directory: Path | str,
    *,
    reference: ReferenceData | None = None,
    on_progress: Callable[[ImportProgress], None] | None = None,
) -> ImportResult:
    """Decode every PDF form in ``directory``.

    Parameters
    ----------
    directory : Path | str
        Directory holding one registration form per applicant.
    reference : ReferenceData, optional
        Converters for free-text values; defaults to the shared instance.
    on_progress : Callable[[ImportProgress], None], optional
        Called after each file with the running count.

    Returns
    -------
    ImportResult
        Applicants, empty forms, and unreadable files.

    Raises
    ------
    NotADirectoryError
        If ``directory`` is not an existing directory.
    """
    directory = Path(directory)
    if not directory.is_dir():
        msg = f"Not a directory: {directory}"
        raise NotADirectoryError(msg)

    reference = reference or default_reference_data()
    files = find_form_files(directory)
    logger.info("Importing %d form(s) from %s", len(files), directory)

    result = ImportResult()
    for index, path in enumerate(files, start=1):
        outcome = extract_applicant(
            read_form_fields(path),
            path.name,
            nationality_converter=reference.nationality,
        )
        if outcome.kind is OutcomeKind.APPLICANT and outcome.applicant is not None:
            result.applicants.append(outcome.applicant)
        elif outcome.kind is OutcomeKind.EMPTY:
            result.empty.append(path.name)
        else:
            result.unreadable.append(path.name)
        if on_progress is not None:
            on_progress(ImportProgress(index, len(files)))

    logger.info(
        "Imported %d applicant(s), %d empty form(s), %d unreadable file(s)",
        len(result.applicants),
        len(result.empty),
        len(result.unreadable),
    )
    return result


class ImportWorker:
    """Run :func:`import_directory` on a single background thread.

    Progress is published to an optional callback (called from the worker
    thread) and can be polled with :meth:`progress`. There is no cancellation.

    Example
    -------
    >>> worker = ImportWorker(Path("anmeldungen"))
    >>> worker.start()
    >>> result = worker.result()
    >>> worker.close()
    """

    def __init__(
        self,
        directory: Path | str,
        *,
        reference: ReferenceData | None = None,
        on_progress: Callable[[ImportProgress], None] | None = None,
    ) -> None:
        self.directory = Path(directory)
        self._reference = reference
        self._on_progress = on_progress
        self._lock = threading.Lock()
        self._current = 0
        self._total = 0
        self._executor: ThreadPoolExecutor | None = None
        self._future: Future[ImportResult] | None = None

    def start(self) -> ImportWorker:
        """Submit the import; calling it again has no effect."""
        self._submit()
        return self

    def _submit(self) -> Future[ImportResult]:
        if self._future is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="applicant-import")
            self._future = self._executor.submit(self._run)
        return self._future

    def _run(self) -> ImportResult:
        return import_directory(self.directory, reference=self._reference, on_progress=self._publish)

    def _publish(self, event: ImportProgress) -> None:
        with self._lock:
            self._current = event.current
            self._total = event.total
        if self._on_progress is not None:
            try:
                self._on_progress(event)
            except Exception as e:
                logger.error("Progress callback failed: %s", e)

    def progress(self) -> ImportProgress:
        """Return the latest progress snapshot."""
        with self._lock:
            return ImportProgress(self._current, self._total)

    def done(self) -> bool:
        """Whether the import has finished (successfully or not)."""
        return self._future is not None and self._future.done()

    def result(self, timeout: float | None = None) -> ImportResult:
        """Block until the import finishes and return its result.

        Starts the worker if :meth:`start` was not called yet. Exceptions
        raised by the import are re-raised here.
        """
        return self._submit().result(timeout=timeout)

    def close(self) -> None:
        """Wait for the import to finish and release the worker thread."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> ImportWorker:
        return self.start()

    def __exit__(self, *exc_info: object) -> None:
        self.close()
