"""Converters from free text and postal codes to BBS-Planung codes.

Three converters sit on top of the bundled reference tables:

* :class:`PostalConverter`: exact lookup of a postal code's county code
* :class:`NationalityConverter`: approximate match of a nationality to the
  Destatis state number
* :class:`VocationConverter`: approximate match of a vocation to its short code

Approximate matching scores the case-folded, trimmed input against every
case-folded table key with :func:`Levenshtein.jaro_winkler`. The highest
score wins; ties go to the lexicographically smallest key. There is no
acceptance threshold, so a non-empty table always yields a key.

:class:`ReferenceData` bundles one instance of each converter and is passed
explicitly to the extraction pipeline and the exporter.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

import Levenshtein

from applicant_import.config import get_reference_dataset_config, setup_logging
from applicant_import.reference.tables import ReferenceTable, open_dataset

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = setup_logging(__name__)

__all__ = [
    "NationalityConverter",
    "PostalConverter",
    "ReferenceData",
    "VocationConverter",
    "best_match",
    "default_reference_data",
]


# =============================================================================
# Matching
# =============================================================================


def best_match(text: str, candidates: Iterable[str]) -> str | None:
    """Return the candidate most similar to ``text``.

    Parameters
    ----------
    text : str
        Free-text input; trimmed and case-folded before scoring.
    candidates : Iterable[str]
        Table keys; case-folded for scoring, returned unchanged.

    Returns
    -------
    str | None
        Key with the highest Jaro-Winkler similarity, the smallest key on a
        tie, or ``None`` when there are no candidates.
    """
    needle = text.strip().casefold()
    best_key: str | None = None
    best_score = -1.0
    for key in candidates:
        score = Levenshtein.jaro_winkler(needle, key.casefold())
        if score > best_score or (score == best_score and best_key is not None and key < best_key):
            best_key = key
            best_score = score
    return best_key


class _ApproximateConverter:
    """Shared guess/convert logic over a string-keyed reference table."""

    default_key = ""
    default_code = ""

    def __init__(self, table: ReferenceTable[str]) -> None:
        self.table = table

    def guess(self, text: str) -> str:
        """Return the table key closest to ``text``.

        Empty input after trimming returns the default key without scoring.
        An empty table also returns the default key.
        """
        if not text.strip():
            logger.debug("Falling back on default key %r for %s", self.default_key, self.table.name)
            return self.default_key
        guess = best_match(text, self.table.keys())
        if guess is None:
            return self.default_key
        logger.debug("Best guess for %r in %s: %r", text, self.table.name, guess)
        return guess


# =============================================================================
# Converters
# =============================================================================


class NationalityConverter(_ApproximateConverter):
    """Map free-text nationalities to Destatis state numbers.

    Example
    -------
    >>> converter.guess("französisch")
    'Frankreich'
    >>> converter.convert("türkisch")
    163
    """

    default_key = "Deutschland"

    def __init__(self, table: ReferenceTable[str], default_key: str = "Deutschland") -> None:
        super().__init__(table)
        self.default_key = default_key

    def convert(self, text: str) -> int:
        """Return the state number of the best-matching nationality.

        Falls back to ``0`` (Germany) when the table has no usable entry.
        """
        code = self.table.get(self.guess(text))
        if code is None:
            return 0
        try:
            return int(code)
        except ValueError:
            logger.warning("Malformed state number %r in %s", code, self.table.name)
            return 0


class VocationConverter(_ApproximateConverter):
    """Map free-text vocation descriptions to their short codes."""

    def convert(self, text: str) -> str:
        """Return the short code of the best-matching vocation, ``""`` if none."""
        code = self.table.get(self.guess(text))
        return code if code is not None else self.default_code


class PostalConverter:
    """Look up county codes by postal code."""

    def __init__(self, table: ReferenceTable[int]) -> None:
        self.table = table

    def convert(self, zip_code: int) -> str:
        """Return the county code for ``zip_code``, or ``""`` if unmapped."""
        code = self.table.get(zip_code)
        if code is None:
            logger.debug("No county code for postal code %s", zip_code)
            return ""
        return code

    def convert_text(self, zip_code: str) -> str:
        """Convert a postal code given as text; non-numeric input yields ``""``."""
        try:
            return self.convert(int(zip_code.strip()))
        except ValueError:
            return ""


# =============================================================================
# Bundle
# =============================================================================


@dataclass(frozen=True)
class ReferenceData:
    """The three converters handed to the pipeline and the exporter."""

    nationality: NationalityConverter
    vocation: VocationConverter
    postal: PostalConverter

    @classmethod
    def from_config(cls) -> ReferenceData:
        """Build lazily-loading converters for the configured datasets."""
        nationality_table = open_dataset("nationality")
        vocation_table = open_dataset("vocation")
        postal_table = open_dataset("postal", key_type=int)
        nationality_default = get_reference_dataset_config("nationality").get("default_key", "Deutschland")
        return cls(
            nationality=NationalityConverter(nationality_table, nationality_default),
            vocation=VocationConverter(vocation_table),
            postal=PostalConverter(postal_table),
        )


_default: ReferenceData | None = None
_default_lock = threading.Lock()


def default_reference_data() -> ReferenceData:
    """Return the process-wide :class:`ReferenceData` built from configuration."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = ReferenceData.from_config()
    return _default
