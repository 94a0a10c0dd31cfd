"""Bundled reference tables loaded lazily from ``;``-delimited CSV files.

A :class:`ReferenceTable` reads its CSV on first access, under a lock so that
concurrent first lookups load the file exactly once. A failed load is logged
and leaves the table empty; lookups then fall back to their defaults.
"""

from __future__ import annotations

import threading
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import pandas as pd

from applicant_import.config import (
    get_reference_dataset_config,
    get_reference_delimiter,
    get_reference_encoding,
    get_reference_path,
    setup_logging,
)
from applicant_import.errors import ReferenceDataLoadError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from pathlib import Path

logger = setup_logging(__name__)

__all__ = ["ReferenceTable", "load_reference_csv", "open_dataset"]

K = TypeVar("K")


def load_reference_csv(
    path: Path,
    key_column: str,
    value_column: str,
    *,
    delimiter: str = ";",
    encoding: str = "utf-8",
) -> dict[str, str]:
    """Read a two-column reference CSV into a ``{key: value}`` dict.

    Parameters
    ----------
    path : Path
        CSV file with a header row.
    key_column, value_column : str
        Header names of the key and value columns.
    delimiter : str, optional
        Field delimiter, ``;`` by default.
    encoding : str, optional
        File encoding, UTF-8 by default.

    Returns
    -------
    dict[str, str]
        Trimmed keys mapped to trimmed values. Rows with an empty key are
        dropped; later duplicates overwrite earlier ones.

    Raises
    ------
    ReferenceDataLoadError
        If the file cannot be read or lacks one of the columns.
    """
    try:
        frame = pd.read_csv(
            path,
            sep=delimiter,
            encoding=encoding,
            dtype=str,
            keep_default_na=False,
        )
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        msg = f"Cannot read reference data {path}: {e}"
        raise ReferenceDataLoadError(msg) from e

    missing = [column for column in (key_column, value_column) if column not in frame.columns]
    if missing:
        msg = f"Reference data {path} lacks column(s): {', '.join(missing)}"
        raise ReferenceDataLoadError(msg)

    keys = frame[key_column].str.strip()
    values = frame[value_column].str.strip()
    return {key: value for key, value in zip(keys, values, strict=True) if key}


class ReferenceTable(Generic[K]):
    """Immutable mapping from display keys to codes, loaded on first use.

    Parameters
    ----------
    name : str
        Dataset name used in log messages.
    loader : Callable[[], Mapping[K, str]]
        Produces the table contents; may raise :class:`ReferenceDataLoadError`.
    """

    def __init__(self, name: str, loader: Callable[[], Mapping[K, str]]) -> None:
        self.name = name
        self._loader = loader
        self._entries: Mapping[K, str] | None = None
        self._lock = threading.Lock()

    @property
    def entries(self) -> Mapping[K, str]:
        """Return the table contents, loading them on first access."""
        entries = self._entries
        if entries is None:
            with self._lock:
                if self._entries is None:
                    self._entries = MappingProxyType(dict(self._load()))
                entries = self._entries
        return entries

    def _load(self) -> Mapping[K, str]:
        try:
            entries = self._loader()
        except ReferenceDataLoadError as e:
            logger.error("Reference table '%s' unavailable: %s", self.name, e)
            return {}
        logger.debug("Loaded %d entries for reference table '%s'", len(entries), self.name)
        return entries

    def get(self, key: K, default: str | None = None) -> str | None:
        """Return the code for ``key`` or ``default``."""
        return self.entries.get(key, default)

    def keys(self) -> tuple[K, ...]:
        """Return all keys in file order."""
        return tuple(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        state = "loaded" if self._entries is not None else "pending"
        return f"ReferenceTable({self.name!r}, {state})"


def open_dataset(dataset: str, *, key_type: Callable[[str], Any] = str) -> ReferenceTable[Any]:
    """Create a lazy table for a dataset configured in ``config.json``.

    Parameters
    ----------
    dataset : str
        ``"nationality"``, ``"vocation"``, or ``"postal"``.
    key_type : Callable[[str], Any], optional
        Converts raw keys, e.g. ``int`` for postal codes. Rows whose key does
        not convert are skipped with a warning.

    Returns
    -------
    ReferenceTable
        Table that reads its CSV on first lookup.
    """
    descriptor = get_reference_dataset_config(dataset)
    path = get_reference_path(dataset)
    delimiter = get_reference_delimiter()
    encoding = get_reference_encoding()

    def loader() -> dict[Any, str]:
        raw = load_reference_csv(
            path,
            descriptor["key_column"],
            descriptor["value_column"],
            delimiter=delimiter,
            encoding=encoding,
        )
        if key_type is str:
            return raw
        converted: dict[Any, str] = {}
        for key, value in raw.items():
            try:
                converted[key_type(key)] = value
            except ValueError:
                logger.warning("Skipping malformed key %r in reference table '%s'", key, dataset)
        return converted

    return ReferenceTable(dataset, loader)
