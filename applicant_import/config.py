"""Configuration management for applicant-import.

This module centralizes file-system paths, environment variables, and the JSON
configuration loaders used by the extraction and export pipeline.

Configuration files
-------------------
* ``config.json``: reference dataset descriptors and export settings
* ``extraction.json``: form field names, ignored values, choice literals, and
  the form code tables for religion, degree, and school
* ``reference/*.csv``: bundled reference tables (nationality, vocation,
  postal code to county)

Environment variables
---------------------
``DATA_DIR``, ``LOGS_DIR``, and ``REFERENCE_DIR`` override default
directories. Directories for data and logs are created eagerly on import so
downstream callers can rely on their existence.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, cast

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
DATA_DIR = Path(os.getenv("DATA_DIR", PROJECT_ROOT / "data"))
LOGS_DIR = Path(os.getenv("LOGS_DIR", PROJECT_ROOT / "logs"))
REFERENCE_DIR = Path(os.getenv("REFERENCE_DIR", CONFIG_DIR / "reference"))

# Ensure directories exist
DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)

DATE_FORMAT = "%d.%m.%Y"


def _load_json_config(filename: str) -> dict[str, Any]:
    """Load a JSON file from ``CONFIG_DIR``.

    Parameters
    ----------
    filename : str
        File name relative to ``CONFIG_DIR`` (e.g., ``"config.json"``).

    Returns
    -------
    dict[str, Any]
        Parsed JSON object.

    Raises
    ------
    FileNotFoundError
        If the file is missing.
    json.JSONDecodeError
        If the file exists but is not valid JSON.
    """
    config_path = CONFIG_DIR / filename
    if not config_path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with Path(config_path).open(encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def get_config() -> dict[str, Any]:
    """Load the primary project configuration.

    Returns
    -------
    dict[str, Any]
        Parsed contents of ``config/config.json`` including the reference
        dataset descriptors and the export settings.
    """
    return _load_json_config("config.json")


def get_extraction_config() -> dict[str, Any]:
    """Load form extraction rules from ``extraction.json``.

    Returns
    -------
    dict[str, Any]
        Field-name mapping, ignored values, choice literals, and code tables.
    """
    return _load_json_config("extraction.json")


def setup_logging(name: str = "applicant_import") -> logging.Logger:
    """Configure a console+file logger if not already present.

    Parameters
    ----------
    name : str, optional
        Logger namespace; reused to avoid duplicate handlers.

    Returns
    -------
    logging.Logger
        Logger with INFO-level console handler and DEBUG-level daily file
        handler under ``LOGS_DIR``.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(logging.DEBUG)

        # Console handler
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_format = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
        console_handler.setFormatter(console_format)
        logger.addHandler(console_handler)

        # File handler
        log_filename = f"{datetime.now(UTC).strftime('%Y-%m-%d')}_run.log"
        file_handler = logging.FileHandler(LOGS_DIR / log_filename, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_format = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    return logger


# =============================================================================
# Reference Dataset Settings
# =============================================================================


def get_reference_dataset_config(dataset: str) -> dict[str, Any]:
    """Return the descriptor of a bundled reference dataset.

    Parameters
    ----------
    dataset : str
        One of ``"nationality"``, ``"vocation"``, or ``"postal"``.

    Returns
    -------
    dict[str, Any]
        Descriptor with ``file``, ``key_column``, and ``value_column``.

    Raises
    ------
    KeyError
        If the dataset is not configured.
    """
    datasets = get_config().get("reference_data", {}).get("datasets", {})
    if dataset not in datasets:
        msg = f"Reference dataset '{dataset}' missing from config/config.json"
        raise KeyError(msg)
    return cast("dict[str, Any]", datasets[dataset])


def get_reference_path(dataset: str) -> Path:
    """Resolve the CSV path of a reference dataset under ``REFERENCE_DIR``."""
    return REFERENCE_DIR / get_reference_dataset_config(dataset)["file"]


def get_reference_delimiter() -> str:
    """Return the field delimiter shared by all reference datasets (default ``;``)."""
    reference = get_config().get("reference_data", {})
    return cast("str", reference.get("delimiter", ";"))


def get_reference_encoding() -> str:
    """Return the text encoding shared by all reference datasets (default UTF-8)."""
    reference = get_config().get("reference_data", {})
    return cast("str", reference.get("encoding", "utf-8"))


# =============================================================================
# Export Settings
# =============================================================================


def get_export_config() -> dict[str, Any]:
    """Return the export settings block of ``config.json``.

    Returns
    -------
    dict[str, Any]
        Settings with ``school_number``, ``delimiter``, ``line_terminator``,
        ``encoding``, and ``default_filename``.
    """
    return cast("dict[str, Any]", get_config().get("export", {}))


def get_school_number() -> str:
    """Return the school number written to the ``SNR`` column."""
    return cast("str", get_export_config().get("school_number", ""))


def get_export_encoding() -> str:
    """Return the export file encoding (``ISO-8859-15`` for BBS-Planung)."""
    return cast("str", get_export_config().get("encoding", "iso-8859-15"))


def get_export_delimiter() -> str:
    """Return the export field delimiter."""
    return cast("str", get_export_config().get("delimiter", ";"))


def get_export_line_terminator() -> str:
    """Return the export record separator."""
    return cast("str", get_export_config().get("line_terminator", "\r\n"))


def get_default_export_path() -> Path:
    """Return the default export file path under ``DATA_DIR``."""
    filename = get_export_config().get("default_filename", "Bewerber_Aus_Nebenstelle.txt")
    return DATA_DIR / filename
