"""applicant-import: registration forms to BBS-Planung applicant import files.

The package reads the AcroForm fields of applicant registration PDFs, decodes
them into typed applicant records, resolves free-text values to codes, and
writes the fixed-layout import file of the BBS-Planung school administration
system.

Architecture
------------
* ``model``: Field registry, enumerations, applicant records, date helpers.
* ``reference``: Bundled reference tables and the nationality, vocation, and
  postal code converters (Jaro-Winkler matching via Levenshtein).
* ``extractor``: pypdf form reader, decoding pipeline, directory import, and
  the background import worker.
* ``writer``: Declarative export schema and the exporter (pandas).

Configuration
-------------
``config/config.json`` holds reference dataset descriptors and export
settings; ``config/extraction.json`` holds form field names and code tables.
Paths default to ``data/`` and ``logs/`` but respect ``DATA_DIR``,
``LOGS_DIR``, and ``REFERENCE_DIR`` overrides.

Examples
--------
Import a directory of forms and write the export file:

    >>> python -m applicant_import.main_export anmeldungen/ -o Bewerber.txt
"""

from applicant_import.model import Applicant, ApplicantBuilder, Field

__version__ = "0.1.0"
__all__ = ["Applicant", "ApplicantBuilder", "Field", "__version__"]
