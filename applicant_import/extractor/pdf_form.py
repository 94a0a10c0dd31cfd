"""Read AcroForm field values from registration PDFs using pypdf.

The reader flattens pypdf's field dictionaries into ``(qualified name, raw
value)`` pairs, the input format of :func:`extract_applicant`. Radio buttons
and check boxes store their state as a PDF name (``/UmschuelerJa``); the
leading slash is dropped and the ``Off`` state is reported as ``None``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from pypdf import PdfReader
from pypdf.errors import PdfReadError
from pypdf.generic import NameObject

from applicant_import.config import setup_logging

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = setup_logging(__name__)

__all__ = ["FormField", "dump_form_fields", "normalize_value", "read_form_fields"]

FormField = tuple[str, str | None]

_OFF_STATE = "Off"


def normalize_value(value: Any) -> str | None:
    """Convert a pypdf field value to the plain string the pipeline expects.

    Parameters
    ----------
    value : Any
        Value of a field's ``/V`` entry: text, a PDF name, a list of choices,
        or ``None``.

    Returns
    -------
    str | None
        Text for text fields, the state name without the leading ``/`` for
        buttons, the first entry of a multi-choice list, or ``None`` for
        unset values and the ``Off`` button state.
    """
    if value is None:
        return None
    if isinstance(value, list):
        return normalize_value(value[0]) if value else None
    if isinstance(value, NameObject):
        name = str(value).lstrip("/")
        return None if name == _OFF_STATE else name
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return str(value)


def read_form_fields(path: Path | str) -> list[FormField] | None:
    """Return the form field pairs of a PDF in document order.

    Parameters
    ----------
    path : Path | str
        PDF file to read.

    Returns
    -------
    list[FormField] | None
        ``(qualified name, raw value)`` pairs, or ``None`` if the file cannot
        be opened, its form is malformed, or it has no AcroForm.
    """
    path = Path(path)
    try:
        reader = PdfReader(path)
        fields = reader.get_fields()
    except (OSError, PdfReadError, ValueError) as e:
        logger.warning("Could not open PDF file %s: %s", path.name, e)
        return None
    except Exception as e:
        # pypdf fails with arbitrary errors on malformed field dictionaries
        logger.warning("Could not read form of %s: %s: %s", path.name, type(e).__name__, e)
        return None

    if not fields:
        logger.info("No form found in %s", path.name)
        return None

    return [(name, normalize_value(field.get("/V"))) for name, field in fields.items()]


def _format_listing(path: Path, fields: Iterable[tuple[str, Any, str | None]]) -> list[str]:
    lines = [f"# {path.name}"]
    lines.extend(f"{field_type} - {name} - {value}" for name, field_type, value in fields)
    return lines


def dump_form_fields(paths: Iterable[Path], output: Path) -> int:
    """Write a listing of every form field of ``paths`` to ``output``.

    Each line has the form ``<field type> - <qualified name> - <value>``,
    grouped by file. Used to discover field names of new form revisions.

    Parameters
    ----------
    paths : Iterable[Path]
        PDF files to inspect.
    output : Path
        Text file to write (UTF-8).

    Returns
    -------
    int
        Number of files that contained a form.
    """
    lines: list[str] = []
    with_form = 0
    for path in paths:
        try:
            fields = PdfReader(path).get_fields()
        except (OSError, PdfReadError, ValueError) as e:
            logger.warning("Could not open PDF file %s: %s", path.name, e)
            continue
        except Exception as e:
            logger.warning("Could not read form of %s: %s: %s", path.name, type(e).__name__, e)
            lines.append(f"# {path.name}: unreadable form")
            continue
        if not fields:
            lines.append(f"# {path.name}: no form")
            continue
        with_form += 1
        lines.extend(
            _format_listing(
                path,
                (
                    (name, str(field.get("/FT", "")).lstrip("/"), normalize_value(field.get("/V")))
                    for name, field in fields.items()
                ),
            )
        )

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.info("Wrote form field listing for %d file(s) to %s", with_form, output)
    return with_form
