"""Error taxonomy shared by the extraction pipeline and the exporter.

Only :class:`InvalidArgumentError` propagates to callers; it signals misuse of
the record builder. Everything else is either caught and logged at the point
of failure (decode errors, reference loading) or returned as a value
(validation failures, row export errors).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from applicant_import.model.applicant import Applicant
    from applicant_import.model.fields import Field

__all__ = [
    "FieldDecodeError",
    "InvalidArgumentError",
    "ReferenceDataLoadError",
    "RowExportError",
    "ValidationFailure",
]


# =============================================================================
# Exceptions
# =============================================================================


class InvalidArgumentError(ValueError):
    """Raised when a record builder receives a missing or ill-typed argument."""


class FieldDecodeError(ValueError):
    """Raised by a decoding rule when a raw form value cannot be converted.

    Attributes
    ----------
    field : Field
        Registry field the value was destined for.
    raw : str | None
        The raw value as read from the form.
    """

    def __init__(self, field: Field, raw: str | None, reason: str) -> None:
        self.field = field
        self.raw = raw
        super().__init__(f"Cannot decode {field.name} from {raw!r}: {reason}")


class ReferenceDataLoadError(OSError):
    """Raised when a bundled reference table cannot be read or parsed."""


# =============================================================================
# Value-level failures
# =============================================================================


@dataclass(frozen=True)
class ValidationFailure:
    """An applicant that failed the plausibility check.

    Attributes
    ----------
    applicant : Applicant
        The rejected record.
    invalid_fields : tuple[Field, ...]
        Required fields that are unset or empty, in registry order.
    message : str
        Review comment naming the invalid fields.
    """

    applicant: Applicant
    invalid_fields: tuple[Field, ...] = field(default_factory=tuple)
    message: str = ""


@dataclass(frozen=True)
class RowExportError:
    """A record that could not be written, or a file-level write failure.

    ``applicant`` is ``None`` when the failure concerns the export file itself.
    """

    applicant: Applicant | None
    message: str

    def describe(self) -> str:
        """Return a one-line description suitable for a summary listing."""
        if self.applicant is None:
            return f"Exportdatei: {self.message}"
        return f"{self.applicant} ({self.applicant.file_name}): {self.message}"
