"""Date arithmetic on applicant records.

Dates on registration forms are written ``d.m.YYYY`` (leading zeros optional).
Month and year arithmetic uses :class:`dateutil.relativedelta.relativedelta`,
which clamps to the last day of shorter months.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING

from dateutil.relativedelta import relativedelta

from applicant_import.config import DATE_FORMAT, setup_logging
from applicant_import.model.fields import Field

if TYPE_CHECKING:
    from applicant_import.model.applicant import Applicant

logger = setup_logging(__name__)

__all__ = ["AGE_OF_MAJORITY", "end_of_training", "format_date", "is_adult", "parse_date"]

AGE_OF_MAJORITY = 18


def parse_date(text: str | None) -> date | None:
    """Parse a ``d.m.YYYY`` date string.

    Parameters
    ----------
    text : str | None
        Date as written on the form, e.g. ``"1.8.2014"`` or ``"01.08.2014"``.

    Returns
    -------
    date | None
        Parsed date, or ``None`` for empty or malformed input.
    """
    if not text or not text.strip():
        return None
    try:
        return datetime.strptime(text.strip(), DATE_FORMAT).date()
    except ValueError:
        logger.debug("Unparseable date: %r", text)
        return None


def format_date(value: date) -> str:
    """Format a date as ``dd.mm.YYYY``."""
    return value.strftime(DATE_FORMAT)


def is_adult(applicant: Applicant, today: date | None = None) -> bool:
    """Check whether the applicant turned 18 strictly before ``today``.

    Parameters
    ----------
    applicant : Applicant
        Record whose ``BIRTHDAY`` is inspected.
    today : date, optional
        Reference date, defaults to :meth:`date.today`.

    Returns
    -------
    bool
        ``False`` when the birthday is missing or unparseable.
    """
    birthday = parse_date(applicant.get(Field.BIRTHDAY))
    if birthday is None:
        return False
    reference = today or date.today()
    return birthday + relativedelta(years=AGE_OF_MAJORITY) < reference


def end_of_training(applicant: Applicant) -> str:
    """Compute the last day of training.

    The end date is the start of training plus the training duration in
    months, minus one day, e.g. ``01.09.1999`` and 36 months give
    ``31.08.2002``.

    Returns
    -------
    str
        ``dd.mm.YYYY``, or ``""`` when the start is missing or unparseable or
        the duration is not positive.
    """
    start = parse_date(applicant.get(Field.START_OF_TRAINING))
    months = applicant.get(Field.DURATION_OF_TRAINING)
    if start is None or months <= 0:
        return ""
    return format_date(start + relativedelta(months=months) - timedelta(days=1))
