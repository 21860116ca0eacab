"""
Developer Registry — Derived Fields
=====================================

What:  Values computed from stored data rather than entered by the user:
       age from birth date and the level display name.
Who:   DeveloperService.

Age formula:
    age = today.year - birth_date.year

    This is a calendar-year subtraction. It ignores month and day, so
    someone whose birthday has not come yet this year is reported one
    year older than their exact age. Clients display this value as-is,
    so the formula must stay exactly this.
"""

from datetime import date, datetime
from typing import Optional, Union

from devregistry.exceptions import ValidationError

NO_LEVEL_LABEL = "N/A"


def compute_age(birth_date: date, today: Optional[date] = None) -> int:
    """Year difference between `today` (default: current date) and `birth_date`."""
    today = today or date.today()
    return today.year - birth_date.year


def parse_birth_date(
    value: Union[str, date, None],
    today: Optional[date] = None,
) -> date:
    """
    Turn user input into a birth date.

    Accepts a date, an ISO date ("1990-05-17") or an ISO datetime
    ("1990-05-17T00:00:00Z"); only the date part of a datetime is kept.

    Raises:
        ValidationError: empty or unparseable value, or a date after `today`.
    """
    if isinstance(value, datetime):
        parsed = value.date()
    elif isinstance(value, date):
        parsed = value
    else:
        text = (value or "").strip()
        if not text:
            raise ValidationError("Field 'data_nascimento' must not be empty", field="data_nascimento")
        try:
            parsed = date.fromisoformat(text)
        except ValueError:
            try:
                parsed = datetime.fromisoformat(text.replace("Z", "+00:00")).date()
            except ValueError:
                raise ValidationError(
                    f"Invalid birth date '{text}'. Expected format YYYY-MM-DD",
                    field="data_nascimento",
                )

    today = today or date.today()
    if parsed > today:
        raise ValidationError(
            "Birth date cannot be in the future",
            field="data_nascimento",
            context={"data_nascimento": parsed.isoformat()},
        )
    return parsed


def level_display_name(name: Optional[str]) -> str:
    """Level name for display, or "N/A" for a null or dangling reference."""
    return name if name else NO_LEVEL_LABEL

