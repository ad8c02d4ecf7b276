from datetime import date, datetime
from typing import Optional


# Tried in order. strptime matches month abbreviations case-insensitively,
# so "31 OCT 2025" and "05-Nov-25" both parse.
DATE_FORMATS = (
    "%d/%m/%y",   # 18/11/25
    "%d-%b-%y",   # 05-NOV-25
    "%d-%m-%y",   # 01-11-25
    "%d %b %Y",   # 31 OCT 2025
)


def normalize_date(token: Optional[str], fallback: Optional[date] = None) -> date:
    """Convert a dialect date token to a calendar date.

    Returns ``fallback`` (today when not given) if the token is missing or
    matches none of ``DATE_FORMATS``. Several dialects carry no date at all,
    so this is a normal outcome, not an error.
    """

    if token:
        cleaned = " ".join(token.split())
        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(cleaned, fmt).date()
            except ValueError:
                continue
    return fallback if fallback is not None else date.today()
