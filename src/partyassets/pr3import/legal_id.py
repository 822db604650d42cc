from __future__ import annotations

import re
from datetime import date
from typing import Optional

_NON_DIGITS = re.compile(r"[^0-9]")
_DIGITS_ONLY = re.compile(r"[0-9]+")


def clean_legal_id(legal_id: str) -> str:
    """Removes everything but the ASCII digits 0-9 from the given legal id."""
    return _NON_DIGITS.sub("", legal_id)


def add_century_digit(legal_id: str, today: Optional[date] = None) -> Optional[str]:
    """
    Naively adds the century digits to a personal identity number, if they are missing.

    Numbers already starting with "19" or "20" are returned unchanged. Otherwise the
    leading two-digit year is compared with the current two-digit year: not after it
    means "20", after it means "19". People older than a hundred years end up in the
    wrong century.

    Returns None for blank input or input containing anything but digits.
    """
    if not legal_id or not legal_id.strip() or not _DIGITS_ONLY.fullmatch(legal_id):
        return None
    if legal_id.startswith("19") or legal_id.startswith("20"):
        return legal_id

    this_year = (today or date.today()).year % 100
    legal_id_year = int(legal_id[:2])

    return ("20" if legal_id_year <= this_year else "19") + legal_id


def normalize_legal_id(raw: str, today: Optional[date] = None) -> Optional[str]:
    """Cleans the raw legal id and adds the century digits."""
    return add_century_digit(clean_legal_id(raw), today=today)
