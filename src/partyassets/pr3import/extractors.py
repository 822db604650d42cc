"""
Per-column extraction rules for PR3 rows.

Each rule reads one or more cells of a SourceRow and returns either a value or None.
A None result means the corresponding asset field is simply left unset.
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from partyassets.domain.models import Status
from partyassets.pr3import.row import SourceRow

DRIVER = "driver"
PASSENGER = "passenger"

_SEX_CODES = {0: "K", 1: "M"}
_APPLIED_AS_CODES = {1: PASSENGER, 2: DRIVER}
_APPLIED_AS_SHORT = {DRIVER: "F", PASSENGER: "P"}
_SMART_PARK_SYNC_CODES = {0: "false", 1: "true"}


def extract_asset_id(row: SourceRow) -> Optional[str]:
    return row.asset_id


def extract_legal_id(row: SourceRow) -> Optional[str]:
    return row.legal_id


def extract_issued_date(row: SourceRow) -> Optional[date]:
    return row.issued


def extract_valid_to_date(row: SourceRow) -> Optional[date]:
    return row.valid_to


def extract_status(row: SourceRow, today: date) -> Optional[Status]:
    """ACTIVE while the valid-to date is after today, EXPIRED otherwise."""
    valid_to = row.valid_to
    if valid_to is None:
        return None
    return Status.ACTIVE if valid_to > today else Status.EXPIRED


def extract_registration_number(row: SourceRow) -> Optional[str]:
    return row.registration_number


def extract_card_printed(row: SourceRow) -> Optional[str]:
    printed = row.card_printed
    return printed.isoformat() if printed else None


def extract_smart_park_sync(row: SourceRow) -> Optional[str]:
    return _decode(row.smart_park_sync_code, _SMART_PARK_SYNC_CODES)


def extract_issued_by_administration(row: SourceRow) -> Optional[str]:
    return row.issued_by_administration


def extract_issued_by_administrator(row: SourceRow) -> Optional[str]:
    return row.issued_by_administrator


def extract_applied_as(row: SourceRow) -> Optional[str]:
    """Whether the card was applied for as a driver or as a passenger."""
    return _decode(row.applied_as_code, _APPLIED_AS_CODES)


def extract_sex(row: SourceRow) -> Optional[str]:
    """"K" for women and "M" for men."""
    return _decode(row.sex_code, _SEX_CODES)


def extract_birth_year(row: SourceRow) -> Optional[str]:
    """The first two characters of the legal id exactly as written in the sheet."""
    legal_id = row.legal_id
    if legal_id is None or len(legal_id) < 2:
        return None
    return legal_id[:2]


def applied_as_short_code(applied_as: Optional[str]) -> Optional[str]:
    if applied_as is None:
        return None
    return _APPLIED_AS_SHORT.get(applied_as)


def build_permit_full_number(
    municipality_id: str,
    asset_id: Optional[str],
    birth_year: Optional[str],
    sex: Optional[str],
    applied_as: Optional[str],
) -> Optional[str]:
    """
    Formats the full permit number as {municipality id}-{asset id}-{birth year}{sex}-{applied as}.
    Returns None unless every part is present.
    """
    applied_as_short = applied_as_short_code(applied_as)
    if not sex or not asset_id or not birth_year or not applied_as_short:
        return None
    return f"{municipality_id}-{asset_id}-{birth_year}{sex}-{applied_as_short}"


def _decode(code: Optional[int], mapping: dict[int, str]) -> Optional[str]:
    if code is None:
        return None
    return mapping.get(code)
