from __future__ import annotations

from datetime import date, datetime
from enum import IntEnum
from typing import Any, Optional, Sequence

from openpyxl.utils.datetime import from_excel


class Column(IntEnum):
    """Zero-based column offsets of the PR3 export (legacy header name in comments)."""
    SEX = 4  # KON
    APPLIED_AS = 5  # PASSAGE
    ASSET_ID = 7  # TILLSTNR
    LEGAL_ID = 10  # PERSONNR
    REGISTRATION_NUMBER = 15  # DIARIENR
    ISSUED = 16  # UTFARDAT
    VALID_TO = 18  # GILTIGTTOM
    CARD_PRINTED = 21  # UTSKRIVET
    ISSUED_BY_ADMINISTRATION = 23  # EXTRA1
    ISSUED_BY_ADMINISTRATOR = 24  # EXTRA2
    SMART_PARK_SYNC = 27  # SmartParkSync


REQUIRED_WIDTH = max(Column) + 1


def cell_text(value: Any) -> str:
    """Renders a cell value as text, regardless of what type the spreadsheet stores it as."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


class SourceRow:
    """
    Read-only view over one row of the source sheet, with typed accessors per cell.
    Trailing empty cells are dropped.
    """

    def __init__(self, values: Sequence[Any]):
        cells = list(values)
        while cells and cell_text(cells[-1]).strip() == "":
            cells.pop()
        self.values: tuple[Any, ...] = tuple(cells)

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        return f"SourceRow({self.values!r})"

    def raw(self, index: int) -> Any:
        return self.values[index] if 0 <= index < len(self.values) else None

    def text(self, index: int) -> str:
        return cell_text(self.raw(index))

    def optional_text(self, index: int) -> Optional[str]:
        text = self.text(index).strip()
        return text or None

    def integer(self, index: int) -> Optional[int]:
        text = self.optional_text(index)
        if text is None:
            return None
        try:
            return int(text)
        except ValueError:
            return None

    def as_date(self, index: int) -> Optional[date]:
        value = self.raw(index)
        if value is None:
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            try:
                return from_excel(value).date()
            except (ValueError, OverflowError):
                return None
        text = str(value).strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None

    # Named accessors for the PR3 layout

    @property
    def sort_key(self) -> str:
        return self.text(Column.ASSET_ID)

    @property
    def asset_id(self) -> Optional[str]:
        return self.optional_text(Column.ASSET_ID)

    @property
    def legal_id(self) -> Optional[str]:
        return self.optional_text(Column.LEGAL_ID)

    @property
    def sex_code(self) -> Optional[int]:
        return self.integer(Column.SEX)

    @property
    def applied_as_code(self) -> Optional[int]:
        return self.integer(Column.APPLIED_AS)

    @property
    def registration_number(self) -> Optional[str]:
        return self.optional_text(Column.REGISTRATION_NUMBER)

    @property
    def issued(self) -> Optional[date]:
        return self.as_date(Column.ISSUED)

    @property
    def valid_to(self) -> Optional[date]:
        return self.as_date(Column.VALID_TO)

    @property
    def card_printed(self) -> Optional[date]:
        return self.as_date(Column.CARD_PRINTED)

    @property
    def issued_by_administration(self) -> Optional[str]:
        return self.optional_text(Column.ISSUED_BY_ADMINISTRATION)

    @property
    def issued_by_administrator(self) -> Optional[str]:
        return self.optional_text(Column.ISSUED_BY_ADMINISTRATOR)

    @property
    def smart_park_sync_code(self) -> Optional[int]:
        return self.integer(Column.SMART_PARK_SYNC)
