from __future__ import annotations

from io import BytesIO
from typing import Any, Optional, Sequence

from openpyxl import Workbook
from openpyxl.utils.exceptions import IllegalCharacterError

from partyassets.exceptions import DataSourceError
from partyassets.reporting.styles import FailureReportStyle


class FailureReport:
    """
    Workbook holding only the rows that failed to import.

    Row 1 is the source header, each following row is a failed source row with an
    error detail placed one empty column after its last value.
    """

    def __init__(self, title: Optional[str] = None):
        self.wb = Workbook()
        self.ws = self.wb.active
        if title:
            self.ws.title = title
        self.rows_written = 0

    def copy_header(self, values: Sequence[Any]) -> None:
        for col, value in enumerate(values, 1):
            cell = self.ws.cell(row=1, column=col, value=value)
            FailureReportStyle.apply_header_style(cell)

    def append_failure(self, values: Sequence[Any], detail: str) -> int:
        """Appends a failed row and returns its index, starting at 1 below the header."""
        self.rows_written += 1
        target_row = self.rows_written + 1
        try:
            for col, value in enumerate(values, 1):
                self.ws.cell(row=target_row, column=col, value=value)
            detail_cell = self.ws.cell(row=target_row, column=len(values) + 2, value=detail)
        except (IllegalCharacterError, ValueError) as exc:
            raise DataSourceError(f"Unable to write failure report row {self.rows_written}: {exc}") from exc
        FailureReportStyle.apply_detail_style(detail_cell)
        return self.rows_written

    def to_bytes(self) -> bytes:
        FailureReportStyle.auto_size_columns(self.ws)
        buffer = BytesIO()
        try:
            self.wb.save(buffer)
        except (OSError, ValueError) as exc:
            raise DataSourceError(f"Unable to write failure report: {exc}") from exc
        return buffer.getvalue()

    def close(self) -> None:
        self.wb.close()
