from __future__ import annotations

import logging
import zipfile
from contextlib import closing
from datetime import date
from io import BytesIO
from typing import BinaryIO, Callable, Optional, Union

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from partyassets.config import StaticAssetInfo
from partyassets.exceptions import DataSourceError, IntegrationError
from partyassets.integration.party import PartyLookup
from partyassets.pr3import.models import ImportResult
from partyassets.pr3import.row import REQUIRED_WIDTH, SourceRow
from partyassets.pr3import.transformer import RowTransformer
from partyassets.pr3import.validation import format_violations, to_request
from partyassets.reporting.failure_report import FailureReport
from partyassets.services.assets import AssetService

logger = logging.getLogger(__name__)


class PR3Importer:
    """
    Imports parking permits from a PR3 spreadsheet export.

    The first row of the first sheet is the header. Data rows are processed in
    descending order of their permit number text; each row either creates an asset
    or ends up in the failure report together with the reason it failed.
    """

    def __init__(
        self,
        static_info: StaticAssetInfo,
        asset_service: AssetService,
        party_lookup: PartyLookup,
        today: Callable[[], date] = date.today,
    ):
        self.static_info = static_info
        self.asset_service = asset_service
        self.transformer = RowTransformer(static_info, party_lookup, today=today)

    def import_from_excel(self, source: Union[bytes, BinaryIO]) -> ImportResult:
        title, header, data_rows = self._read_rows(source)
        logger.info("pr3 import started", extra={"rows": len(data_rows)})

        with closing(FailureReport(title=title)) as report:
            report.copy_header(header.values)
            for row in self._sorted(data_rows):
                detail = self._import_row(row)
                if detail is not None:
                    index = report.append_failure(row.values, detail)
                    logger.warning(
                        "pr3 row failed",
                        extra={"asset_id": row.asset_id, "report_row": index, "detail": detail},
                    )
            result = ImportResult(
                total=len(data_rows),
                failed=report.rows_written,
                failed_excel_data=report.to_bytes(),
            )

        logger.info(
            "pr3 import finished",
            extra={"total": result.total, "successful": result.successful, "failed": result.failed},
        )
        return result

    def _import_row(self, row: SourceRow) -> Optional[str]:
        """Imports a single row, returning the failure detail or None on success."""
        try:
            draft = self.transformer.transform(row)
        except IntegrationError as exc:
            return str(exc)

        request = to_request(draft)
        if isinstance(request, list):
            return format_violations(request)

        outcome = self.asset_service.create_asset(request)
        return None if outcome.created else outcome.detail

    @staticmethod
    def _sorted(rows: list[SourceRow]) -> list[SourceRow]:
        # ascending then reversed, so equal keys keep reverse source order
        return list(reversed(sorted(rows, key=lambda row: row.sort_key)))

    @staticmethod
    def _read_rows(source: Union[bytes, BinaryIO]) -> tuple[str, SourceRow, list[SourceRow]]:
        stream = BytesIO(source) if isinstance(source, (bytes, bytearray)) else source
        try:
            with closing(load_workbook(stream, read_only=True, data_only=True)) as wb:
                if not wb.worksheets:
                    raise DataSourceError("Source workbook has no sheets")
                ws = wb.worksheets[0]
                title = ws.title
                rows = [SourceRow(values) for values in ws.iter_rows(values_only=True)]
        except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as exc:
            raise DataSourceError(f"Unable to read source workbook: {exc}") from exc

        if not rows:
            raise DataSourceError("Source sheet is empty")
        header, data_rows = rows[0], [row for row in rows[1:] if len(row)]
        if len(header) < REQUIRED_WIDTH:
            raise DataSourceError(
                f"Source header spans {len(header)} columns, expected at least {REQUIRED_WIDTH}"
            )
        return title, header, data_rows
