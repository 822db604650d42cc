from __future__ import annotations

from datetime import date, datetime
from io import BytesIO
from typing import Any, Optional
from uuid import NAMESPACE_OID, uuid5

import pytest
from openpyxl import Workbook

from partyassets.config import StaticAssetInfo
from partyassets.data.repositories import AssetRepository
from partyassets.data.storage import Database
from partyassets.domain.models import PartyType
from partyassets.pr3import import PR3Importer
from partyassets.services.assets import AssetService

TODAY = date(2024, 6, 1)

HEADER = [f"COL{i}" for i in range(28)]
HEADER[4] = "KON"
HEADER[5] = "PASSAGE"
HEADER[7] = "TILLSTNR"
HEADER[10] = "PERSONNR"
HEADER[15] = "DIARIENR"
HEADER[16] = "UTFARDAT"
HEADER[18] = "GILTIGTTOM"
HEADER[21] = "UTSKRIVET"
HEADER[23] = "EXTRA1"
HEADER[24] = "EXTRA2"
HEADER[27] = "SmartParkSync"


def pr3_row(**overrides: Any) -> list[Any]:
    """A complete, importable PR3 row; keyword overrides use the legacy header names."""
    cells = {
        "KON": 1,
        "PASSAGE": 2,
        "TILLSTNR": "1001",
        "PERSONNR": "650501-8585",
        "DIARIENR": "SBK-2023-42",
        "UTFARDAT": datetime(2023, 1, 10),
        "GILTIGTTOM": datetime(2025, 1, 10),
        "UTSKRIVET": datetime(2023, 1, 12),
        "EXTRA1": "Stadsbyggnadskontoret",
        "EXTRA2": "Anna Andersson",
        "SmartParkSync": 1,
    }
    cells.update(overrides)
    row: list[Any] = [None] * len(HEADER)
    for name, value in cells.items():
        row[HEADER.index(name)] = value
    return row


def build_workbook(rows: list[list[Any]], header: Optional[list[Any]] = None, title: str = "PR3") -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = title
    ws.append(HEADER if header is None else header)
    for row in rows:
        ws.append(row)
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


class FakePartyClient:
    """Party lookup double: deterministic party ids, optional misses and failures."""

    def __init__(self, missing: tuple[str, ...] = (), error: Optional[Exception] = None):
        self.calls: list[tuple[PartyType, str]] = []
        self.missing = set(missing)
        self.error = error

    def get_party_id(self, party_type: PartyType, legal_id: str) -> Optional[str]:
        self.calls.append((party_type, legal_id))
        if self.error is not None:
            raise self.error
        if legal_id in self.missing:
            return None
        return str(uuid5(NAMESPACE_OID, legal_id))


@pytest.fixture
def db(tmp_path):
    return Database(tmp_path / "partyassets.db")


@pytest.fixture
def repository(db):
    return AssetRepository(db=db)


@pytest.fixture
def asset_service(repository):
    return AssetService(repository=repository)


@pytest.fixture
def party_client():
    return FakePartyClient()


@pytest.fixture
def static_info():
    return StaticAssetInfo(origin="PR3", type="PERMIT", description="Parkeringstillstånd", municipality_id="2281")


@pytest.fixture
def importer(static_info, asset_service, party_client):
    return PR3Importer(
        static_info=static_info,
        asset_service=asset_service,
        party_lookup=party_client,
        today=lambda: TODAY,
    )
