from __future__ import annotations

import json
from datetime import UTC, date, datetime
from typing import Optional
from uuid import uuid4

from partyassets.data.storage import Database
from partyassets.domain.models import Asset, AssetCreateRequest


class AssetRepository:
    """
    Asset persistence keyed by the business asset id.
    """

    def __init__(self, db: Database):
        self.db = db

    def exists_by_asset_id(self, asset_id: str) -> bool:
        with self.db._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT 1 FROM assets WHERE asset_id = ?", (asset_id,))
            return cur.fetchone() is not None

    def save(self, request: AssetCreateRequest) -> str:
        """
        Inserts a new asset and returns its generated id.
        Raises sqlite3.IntegrityError if the asset id is already taken.
        """
        asset_uuid = str(uuid4())
        with self.db._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT INTO assets
                    (id, asset_id, party_id, origin, type, issued, valid_to, status, status_reason,
                     description, case_reference_ids_json, additional_parameters_json, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    asset_uuid,
                    request.asset_id,
                    request.party_id,
                    request.origin,
                    request.type,
                    request.issued.isoformat(),
                    request.valid_to.isoformat() if request.valid_to else None,
                    request.status.value,
                    request.status_reason,
                    request.description,
                    json.dumps(request.case_reference_ids, ensure_ascii=False),
                    json.dumps(request.additional_parameters, ensure_ascii=False),
                    datetime.now(UTC).isoformat(),
                ),
            )
            conn.commit()
        return asset_uuid

    def find_by_asset_id(self, asset_id: str) -> Optional[Asset]:
        with self.db._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                SELECT id, asset_id, party_id, origin, type, issued, valid_to, status, status_reason,
                       description, case_reference_ids_json, additional_parameters_json
                FROM assets WHERE asset_id = ?
                """,
                (asset_id,),
            )
            row = cur.fetchone()
        if not row:
            return None
        return Asset(
            id=row[0],
            asset_id=row[1],
            party_id=row[2],
            origin=row[3],
            type=row[4],
            issued=date.fromisoformat(row[5]),
            valid_to=date.fromisoformat(row[6]) if row[6] else None,
            status=row[7],
            status_reason=row[8],
            description=row[9],
            case_reference_ids=json.loads(row[10]),
            additional_parameters=json.loads(row[11]),
        )
