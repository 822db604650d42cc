from __future__ import annotations

import base64
import binascii
from typing import Generator, Optional

from fastapi import Depends, Header, HTTPException

from partyassets.config import settings
from partyassets.data.repositories import AssetRepository
from partyassets.data.storage import Database
from partyassets.integration.party import PartyClient, PartyLookup
from partyassets.pr3import import PR3Importer
from partyassets.services.assets import AssetService

# Global/Cached instances
_db_instance: Optional[Database] = None
_party_client_instance: Optional[PartyClient] = None


def get_db() -> Database:
    global _db_instance
    if _db_instance is None:
        _db_instance = Database(settings.paths.db_path)
    return _db_instance


def get_asset_service() -> Generator[AssetService, None, None]:
    db = get_db()
    yield AssetService(repository=AssetRepository(db=db))


def get_party_client() -> PartyClient:
    global _party_client_instance
    if _party_client_instance is None:
        _party_client_instance = PartyClient(
            base_url=settings.party.base_url,
            municipality_id=settings.party.municipality_id,
            timeout=settings.party.timeout_seconds,
            max_retries=settings.party.max_retries,
            backoff_seconds=settings.party.backoff_seconds,
        )
    return _party_client_instance


def get_pr3_importer(
    asset_service: AssetService = Depends(get_asset_service),
    party_lookup: PartyLookup = Depends(get_party_client),
) -> Generator[PR3Importer, None, None]:
    yield PR3Importer(
        static_info=settings.pr3import.static_asset_info,
        asset_service=asset_service,
        party_lookup=party_lookup,
    )


def require_auth(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
):
    token = settings.security.api_token
    basic_user = settings.security.basic_user
    basic_pass = settings.security.basic_pass
    if not token and not (basic_user and basic_pass):
        return

    if token and (
        authorization == f"Bearer {token}"
        or authorization == f"Token {token}"
        or x_api_key == token
    ):
        return

    if basic_user and basic_pass and authorization and authorization.startswith("Basic "):
        try:
            decoded = base64.b64decode(authorization.split(" ", 1)[1]).decode("utf-8")
            username, password = decoded.split(":", 1)
        except (binascii.Error, UnicodeDecodeError, ValueError):
            username = password = None
        if username == basic_user and password == basic_pass:
            return

    raise HTTPException(status_code=401, detail="Unauthorized", headers={"WWW-Authenticate": "Bearer"})
