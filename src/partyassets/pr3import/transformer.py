from __future__ import annotations

import logging
from datetime import date
from types import MappingProxyType
from typing import Callable, Optional

from partyassets.config import StaticAssetInfo
from partyassets.domain.models import PartyType
from partyassets.integration.party import PartyLookup
from partyassets.pr3import import extractors
from partyassets.pr3import.legal_id import normalize_legal_id
from partyassets.pr3import.models import (
    AssetDraft,
    PARAM_APPLIED_AS,
    PARAM_CARD_PRINTED,
    PARAM_ISSUED_BY_ADMINISTRATION,
    PARAM_ISSUED_BY_ADMINISTRATOR,
    PARAM_PERMIT_FULL_NUMBER,
    PARAM_REGISTRATION_NUMBER,
    PARAM_SMART_PARK_SYNC,
)
from partyassets.pr3import.row import SourceRow

logger = logging.getLogger(__name__)


class RowTransformer:
    """
    Maps one PR3 row onto an AssetDraft.

    Static fields come from configuration, the party id from the Party service and
    everything else from the row. Nothing is validated here.
    """

    def __init__(
        self,
        static_info: StaticAssetInfo,
        party_lookup: PartyLookup,
        today: Callable[[], date] = date.today,
    ):
        self.static_info = static_info
        self.party_lookup = party_lookup
        self.today = today

    def transform(self, row: SourceRow) -> AssetDraft:
        today = self.today()
        return AssetDraft(
            origin=self.static_info.origin,
            type=self.static_info.type,
            description=self.static_info.description,
            asset_id=extractors.extract_asset_id(row),
            party_id=self.resolve_party_id(row, today),
            issued=extractors.extract_issued_date(row),
            valid_to=extractors.extract_valid_to_date(row),
            status=extractors.extract_status(row, today),
            additional_parameters=MappingProxyType(self.additional_parameters(row)),
        )

    def resolve_party_id(self, row: SourceRow, today: date) -> Optional[str]:
        raw = extractors.extract_legal_id(row)
        if raw is None:
            return None
        legal_id = normalize_legal_id(raw, today=today)
        if legal_id is None:
            logger.debug("skipping party lookup for unusable legal id", extra={"asset_id": row.asset_id})
            return None
        return self.party_lookup.get_party_id(PartyType.PRIVATE, legal_id)

    def additional_parameters(self, row: SourceRow) -> dict[str, str]:
        applied_as = extractors.extract_applied_as(row)
        candidates = {
            PARAM_REGISTRATION_NUMBER: extractors.extract_registration_number(row),
            PARAM_CARD_PRINTED: extractors.extract_card_printed(row),
            PARAM_SMART_PARK_SYNC: extractors.extract_smart_park_sync(row),
            PARAM_ISSUED_BY_ADMINISTRATION: extractors.extract_issued_by_administration(row),
            PARAM_ISSUED_BY_ADMINISTRATOR: extractors.extract_issued_by_administrator(row),
            PARAM_APPLIED_AS: applied_as,
            PARAM_PERMIT_FULL_NUMBER: extractors.build_permit_full_number(
                self.static_info.municipality_id,
                extractors.extract_asset_id(row),
                extractors.extract_birth_year(row),
                extractors.extract_sex(row),
                applied_as,
            ),
        }
        return {key: value for key, value in candidates.items() if value is not None}
