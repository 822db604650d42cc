from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Mapping, Optional

from partyassets.domain.models import Status

PARAM_REGISTRATION_NUMBER = "registrationNumber"
PARAM_CARD_PRINTED = "cardPrinted"
PARAM_SMART_PARK_SYNC = "smartParkSync"
PARAM_ISSUED_BY_ADMINISTRATION = "issuedByAdministration"
PARAM_ISSUED_BY_ADMINISTRATOR = "issuedByAdministrator"
PARAM_APPLIED_AS = "appliedAs"
PARAM_PERMIT_FULL_NUMBER = "permitFullNumber"


@dataclass(frozen=True)
class AssetDraft:
    """
    Asset as transformed from a single PR3 row, before validation.
    Every field except the static ones may be missing.
    """
    origin: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    asset_id: Optional[str] = None
    party_id: Optional[str] = None
    issued: Optional[date] = None
    valid_to: Optional[date] = None
    status: Optional[Status] = None
    additional_parameters: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def to_request_data(self) -> dict:
        """Field values for an AssetCreateRequest; unset fields are left out."""
        data = {
            "origin": self.origin,
            "type": self.type,
            "description": self.description,
            "asset_id": self.asset_id,
            "party_id": self.party_id,
            "issued": self.issued,
            "valid_to": self.valid_to,
            "status": self.status,
        }
        data = {key: value for key, value in data.items() if value is not None}
        data["additional_parameters"] = dict(self.additional_parameters)
        return data


@dataclass(frozen=True)
class Violation:
    field_path: str
    message: str

    def __str__(self) -> str:
        return f"{self.field_path} {self.message}"


@dataclass(frozen=True)
class ImportResult:
    total: int
    failed: int
    failed_excel_data: bytes = field(default=b"", repr=False)

    @property
    def successful(self) -> int:
        return self.total - self.failed

    def to_dict(self) -> dict:
        return {"total": self.total, "successful": self.successful, "failed": self.failed}
