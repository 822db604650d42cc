from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class Status(str, Enum):
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"
    BLOCKED = "BLOCKED"


class PartyType(str, Enum):
    PRIVATE = "PRIVATE"
    ENTERPRISE = "ENTERPRISE"


class AssetCreateRequest(BaseModel):
    """
    Request to create a single asset. The asset id is the business key.
    """
    party_id: str
    asset_id: str = Field(min_length=1)
    origin: Optional[str] = None
    case_reference_ids: list[str] = Field(default_factory=list)
    type: str = Field(min_length=1)
    issued: date
    valid_to: Optional[date] = None
    status: Status
    status_reason: Optional[str] = None
    description: Optional[str] = None
    additional_parameters: dict[str, str] = Field(default_factory=dict)

    @field_validator("party_id")
    @classmethod
    def _valid_uuid(cls, value: str) -> str:
        try:
            UUID(str(value))
        except ValueError:
            raise ValueError("not a valid UUID")
        return value

    @field_validator("asset_id", "type")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class Asset(AssetCreateRequest):
    id: str
