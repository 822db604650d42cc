from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from typing import Optional

from partyassets.data.repositories import AssetRepository
from partyassets.domain.models import AssetCreateRequest
from partyassets.exceptions import Problem

logger = logging.getLogger(__name__)

GENERIC_FAILURE_DETAIL = "Unable to create asset"


@dataclass(frozen=True)
class CreateOutcome:
    """Result of a create attempt: either the new asset's id, or a failure."""
    id: Optional[str] = None
    problem: Optional[Problem] = None
    message: Optional[str] = None

    @property
    def created(self) -> bool:
        return self.problem is None and self.message is None and self.id is not None

    @property
    def detail(self) -> Optional[str]:
        """Failure detail, preferring the structured problem detail over the plain message."""
        if self.created:
            return None
        if self.problem is not None and self.problem.detail:
            return self.problem.detail
        return self.message or GENERIC_FAILURE_DETAIL

    @classmethod
    def success(cls, asset_uuid: str) -> "CreateOutcome":
        return cls(id=asset_uuid)

    @classmethod
    def rejected(cls, problem: Problem) -> "CreateOutcome":
        return cls(problem=problem)

    @classmethod
    def failure(cls, message: Optional[str]) -> "CreateOutcome":
        return cls(message=message)


class AssetService:
    def __init__(self, repository: AssetRepository):
        self.repository = repository

    def create_asset(self, request: AssetCreateRequest) -> CreateOutcome:
        """
        Creates the asset unless one with the same asset id already exists.
        Failures are returned as an outcome, never raised.
        """
        try:
            if self.repository.exists_by_asset_id(request.asset_id):
                return CreateOutcome.rejected(self._conflict(request.asset_id))
            return CreateOutcome.success(self.repository.save(request))
        except sqlite3.IntegrityError:
            # concurrent insert of the same asset id
            return CreateOutcome.rejected(self._conflict(request.asset_id))
        except sqlite3.Error as exc:
            logger.exception("asset persistence failed", extra={"asset_id": request.asset_id})
            return CreateOutcome.failure(str(exc))

    @staticmethod
    def _conflict(asset_id: str) -> Problem:
        return Problem(
            status=409,
            title="Conflict",
            detail=f"Asset with assetId {asset_id} already exists",
        )
