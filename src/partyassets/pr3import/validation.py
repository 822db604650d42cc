from __future__ import annotations

from typing import Union

from pydantic import ValidationError

from partyassets.domain.models import AssetCreateRequest
from partyassets.pr3import.models import AssetDraft, Violation

_VALUE_ERROR_PREFIX = "Value error, "


def to_request(draft: AssetDraft) -> Union[AssetCreateRequest, list[Violation]]:
    """
    Validates a draft against the asset creation constraints.
    Returns the request on success, otherwise every violation found.
    """
    try:
        return AssetCreateRequest.model_validate(draft.to_request_data())
    except ValidationError as exc:
        return [_violation(error) for error in exc.errors()]


def validate_asset(draft: AssetDraft) -> list[Violation]:
    result = to_request(draft)
    return result if isinstance(result, list) else []


def format_violations(violations: list[Violation]) -> str:
    return ", ".join(str(v) for v in violations)


def _violation(error: dict) -> Violation:
    path = ".".join(str(part) for part in error.get("loc", ()))
    message = str(error.get("msg", "is invalid"))
    if message.startswith(_VALUE_ERROR_PREFIX):
        message = message[len(_VALUE_ERROR_PREFIX):]
    return Violation(field_path=path, message=message)
