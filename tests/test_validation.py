from datetime import date
from uuid import uuid4

from partyassets.domain.models import AssetCreateRequest, Status
from partyassets.pr3import.models import AssetDraft
from partyassets.pr3import.validation import format_violations, to_request, validate_asset


def _draft(**overrides) -> AssetDraft:
    fields = dict(
        origin="PR3",
        type="PERMIT",
        description="Parkeringstillstånd",
        asset_id="1001",
        party_id=str(uuid4()),
        issued=date(2023, 1, 10),
        valid_to=date(2025, 1, 10),
        status=Status.ACTIVE,
        additional_parameters={"appliedAs": "driver"},
    )
    fields.update(overrides)
    return AssetDraft(**fields)


def test_valid_draft_becomes_a_request():
    request = to_request(_draft())
    assert isinstance(request, AssetCreateRequest)
    assert request.asset_id == "1001"
    assert request.additional_parameters == {"appliedAs": "driver"}
    assert validate_asset(_draft()) == []


def test_missing_party_id_is_a_violation():
    violations = validate_asset(_draft(party_id=None))
    assert [v.field_path for v in violations] == ["party_id"]
    assert str(violations[0]) == "party_id Field required"


def test_party_id_must_be_a_uuid():
    violations = validate_asset(_draft(party_id="not-a-uuid"))
    assert [str(v) for v in violations] == ["party_id not a valid UUID"]


def test_blank_asset_id_and_missing_dates_are_reported_together():
    violations = validate_asset(_draft(asset_id="   ", issued=None, status=None))
    assert {v.field_path for v in violations} == {"asset_id", "issued", "status"}
    detail = format_violations(violations)
    assert "asset_id must not be blank" in detail
    assert detail.count(", ") == 2


def test_valid_to_is_optional():
    assert validate_asset(_draft(valid_to=None)) == []
