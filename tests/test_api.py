from fastapi.testclient import TestClient

from conftest import build_workbook, pr3_row, FakePartyClient
from partyassets.api.deps import get_party_client
from partyassets.api.main import create_app
from partyassets.config import settings

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _client(tmp_path, party=None) -> TestClient:
    app = create_app(db_path=tmp_path / "partyassets.db")
    app.dependency_overrides[get_party_client] = lambda: party or FakePartyClient()
    return TestClient(app)


def _upload(client, data: bytes, **kwargs):
    return client.post("/imports/pr3", files={"file": ("pr3.xlsx", data, XLSX)}, **kwargs)


def test_health(tmp_path):
    resp = _client(tmp_path).get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert "x-request-id" in resp.headers


def test_successful_import_returns_counters(tmp_path):
    resp = _upload(_client(tmp_path), build_workbook([pr3_row(), pr3_row(TILLSTNR="1002")]))

    assert resp.status_code == 200
    assert resp.json() == {"total": 2, "successful": 2, "failed": 0}


def test_failed_rows_are_returned_as_spreadsheet(tmp_path):
    resp = _upload(_client(tmp_path), build_workbook([pr3_row(), pr3_row(TILLSTNR="1002", PERSONNR=None)]))

    assert resp.status_code == 200
    assert resp.headers["content-type"] == XLSX
    assert resp.headers["x-import-total"] == "2"
    assert resp.headers["x-import-successful"] == "1"
    assert resp.headers["x-import-failed"] == "1"
    assert resp.content[:2] == b"PK"


def test_invalid_source_is_unprocessable(tmp_path):
    resp = _upload(_client(tmp_path), b"not a workbook")

    assert resp.status_code == 422
    assert resp.json()["error"] == "invalid_source"


def test_auth_is_enforced_when_configured(tmp_path, monkeypatch):
    monkeypatch.setattr(settings.security, "api_token", "secret")
    client = _client(tmp_path)
    data = build_workbook([pr3_row()])

    assert _upload(client, data).status_code == 401
    assert _upload(client, data, headers={"X-API-Key": "secret"}).status_code == 200


def test_upload_size_is_capped(tmp_path, monkeypatch):
    monkeypatch.setattr(settings.security, "max_upload_mb", 1)
    resp = _upload(_client(tmp_path), b"x" * (1024 * 1024 + 1))
    assert resp.status_code == 413
    assert "max 1MB" in resp.json()["detail"]


def test_caller_request_id_is_echoed(tmp_path):
    resp = _client(tmp_path).get("/health", headers={"X-Request-ID": "abc123"})
    assert resp.headers["x-request-id"] == "abc123"


def test_import_route_is_not_mounted_when_disabled(tmp_path, monkeypatch):
    monkeypatch.setattr(settings.pr3import, "enabled", False)
    resp = _upload(_client(tmp_path), build_workbook([pr3_row()]))
    assert resp.status_code == 404
