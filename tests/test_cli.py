import json

from typer.testing import CliRunner

import partyassets.main as main
from conftest import FakePartyClient, build_workbook, pr3_row
from partyassets.config import settings

runner = CliRunner()


def _fake_party(monkeypatch):
    monkeypatch.setattr(main, "PartyClient", lambda **kwargs: FakePartyClient())


def test_version():
    result = runner.invoke(main.cli, ["version"])
    assert result.exit_code == 0
    assert settings.app.version in result.stdout


def test_import_pr3_writes_failure_report(tmp_path, monkeypatch):
    _fake_party(monkeypatch)
    source = tmp_path / "pr3.xlsx"
    source.write_bytes(build_workbook([pr3_row(), pr3_row(TILLSTNR="1002", PERSONNR=None)]))
    output = tmp_path / "failed.xlsx"

    result = runner.invoke(
        main.cli,
        ["import-pr3", str(source), "--output", str(output), "--db-path", str(tmp_path / "cli.db")],
    )

    assert result.exit_code == 0, result.output
    line = next(l for l in result.stdout.splitlines() if l.startswith("{"))
    counters = json.loads(line)
    assert counters == {"total": 2, "successful": 1, "failed": 1}
    assert output.read_bytes()[:2] == b"PK"


def test_import_pr3_refuses_when_disabled(tmp_path, monkeypatch):
    monkeypatch.setattr(settings.pr3import, "enabled", False)
    source = tmp_path / "pr3.xlsx"
    source.write_bytes(build_workbook([pr3_row()]))

    result = runner.invoke(main.cli, ["import-pr3", str(source)])
    assert result.exit_code == 1


def test_import_pr3_rejects_invalid_source(tmp_path, monkeypatch):
    _fake_party(monkeypatch)
    source = tmp_path / "pr3.xlsx"
    source.write_bytes(b"garbage")

    result = runner.invoke(main.cli, ["import-pr3", str(source), "--db-path", str(tmp_path / "cli.db")])
    assert result.exit_code == 2
