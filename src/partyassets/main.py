from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
import uvicorn

from partyassets.config import settings
from partyassets.data.repositories import AssetRepository
from partyassets.data.storage import Database
from partyassets.exceptions import PartyAssetsError
from partyassets.integration.party import PartyClient
from partyassets.pr3import import PR3Importer
from partyassets.services.assets import AssetService

cli = typer.Typer(help="Party Assets CLI")


@cli.command()
def version() -> None:
    """Print runtime version."""
    typer.echo(f"{settings.app.name} {settings.app.version}")


@cli.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host to bind"),
    port: int = typer.Option(8000, help="Port to bind"),
    reload: bool = typer.Option(False, help="Enable autoreload for local development"),
) -> None:
    """Run the Party Assets API server."""
    uvicorn.run(
        "partyassets.api.main:app",
        host=host,
        port=port,
        reload=reload,
        app_dir="src",
    )


@cli.command("import-pr3")
def import_pr3(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="PR3 export (.xlsx)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Where to write the failure report"),
    db_path: Optional[Path] = typer.Option(None, help="Override the configured database path"),
) -> None:
    """Import parking permits from a PR3 export into the local asset store."""
    logging.basicConfig(level=getattr(logging, settings.logging.level.upper(), logging.INFO))
    if not settings.pr3import.enabled:
        typer.echo("PR3 import is disabled (pr3import.enabled=false)", err=True)
        raise typer.Exit(code=1)

    importer = PR3Importer(
        static_info=settings.pr3import.static_asset_info,
        asset_service=AssetService(repository=AssetRepository(db=Database(db_path or settings.paths.db_path))),
        party_lookup=PartyClient(
            base_url=settings.party.base_url,
            municipality_id=settings.party.municipality_id,
            timeout=settings.party.timeout_seconds,
            max_retries=settings.party.max_retries,
            backoff_seconds=settings.party.backoff_seconds,
        ),
    )
    try:
        result = importer.import_from_excel(file.read_bytes())
    except PartyAssetsError as exc:
        typer.echo(f"Import failed: {exc}", err=True)
        raise typer.Exit(code=2)

    typer.echo(json.dumps(result.to_dict()))
    if result.failed:
        target = output or file.with_name(f"{file.stem}-failed.xlsx")
        target.write_bytes(result.failed_excel_data)
        typer.echo(f"Failed rows written to {target}", err=True)


if __name__ == "__main__":
    cli()
