from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
import uvicorn

from kits_api.config import Settings
from kits_api.exceptions import ConfigError, KitsApiError
from kits_api.kits.provisioner import TenantSheetProvisioner
from kits_api.services import KitCatalogService, clean_email, resolve_tenant_key
from kits_api.sheets.client import GoogleSheetsClient

cli = typer.Typer(help="kits-couture-api CLI")

ConfigOption = typer.Option(None, "--config", help="YAML settings file (defaults to config/settings.yaml)")


def _load(config: Optional[Path]) -> tuple[Settings, GoogleSheetsClient]:
    try:
        settings = Settings.load(config)
        settings.require_google()
        return settings, GoogleSheetsClient.from_settings(settings.google)
    except ConfigError as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(code=1)


@cli.command()
def version() -> None:
    """Print runtime version."""
    settings = Settings.load()
    typer.echo(f"{settings.app.name} {settings.app.version}")


@cli.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Host to bind (defaults to settings)"),
    port: Optional[int] = typer.Option(None, help="Port to bind (defaults to settings)"),
    reload: bool = typer.Option(False, help="Enable autoreload for local development"),
) -> None:
    """Run the API server. Configuration comes from config/settings.yaml and the environment."""
    settings, _ = _load(None)
    uvicorn.run(
        "kits_api.api.main:create_app",
        factory=True,
        host=host or settings.server.host,
        port=port or settings.server.port,
        reload=reload,
    )


@cli.command()
def provision(
    email: str = typer.Argument(..., help="Tenant email"),
    config: Optional[Path] = ConfigOption,
) -> None:
    """Create the tenant tab and its header row if missing."""
    settings, client = _load(config)
    try:
        sheet_name = resolve_tenant_key(clean_email(email), settings.kits.kits_tenant_case)
        created = TenantSheetProvisioner(
            client, repair_missing_header=settings.kits.repair_missing_header
        ).ensure(sheet_name)
    except KitsApiError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"{sheet_name}: {'created' if created else 'already present'}")


@cli.command()
def kits(
    email: str = typer.Argument(..., help="Tenant email"),
    admin: bool = typer.Option(False, "--admin", help="All rows, raw values"),
    config: Optional[Path] = ConfigOption,
) -> None:
    """Print a tenant's kits as JSON."""
    settings, client = _load(config)
    provisioner = TenantSheetProvisioner(client, repair_missing_header=settings.kits.repair_missing_header)
    catalog = KitCatalogService(client=client, provisioner=provisioner, kit_settings=settings.kits)
    try:
        result = catalog.list_admin_kits(email) if admin else catalog.list_kits(email)
    except KitsApiError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(result.model_dump(by_alias=True), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    cli()
