import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from kits_api.api.middleware import REQUEST_ID_HEADER, assign_request_id, log_kit_requests, request_id_of
from kits_api.api.routers import kits, system
from kits_api.config import Settings
from kits_api.exceptions import IntegrationError, InvalidRequest
from kits_api.kits.provisioner import TenantSheetProvisioner
from kits_api.services import KitCatalogService
from kits_api.sheets.client import GoogleSheetsClient, SpreadsheetClient

logger = logging.getLogger("kits_api.api")


def _error_response(request: Request, status_code: int, error: str, details: Optional[str]) -> JSONResponse:
    payload = {"error": error, "details": details}
    headers = {}
    rid = request_id_of(request)
    if rid:
        payload["request_id"] = rid
        # Unhandled errors are rendered outside the request-id middleware.
        headers[REQUEST_ID_HEADER] = rid
    return JSONResponse(status_code=status_code, content=payload, headers=headers)


def create_app(
    settings: Optional[Settings] = None,
    sheets_client: Optional[SpreadsheetClient] = None,
) -> FastAPI:
    """
    Factory to build the FastAPI application.
    Settings are resolved once here; a missing spreadsheet id or credential bundle raises ConfigError
    so the process never starts half-configured. Tests pass a fake sheets_client.
    """
    settings = settings or Settings.load()
    logging.basicConfig(level=getattr(logging, settings.logging.level.upper(), logging.INFO))

    if sheets_client is None:
        settings.require_google()
        sheets_client = GoogleSheetsClient.from_settings(settings.google)

    provisioner = TenantSheetProvisioner(
        sheets_client,
        repair_missing_header=settings.kits.repair_missing_header,
    )

    app = FastAPI(title=settings.app.name, version=settings.app.version)
    app.state.settings = settings
    app.state.catalog = KitCatalogService(
        client=sheets_client,
        provisioner=provisioner,
        kit_settings=settings.kits,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.logging.log_requests:
        app.middleware("http")(log_kit_requests)
    app.middleware("http")(assign_request_id)

    app.include_router(system.router)
    app.include_router(kits.router)

    @app.exception_handler(InvalidRequest)
    async def invalid_request_handler(request: Request, exc: InvalidRequest):
        return _error_response(request, 400, str(exc), None)

    @app.exception_handler(IntegrationError)
    async def integration_error_handler(request: Request, exc: IntegrationError):
        logger.error(f"Spreadsheet call failed on {request.url.path}: {exc}")
        return _error_response(request, 500, "Error reading Google Sheet", str(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", extra={"path": str(request.url)})
        return _error_response(request, 500, "internal_error", "Unexpected server error")

    logger.info(f"{settings.app.name} ready (spreadsheet {settings.google.spreadsheet_id})")
    return app
