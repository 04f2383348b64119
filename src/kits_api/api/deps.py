from typing import Optional

from fastapi import Depends, Header, HTTPException, Request

from kits_api.config import Settings
from kits_api.services import KitCatalogService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_catalog_service(request: Request) -> KitCatalogService:
    return request.app.state.catalog


def require_admin(
    settings: Settings = Depends(get_settings),
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
):
    token = settings.security.admin_token
    if not token:
        return

    if (
        authorization == f"Bearer {token}"
        or authorization == f"Token {token}"
        or x_api_key == token
    ):
        return

    raise HTTPException(status_code=401, detail="Unauthorized", headers={"WWW-Authenticate": "Bearer"})
