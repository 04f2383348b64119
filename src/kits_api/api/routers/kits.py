from typing import Optional

from fastapi import APIRouter, Depends, Query

from kits_api.api.deps import get_catalog_service, require_admin
from kits_api.services import KitCatalogService

router = APIRouter(tags=["Kits"])


@router.get("/kits")
def list_kits(
    email: Optional[str] = Query(None, description="Tenant email; selects the tab"),
    catalog: KitCatalogService = Depends(get_catalog_service),
):
    return catalog.list_kits(email).model_dump(by_alias=True)


@router.get("/admin/kits")
def list_admin_kits(
    email: Optional[str] = Query(None, description="Tenant email; selects the tab"),
    catalog: KitCatalogService = Depends(get_catalog_service),
    _auth=Depends(require_admin),
):
    return catalog.list_admin_kits(email).model_dump(by_alias=True)
