from fastapi import APIRouter, Depends

from kits_api.api.deps import get_settings
from kits_api.config import Settings

router = APIRouter(tags=["System"])


@router.get("/health")
def health(settings: Settings = Depends(get_settings)):
    return {"status": "ok", "spreadsheetId": settings.google.spreadsheet_id}
