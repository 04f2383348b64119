import logging
from typing import Any, Optional

from kits_api.config import KitSettings
from kits_api.exceptions import InvalidRequest
from kits_api.kits.models import AdminKitListResponse, KitListResponse
from kits_api.kits.normalizer import admin_row, is_empty_row, normalize_row
from kits_api.kits.provisioner import TenantSheetProvisioner
from kits_api.kits.schema import FIRST_DATA_ROW, data_range
from kits_api.sheets.client import SpreadsheetClient

logger = logging.getLogger("kits_api.services")


def clean_email(email: Optional[str]) -> str:
    cleaned = (email or "").strip()
    if not cleaned:
        raise InvalidRequest("Missing email query parameter")
    return cleaned


def resolve_tenant_key(email: str, case: str) -> str:
    return email.lower() if case == "lower" else email


class KitCatalogService:
    """
    Serves a tenant's kit tab. Every call re-reads the spreadsheet; nothing is cached.
    """

    def __init__(
        self,
        client: SpreadsheetClient,
        provisioner: TenantSheetProvisioner,
        kit_settings: Optional[KitSettings] = None,
    ):
        self.client = client
        self.provisioner = provisioner
        self.kit_settings = kit_settings or KitSettings()

    def list_kits(self, email: Optional[str]) -> KitListResponse:
        """Active kits only, in sheet order, with numbers and options decoded."""
        email = clean_email(email)
        sheet_name = resolve_tenant_key(email, self.kit_settings.kits_tenant_case)

        kits = [
            normalize_row(row, row_index)
            for row_index, row in self._read_rows(sheet_name)
        ]
        active = [kit for kit in kits if kit.active]
        logger.debug(f"{sheet_name}: {len(active)}/{len(kits)} active kits")
        return KitListResponse(email=email, sheet_name=sheet_name, kits=active)

    def list_admin_kits(self, email: Optional[str]) -> AdminKitListResponse:
        """Every non-empty row as raw strings, with its spreadsheet row number."""
        email = clean_email(email)
        sheet_name = resolve_tenant_key(email, self.kit_settings.admin_tenant_case)

        kits = [
            admin_row(row, row_index, sheet_name)
            for row_index, row in self._read_rows(sheet_name)
        ]
        return AdminKitListResponse(email=email, sheet_name=sheet_name, kits=kits)

    def _read_rows(self, sheet_name: str) -> list[tuple[int, list[Any]]]:
        self.provisioner.ensure(sheet_name)
        rows = self.client.get_values(data_range(sheet_name))
        return [
            (row_index, row)
            for row_index, row in enumerate(rows, start=FIRST_DATA_ROW)
            if not is_empty_row(row)
        ]
