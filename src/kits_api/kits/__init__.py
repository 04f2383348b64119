from kits_api.kits.models import (
    AdminKitListResponse,
    AdminKitRow,
    KitConfig,
    KitListResponse,
    KitRecord,
)
from kits_api.kits.normalizer import (
    ActiveFlag,
    admin_row,
    is_empty_row,
    normalize_row,
    parse_number_from_sheet,
    parse_options_json,
)
from kits_api.kits.provisioner import TenantSheetProvisioner
from kits_api.kits.schema import KIT_COLUMNS, KIT_FIELDS

__all__ = [
    "ActiveFlag",
    "AdminKitListResponse",
    "AdminKitRow",
    "KIT_COLUMNS",
    "KIT_FIELDS",
    "KitConfig",
    "KitListResponse",
    "KitRecord",
    "TenantSheetProvisioner",
    "admin_row",
    "is_empty_row",
    "normalize_row",
    "parse_number_from_sheet",
    "parse_options_json",
]
