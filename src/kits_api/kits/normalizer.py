from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Optional, Sequence

from kits_api.exceptions import DataWarning
from kits_api.kits.models import ActiveFlag, AdminKitRow, KitConfig, KitRecord
from kits_api.kits.schema import KIT_FIELDS

logger = logging.getLogger("kits_api.kits")

INACTIVE_TOKENS = frozenset({"non", "no", "0", "false"})

# Leading decimal literal, the way sheet users type it ("12", "1.5", ".5", "2e3", "3 ex.").
_NUMBER_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number_from_sheet(value: Any) -> float:
    """
    Locale tolerant number parsing: "1,5" -> 1.5.
    Only the leading numeric part is read; anything unparseable gives 0.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().replace(",", ".", 1)
        match = _NUMBER_PREFIX.match(text)
        if not match:
            return 0
        try:
            number = float(match.group(0))
        except ValueError:
            return 0
    # "1e999" overflows to inf, which cannot be rendered as JSON.
    return number if math.isfinite(number) else 0


def parse_active_flag(value: Any) -> ActiveFlag:
    token = _cell(value).strip().lower()
    return ActiveFlag.INACTIVE if token in INACTIVE_TOKENS else ActiveFlag.ACTIVE


def parse_options_json(value: Any) -> Optional[Any]:
    """Decodes the PJMOptionsJSON cell. Blank -> None, malformed -> DataWarning."""
    text = _cell(value)
    if not text:
        return None
    try:
        return json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)
    except ValueError as exc:
        raise DataWarning(f"Invalid PJMOptionsJSON: {exc}") from exc


def _reject_constant(token: str) -> Any:
    raise ValueError(f"{token} is not valid JSON")


def _finite_float(token: str) -> float:
    number = float(token)
    if not math.isfinite(number):
        raise ValueError(f"{token} is out of range")
    return number


def is_empty_row(row: Optional[Sequence[Any]]) -> bool:
    return not row


def normalize_row(row: Sequence[Any], row_index: Optional[int] = None) -> KitRecord:
    cells = _by_field(row)

    try:
        pjm_options = parse_options_json(cells["pjm_options_json"])
    except DataWarning as exc:
        logger.warning(f"Kit '{cells['kit_id']}' (row {row_index}): {exc}")
        pjm_options = None

    return KitRecord(
        kit_id=cells["kit_id"],
        name=cells["kit_name"],
        image_url=cells["image_url"],
        default_qty_livret=parse_number_from_sheet(cells["default_qty_livret"]),
        default_qty_pochette=parse_number_from_sheet(cells["default_qty_pochette"]),
        default_qty_patron=parse_number_from_sheet(cells["default_qty_patron"]),
        status=parse_active_flag(cells["active"]),
        config=KitConfig(
            nombre_pages_livret=cells["nombre_pages_livret"],
            type_livret=cells["type_livret"],
            type_impression_couverture=cells["type_impression_couverture"],
            type_impression_corps=cells["type_impression_corps"],
            papier_couverture=cells["papier_couverture"],
            papier_corps=cells["papier_corps"],
            format_ferme_livret=cells["format_ferme_livret"],
            pochette=cells["pochette"],
            mise_en_pochette=cells["mise_en_pochette"],
            patron_m2=cells["patron_m2"],
            impression_patron=cells["impression_patron"],
        ),
        pjm_options=pjm_options,
        row_index=row_index,
    )


def admin_row(row: Sequence[Any], row_index: int, sheet_name: str) -> AdminKitRow:
    cells = _by_field(row)
    return AdminKitRow(
        row_index=row_index,
        sheet_name=sheet_name,
        kit_id=cells["kit_id"],
        kit_name=cells["kit_name"],
        image_url=cells["image_url"],
        default_qty_livret=cells["default_qty_livret"],
        default_qty_pochette=cells["default_qty_pochette"],
        default_qty_patron=cells["default_qty_patron"],
        nombre_pages_livret=cells["nombre_pages_livret"],
        type_livret=cells["type_livret"],
        type_impression_couv=cells["type_impression_couverture"],
        type_impression_corps=cells["type_impression_corps"],
        papier_couverture=cells["papier_couverture"],
        papier_corps=cells["papier_corps"],
        format_ferme_livret=cells["format_ferme_livret"],
        pochette=cells["pochette"],
        mise_en_pochette=cells["mise_en_pochette"],
        patron_m2=cells["patron_m2"],
        impression_patron=cells["impression_patron"],
        active_raw=cells["active"],
        pjm_options_json=cells["pjm_options_json"],
    )


def _by_field(row: Sequence[Any]) -> dict[str, str]:
    values = list(row or [])
    return {
        field: _cell(values[idx]) if idx < len(values) else ""
        for idx, field in enumerate(KIT_FIELDS)
    }


def _cell(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
