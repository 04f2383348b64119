from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class ActiveFlag(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class KitConfig(_CamelModel):
    nombre_pages_livret: str = ""
    type_livret: str = ""
    type_impression_couverture: str = ""
    type_impression_corps: str = ""
    papier_couverture: str = ""
    papier_corps: str = ""
    format_ferme_livret: str = ""
    pochette: str = ""
    mise_en_pochette: str = ""
    patron_m2: str = ""
    impression_patron: str = ""


class KitRecord(_CamelModel):
    """
    A kit row as served to the storefront.
    Prices stay at zero until a pricing integration fills them.
    """

    kit_id: str = ""
    name: str = ""
    image_url: str = ""
    default_qty_livret: float = 0
    default_qty_pochette: float = 0
    default_qty_patron: float = 0
    price_livret: float = 0
    price_pochette: float = 0
    price_patron: float = 0
    status: ActiveFlag = Field(default=ActiveFlag.ACTIVE, exclude=True)
    config: KitConfig = Field(default_factory=KitConfig)
    pjm_options: Optional[Any] = None
    row_index: Optional[int] = Field(default=None, exclude=True)

    @computed_field
    @property
    def active(self) -> bool:
        return self.status is ActiveFlag.ACTIVE


class AdminKitRow(_CamelModel):
    """Raw cell values plus the row position, for operators."""

    row_index: int
    sheet_name: str
    kit_id: str = ""
    kit_name: str = ""
    image_url: str = ""
    default_qty_livret: str = ""
    default_qty_pochette: str = ""
    default_qty_patron: str = ""
    nombre_pages_livret: str = ""
    type_livret: str = ""
    type_impression_couv: str = ""
    type_impression_corps: str = ""
    papier_couverture: str = ""
    papier_corps: str = ""
    format_ferme_livret: str = ""
    pochette: str = ""
    mise_en_pochette: str = ""
    patron_m2: str = ""
    impression_patron: str = ""
    active_raw: str = ""
    pjm_options_json: str = ""


class KitListResponse(_CamelModel):
    email: str
    sheet_name: str
    kits: list[KitRecord] = Field(default_factory=list)

    @computed_field
    @property
    def count(self) -> int:
        return len(self.kits)


class AdminKitListResponse(_CamelModel):
    email: str
    sheet_name: str
    kits: list[AdminKitRow] = Field(default_factory=list)

    @computed_field
    @property
    def count(self) -> int:
        return len(self.kits)
