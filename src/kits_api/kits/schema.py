"""
Fixed layout of a tenant tab. Columns are positional: the value at index i
always belongs to the header at index i.
"""

from kits_api.sheets.ranges import a1_range, column_letter

KIT_COLUMNS: tuple[str, ...] = (
    "KitId",
    "KitName",
    "ImageURL",
    "DefaultQtyLivret",
    "DefaultQtyPochette",
    "DefaultQtyPatron",
    "NombrePagesLivret",
    "TypeLivret",
    "TypeImpressionCouverture",
    "TypeImpressionCorps",
    "PapierCouverture",
    "PapierCorps",
    "FormatFermeLivret",
    "Pochette",
    "MiseEnPochette",
    "PatronM2",
    "ImpressionPatron",
    "Active",
    "PJMOptionsJSON",
)

KIT_FIELDS: tuple[str, ...] = (
    "kit_id",
    "kit_name",
    "image_url",
    "default_qty_livret",
    "default_qty_pochette",
    "default_qty_patron",
    "nombre_pages_livret",
    "type_livret",
    "type_impression_couverture",
    "type_impression_corps",
    "papier_couverture",
    "papier_corps",
    "format_ferme_livret",
    "pochette",
    "mise_en_pochette",
    "patron_m2",
    "impression_patron",
    "active",
    "pjm_options_json",
)

FIRST_DATA_ROW = 2
LAST_COLUMN = column_letter(len(KIT_COLUMNS))


def header_range(sheet_name: str) -> str:
    return a1_range(sheet_name, "A1", f"{LAST_COLUMN}1")


def data_range(sheet_name: str) -> str:
    return a1_range(sheet_name, f"A{FIRST_DATA_ROW}", LAST_COLUMN)
