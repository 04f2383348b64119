from kits_api.sheets.client import GoogleSheetsClient, SpreadsheetClient
from kits_api.sheets.ranges import a1_range, column_letter

__all__ = [
    "GoogleSheetsClient",
    "SpreadsheetClient",
    "a1_range",
    "column_letter",
]
