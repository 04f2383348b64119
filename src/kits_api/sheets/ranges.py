from typing import Optional


def column_letter(index: int) -> str:
    """1-based column number to its A1 letters (1 -> A, 19 -> S, 27 -> AA)."""
    if index < 1:
        raise ValueError(f"Column index must be >= 1, got {index}")
    letters = ""
    while index:
        index, rem = divmod(index - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def quote_sheet_name(sheet_name: str) -> str:
    return "'" + sheet_name.replace("'", "''") + "'"


def a1_range(sheet_name: str, start: str, end: Optional[str] = None) -> str:
    target = f"{start}:{end}" if end else start
    return f"{quote_sheet_name(sheet_name)}!{target}"
