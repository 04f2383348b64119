import pytest
from fastapi.testclient import TestClient

from kits_api.api.main import create_app
from kits_api.config import GoogleSettings, Settings
from kits_api.exceptions import IntegrationError


class FakeSheetsClient:
    """
    In-memory spreadsheet keyed by tab title.
    Records every call so tests can assert on remote traffic.
    """

    def __init__(self, tabs: dict[str, list[list[str]]] | None = None):
        self.tabs: dict[str, list[list[str]]] = {title: [list(r) for r in rows] for title, rows in (tabs or {}).items()}
        self.calls: list[tuple] = []
        self.fail_with: IntegrationError | None = None

    def _record(self, *call):
        self.calls.append(call)
        if self.fail_with:
            raise self.fail_with

    def list_sheet_titles(self) -> list[str]:
        self._record("list_sheet_titles")
        return list(self.tabs)

    def add_sheet(self, title: str) -> None:
        self._record("add_sheet", title)
        if title in self.tabs:
            raise IntegrationError(f'A sheet with the name "{title}" already exists.', status_code=400)
        self.tabs[title] = []

    def update_values(self, range_a1: str, values: list[list[str]]) -> None:
        self._record("update_values", range_a1, values)
        title, start_row = self._parse(range_a1)
        rows = self.tabs[title]
        for offset, row in enumerate(values):
            idx = start_row - 1 + offset
            while len(rows) <= idx:
                rows.append([])
            rows[idx] = list(row)

    def get_values(self, range_a1: str) -> list[list[str]]:
        self._record("get_values", range_a1)
        title, start_row = self._parse(range_a1)
        rows = self.tabs[title][start_row - 1:]
        if range_a1.endswith("1") and start_row == 1:
            rows = rows[:1]
        # Like the real API: trailing empty rows are dropped.
        while rows and not rows[-1]:
            rows = rows[:-1]
        return [list(r) for r in rows]

    @staticmethod
    def _parse(range_a1: str) -> tuple[str, int]:
        sheet, cells = range_a1.rsplit("!", 1)
        title = sheet[1:-1].replace("''", "'")
        start = cells.split(":")[0]
        return title, int("".join(ch for ch in start if ch.isdigit()))

    def writes(self) -> list[tuple]:
        return [c for c in self.calls if c[0] in {"add_sheet", "update_values"}]


def _kit_row(kit_id="K1", name="Kit 1", active="oui", options="", qty=("1,5", "2", "")) -> list[str]:
    return [
        kit_id, name, "https://img/k.png", qty[0], qty[1], qty[2],
        "24", "Agrafé", "Quadri", "Noir", "Couché 300g", "Offset 90g",
        "A5", "Oui", "Non", "1,2", "Traceur", active, options,
    ]


@pytest.fixture
def kit_row():
    return _kit_row


@pytest.fixture
def settings():
    return Settings(
        google=GoogleSettings(spreadsheet_id="sheet-123"),
    )


@pytest.fixture
def fake_sheets():
    return FakeSheetsClient()


@pytest.fixture
def client(settings, fake_sheets):
    app = create_app(settings=settings, sheets_client=fake_sheets)
    return TestClient(app)
