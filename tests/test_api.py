import logging

from fastapi.testclient import TestClient

from kits_api.api.main import create_app
from kits_api.config import GoogleSettings, SecuritySettings, Settings
from kits_api.exceptions import IntegrationError
from kits_api.kits import KIT_COLUMNS


def test_health(client, fake_sheets):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "spreadsheetId": "sheet-123"}
    assert fake_sheets.calls == []


def test_kits_requires_email(client, fake_sheets):
    for params in ({}, {"email": "   "}):
        resp = client.get("/kits", params=params)
        assert resp.status_code == 400
        assert resp.json()["error"]
    assert fake_sheets.calls == []


def test_admin_kits_requires_email(client, fake_sheets):
    resp = client.get("/admin/kits")
    assert resp.status_code == 400
    assert "error" in resp.json()
    assert fake_sheets.calls == []


def test_kits_filters_inactive_and_keeps_order(client, fake_sheets, kit_row):
    fake_sheets.tabs["client@test.com"] = [
        list(KIT_COLUMNS),
        kit_row(kit_id="K1"),
        kit_row(kit_id="K2", active="Non"),
        [],
        kit_row(kit_id="K3", active="", options="{bad json"),
        kit_row(kit_id="K4", active="false"),
        kit_row(kit_id="K5", active="1", options='{"a": 1}'),
    ]

    resp = client.get("/kits", params={"email": "  Client@Test.com "})
    assert resp.status_code == 200
    body = resp.json()
    assert body["email"] == "Client@Test.com"
    assert body["sheetName"] == "client@test.com"
    assert body["count"] == 3
    assert [k["kitId"] for k in body["kits"]] == ["K1", "K3", "K5"]
    assert all(k["active"] for k in body["kits"])
    assert body["kits"][1]["pjmOptions"] is None
    assert body["kits"][2]["pjmOptions"] == {"a": 1}
    assert body["kits"][0]["defaultQtyLivret"] == 1.5


def test_admin_kits_returns_every_row(client, fake_sheets, kit_row):
    fake_sheets.tabs["Client@Test.com"] = [
        list(KIT_COLUMNS),
        kit_row(kit_id="K1"),
        kit_row(kit_id="K2", active="Non"),
        [],
        kit_row(kit_id="K3", active="false"),
    ]

    resp = client.get("/admin/kits", params={"email": "Client@Test.com"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["sheetName"] == "Client@Test.com"
    assert body["count"] == 3
    assert [k["kitId"] for k in body["kits"]] == ["K1", "K2", "K3"]
    assert [k["rowIndex"] for k in body["kits"]] == [2, 3, 5]
    assert body["kits"][1]["activeRaw"] == "Non"
    assert body["kits"][0]["defaultQtyLivret"] == "1,5"
    assert body["kits"][0]["sheetName"] == "Client@Test.com"


def test_first_request_provisions_tab(client, fake_sheets):
    resp = client.get("/kits", params={"email": "new@test.com"})
    assert resp.status_code == 200
    assert resp.json() == {"email": "new@test.com", "sheetName": "new@test.com", "kits": [], "count": 0}
    assert fake_sheets.tabs["new@test.com"] == [list(KIT_COLUMNS)]

    client.get("/kits", params={"email": "new@test.com"})
    assert [c for c in fake_sheets.calls if c[0] == "add_sheet"] == [("add_sheet", "new@test.com")]


def test_integration_error_becomes_500(client, fake_sheets):
    fake_sheets.fail_with = IntegrationError("Google Sheets returned 403: The caller does not have permission")

    resp = client.get("/kits", params={"email": "client@test.com"})
    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "Error reading Google Sheet"
    assert "does not have permission" in body["details"]
    assert resp.headers["x-request-id"]


def test_admin_token_guards_admin_route(fake_sheets):
    settings = Settings(
        google=GoogleSettings(spreadsheet_id="sheet-123"),
        security=SecuritySettings(admin_token="s3cret"),
    )
    client = TestClient(create_app(settings=settings, sheets_client=fake_sheets))

    assert client.get("/admin/kits", params={"email": "a@b.c"}).status_code == 401
    ok = client.get("/admin/kits", params={"email": "a@b.c"}, headers={"Authorization": "Bearer s3cret"})
    assert ok.status_code == 200
    assert client.get("/kits", params={"email": "a@b.c"}).status_code == 200


def test_request_id_is_echoed(client):
    resp = client.get("/health", headers={"x-request-id": "abc123"})
    assert resp.headers["x-request-id"] == "abc123"


def test_non_finite_cells_do_not_break_listing(client, fake_sheets, kit_row):
    fake_sheets.tabs["c@t.com"] = [
        list(KIT_COLUMNS),
        kit_row(kit_id="K1", options="NaN"),
        kit_row(kit_id="K2", qty=("1e999", "1", "1")),
        kit_row(kit_id="K3", options='{"ok": true}'),
    ]

    resp = client.get("/kits", params={"email": "c@t.com"})
    assert resp.status_code == 200
    kits = resp.json()["kits"]
    assert [k["kitId"] for k in kits] == ["K1", "K2", "K3"]
    assert kits[0]["pjmOptions"] is None
    assert kits[1]["defaultQtyLivret"] == 0
    assert kits[2]["pjmOptions"] == {"ok": True}


def test_unhandled_error_keeps_request_id_header(settings, fake_sheets):
    fake_sheets.fail_with = RuntimeError("boom")
    client = TestClient(create_app(settings=settings, sheets_client=fake_sheets), raise_server_exceptions=False)

    resp = client.get("/kits", params={"email": "c@t.com"}, headers={"x-request-id": "rid-42"})
    assert resp.status_code == 500
    assert resp.json()["error"] == "internal_error"
    assert resp.json()["request_id"] == "rid-42"
    assert resp.headers["x-request-id"] == "rid-42"


def test_request_log_names_tenant(client, caplog):
    with caplog.at_level(logging.INFO, logger="kits_api.api"):
        client.get("/kits", params={"email": " Shop@Test.com "})

    assert "GET /kits tenant=Shop@Test.com -> 200" in caplog.text
