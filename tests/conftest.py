"""
Shared fixtures: a mocked Google Sheets API
"""
import httpx
import pytest

from spotlight.config import Settings, SheetsSettings
from spotlight.services.sheets import SheetsClient


SHEET_ID = "sheet123"
API_KEY = "test-key"

SHEETS = {
    "Swimwear": [
        ["Swimwear"],
        ["CANDIDATE 1", "CANDIDATE 2"],
        ["JUDGE 1", "80", "90"],
        ["JUDGE 2", "85", "95"],
    ],
    "Evening Gown": [
        ["Evening Gown"],
        ["", "CANDIDATE 3", "CANDIDATE 4", "CANDIDATE 5"],
        ["JUDGE 1", "70", "n/a", "60"],
        ["JUDGE 2", "90"],
        [],
        ["Talent"],
        ["", "CANDIDATE 6"],
        ["JUDGE 1", "99"],
    ],
    "Empty": None,
}


def sheets_api(request: httpx.Request) -> httpx.Response:
    """Minimal stand-in for the Sheets v4 REST API"""
    if request.url.params.get("key") != API_KEY:
        return httpx.Response(403, json={"error": {"message": "bad key"}})

    path = request.url.path
    base = f"/v4/spreadsheets/{SHEET_ID}"
    if path == base:
        return httpx.Response(200, json={
            "sheets": [{"properties": {"title": name}} for name in SHEETS]
        })
    if path.startswith(base + "/values/"):
        a1 = path[len(base + "/values/"):]
        name = a1.rsplit("!", 1)[0]
        if name.startswith("'"):
            name = name[1:-1].replace("''", "'")
        if name not in SHEETS:
            return httpx.Response(400, json={"error": {"message": "Unable to parse range"}})
        body = {"range": a1, "majorDimension": "ROWS"}
        if SHEETS[name] is not None:
            body["values"] = SHEETS[name]
        return httpx.Response(200, json=body)
    return httpx.Response(404)


@pytest.fixture
def sheets_settings():
    return SheetsSettings(spreadsheet_id=SHEET_ID, api_key=API_KEY)


@pytest.fixture
def settings(sheets_settings):
    return Settings(sheets=sheets_settings)


@pytest.fixture
def sheets_client(sheets_settings):
    http = httpx.AsyncClient(transport=httpx.MockTransport(sheets_api))
    return SheetsClient(sheets_settings, http_client=http)
