"""
Google Sheets source - List categories and fetch score grids

Every sheet (tab) of the spreadsheet is one category. A sheet's grid is
fetched over the Sheets v4 REST API with an API key.
"""
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from spotlight.config import SheetsSettings
from spotlight.exceptions import SheetsConfigError, SheetsError


logger = logging.getLogger(__name__)


def quote_sheet_name(name: str) -> str:
    """
    Quote a sheet name for A1 notation

    Names with spaces or quotes are wrapped in single quotes, inner quotes
    doubled: Evening Gown -> 'Evening Gown', Q&A's -> 'Q&A''s'
    """
    if " " in name or "'" in name:
        return "'" + name.replace("'", "''") + "'"
    return name


def sheet_range(name: str, cell_range: str) -> str:
    """URL-encoded range, e.g. 'Evening Gown'!A1:Z100"""
    return quote(f"{quote_sheet_name(name)}!{cell_range}", safe="")


class SheetsClient:
    """Async client for one spreadsheet"""

    def __init__(self, settings: SheetsSettings, http_client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self._http = http_client or httpx.AsyncClient(timeout=settings.timeout)

    async def aclose(self) -> None:
        await self._http.aclose()

    def _require_config(self) -> None:
        if not self.settings.is_configured:
            raise SheetsConfigError("Missing configuration: spreadsheet_id or api_key")

    async def _get_json(self, url: str, params: Dict[str, str], sheet: str = "") -> Dict[str, Any]:
        try:
            resp = await self._http.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error(f"❌ Sheets request failed ({sheet or 'metadata'}): {e}")
            raise SheetsError(f"Network error: {e}", sheet=sheet) from e

        if resp.status_code != 200:
            logger.error(f"❌ Sheets API error {resp.status_code} ({sheet or 'metadata'})")
            raise SheetsError(
                f"API error: {resp.status_code} {resp.reason_phrase}",
                status_code=resp.status_code,
                sheet=sheet,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise SheetsError(f"Invalid JSON from Sheets API: {resp.text[:200]}", sheet=sheet) from e

        if not isinstance(data, dict):
            raise SheetsError("Unexpected response shape from Sheets API", sheet=sheet)
        return data

    async def list_sheet_names(self) -> List[str]:
        """Titles of every sheet in the spreadsheet, in tab order"""
        self._require_config()
        url = f"{self.settings.base_url}/spreadsheets/{self.settings.spreadsheet_id}"
        data = await self._get_json(url, {"key": self.settings.api_key, "fields": "sheets.properties.title"})
        return [
            sheet["properties"]["title"]
            for sheet in data.get("sheets", [])
            if isinstance(sheet, dict) and "title" in sheet.get("properties", {})
        ]

    async def fetch_grid(self, sheet_name: str) -> List[List[str]]:
        """
        Fetch the configured cell range of one sheet

        Returns:
            Row-major grid; rows are as sparse as the API returns them.
            An empty sheet gives an empty list.
        """
        self._require_config()
        if not sheet_name:
            raise SheetsError("No sheet selected")

        # The range is already percent-encoded, build the URL by hand
        url = (
            f"{self.settings.base_url}/spreadsheets/{self.settings.spreadsheet_id}"
            f"/values/{sheet_range(sheet_name, self.settings.cell_range)}"
        )
        data = await self._get_json(url, {"key": self.settings.api_key}, sheet=sheet_name)

        rows = data.get("values") or []
        grid = [
            ["" if cell is None else str(cell) for cell in row]
            for row in rows
            if isinstance(row, list)
        ]
        logger.info(f"📄 Fetched {len(grid)} rows from sheet '{sheet_name}'")
        return grid
