"""
Exceptions raised by the spreadsheet fetch layer
"""
from typing import Optional


class SheetsError(Exception):
    """Sheet could not be fetched (network, non-200, invalid JSON)"""

    def __init__(self, message: str, status_code: Optional[int] = None, sheet: str = ""):
        self.status_code = status_code
        self.sheet = sheet
        super().__init__(message)


class SheetsConfigError(SheetsError):
    """Spreadsheet id or API key missing"""
