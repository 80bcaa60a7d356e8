"""
Configuration loader
"""
import os
import yaml
from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel


APP_VERSION = "1.0.0"
DEFAULT_CONFIG_PATH = "config/settings.yaml"


class SheetsSettings(BaseModel):
    """Where the score sheets live"""
    spreadsheet_id: str = ""
    api_key: str = ""
    cell_range: str = "A1:Z100"   # range fetched from every sheet
    base_url: str = "https://sheets.googleapis.com/v4"
    timeout: float = 10.0         # seconds

    @property
    def is_configured(self) -> bool:
        return bool(self.spreadsheet_id and self.api_key)


class Settings(BaseModel):
    """Server settings"""
    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]
    sheets: SheetsSettings = SheetsSettings()


# env var -> (section, field)
ENV_OVERRIDES = {
    "SPOTLIGHT_SHEET_ID": ("sheets", "spreadsheet_id"),
    "SPOTLIGHT_API_KEY": ("sheets", "api_key"),
    "SPOTLIGHT_HOST": (None, "host"),
    "SPOTLIGHT_PORT": (None, "port"),
    "SPOTLIGHT_LOG_LEVEL": (None, "log_level"),
}


def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load settings from YAML file, then apply environment overrides

    Args:
        config_path: Path to config file (default: $SPOTLIGHT_CONFIG or
                     config/settings.yaml). A missing file means defaults.

    Returns:
        Settings object
    """
    path = Path(config_path or os.environ.get("SPOTLIGHT_CONFIG", DEFAULT_CONFIG_PATH))

    data = {}
    if path.exists():
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")

    # "sheets:" with nothing under it loads as None
    if data.get("sheets") is None:
        data.pop("sheets", None)

    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if not value:
            continue
        if section:
            if not isinstance(data.get(section), dict):
                data[section] = {}
            data[section][key] = value
        else:
            data[key] = value

    return Settings(**data)
