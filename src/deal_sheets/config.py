"""Load settings from environment variables or a YAML file."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from deal_sheets.connectors.google_sheets.constants import BASE_URL, DEFAULT_RANGE

ENV_PREFIX = "DEAL_SHEETS_"
_FALSEY = {"0", "false", "no", "off"}


class LoadSettings(BaseModel):
    """Where to load deals from, and whether to load on startup."""

    spreadsheet: Optional[str] = Field(default=None, description="Spreadsheet ID or URL")
    api_key: Optional[str] = Field(default=None, repr=False)
    range: str = DEFAULT_RANGE
    auto_load: bool = False
    base_url: str = BASE_URL
    timeout: float = 30.0

    @property
    def can_load(self) -> bool:
        return bool((self.spreadsheet or "").strip() and (self.api_key or "").strip())

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> "LoadSettings":
        """
        Read DEAL_SHEETS_* variables. auto_load defaults to on when both the
        spreadsheet and key are set; DEAL_SHEETS_AUTO_LOAD=0 turns it off.
        """
        env = os.environ if environ is None else environ

        def _get(name: str) -> Optional[str]:
            value = env.get(ENV_PREFIX + name)
            return value.strip() if value and value.strip() else None

        data: dict = {
            "spreadsheet": _get("SPREADSHEET"),
            "api_key": _get("API_KEY"),
        }
        if _get("RANGE"):
            data["range"] = _get("RANGE")
        if _get("BASE_URL"):
            data["base_url"] = _get("BASE_URL")
        if _get("TIMEOUT"):
            data["timeout"] = _get("TIMEOUT")

        settings = cls.model_validate(data)
        flag = _get("AUTO_LOAD")
        auto = settings.can_load and (flag is None or flag.lower() not in _FALSEY)
        return settings.model_copy(update={"auto_load": auto})

    @classmethod
    def from_yaml(cls, path: str | Path) -> "LoadSettings":
        """Load settings from YAML. Supports nested (google_sheets:) or flat structure."""
        data = yaml.safe_load(Path(path).read_text()) or {}
        nested = data.get("google_sheets", {}) or {}

        flat: dict = {}
        for key in ("spreadsheet", "api_key", "range", "auto_load", "base_url", "timeout"):
            value = nested.get(key, data.get(key))
            if value is not None:
                flat[key] = value
        return cls.model_validate(flat)

    def merged(self, **overrides) -> "LoadSettings":
        """Copy with non-None overrides applied (CLI flags win over file/env)."""
        update = {k: v for k, v in overrides.items() if v is not None}
        return self.model_copy(update=update)
