"""Application settings read from Streamlit secrets or the environment."""

import os
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, Optional

from pydantic import BaseModel, Field

DEFAULT_MODELS = {
    "anthropic": "claude-haiku-4-5-20251001",
    "gemini": "gemini-2.0-flash",
}

API_KEY_NAMES = {
    "anthropic": "ANTHROPIC_API_KEY",
    "gemini": "GEMINI_API_KEY",
}


class AppConfig(BaseModel):
    chat_provider: Literal["anthropic", "gemini"] = "gemini"
    model_name: Optional[str] = Field(None, description="Defaults to the provider's model")
    api_key: Optional[str] = None
    temperature: float = Field(0.7, ge=0, le=1)
    max_tokens: int = Field(1024, gt=0)

    storage_backend: Literal["memory", "gdrive"] = "memory"
    google_drive_token: Optional[Dict[str, Any]] = Field(
        None, description="Authorized-user info for the Drive backend"
    )
    catalog_dir: Optional[Path] = Field(None, description="Overrides the bundled catalog")

    @property
    def resolved_model_name(self) -> str:
        return self.model_name or DEFAULT_MODELS[self.chat_provider]

    @property
    def chat_enabled(self) -> bool:
        return bool(self.api_key)


def _lookup(secrets: Mapping[str, Any], key: str) -> Any:
    if key in secrets:
        return secrets[key]
    return os.environ.get(key.upper())


def load_config(secrets: Optional[Mapping[str, Any]] = None) -> AppConfig:
    """
    Build the app config from a secrets mapping with environment fallback.

    Args:
        secrets: Mapping such as ``st.secrets``; keys are FITMATCH_* names
            plus ANTHROPIC_API_KEY / GEMINI_API_KEY

    Returns:
        Validated AppConfig; unset values keep their defaults
    """
    secrets = secrets or {}
    values: Dict[str, Any] = {}

    for field, key in (
        ("chat_provider", "FITMATCH_CHAT_PROVIDER"),
        ("model_name", "FITMATCH_MODEL"),
        ("temperature", "FITMATCH_TEMPERATURE"),
        ("max_tokens", "FITMATCH_MAX_TOKENS"),
        ("storage_backend", "FITMATCH_STORAGE"),
        ("catalog_dir", "FITMATCH_CATALOG_DIR"),
    ):
        value = _lookup(secrets, key)
        if value is not None:
            values[field] = value

    provider = values.get("chat_provider", "gemini")
    api_key = _lookup(secrets, API_KEY_NAMES.get(provider, ""))
    if api_key:
        values["api_key"] = api_key

    token = secrets.get("google_drive")
    if token:
        values["google_drive_token"] = dict(token)

    return AppConfig(**values)
