"""Configuration management with Pydantic Settings + optional YAML."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from chatworkhook.hook import SIGNATURE_HEADER
from chatworkhook.utils.platform import get_config_dir


class ReceiverConfig(BaseModel):
    bind: str = "0.0.0.0"
    port: int = 8420
    path: str = "/webhooks/chatwork"
    signature_header: str = SIGNATURE_HEADER


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CHATWORKHOOK_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    # Webhook token as shown by ChatWork (base64 text)
    secret: str = ""
    receiver: ReceiverConfig = Field(default_factory=ReceiverConfig)
    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("secret")
    @classmethod
    def _strip_secret(cls, value: str) -> str:
        return value.strip()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Env vars take precedence over values passed in (the YAML overlay)
        return env_settings, init_settings, dotenv_settings, file_secret_settings


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from env vars, optionally overlaying a YAML config."""
    yaml_data: dict[str, Any] = {}

    # Determine config file path
    if config_path is None:
        config_path = os.environ.get("CHATWORKHOOK_CONFIG")
    if config_path is None:
        default = get_config_dir() / "config.yaml"
        if default.exists():
            config_path = default

    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                yaml_data = yaml.safe_load(f) or {}

    # Build settings: YAML values as defaults, env vars override
    return Settings(**yaml_data)
