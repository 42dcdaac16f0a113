"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "VIBECODER_"
_ENV_SKIP = {"providers"}


class ProviderSettings(BaseModel):
    """One configured AI backend."""
    name:         str
    kind:         str = "mock"
    enabled:      bool = True
    model:        str = "mock-model-v1"
    api_key:      Optional[str] = None
    api_endpoint: Optional[str] = None


class Settings(BaseModel):
    app_name:      str = "vibecoder"
    db_url:        str = "sqlite:///vibecoder.db"
    parser_config: str = Field(default="gfm-like", description="MarkdownIt parser preset name")
    max_history:   int = Field(default=100, ge=1, description="Max session entries kept")
    auto_save:     bool = Field(default=True, description="Persist each interaction to the database")
    export_format: str = Field(default="md", pattern="^(md|json|txt|html)$", description="md, json, txt or html")
    output_dir:    str = Field(default="exports", description="Directory for exported sessions")
    temperature:   float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens:    Optional[int] = Field(default=1000, ge=1)
    log_level:     str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    plugins:       list[str] = Field(default_factory=list, description="Enabled plugin names, in run order")
    providers:     list[ProviderSettings] = Field(default_factory=list)

    @field_validator("log_level", mode="before")
    def upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator("plugins", mode="before")
    def split_plugin_names(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [name.strip() for name in value.split(",") if name.strip()]
        return value


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then VIBECODER_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if name in _ENV_SKIP:
            continue
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
