"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "FMPUB_"


class Settings(BaseModel):
    content_dir:    str  = Field(default="content", description="Directory scanned for .md/.mdx posts")
    output_dir:     str  = Field(default="public",  description="Directory for normalized posts + index JSON")
    build_drafts:   bool = Field(default=False,     description="Publish documents marked draft: true")
    workers:        int  = Field(default=4,  ge=1,  description="Parser threads for a batch build; 1 = sequential")
    summary_length: int  = Field(default=70, ge=1,  description="Words per summary when no <!--more--> divider")
    log_level:      str  = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then FMPUB_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValueError as e:
        raise ValueError(f"Invalid configuration: {e}") from e
