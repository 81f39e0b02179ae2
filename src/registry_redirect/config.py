"""Redirector configuration helpers."""

import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .constants import CONFIG_DIR, CONFIG_FILE, DEFAULT_PROBE_TIMEOUT, ENV_PREFIX, GLOBAL_REGION
from .errors import ConfigError, InvalidSettingError
from .regions import aws_region_to_s3_url

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class RedirectorSettings(BaseModel):
    """Settings for region routing and blob probes."""

    probe_timeout: float = Field(DEFAULT_PROBE_TIMEOUT, gt=0, description="HEAD probe timeout in seconds")
    default_region: str = Field(GLOBAL_REGION, description="Region used when the caller gives none")
    log_level: LogLevel = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator("default_region")
    @classmethod
    def _routable_region(cls, v: str) -> str:
        if not aws_region_to_s3_url(v):
            raise ValueError(f"default_region '{v}' is not routed to any bucket")
        return v


def default_config_path() -> Path:
    """~/.registry-redirect/config.yaml"""
    return Path.home() / CONFIG_DIR / CONFIG_FILE


def _env_overrides() -> Dict[str, Any]:
    overrides = {}
    for name in RedirectorSettings.model_fields:
        value = os.environ.get(ENV_PREFIX + name.upper())
        if value is not None:
            overrides[name] = value
    return overrides


def load_settings(path: Optional[Path] = None) -> RedirectorSettings:
    """Load settings from YAML, then apply REGISTRY_REDIRECT_* env overrides.

    Args:
        path: Config file; when omitted the default location is used if present

    Returns:
        Validated settings

    Raises:
        ConfigError: If the file is unreadable or a value is invalid
    """
    explicit = path is not None
    path = Path(path) if explicit else default_config_path()

    data: Dict[str, Any] = {}
    if path.exists():
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Failed to read {path}: {e}")
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse {path}: {e}")
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping in {path}, got {type(data).__name__}")
        bad_keys = [k for k in data if not isinstance(k, str)]
        if bad_keys:
            raise ConfigError(f"Setting names must be strings in {path}, got {bad_keys}")
    elif explicit:
        raise ConfigError(f"Config file not found: {path}")

    data.update(_env_overrides())
    try:
        return RedirectorSettings.model_validate(data)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise InvalidSettingError(str(path), errors)
