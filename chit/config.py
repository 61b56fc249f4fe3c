import logging
import os
import re
from functools import lru_cache
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Pattern to match $VAR_NAME environment variable references
ENV_VAR_PATTERN = re.compile(r"\$([A-Z_][A-Z0-9_]*)")

LOG_LEVELS = ("debug", "info", "warning", "error")

_config_path_override: Path | None = None


def interpolate_env_vars(value):
    """Recursively replace $VAR_NAME with os.environ values."""
    if isinstance(value, str):

        def replace(match):
            var = match.group(1)
            val = os.environ.get(var)
            if val is None:
                raise ValueError(f"Environment variable ${var} not set")
            return val

        return ENV_VAR_PATTERN.sub(replace, value)
    elif isinstance(value, dict):
        return {k: interpolate_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [interpolate_env_vars(item) for item in value]
    return value


def set_config_path(path: Path | str | None) -> None:
    """Use *path* instead of the default config file. ``None`` clears the override."""
    global _config_path_override
    _config_path_override = Path(path) if path is not None else None


def get_config_path() -> Path:
    """Resolve the YAML config file: override, then $CHIT_CONFIG, then ./chit.yaml."""
    if _config_path_override is not None:
        return _config_path_override
    if env_path := os.environ.get("CHIT_CONFIG"):
        return Path(env_path)
    return Path.cwd() / "chit.yaml"


def load_config_file() -> dict:
    """Load and parse the YAML config with environment variable interpolation."""
    config_path = get_config_path()

    if not config_path.exists():
        raise FileNotFoundError(f"{config_path.name} not found at {config_path}")

    with open(config_path, "r") as f:
        config = yaml.safe_load(f) or {}

    return interpolate_env_vars(config)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CHIT_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Default secret for the CLI; never read by the codec itself
    secret: str | None = None

    # Default decode TTL in seconds
    ttl: int = 60

    log_level: str = "warning"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.lower()
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value


@lru_cache
def get_settings() -> Settings:
    """Load settings from the environment, .env and the YAML config file."""
    # Load .env early so env vars are available for YAML interpolation
    load_dotenv(Path.cwd() / ".env")

    base_settings = Settings()

    try:
        file_config = load_config_file()
    except FileNotFoundError:
        logger.debug("No config file found, using environment only")
        return base_settings

    updates = {k: v for k, v in file_config.items() if k in Settings.model_fields}
    if updates:
        # Re-validate so YAML values get the same checks as env values
        return Settings.model_validate({**base_settings.model_dump(), **updates})

    return base_settings


def clear_settings_cache() -> None:
    get_settings.cache_clear()
