"""
Configuration - YAML file plus environment overrides

The configuration is built once by the caller and handed to each component
explicitly. Keys follow the config.yaml layout:

    api:
      baseUrl: https://api.github.com/events
      maxRetries: 3
      retryDelayMs: 1000
      rateLimitWaitSeconds: 60
    filter:
      type: PushEvent
"""

import os
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

load_dotenv()  # take environment variables from .env

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.yaml"
DEFAULT_BASE_URL = "https://api.github.com/events"

# Environment variable -> (section, alias key, field name)
ENV_OVERRIDES = {
    "LOGPARSER_BASE_URL": ("api", "baseUrl", "base_url"),
    "LOGPARSER_MAX_RETRIES": ("api", "maxRetries", "max_retries"),
    "LOGPARSER_RETRY_DELAY_MS": ("api", "retryDelayMs", "retry_delay_ms"),
    "LOGPARSER_RATE_LIMIT_WAIT_SECONDS": (
        "api",
        "rateLimitWaitSeconds",
        "rate_limit_wait_seconds",
    ),
    "LOGPARSER_STORE_PATH": ("storage", "path", "path"),
    "LOGPARSER_LOG_LEVEL": (None, "logLevel", "log_level"),
}


class ConfigError(ValueError):
    """Raised when the configuration file cannot be read or is invalid"""


class FetchConfig(BaseModel):
    """Parameters for one fetch run"""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    base_url: str = Field(DEFAULT_BASE_URL, alias="baseUrl", min_length=1)
    max_retries: int = Field(3, alias="maxRetries", gt=0)
    retry_delay_ms: int = Field(1000, alias="retryDelayMs", ge=0)
    rate_limit_wait_seconds: int = Field(60, alias="rateLimitWaitSeconds", gt=0)
    page_delay_seconds: float = Field(0.1, alias="pageDelaySeconds", ge=0)
    timeout_seconds: float = Field(30, alias="timeoutSeconds", gt=0)


class FilterConfig(BaseModel):
    """Default display filters"""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: Optional[str] = None


class StorageConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    path: str = "logs.json"


class AppConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    api: FetchConfig = Field(default_factory=FetchConfig)
    filter: FilterConfig = Field(default_factory=FilterConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    log_level: str = Field("INFO", alias="logLevel")


def env_get(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get environment variable or return default."""
    return os.getenv(key, default)


def read_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a YAML mapping from disk

    Args:
        path: Path to the YAML file

    Returns:
        Dict: Parsed mapping, empty if the file does not exist or is empty
    """
    path = Path(path)
    if not path.exists():
        logger.info(f"No config file at {path}, using defaults")
        return {}

    yaml = YAML(typ="safe")
    try:
        loaded = yaml.load(path.read_text(encoding="utf-8"))
    except (OSError, YAMLError) as e:
        raise ConfigError(f"Failed to parse config file {path}: {e}") from e

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return loaded


def apply_env_overrides(
    raw: Dict[str, Any], environ: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    """
    Overlay LOGPARSER_* environment variables on a raw config mapping

    Args:
        raw: Mapping read from the config file
        environ: Environment to read (defaults to os.environ)

    Returns:
        Dict: New mapping with overrides applied
    """
    environ = os.environ if environ is None else environ
    merged = {
        key: dict(value) if isinstance(value, dict) else value
        for key, value in raw.items()
    }

    for env_key, (section, alias, name) in ENV_OVERRIDES.items():
        value = environ.get(env_key)
        if value is None or value == "":
            continue
        if section is None:
            target = merged
        else:
            target = merged.setdefault(section, {})
            if not isinstance(target, dict):
                raise ConfigError(f"Config section '{section}' must be a mapping")
        # the file may use either spelling; the override replaces both
        target.pop(name, None)
        target[alias] = value

    return merged


def load_config(
    path: Union[str, Path, None] = None, environ: Optional[Dict[str, str]] = None
) -> AppConfig:
    """
    Build the application configuration

    Args:
        path: Config file path (LOGPARSER_CONFIG or config.yaml when omitted)
        environ: Environment to read overrides from (defaults to os.environ)

    Returns:
        AppConfig: Validated, immutable configuration

    Raises:
        ConfigError: On unreadable YAML or invalid values
    """
    if path is None:
        path = env_get("LOGPARSER_CONFIG", DEFAULT_CONFIG_PATH)

    raw = apply_env_overrides(read_yaml(path), environ)

    try:
        config = AppConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.debug(f"Loaded configuration: {config}")
    return config
