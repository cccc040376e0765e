from __future__ import annotations

import logging
import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from content_manager.exceptions import ConfigurationError
from content_manager.services.scanner import DEFAULT_EXTENSIONS, normalize_extensions

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.yaml"

_ENV_VAR_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def expand_env_vars(config_str: str) -> str:
    """
    Expand ${VAR_NAME} placeholders in a YAML string.
    Lines whose first non-whitespace character is # are left untouched.

    Raises:
        KeyError: If a referenced environment variable is not set
    """
    def replace_var(match: re.Match[str]) -> str:
        var_name = match.group(1)
        try:
            return os.environ[var_name]
        except KeyError:
            msg = f"Environment variable '{var_name}' referenced in config but not set"
            raise KeyError(msg) from None

    lines = []
    for line in config_str.split("\n"):
        if line.lstrip().startswith("#"):
            lines.append(line)
        else:
            lines.append(_ENV_VAR_RE.sub(replace_var, line))
    return "\n".join(lines)


def load_config_from_yaml(config_path: str | None = None) -> dict[str, Any]:
    """
    Load the YAML configuration file and expand environment variables.

    Args:
        config_path: Path to the config file. If None, uses the CONFIG_PATH
                     environment variable, falling back to ./config.yaml.

    Returns:
        Parsed configuration mapping

    Raises:
        ConfigurationError: File missing or unreadable, variable unset,
                            invalid YAML or a non-mapping root
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", DEFAULT_CONFIG_PATH)

    config_file = Path(config_path)
    try:
        config_str = config_file.read_text(encoding="utf-8")
    except OSError as e:
        msg = (
            f"Configuration file not readable at {config_path}\n"
            f"Use the CONFIG_PATH environment variable to override its location."
        )
        raise ConfigurationError(
            msg,
            context={"config_file": str(config_file), "error_type": type(e).__name__},
        ) from e

    try:
        expanded_config = expand_env_vars(config_str)
    except KeyError as e:
        msg = f"Error expanding environment variables in config: {e}"
        raise ConfigurationError(msg, context={"config_file": str(config_file)}) from None

    try:
        config_dict = yaml.safe_load(expanded_config)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in config: {e}"
        raise ConfigurationError(msg, context={"config_file": str(config_file)}) from None

    if config_dict is None:
        config_dict = {}

    if not isinstance(config_dict, dict):
        msg = "Config must contain a YAML mapping at root level"
        raise ConfigurationError(msg, context={"config_file": str(config_file)})

    return config_dict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CONTENT_MANAGER_",
        env_file=None,
        case_sensitive=False,
    )

    # Security
    auth_token: str  # Required
    environment: str = "development"

    # Observability
    log_level: str = "INFO"
    log_json: bool = True

    # Scanning and search
    extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    include_hidden: bool = False
    max_results_limit: int = Field(default=1000, ge=1)
    frontmatter_parser: Literal["simple", "yaml"] = "simple"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    @field_validator("extensions", mode="after")
    @classmethod
    def validate_extensions(cls, v: list[str]) -> list[str]:
        """Normalize extensions to a leading-dot form and require at least one."""
        normalized = list(normalize_extensions(v))
        if not normalized:
            msg = "search.extensions must list at least one extension"
            raise ValueError(msg)
        return normalized

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Unknown log level: {v}"
            raise ValueError(msg)
        return level


def flatten_config(config_dict: dict[str, Any]) -> dict[str, Any]:
    """Map the nested YAML layout onto flat Settings field names."""
    flat_config: dict[str, Any] = {}

    def section(name: str) -> dict[str, Any]:
        value = config_dict.get(name)
        return value if isinstance(value, dict) else {}

    auth = section("auth")
    if "token" in auth:
        flat_config["auth_token"] = auth["token"]

    if "environment" in config_dict:
        flat_config["environment"] = config_dict["environment"]

    logging_section = section("logging")
    if "level" in logging_section:
        flat_config["log_level"] = logging_section["level"]
    if "json" in logging_section:
        flat_config["log_json"] = logging_section["json"]

    search = section("search")
    for key in ("extensions", "include_hidden", "max_results_limit"):
        if key in search:
            flat_config[key] = search[key]

    frontmatter = section("frontmatter")
    if "parser" in frontmatter:
        flat_config["frontmatter_parser"] = frontmatter["parser"]

    server = section("server")
    for key in ("host", "port"):
        if key in server:
            flat_config[key] = server[key]

    return flat_config


def build_settings(config_path: str | None = None) -> Settings:
    """Load settings from the YAML config file.

    Raises:
        ConfigurationError: Loading or validation failed
    """
    config_dict = load_config_from_yaml(config_path)
    flat_config = flatten_config(config_dict)

    try:
        return Settings(**flat_config)
    except ValidationError as e:
        msg = f"Configuration validation error: {e}"
        raise ConfigurationError(
            msg,
            context={"fields": [".".join(str(loc) for loc in err["loc"]) for err in e.errors()]},
        ) from e


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings loaded once per process; FastAPI dependency."""
    settings = build_settings()
    logger.debug(
        "Configuration loaded",
        extra={
            "environment": settings.environment,
            "frontmatter_parser": settings.frontmatter_parser,
            "extensions": settings.extensions,
        },
    )
    return settings
