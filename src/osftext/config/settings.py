"""osftext configuration settings."""

from __future__ import annotations

import json
import os
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from osftext.exceptions import ConfigurationError, check_config_keys


class OSFTextSettings(BaseSettings):
    """osftext configuration settings.

    Settings are loaded with the following precedence (highest to lowest):
    1. CLI arguments (when provided via command flags)
       Example: osf2txt --newline -i screenplay.osf

    2. Config file values (YAML, TOML, or JSON)
       Example: osf2txt --config osftext.yaml

    3. Environment variables (prefixed with OSFTEXT_)
       Example: export OSFTEXT_LOG_LEVEL=DEBUG

    4. .env file (in current directory)

    5. Default values (defined in field declarations below)
    """

    model_config = SettingsConfigDict(
        env_prefix="OSFTEXT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Container settings
    packaged_extensions: list[str] = Field(
        default_factory=lambda: [".fadein"],
        description="File extensions treated as zip-packaged screenplay projects",
    )
    document_member: str = Field(
        default="document.xml",
        description="Archive member holding the OSF XML inside a packaged project",
        min_length=1,
    )

    # Output settings
    trailing_newline: bool = Field(
        default=False,
        description="Append a trailing newline to rendered text",
    )

    # Debug settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # Logging settings
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    log_format: str = Field(
        default="console",
        description="Log output format (console, json, structured)",
        pattern="^(console|json|structured)$",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file path",
    )

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path | None:
        """Expand environment variables and resolve path."""
        if v is None:
            return None
        if isinstance(v, str):
            expanded = os.path.expandvars(v)
            return Path(expanded).expanduser().resolve()
        if isinstance(v, Path):
            return v.resolve()
        raise ValueError(
            f"Path fields must be string or Path, got {type(v).__name__}: {v!r}"
        )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        """Normalize log level to uppercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.upper()
        raise ValueError(f"log_level must be a string, got {type(v).__name__}")

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, v: Any) -> str:
        """Normalize log format to lowercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.lower()
        raise ValueError(f"log_format must be a string, got {type(v).__name__}")

    @field_validator("packaged_extensions", mode="before")
    @classmethod
    def normalize_extensions(cls, v: Any) -> list[str]:
        """Lower-case extensions and make sure each starts with a dot.

        A single comma separated string is accepted as well.
        """
        if isinstance(v, str):
            v = [part for part in v.split(",") if part.strip()]
        if not isinstance(v, (list, tuple, set)):  # noqa: UP038
            raise ValueError(
                f"packaged_extensions must be a list, got {type(v).__name__}"
            )
        normalized = []
        for ext in v:
            ext = str(ext).strip().lower()
            if not ext.startswith("."):
                ext = "." + ext
            normalized.append(ext)
        return normalized

    @classmethod
    def from_env(cls) -> OSFTextSettings:
        """Create settings from environment variables."""
        return _build_settings(cls, {}, source="environment")

    @classmethod
    def from_file(cls, config_path: Path | str) -> OSFTextSettings:
        """Load settings from a configuration file.

        Args:
            config_path: Path to configuration file (YAML, TOML, or JSON).

        Returns:
            Settings loaded from the file.

        Raises:
            ConfigurationError: If the file format is not supported, the file
                cannot be parsed, or a value is invalid.
            FileNotFoundError: If config file doesn't exist.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        suffix = config_path.suffix.lower()

        try:
            if suffix in {".yml", ".yaml"}:
                with config_path.open(encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}
            elif suffix == ".toml":
                with config_path.open("rb") as f:
                    data = tomllib.load(f)
            elif suffix == ".json":
                with config_path.open(encoding="utf-8") as f:
                    data = json.load(f)
            else:
                raise ConfigurationError(
                    message=f"Unsupported configuration file format: {suffix}",
                    hint="Use one of the supported formats: .yml, .yaml, .toml, "
                    "or .json",
                    details={
                        "file": str(config_path),
                        "detected_format": suffix,
                        "supported_formats": [".yml", ".yaml", ".toml", ".json"],
                    },
                )
        except (yaml.YAMLError, tomllib.TOMLDecodeError, ValueError) as e:
            raise ConfigurationError(
                message=f"Cannot parse configuration file: {config_path}",
                hint=f"Check the {suffix.lstrip('.').upper()} syntax of the file.",
                details={"file": str(config_path), "reason": str(e)},
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                message=f"Configuration file must contain a mapping: {config_path}",
                hint="Write settings as key/value pairs at the top level.",
                details={"file": str(config_path), "found": type(data).__name__},
            )

        check_config_keys(data)

        return _build_settings(cls, data, source=str(config_path))


def _build_settings(
    settings_cls: type[OSFTextSettings], data: dict[str, Any], source: str
) -> OSFTextSettings:
    try:
        return settings_cls(**data)
    except ValidationError as e:
        fields = [".".join(str(loc) for loc in err["loc"]) for err in e.errors()]
        raise ConfigurationError(
            message=f"Invalid configuration values in {source}",
            hint=f"Check the value of: {', '.join(fields)}",
            details={"source": source, "reason": str(e)},
        ) from e


# Global settings instance
_settings: OSFTextSettings | None = None


def get_settings() -> OSFTextSettings:
    """Get the global settings instance, loading it from the environment once."""
    global _settings
    if _settings is None:
        _settings = OSFTextSettings.from_env()
    return _settings


def set_settings(settings: OSFTextSettings) -> None:
    """Set the global settings instance.

    Args:
        settings: Settings instance to use globally.
    """
    global _settings
    _settings = settings


def clear_settings_cache() -> None:
    """Clear the global settings cache.

    This forces get_settings() to re-read from environment variables
    on the next call. Useful for testing when environment variables are
    changed via monkeypatch.
    """
    global _settings
    _settings = None


def reset_settings() -> None:
    """Reset the global settings instance."""
    clear_settings_cache()


def get_settings_for_cli(
    config_file: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> OSFTextSettings:
    """Get settings for CLI commands with consistent precedence.

    Args:
        config_file: Optional config file to load instead of the environment
            defaults.
        cli_overrides: CLI argument overrides. Only non-None values apply.

    Returns:
        OSFTextSettings instance with all sources merged.

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist.
        ConfigurationError: If config_file cannot be read as settings or an
            override value is invalid.
    """
    settings = OSFTextSettings.from_file(config_file) if config_file else get_settings()

    if cli_overrides:
        filtered_overrides = {k: v for k, v in cli_overrides.items() if v is not None}
        if filtered_overrides:
            data = settings.model_dump()
            data.update(filtered_overrides)
            settings = _build_settings(OSFTextSettings, data, source="command line")

    return settings
