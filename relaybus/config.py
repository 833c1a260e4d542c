"""Configuration loading and validation for the relaybus demo."""

from __future__ import annotations

from copy import deepcopy
import logging
import os
from pathlib import Path
import tomllib
from typing import Any

from platformdirs import user_config_path, user_state_path
from pydantic import BaseModel, ValidationError, field_validator

from .events import DEFAULT_MESSAGE, EVENT_BUS_DATA
from .exceptions import ConfigValidationError

LOGGER = logging.getLogger(__name__)

CONFIG_DIR = user_config_path("relaybus")
CONFIG_PATH = CONFIG_DIR / "config.toml"

VALID_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _require_non_empty(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError("Expected a string value.")
    normalized = value.strip()
    if not normalized:
        raise ValueError("String value must not be empty.")
    return normalized


class AppConfig(BaseModel):
    """Application metadata."""

    title: str = "Relay Bus Demo"

    @field_validator("title", mode="before")
    @classmethod
    def _validate_title(cls, value: Any) -> str:
        return _require_non_empty(value)


class BusConfig(BaseModel):
    """Event delivery policy."""

    isolate_errors: bool = False


class DemoConfig(BaseModel):
    """Event emitted by the demo button."""

    event_name: str = EVENT_BUS_DATA.name
    message: str = DEFAULT_MESSAGE

    @field_validator("event_name", mode="before")
    @classmethod
    def _validate_event_name(cls, value: Any) -> str:
        # Empty names are legal bus keys, only the type is checked.
        if not isinstance(value, str):
            raise ValueError("event_name must be a string.")
        return value

    @field_validator("message", mode="before")
    @classmethod
    def _validate_message(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("message must be a string.")
        return value


class LoggingConfig(BaseModel):
    """Logging behavior and output destinations."""

    level: str = "INFO"
    structured: bool = True
    log_to_file: bool = False
    log_file_path: str = str(user_state_path("relaybus") / "app.log")

    @field_validator("level", mode="before")
    @classmethod
    def _validate_level(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("Logging level must be a string.")
        normalized = value.strip().upper()
        if normalized not in VALID_LOG_LEVELS:
            raise ValueError(f"Unsupported log level {normalized!r}.")
        return normalized

    @field_validator("log_file_path", mode="before")
    @classmethod
    def _validate_log_file_path(cls, value: Any) -> str:
        return _require_non_empty(value)


class Config(BaseModel):
    """Root configuration model for all sections."""

    app: AppConfig = AppConfig()
    bus: BusConfig = BusConfig()
    demo: DemoConfig = DemoConfig()
    logging: LoggingConfig = LoggingConfig()


DEFAULT_CONFIG: dict[str, dict[str, Any]] = Config().model_dump()

_SECTION_MODELS: dict[str, type[BaseModel]] = {
    "app": AppConfig,
    "bus": BusConfig,
    "demo": DemoConfig,
    "logging": LoggingConfig,
}


def ensure_config_dir(config_dir: Path | None = None) -> Path:
    """Ensure that the config directory exists and return its path."""
    directory = config_dir or CONFIG_DIR
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        LOGGER.warning("Unable to create config directory %s: %s", directory, exc)
    return directory


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override values onto base values."""
    merged: dict[str, Any] = deepcopy(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _validate_section(name: str, raw: Any) -> dict[str, Any]:
    """Validate one section, falling back to its defaults when invalid."""
    model = _SECTION_MODELS[name]
    try:
        return model.model_validate(raw).model_dump()
    except ValidationError as exc:
        LOGGER.warning(
            "config.section_invalid",
            extra={
                "event": "config.section_invalid",
                "section": name,
                "reason": str(exc),
            },
        )
        return deepcopy(DEFAULT_CONFIG[name])


def _validate_config(raw: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """Validate merged config section by section."""
    try:
        validated = {name: _validate_section(name, raw.get(name, {})) for name in _SECTION_MODELS}
        return Config.model_validate(validated).model_dump()
    except Exception as exc:  # noqa: BLE001 - unexpected model construction failure.
        raise ConfigValidationError(f"Unable to validate configuration: {exc}") from exc


def load_config(config_path: Path | None = None) -> dict[str, dict[str, Any]]:
    """
    Load configuration from TOML, merge with defaults, and validate.

    The optional ``config_path`` argument is intended for tests and tooling.
    """
    target_path = config_path or CONFIG_PATH

    raw_data: dict[str, Any] = {}
    if target_path.exists():
        try:
            raw_data = tomllib.loads(target_path.read_text(encoding="utf-8"))
        except (tomllib.TOMLDecodeError, OSError, UnicodeDecodeError) as exc:
            LOGGER.warning("Failed to parse config at %s: %s", target_path, exc)
            raw_data = {}

    merged = _deep_merge(DEFAULT_CONFIG, raw_data)
    return _validate_config(merged)


def config_path_from_env() -> Path | None:
    """Return the config override from ``RELAYBUS_CONFIG`` if set."""
    value = os.environ.get("RELAYBUS_CONFIG", "").strip()
    return Path(value).expanduser() if value else None
