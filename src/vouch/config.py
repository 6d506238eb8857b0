from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from vouch.constants import (
    DEFAULT_VAR_NAME,
    MSG_ASSERT_ALLOWED_FIELDS,
    MSG_ASSERT_FIELD_TYPES,
    MSG_ASSERT_FIELD_VALUES,
    MSG_ASSERT_FORBIDDEN_FIELDS,
    MSG_ASSERT_OPTIONAL_FIELD_TYPES,
    MSG_ASSERT_OPTIONAL_FIELD_VALUES,
    MSG_ASSERT_TYPE,
    MSG_ASSERT_VALUE,
)
from vouch.exceptions import ConfigError
from vouch.logging import get_logger

__all__ = [
    "MessageTemplates",
    "VouchSettings",
    "load_config",
    "get_user_config_path",
]

logger = get_logger(__name__)


class MessageTemplates(BaseModel):
    """One message template per assertion kind.

    Attributes:
        type: Used by ``assert_type``.
        value: Used by ``assert_value`` and its shorthands.
        field_types: Used by ``assert_field_types``.
        field_values: Used by ``assert_field_values``.
        optional_field_types: Used by ``assert_optional_field_types``.
        optional_field_values: Used by ``assert_optional_field_values``.
        allowed_fields: Used by ``assert_allowed_fields``.
        forbidden_fields: Used by ``assert_forbidden_fields``.
    """

    type: str = MSG_ASSERT_TYPE
    value: str = MSG_ASSERT_VALUE
    field_types: str = MSG_ASSERT_FIELD_TYPES
    field_values: str = MSG_ASSERT_FIELD_VALUES
    optional_field_types: str = MSG_ASSERT_OPTIONAL_FIELD_TYPES
    optional_field_values: str = MSG_ASSERT_OPTIONAL_FIELD_VALUES
    allowed_fields: str = MSG_ASSERT_ALLOWED_FIELDS
    forbidden_fields: str = MSG_ASSERT_FORBIDDEN_FIELDS


class YamlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from YAML files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                with open(yaml_file) as f:
                    loaded = yaml.safe_load(f)
                    if loaded is None:
                        logger.warning(
                            f"Config file {yaml_file} is empty, using defaults."
                        )
                    elif isinstance(loaded, dict):
                        self._config_data = loaded
                    else:
                        raise ConfigError(
                            message=f"Config file {yaml_file} must contain a mapping",
                            value=loaded,
                        )
            except yaml.YAMLError as e:
                raise ConfigError(
                    message=f"Invalid YAML in {yaml_file}: {e}",
                    field=None,
                    value=None,
                ) from e

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get value for a specific field from the YAML config."""
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return the complete config data."""
        return self._config_data


class VouchSettings(BaseSettings):
    """Root configuration for assertion messages and token defaults."""

    model_config = SettingsConfigDict(
        env_prefix="VOUCH_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    messages: MessageTemplates = Field(default_factory=MessageTemplates)
    default_var_name: str = DEFAULT_VAR_NAME

    @field_validator("default_var_name")
    @classmethod
    def check_var_name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("default_var_name must not be blank")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the order of settings sources.

        Priority (highest to lowest):
        1. Init settings (explicit keyword arguments)
        2. Environment variables (VOUCH_*)
        3. Project YAML config (./vouch.yaml)
        4. User YAML config (~/.config/vouch/config.yaml)
        """
        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, Path.cwd() / "vouch.yaml"),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/vouch/config.yaml
    """
    return Path.home() / ".config" / "vouch" / "config.yaml"


def load_config(config_path: Path | None = None) -> VouchSettings:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional config file. Its values take precedence over
            every other source, environment variables included.

    Returns:
        VouchSettings instance with merged configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    if config_path is not None and not config_path.exists():
        raise ConfigError(
            message=f"Config file not found: {config_path}",
            field=None,
            value=str(config_path),
        )
    try:
        file_data = YamlConfigSource(VouchSettings, config_path)() if config_path else {}
        return VouchSettings(**file_data)
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
