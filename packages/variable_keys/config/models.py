"""Typed configuration models for variable keys."""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    EnvSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from packages.variable_keys.enums import MorphType, PrimaryKeyType

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "variable-keys" / "variable-keys.yaml"


class LoggingSettings(BaseModel):
    """Logging configuration applied by ``bootstrap``."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_output: bool = True
    service: str = "variable-keys"
    environment: str = "dev"


class ModelKeySettings(BaseModel):
    """Key kinds configured for one model under ``models.<identifier>``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    primary_key_type: PrimaryKeyType | None = None
    morph_type: MorphType | None = None


class MappingEnvSettingsSource(EnvSettingsSource):
    """Environment source reading from an explicit mapping, not ``os.environ``."""

    def __init__(
        self, settings_cls: type[BaseSettings], environ: Mapping[str, str]
    ) -> None:
        self._environ = environ
        super().__init__(settings_cls)

    def _load_env_vars(self) -> Mapping[str, str | None]:
        """Return the injected variables, case-folded like ``os.environ`` ones."""
        if self.case_sensitive:
            return dict(self._environ)
        return {key.lower(): value for key, value in self._environ.items()}


class VariableKeysSettings(BaseSettings):
    """Root settings resolved from init/env/yaml/defaults sources.

    ``models`` keys are model identifiers (``"<module>.<qualname>"``) as
    produced by ``model_identifier``. Environment variable names are
    case-insensitive, so identifiers set through ``VARIABLE_KEYS_MODELS__...``
    arrive lowercased; mixed-case identifiers belong in YAML or init params.
    """

    model_config = SettingsConfigDict(
        env_prefix="VARIABLE_KEYS_",
        env_nested_delimiter="__",
        extra="ignore",
        nested_model_default_partial_update=True,
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    default_morph_type: MorphType = MorphType.NUMERIC
    models: dict[str, ModelKeySettings] = Field(default_factory=dict)

    _config_path: ClassVar[Path] = DEFAULT_CONFIG_PATH
    _environ: ClassVar[Mapping[str, str] | None] = None

    @field_validator("default_morph_type")
    @classmethod
    def _require_concrete_morph_type(cls, value: MorphType) -> MorphType:
        """Reject ``string``, which only ever resolves through this default."""
        if value is MorphType.STRING:
            raise ValueError("default_morph_type must be numeric, uuid or ulid")
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Apply precedence: init > env > yaml > model defaults."""
        if cls._environ is not None:
            env_settings = MappingEnvSettingsSource(settings_cls, cls._environ)
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(
                settings_cls,
                yaml_file=cls._config_path,
                yaml_file_encoding="utf-8",
            ),
        )
