"""Unified settings — init kwargs, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — passed by the embedding application
  2. Env vars     — ``MASSASSIGN_*`` prefix, ``__`` for nested sections
  3. TOML file    — explicit path, ``$MASSASSIGN_CONFIG``, or the nearest
                    ``massassign.toml`` walking up from the working directory
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import os
import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from massassign.config.models import ParametersConfig, SettersConfig
from massassign.domain.setters import PropertySetters

CONFIG_FILENAME = "massassign.toml"
CONFIG_ENV_VAR = "MASSASSIGN_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Locate the config file: ``$MASSASSIGN_CONFIG``, else the nearest
    ``massassign.toml`` in *start* (default: cwd) or one of its parents.

    A set env var that names no file means "no config"; the walk-up is skipped.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``massassign.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise ValueError(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class MassAssignSettings(BaseSettings):
    """Frozen settings object for the assignment service.

    Attributes:
        config_path: The TOML file that was loaded, or None.
        verbose: DEBUG logging for the ``massassign`` logger.
        log_json: JSON log lines instead of console output.
        setters: Setter resolution options.
        parameters: ``Parameters.permit`` behaviour.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "MASSASSIGN_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None
    verbose: bool = False
    log_json: bool = False

    setters: SettersConfig = Field(default_factory=SettersConfig)
    parameters: ParametersConfig = Field(default_factory=ParametersConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def load(
        cls,
        *,
        config_path: str | Path | None = None,
        start: Path | None = None,
        **overrides: Any,
    ) -> MassAssignSettings:
        """Build settings, discovering ``massassign.toml`` unless given a path.

        An explicit *config_path* that does not exist is ignored rather than
        falling back to discovery.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None

    def build_setters(self) -> PropertySetters:
        """A setter registry honouring the ``[setters]`` section."""
        return PropertySetters(
            prefix=self.setters.prefix,
            allow_instance_attributes=self.setters.allow_instance_attributes,
        )
