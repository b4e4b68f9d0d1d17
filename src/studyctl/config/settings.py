"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``STUDYCTL_*`` prefix
  3. TOML file    — ``studyctl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` fed by
:func:`studyctl.config.discovery.locate_workspace`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from studyctl.config.discovery import ConfigFileError, WorkspaceLocation, locate_workspace
from studyctl.config.models import (
    AttendanceConfig,
    PyqConfig,
    RevisionConfig,
    StoreConfig,
)

__all__ = ["ConfigFileError", "StudySettings", "TomlSettingsSource"]


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``studyctl.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise ConfigFileError(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class StudySettings(BaseSettings):
    """Unified settings for the studyctl CLI.

    Attributes:
        workspace_root: Directory the store path is resolved against
            (parent of ``studyctl.toml``, or CWD if no config found).
        config_path: The config file in effect, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "STUDYCTL_",
        "env_nested_delimiter": "__",
    }

    workspace_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    store: StoreConfig = Field(default_factory=StoreConfig)
    attendance: AttendanceConfig = Field(default_factory=AttendanceConfig)
    revision: RevisionConfig = Field(default_factory=RevisionConfig)
    pyq: PyqConfig = Field(default_factory=PyqConfig)

    @property
    def store_path(self) -> Path:
        """Absolute path of the JSON state file."""
        location = WorkspaceLocation(root=self.workspace_root, config_path=self.config_path)
        return location.resolve_store(self.store.path)

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
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        workspace_root: Path | None = None,
        **cli_flags: Any,
    ) -> StudySettings:
        """Construct settings from CLI invocation.

        Discovers ``studyctl.toml`` via walk-up (or explicit *config_path*),
        resolves *workspace_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides.
        """
        location = locate_workspace(config_path=config_path, workspace_root=workspace_root)
        _tls.toml_path = location.config_path
        try:
            return cls(
                workspace_root=location.root,
                config_path=location.config_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None
