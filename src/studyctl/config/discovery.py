"""Locating studyctl.toml and the state file it points at.

``studyctl.toml`` is found by walking up from the working directory, the
way git finds ``.git/``. ``STUDYCTL_CONFIG`` or ``--config`` name it
directly. The directory that holds it is the workspace root, and a relative
``[store] path`` resolves against that root, so every subdirectory of a
workspace opens the same state file.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

CONFIG_FILENAME = "studyctl.toml"
CONFIG_ENV_VAR = "STUDYCTL_CONFIG"


class ConfigFileError(ValueError):
    """studyctl.toml is not valid TOML, or ``--config`` names no file."""


def _with_parents(start: Path) -> Iterator[Path]:
    yield start
    yield from start.parents


def find_config(start: Path | None = None) -> Path | None:
    """The config file for a workspace containing *start* (default: cwd).

    ``STUDYCTL_CONFIG`` wins when set; if it names a missing file there is
    no config at all, rather than a fallback to the walk-up.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override).expanduser()
        return path if path.is_file() else None

    for directory in _with_parents((start or Path.cwd()).resolve()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


@dataclass(frozen=True)
class WorkspaceLocation:
    """Where a workspace lives on disk."""

    root: Path
    config_path: Path | None = None

    def resolve_store(self, store_path: str | Path) -> Path:
        """Absolute state file path; relative paths hang off :attr:`root`."""
        path = Path(store_path).expanduser()
        if path.is_absolute():
            return path
        return self.root / path


def locate_workspace(
    *,
    config_path: str | Path | None = None,
    workspace_root: Path | None = None,
) -> WorkspaceLocation:
    """Pick the config file and workspace root for one CLI invocation.

    An explicit *config_path* must exist. Without *workspace_root* the root
    is the config file's directory, or the cwd when there is no config.

    Raises:
        ConfigFileError: *config_path* was given but is not a file.
    """
    if config_path:
        toml_path: Path | None = Path(config_path).expanduser()
        if not toml_path.is_file():
            raise ConfigFileError(f"Config file not found: {toml_path}")
    else:
        toml_path = find_config(workspace_root)

    root = workspace_root
    if root is None:
        root = toml_path.parent if toml_path else Path.cwd()
    return WorkspaceLocation(root=root, config_path=toml_path)
