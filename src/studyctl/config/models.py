"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, studyctl.toml only contains
overrides. A fresh workspace needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from studyctl.domain.filters import parse_pyq_filter
from studyctl.domain.revision import MAX_PLAN_DAYS

# --- studyctl.toml sections ---


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    path: str = "studyctl.json"
    autosave: bool = True


class AttendanceConfig(BaseModel):
    """[attendance] section."""

    model_config = {"frozen": True}

    threshold: int = Field(default=75, gt=0, lt=100)


class RevisionConfig(BaseModel):
    """[revision] section."""

    model_config = {"frozen": True}

    default_days: int = Field(default=7, ge=1, le=MAX_PLAN_DAYS)


class PyqConfig(BaseModel):
    """[pyq] section."""

    model_config = {"frozen": True}

    default_filter: str = "all"

    @field_validator("default_filter")
    @classmethod
    def _known_filter(cls, value: str) -> str:
        return parse_pyq_filter(value).value
