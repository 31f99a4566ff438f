"""Centralized configuration for starred-search using Pydantic Settings."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_KEYWORD_LIMIT = 64
DEFAULT_SEARCH_LIMIT = 10


class FieldWeights(BaseModel):
    """Per-field multipliers applied to every token a repository field emits."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    owner: float = Field(default=0.5, ge=0.0)
    name: float = Field(default=2.0, ge=0.0)
    description: float = Field(default=1.2, ge=0.0)
    readme: float = Field(default=0.4, ge=0.0)


class EngineConfig(BaseModel):
    """Immutable ranking parameters for a single search engine instance.

    ``k`` is folded into the IDF logarithm and ``delta`` is the BM25+ floor
    added to every matched term before IDF weighting.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    field_weights: FieldWeights = Field(default_factory=FieldWeights)
    k1: float = Field(default=1.2, ge=0.0, description="Term frequency saturation")
    b: float = Field(default=0.75, ge=0.0, description="Document length normalization")
    k: float = Field(default=1.0, ge=0.0, description="Constant added inside the IDF logarithm")
    delta: float = Field(default=0.5, ge=0.0, description="Score floor for every matched term")
    max_readme_tokens: int | None = Field(
        default=None, ge=0, description="Maximum readme tokens indexed per repository (None or 0 = unbounded)"
    )
    max_keywords: int = Field(
        default=DEFAULT_KEYWORD_LIMIT, ge=1, description="Maximum keyword tokens considered per search"
    )


DEFAULT_ENGINE_CONFIG = EngineConfig()


def compose_config(overrides: EngineConfig | Mapping[str, Any] | None = None) -> EngineConfig:
    """Merge partial overrides with the default engine configuration.

    ``field_weights`` overrides are merged field by field so callers can tune a
    single weight without restating the others. ``None`` values fall back to
    the defaults.
    """

    if overrides is None:
        return DEFAULT_ENGINE_CONFIG
    if isinstance(overrides, EngineConfig):
        return overrides

    data = DEFAULT_ENGINE_CONFIG.model_dump()
    for key, value in overrides.items():
        if value is None:
            continue
        if key == "field_weights":
            weights = value.model_dump() if isinstance(value, FieldWeights) else dict(value)
            data["field_weights"] = {**data["field_weights"], **weights}
            continue
        data[key] = value
    return EngineConfig.model_validate(data)


class Settings(BaseSettings):
    """Strictly typed configuration loaded from environment variables.

    Engine parameters are nested, e.g. ``STARRED_SEARCH_ENGINE__K1=1.5`` or
    ``STARRED_SEARCH_ENGINE__FIELD_WEIGHTS__NAME=3``.
    """

    model_config = SettingsConfigDict(
        env_prefix="STARRED_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")
    default_limit: int = Field(
        default=DEFAULT_SEARCH_LIMIT, ge=1, description="Result count used when a search omits its limit"
    )
    engine: EngineConfig = Field(default_factory=EngineConfig)

    def engine_config(self) -> EngineConfig:
        """Return the ranking parameters for new engine instances."""
        return self.engine
