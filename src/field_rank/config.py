"""Centralized configuration for field-rank using Pydantic Settings."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from field_rank.parameters import ScorerParameters


class Settings(BaseSettings):
    """Typed configuration loaded from ``FIELD_RANK_*`` environment variables.

    Scorer parameters nest under ``parameters``; use ``__`` to reach them,
    e.g. ``FIELD_RANK_PARAMETERS__K1=3.0`` or
    ``FIELD_RANK_PARAMETERS__TITLE__WEIGHT=2.0``.
    """

    model_config = SettingsConfigDict(
        env_prefix="FIELD_RANK_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="info", description="Root logging level")
    json_logs: bool = Field(default=True, description="Emit structured JSON log lines")

    # Parameter export
    parameter_file: Path = Field(
        default=Path("bm25Para.txt"),
        description="Where the tuned parameters are written for external grading tools",
    )
    write_parameter_file: bool = Field(
        default=True,
        description="Write the parameter file whenever a scoring run starts",
    )

    parameters: ScorerParameters = Field(
        default_factory=ScorerParameters,
        description="BM25 weights, slopes, saturation and PageRank blending",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        allowed = {"debug", "info", "warning", "error", "critical"}
        normalized = value.strip().lower()
        if normalized not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}, got {value!r}")
        return normalized
