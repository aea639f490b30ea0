"""Configuration management."""

from __future__ import annotations

import os
from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator

from dnastore.core.constants import (
    DEFAULT_CAPACITY,
    DEFAULT_MAX_HEADER_WORDS,
    MAX_BUFFER_LENGTH,
    MIN_HEADER_WORDS,
)
from dnastore.utils.logging import configure_logging

_TRUE_VALUES = {"1", "true", "yes", "on"}


class CodecConfig(BaseModel):
    """Settings shared by the codec and buffer factories."""

    max_header_words: int = Field(
        DEFAULT_MAX_HEADER_WORDS,
        ge=MIN_HEADER_WORDS,
        le=4096,
        description="Upper bound of 4-byte words scanned for the header sentinel",
    )
    default_capacity: int = Field(
        DEFAULT_CAPACITY,
        ge=0,
        le=MAX_BUFFER_LENGTH,
        description="Initial capacity of buffers created without an explicit size",
    )
    log_level: str = Field("INFO", description="Root log level")
    json_logs: bool = Field(True, description="Render logs as JSON instead of console")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and check the level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @classmethod
    def from_env(cls) -> "CodecConfig":
        return cls(
            max_header_words=int(
                os.getenv("DNA_MAX_HEADER_WORDS", str(DEFAULT_MAX_HEADER_WORDS))
            ),
            default_capacity=int(
                os.getenv("DNA_DEFAULT_CAPACITY", str(DEFAULT_CAPACITY))
            ),
            log_level=os.getenv("DNA_LOG_LEVEL", "INFO"),
            json_logs=os.getenv("DNA_JSON_LOGS", "true").strip().lower() in _TRUE_VALUES,
        )

    @classmethod
    def from_yaml(cls, path: str) -> "CodecConfig":
        """Load configuration from YAML file."""
        import yaml

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def apply_logging(self) -> None:
        """Configure structlog and the root logger from log_level and json_logs."""
        configure_logging(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CodecConfig":
        """Load configuration from dictionary."""
        return cls(**data)
