"""Logging settings: a stderr sink plus an optional rotating log file.

``setup_logging`` in ``refdocs.api.cli.main`` turns these into loguru sinks;
the values here are passed to ``logger.add`` unchanged.
"""

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
)


def normalize_level(value: str) -> str:
    level = value.strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(
            f"Unknown log level '{value}', expected one of {', '.join(LOG_LEVELS)}"
        )
    return level


class FileLoggingConfig(BaseModel):
    """Rotating log file, off unless a path is requested."""

    enabled: bool = Field(default=False, description="Also write log records to a file")
    path: Path = Field(default=Path("refdocs.log"), description="Log file location")
    level: str = Field(default="INFO", description="Lowest level written to the file")
    rotation: str = Field(default="10 MB", description="loguru rotation policy")
    retention: str = Field(default="1 week", description="loguru retention policy")
    format: str = Field(default=DEFAULT_FILE_FORMAT, description="loguru record format")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        return normalize_level(v)

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: Path) -> Path:
        if not v.name:
            raise ValueError(f"Log file path '{v}' does not name a file")
        return v

    @field_validator("rotation", "retention", "format")
    @classmethod
    def validate_not_blank(cls, v: str, info: ValidationInfo) -> str:
        if not v.strip():
            raise ValueError(f"File logging {info.field_name} cannot be blank")
        return v

    def sink_options(self) -> dict[str, Any]:
        """Keyword arguments for the file sink's ``logger.add`` call."""
        return {
            "level": self.level,
            "rotation": self.rotation,
            "retention": self.retention,
            "format": self.format,
        }


class LoggingConfig(BaseModel):
    """Console and file logging for a refdocs run."""

    console_level: str = Field(
        default="WARNING", description="Lowest level printed to stderr"
    )
    file: FileLoggingConfig = Field(default_factory=FileLoggingConfig)

    @field_validator("console_level")
    @classmethod
    def validate_console_level(cls, v: str) -> str:
        return normalize_level(v)

    def console_sink_level(self, verbose: bool = False) -> str:
        return "DEBUG" if verbose else self.console_level

    @classmethod
    def load_from_env(cls) -> dict[str, Any]:
        """Load logging config from REFDOCS_LOGGING__* variables."""
        config: dict[str, Any] = {}
        if console_level := os.getenv("REFDOCS_LOGGING__CONSOLE_LEVEL"):
            config["console_level"] = console_level
        if log_file := os.getenv("REFDOCS_LOGGING__FILE"):
            config["file"] = {"enabled": True, "path": log_file}
        return config

    @classmethod
    def extract_cli_overrides(cls, args: Any) -> dict[str, Any] | None:
        """Map ``--log-file`` and ``--log-level`` onto the file section.

        Returns:
            Overrides for this section, or None if neither flag was given
        """
        file_overrides: dict[str, Any] = {}
        if log_file := getattr(args, "log_file", None):
            file_overrides["enabled"] = True
            file_overrides["path"] = log_file
        if log_level := getattr(args, "log_level", None):
            file_overrides["level"] = log_level
        return {"file": file_overrides} if file_overrides else None
