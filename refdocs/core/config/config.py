"""Top-level configuration for refdocs.

Sources are layered, later ones winning:
defaults -> JSON config file -> REFDOCS_* environment variables -> CLI arguments.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from refdocs.core.config.docs_config import DocsConfig
from refdocs.core.config.logging_config import LoggingConfig


class Config(BaseModel):
    """Complete refdocs configuration."""

    docs: DocsConfig = Field(default_factory=DocsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_file: Path | None = None, args: Any = None) -> "Config":
        """Build a validated configuration from every source.

        Args:
            config_file: Optional JSON file with ``docs``/``logging`` sections
            args: Optional parsed CLI arguments

        Raises:
            OSError: If ``config_file`` cannot be read
            ValueError: If ``config_file`` is not a JSON object
            pydantic.ValidationError: If the merged values are invalid
        """
        data: dict[str, Any] = {}

        if config_file is not None:
            file_data = json.loads(config_file.read_text(encoding="utf-8"))
            if not isinstance(file_data, dict):
                raise ValueError(
                    f"Config file {config_file} must contain a JSON object, "
                    f"got {type(file_data).__name__}"
                )
            data = _merge(data, file_data)

        data = _merge(data, cls.load_from_env())

        if args is not None:
            overrides: dict[str, Any] = {}
            if docs_overrides := DocsConfig.extract_cli_overrides(args):
                overrides["docs"] = docs_overrides
            if logging_overrides := LoggingConfig.extract_cli_overrides(args):
                overrides["logging"] = logging_overrides
            data = _merge(data, overrides)

        return cls.model_validate(data)

    @classmethod
    def load_from_env(cls) -> dict[str, Any]:
        config: dict[str, Any] = {}
        if docs := DocsConfig.load_from_env():
            config["docs"] = docs
        if logging := LoggingConfig.load_from_env():
            config["logging"] = logging
        return config


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged
