"""Document generation configuration for refdocs.

This module provides the settings the fragment writer and assembler read:
document title, the API spec version the reference is built from, and the
staging/output directories.
"""

import argparse
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from refdocs.docgen import links


class DocsConfig(BaseModel):
    """Reference document configuration.

    Configuration can be provided via:
    - Environment variables (REFDOCS_*)
    - Configuration files
    - CLI arguments
    - Default values
    """

    title: str = Field(
        default="API Reference Docs", description="Human-readable document title"
    )
    spec_version: str = Field(
        default="v1.0.0",
        description="Version of the API spec, e.g. v1.29.0; drives the release link",
    )
    includes_dir: Path = Field(
        default=Path("includes"), description="Staging directory for fragment files"
    )
    build_dir: Path = Field(
        default=Path("build"), description="Directory receiving the assembled document"
    )

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Document title cannot be empty")
        return v

    @field_validator("spec_version")
    @classmethod
    def validate_spec_version(cls, v: str) -> str:
        """Validate that a release tag can be derived from the version."""
        try:
            links.release_tag(v)
        except ValueError as e:
            raise ValueError(f"Invalid spec version '{v}': expected e.g. v1.29.0") from e
        return v

    @property
    def release(self) -> str:
        return links.release_tag(self.spec_version)

    @property
    def spec_link(self) -> str:
        return links.spec_link(self.spec_version)

    @classmethod
    def add_cli_arguments(cls, parser: argparse.ArgumentParser) -> None:
        """Add document-related CLI arguments."""
        parser.add_argument(
            "--title",
            type=str,
            help="Document title (default: from config file or 'API Reference Docs')",
        )
        parser.add_argument(
            "--spec-version",
            type=str,
            help="API spec version the reference is generated from (e.g. v1.29.0)",
        )
        parser.add_argument(
            "--includes-dir",
            type=Path,
            help="Staging directory for fragment files (default: includes)",
        )
        parser.add_argument(
            "--build-dir",
            type=Path,
            help="Output directory for index.html (default: build)",
        )

    @classmethod
    def load_from_env(cls) -> dict[str, Any]:
        """Load document config from environment variables."""
        config: dict[str, Any] = {}
        if title := os.getenv("REFDOCS_DOCS__TITLE"):
            config["title"] = title
        if spec_version := os.getenv("REFDOCS_DOCS__SPEC_VERSION"):
            config["spec_version"] = spec_version
        if includes_dir := os.getenv("REFDOCS_DOCS__INCLUDES_DIR"):
            config["includes_dir"] = Path(includes_dir)
        if build_dir := os.getenv("REFDOCS_DOCS__BUILD_DIR"):
            config["build_dir"] = Path(build_dir)
        return config

    @classmethod
    def extract_cli_overrides(cls, args: Any) -> dict[str, Any] | None:
        """Extract document configuration overrides from CLI arguments.

        Args:
            args: Parsed command line arguments

        Returns:
            Dictionary of overrides, or None if no overrides
        """
        overrides: dict[str, Any] = {}
        for name in ("title", "spec_version", "includes_dir", "build_dir"):
            value = getattr(args, name, None)
            if value:
                overrides[name] = value
        return overrides if overrides else None
