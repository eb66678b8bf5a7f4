#!/usr/bin/env python3
"""
Invocation settings for the toolchain.

The executable name is resolved once from an explicit environment mapping
and carried around as a ToolchainConfig, so nothing below reads the
process environment on its own.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .core_types import PathLike
from .exceptions import ConfigurationError

# Cargo passes RUSTC to build scripts; when set and non-empty it always wins
# over the default executable.
RUSTC_ENV_VAR = "RUSTC"
DEFAULT_EXECUTABLE = "rustc"

PRINT_CFG_ARGS: List[str] = ["--print", "cfg"]
PRINT_TARGET_LIST_ARGS: List[str] = ["--print", "target-list"]


class ToolchainConfig(BaseModel):
    """Settings describing which toolchain to run and for which target."""

    model_config = ConfigDict(
        extra="forbid", validate_assignment=True, str_strip_whitespace=True
    )

    executable: str = Field(
        default=DEFAULT_EXECUTABLE, description="Name or path of the rustc binary"
    )
    target: Optional[str] = Field(
        default=None, description="Target triple passed as --target"
    )

    @field_validator("executable")
    @classmethod
    def validate_executable(cls, v: str) -> str:
        """Reject an empty executable name."""
        if not v:
            raise ValueError("executable must not be empty")
        return v

    @field_validator("target")
    @classmethod
    def validate_target(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty target as no target."""
        return v or None

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        target: Optional[str] = None,
    ) -> ToolchainConfig:
        """
        Resolve the executable from the RUSTC override.

        Args:
            environ: Environment mapping to read; defaults to os.environ
            target: Optional target triple

        Returns:
            ToolchainConfig using RUSTC when set and non-empty, rustc otherwise
        """
        return cls(target=target).apply_env(environ)

    def apply_env(self, environ: Optional[Mapping[str, str]] = None) -> ToolchainConfig:
        """Return a copy whose executable is replaced by a non-empty RUSTC."""
        env = os.environ if environ is None else environ
        override = env.get(RUSTC_ENV_VAR, "").strip()
        if not override:
            return self

        logger.debug(f"Using {RUSTC_ENV_VAR} override: {override}")
        return self.model_validate({**self.model_dump(), "executable": override})

    def with_target(self, target: Optional[str]) -> ToolchainConfig:
        """Return a validated copy using ``target``; blank means no target."""
        return self.model_validate({**self.model_dump(), "target": target})

    @classmethod
    def from_json(cls, file_path: PathLike) -> ToolchainConfig:
        """
        Load settings from a JSON file.

        Raises:
            ConfigurationError: If the file cannot be read or is invalid
        """
        path = Path(file_path)

        if not path.is_file():
            raise ConfigurationError(
                f"Configuration file not found: {path}",
                error_code="FILE_NOT_FOUND",
                file_path=str(path),
            )

        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in file {path}: {e}",
                error_code="INVALID_JSON",
                file_path=str(path),
            ) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                f"Failed to read file {path}: {e}",
                error_code="FILE_READ_ERROR",
                file_path=str(path),
            ) from e

        try:
            config = cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration in {path}: {e}",
                error_code="INVALID_CONFIGURATION",
                file_path=str(path),
                validation_errors=e.errors(),
            ) from e

        logger.debug(f"Loaded toolchain configuration from {path}")
        return config

    def command(
        self, print_args: Optional[List[str]] = None, include_target: bool = True
    ) -> List[str]:
        """Build the argument vector for a `--print` request."""
        command = [self.executable]
        if include_target and self.target:
            command.extend(["--target", self.target])
        command.extend(print_args or PRINT_CFG_ARGS)
        return command

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return self.model_dump()
