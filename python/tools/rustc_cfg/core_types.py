#!/usr/bin/env python3
"""
Core types and data models for the rustc_cfg module.

This module provides the immutable result of one `rustc --print cfg` run,
the enum used for the target byte order, and the record describing a
finished toolchain process.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, TypeAlias, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Type aliases for improved type hinting
PathLike: TypeAlias = Union[str, Path]
CfgValues: TypeAlias = Tuple[str, ...]

# Keys that have a typed accessor on ConfigSet, in the order they are built
TYPED_KEYS: Tuple[str, ...] = (
    "target_arch",
    "target_os",
    "target_family",
    "target_env",
    "target_vendor",
    "target_endian",
    "target_pointer_width",
)


class Endian(StrEnum):
    """Target byte order as reported by `target_endian`."""

    LITTLE = "little"
    BIG = "big"

    @property
    def is_little(self) -> bool:
        """Check if this is little-endian byte order."""
        return self is Endian.LITTLE


class ConfigSet(BaseModel):
    """
    Parsed configuration predicates of one toolchain invocation.

    The typed fields are convenience views over ``raw``, which keeps every
    key exactly as it was reported. Bare flags such as ``unix`` or
    ``debug_assertions`` are present in ``raw`` with an empty tuple.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    target_arch: str = Field(description="Equivalent to cfg(target_arch = \"..\")")
    target_os: str = Field(description="Equivalent to cfg(target_os = \"..\")")
    target_family: Optional[str] = Field(
        default=None, description="Equivalent to cfg(unix) or cfg(windows)"
    )
    target_env: str = Field(
        default="", description="Equivalent to cfg(target_env = \"..\")"
    )
    target_endian: Endian = Field(
        description="Equivalent to cfg(target_endian = \"..\")"
    )
    target_pointer_width: int = Field(
        ge=0, description="Equivalent to cfg(target_pointer_width = \"..\")"
    )
    target_vendor: str = Field(
        default="", description="Equivalent to cfg(target_vendor = \"..\")"
    )
    raw: Mapping[str, CfgValues] = Field(
        default_factory=dict,
        validate_default=True,
        description="Every parsed key with its values in encounter order",
    )

    @field_validator("raw")
    @classmethod
    def freeze_raw(cls, v: Mapping[str, CfgValues]) -> Mapping[str, CfgValues]:
        """Store the raw predicates behind a read-only view."""
        return MappingProxyType({key: tuple(values) for key, values in v.items()})

    def __hash__(self) -> int:
        return hash(
            (
                self.target_arch,
                self.target_os,
                self.target_family,
                self.target_env,
                self.target_endian,
                self.target_pointer_width,
                self.target_vendor,
                tuple(self.raw.items()),
            )
        )

    def get(self, key: str) -> CfgValues:
        """Return every value recorded for ``key``; empty when absent."""
        return self.raw.get(key, ())

    def first(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the first value recorded for ``key``."""
        values = self.raw.get(key)
        if not values:
            return default
        return values[0]

    def has(self, key: str) -> bool:
        """Check if ``key`` was reported at all, with or without a value."""
        return key in self.raw

    def __contains__(self, key: object) -> bool:
        return key in self.raw

    def is_set(self, flag: str) -> bool:
        """Check if ``flag`` was only ever reported as a bare flag."""
        return self.raw.get(flag) == ()

    def matches(self, key: str, value: Optional[str] = None) -> bool:
        """
        Evaluate a single predicate against this configuration.

        ``matches("unix")`` behaves like ``cfg(unix)`` and
        ``matches("target_os", "linux")`` like ``cfg(target_os = "linux")``.
        """
        if value is None:
            return self.is_set(key)
        return value in self.raw.get(key, ())

    def keys(self) -> List[str]:
        """Return the parsed keys in first-seen order."""
        return list(self.raw)

    @property
    def target_feature(self) -> CfgValues:
        """Equivalent to cfg(target_feature = "..")."""
        return self.get("target_feature")

    @property
    def target_has_atomic(self) -> CfgValues:
        """Equivalent to cfg(target_has_atomic = "..")."""
        return self.get("target_has_atomic")

    @property
    def flags(self) -> List[str]:
        """Bare flags reported by the toolchain."""
        return [key for key in self.raw if self.is_set(key)]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "target_arch": self.target_arch,
            "target_os": self.target_os,
            "target_family": self.target_family,
            "target_env": self.target_env,
            "target_endian": self.target_endian.value,
            "target_pointer_width": self.target_pointer_width,
            "target_vendor": self.target_vendor,
            "raw": {key: list(values) for key, values in self.raw.items()},
        }


@dataclass(frozen=True, slots=True)
class CommandResult:
    """
    Immutable result of a toolchain process execution.

    Output is kept as bytes; decoding is left to the caller so that an
    invalid byte sequence can be reported instead of replaced.
    """

    command: List[str] = field(default_factory=list)
    return_code: int = 0
    stdout: bytes = b""
    stderr: bytes = b""
    execution_time: float = 0.0
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self) -> None:
        """Validate command result data."""
        if self.execution_time < 0:
            raise ValueError("execution_time cannot be negative")

    @property
    def success(self) -> bool:
        """Check if the command exited with status zero."""
        return self.return_code == 0

    @property
    def failed(self) -> bool:
        """Check if the command failed."""
        return not self.success

    @property
    def command_str(self) -> str:
        """Get command as a single string."""
        return " ".join(self.command)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "command": self.command,
            "return_code": self.return_code,
            "stdout": self.stdout.decode("utf-8", errors="replace"),
            "stderr": self.stderr.decode("utf-8", errors="replace"),
            "execution_time": self.execution_time,
            "timestamp": self.timestamp,
        }
