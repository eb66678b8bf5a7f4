#!/usr/bin/env python3
"""
Exception types for toolchain invocation and cfg parsing.

Every error carries a stable ``error_code`` and the values needed to
describe it, so callers can report or serialize failures without parsing
messages.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class CfgError(Exception):
    """Base exception for all rustc_cfg errors."""

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        **context: Any,
    ):
        super().__init__(message)
        self.error_code = error_code or self.__class__.__name__.upper()
        self.context = context

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to structured dictionary."""
        return {
            "error_type": self.__class__.__name__,
            "message": str(self),
            "error_code": self.error_code,
            "context": self.context,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={str(self)!r}, error_code={self.error_code!r})"


class InvocationError(CfgError):
    """Raised when the toolchain could not produce usable output."""


class SpawnError(InvocationError):
    """Raised when the toolchain process could not be started."""

    def __init__(self, executable: str, reason: Optional[str] = None, **kwargs: Any):
        self.executable = executable
        self.reason = reason

        message = f"Failed to execute {executable!r}"
        if reason:
            message += f": {reason}"

        super().__init__(
            message,
            error_code="SPAWN_FAILED",
            executable=executable,
            reason=reason,
            **kwargs,
        )


class ProcessError(InvocationError):
    """Raised when the toolchain process exited with a non-zero status."""

    def __init__(
        self,
        exit_code: Optional[int],
        stderr_text: str = "",
        command: Optional[list] = None,
        **kwargs: Any,
    ):
        self.exit_code = exit_code
        self.stderr_text = stderr_text
        self.command = command or []

        message = f"Toolchain exited with status {exit_code}"
        if stderr_text:
            message += f": {stderr_text.strip()}"

        super().__init__(
            message,
            error_code="PROCESS_FAILED",
            exit_code=exit_code,
            stderr_text=stderr_text,
            command=self.command,
            **kwargs,
        )


class DecodeError(InvocationError):
    """Raised when the toolchain output is not valid UTF-8."""

    def __init__(self, stream: str = "stdout", reason: Optional[str] = None, **kwargs: Any):
        self.stream = stream
        self.reason = reason

        message = f"Toolchain {stream} is not valid UTF-8"
        if reason:
            message += f": {reason}"

        super().__init__(
            message,
            error_code="DECODE_FAILED",
            stream=stream,
            reason=reason,
            **kwargs,
        )


class CfgParseError(CfgError):
    """Raised when parsed predicates cannot be turned into a ConfigSet."""


class MissingFieldError(CfgParseError):
    """Raised when a required key has no recorded value."""

    def __init__(self, key: str, **kwargs: Any):
        self.key = key
        super().__init__(
            f"field {key} is missing from config",
            error_code="MISSING_FIELD",
            key=key,
            **kwargs,
        )


class InvalidEndianError(CfgParseError):
    """Raised when target_endian is neither "little" nor "big"."""

    def __init__(self, value: str, **kwargs: Any):
        self.value = value
        super().__init__(
            f"invalid target_endian {value!r}, expected 'little' or 'big'",
            error_code="INVALID_ENDIAN",
            value=value,
            **kwargs,
        )


class InvalidPointerWidthError(CfgParseError):
    """Raised when target_pointer_width is not a non-negative integer."""

    def __init__(self, value: str, **kwargs: Any):
        self.value = value
        super().__init__(
            f"invalid target_pointer_width {value!r}, expected a non-negative integer",
            error_code="INVALID_POINTER_WIDTH",
            value=value,
            **kwargs,
        )


class ConfigurationError(CfgError):
    """Raised when a settings file cannot be loaded or validated."""
