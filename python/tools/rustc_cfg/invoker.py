#!/usr/bin/env python3
"""
Toolchain process execution.

Runs the configured rustc with a `--print` request and returns its standard
output as text. Launch failures, non-zero exits and undecodable output are
raised as exceptions; there is no retry and no timeout.
"""

from __future__ import annotations

import subprocess
import time
from typing import List, Mapping, Optional

from loguru import logger

from .config import PRINT_CFG_ARGS, PRINT_TARGET_LIST_ARGS, ToolchainConfig
from .core_types import CommandResult
from .exceptions import DecodeError, ProcessError, SpawnError


class ProcessRunner:
    """Blocking execution of a single toolchain command."""

    @staticmethod
    def run_command(command: List[str]) -> CommandResult:
        """
        Run a command synchronously, capturing stdout and stderr as bytes.

        Args:
            command: Command and arguments to execute

        Returns:
            CommandResult with execution details

        Raises:
            SpawnError: If the executable could not be started
        """
        start_time = time.time()

        logger.debug(f"Executing command: {' '.join(command)}")

        try:
            result = subprocess.run(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=False,
            )
        except OSError as e:
            raise SpawnError(command[0], reason=e.strerror or str(e)) from e
        except ValueError as e:
            # Arguments the OS cannot accept, e.g. an embedded NUL byte
            raise SpawnError(command[0], reason=str(e)) from e

        execution_time = time.time() - start_time
        cmd_result = CommandResult(
            command=command,
            return_code=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
            execution_time=execution_time,
        )

        logger.debug(
            f"Command exited with code {cmd_result.return_code} in {execution_time:.2f}s"
        )
        return cmd_result


class ToolchainInvoker:
    """Runs `rustc --print ...` requests for one ToolchainConfig."""

    def __init__(
        self,
        config: Optional[ToolchainConfig] = None,
        runner: Optional[ProcessRunner] = None,
    ) -> None:
        self.config = config or ToolchainConfig()
        self.runner = runner or ProcessRunner()

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        target: Optional[str] = None,
    ) -> ToolchainInvoker:
        """Create an invoker honouring the RUSTC override in ``environ``."""
        return cls(ToolchainConfig.from_env(environ, target=target))

    @property
    def executable(self) -> str:
        return self.config.executable

    def _run(self, command: List[str]) -> str:
        result = self.runner.run_command(command)

        if result.failed:
            raise ProcessError(
                result.return_code,
                result.stderr.decode("utf-8", errors="replace"),
                command=command,
            )

        try:
            return result.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError("stdout", reason=str(e)) from e

    def print_cfg(self) -> str:
        """
        Run `<executable> --print cfg` and return its standard output.

        Raises:
            SpawnError: If the toolchain could not be started
            ProcessError: If it exited with a non-zero status
            DecodeError: If its output is not valid UTF-8
        """
        return self._run(self.config.command(PRINT_CFG_ARGS))

    def print_target_list(self) -> List[str]:
        """Run `<executable> --print target-list` and return the triples."""
        output = self._run(
            self.config.command(PRINT_TARGET_LIST_ARGS, include_target=False)
        )
        return [line.strip() for line in output.splitlines() if line.strip()]


def resolve_and_run(
    environ: Optional[Mapping[str, str]] = None, target: Optional[str] = None
) -> str:
    """Resolve the executable from ``environ`` and return its cfg dump."""
    return ToolchainInvoker.from_env(environ, target=target).print_cfg()
