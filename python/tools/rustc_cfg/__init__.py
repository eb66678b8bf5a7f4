#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
rustc_cfg - run `rustc --print cfg` and parse the output

This module runs the Rust compiler's configuration dump and turns it into a
ConfigSet with typed accessors for the well-known keys (target_arch,
target_os, target_family, target_env, target_endian, target_pointer_width,
target_vendor) and a generic lookup for everything else.

Features:
- RUSTC environment override, falling back to `rustc`
- Optional --target triple
- Pure text parser usable on captured output
- Structured exceptions for launch, exit status, decoding and data errors
"""

# Module metadata
__version__ = '0.1.0'
__author__ = "Max Qian"
__license__ = "GPL-3.0-or-later"

from .api import get_cfg, list_targets, parse_cfg, print_cfg
from .config import DEFAULT_EXECUTABLE, RUSTC_ENV_VAR, ToolchainConfig
from .core_types import CommandResult, ConfigSet, Endian
from .exceptions import (
    CfgError,
    CfgParseError,
    ConfigurationError,
    DecodeError,
    InvalidEndianError,
    InvalidPointerWidthError,
    InvocationError,
    MissingFieldError,
    ProcessError,
    SpawnError,
)
from .invoker import ProcessRunner, ToolchainInvoker, resolve_and_run
from .parser import CfgParser, parse
from .cli import main
from .logging_config import setup_logging

# Configure default logging; debug traces stay hidden unless -v is given
setup_logging("INFO")


def get_tool_info() -> dict:
    """
    Return metadata about this tool for discovery by PythonWrapper.

    Returns:
        Dict containing tool metadata including name, version, description,
        available functions, requirements, and platform compatibility.
    """
    return {
        "name": "rustc_cfg",
        "version": __version__,
        "description": "Runs `rustc --print cfg` and parses the configuration predicates",
        "author": __author__,
        "license": __license__,
        "supported": True,
        "platform": ["windows", "linux", "macos"],
        "functions": [
            "get_cfg",
            "print_cfg",
            "parse_cfg",
            "list_targets",
            "resolve_and_run",
            "parse",
        ],
        "requirements": ["loguru", "pydantic", "typer", "rich"],
        "capabilities": [
            "cfg_dump",
            "cfg_parsing",
            "target_listing",
        ],
        "classes": {
            "ConfigSet": "Parsed configuration predicates with typed accessors",
            "ToolchainConfig": "Executable and target settings for the toolchain",
            "ToolchainInvoker": "Runs `--print` requests against the toolchain",
            "CfgParser": "Parser for `--print cfg` output",
        }
    }


__all__ = [
    # Core types
    'ConfigSet',
    'Endian',
    'CommandResult',
    'ToolchainConfig',

    # Exceptions
    'CfgError',
    'InvocationError',
    'SpawnError',
    'ProcessError',
    'DecodeError',
    'CfgParseError',
    'MissingFieldError',
    'InvalidEndianError',
    'InvalidPointerWidthError',
    'ConfigurationError',

    # Classes
    'CfgParser',
    'ProcessRunner',
    'ToolchainInvoker',

    # API functions
    'get_cfg',
    'print_cfg',
    'parse_cfg',
    'list_targets',
    'resolve_and_run',
    'parse',
    'get_tool_info',

    # Constants
    'DEFAULT_EXECUTABLE',
    'RUSTC_ENV_VAR',

    'main'
]
