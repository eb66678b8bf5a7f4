#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
High-level API for the rustc_cfg module.
"""
from typing import List, Mapping, Optional

from .core_types import ConfigSet
from .invoker import ToolchainInvoker
from .parser import parse


def parse_cfg(raw_text: str) -> ConfigSet:
    """
    Parse captured `--print cfg` output without running the toolchain.
    """
    return parse(raw_text)


def print_cfg(target: Optional[str] = None, *,
              environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Run the toolchain and return its raw `--print cfg` output.
    """
    return ToolchainInvoker.from_env(environ, target=target).print_cfg()


def get_cfg(target: Optional[str] = None, *,
            environ: Optional[Mapping[str, str]] = None) -> ConfigSet:
    """
    Run the toolchain and parse its configuration predicates.

    Uses the RUSTC override from ``environ`` (defaults to os.environ) or
    plain `rustc`. A ``target`` triple asks for the cfg of that target
    instead of the host.
    """
    return parse(print_cfg(target, environ=environ))


def list_targets(*, environ: Optional[Mapping[str, str]] = None) -> List[str]:
    """
    List the target triples supported by the toolchain.
    """
    return ToolchainInvoker.from_env(environ).print_target_list()
