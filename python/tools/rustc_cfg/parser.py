#!/usr/bin/env python3
"""
Parser for the output of `rustc --print cfg`.

Each line is either a bare flag (``unix``) or a ``key="value"`` pair.
Values of repeated keys such as ``target_feature`` accumulate in the
order they appear. Parsing does not spawn any process, so captured output
can be fed in directly.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional

from loguru import logger

from .core_types import ConfigSet, Endian
from .exceptions import InvalidEndianError, InvalidPointerWidthError, MissingFieldError


class CfgParser:
    """Parser turning `--print cfg` text into a ConfigSet."""

    def __init__(self) -> None:
        self.pointer_width_pattern = re.compile(r"[0-9]+")
        self.line_break_pattern = re.compile(r"\r\n|\r|\n")

    @staticmethod
    def _unquote(value: str) -> str:
        """Strip exactly one layer of surrounding double quotes."""
        if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
            return value[1:-1]
        return value

    def parse_lines(self, raw_text: str) -> Dict[str, List[str]]:
        """
        Collect every predicate of ``raw_text`` into an ordered mapping.

        Returns:
            Mapping of key to its values in encounter order. Bare flags map
            to an empty list; a bare flag repeated after the key already
            holds values appends an empty-string marker.
        """
        raw: Dict[str, List[str]] = {}

        for line in self.line_break_pattern.split(raw_text):
            line = line.strip()
            if not line:
                continue

            key, sep, value = line.partition("=")
            if not sep:
                values = raw.setdefault(line, [])
                if values:
                    values.append("")
                continue

            raw.setdefault(key.strip(), []).append(self._unquote(value))

        return raw

    @staticmethod
    def _first(raw: Dict[str, List[str]], key: str) -> Optional[str]:
        values = raw.get(key)
        return values[0] if values else None

    def _required(self, raw: Dict[str, List[str]], key: str) -> str:
        values = raw.get(key)
        if not values:
            raise MissingFieldError(key)
        return values[0]

    def _endian(self, raw: Dict[str, List[str]]) -> Endian:
        value = self._required(raw, "target_endian")
        try:
            return Endian(value)
        except ValueError:
            raise InvalidEndianError(value) from None

    def _pointer_width(self, raw: Dict[str, List[str]]) -> int:
        value = self._required(raw, "target_pointer_width")
        if not self.pointer_width_pattern.fullmatch(value):
            raise InvalidPointerWidthError(value)
        return int(value)

    def parse(self, raw_text: str) -> ConfigSet:
        """
        Parse `--print cfg` output into a ConfigSet.

        Args:
            raw_text: Captured standard output of the toolchain

        Returns:
            Fully populated ConfigSet

        Raises:
            MissingFieldError: If a required key has no value
            InvalidEndianError: If target_endian is not little or big
            InvalidPointerWidthError: If target_pointer_width is not numeric
        """
        raw = self.parse_lines(raw_text)
        logger.debug(f"Parsed {len(raw)} cfg keys")

        # Build order decides which missing field is reported first
        target_arch = self._required(raw, "target_arch")
        target_os = self._required(raw, "target_os")
        target_family = self._first(raw, "target_family")
        target_env = self._first(raw, "target_env") or ""
        target_vendor = self._first(raw, "target_vendor") or ""
        target_endian = self._endian(raw)
        target_pointer_width = self._pointer_width(raw)

        return ConfigSet(
            target_arch=target_arch,
            target_os=target_os,
            target_family=target_family,
            target_env=target_env,
            target_endian=target_endian,
            target_pointer_width=target_pointer_width,
            target_vendor=target_vendor,
            raw=raw,
        )


default_parser = CfgParser()


def parse(raw_text: str) -> ConfigSet:
    """Parse `--print cfg` output using the default parser."""
    return default_parser.parse(raw_text)
