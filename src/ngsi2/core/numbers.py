# ngsi2/core/numbers.py
"""
Strict numeric literal parsing shared by the geo-query parser and the
plain-text value codec.

Python's ``int()``/``float()`` accept underscores, ``nan``, ``inf`` and
other spellings that are not valid on the NGSI v2 wire; these helpers only
accept plain decimal literals.
"""
from __future__ import annotations

import math
import re

INTEGER_PATTERN = re.compile(r"[+-]?\d+")
DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
FLOAT32_MAX = 3.4028234663852886e38


def parse_int64(text: str) -> int:
    """Parse a signed 64-bit integer literal. Surrounding blanks are not allowed."""
    if not INTEGER_PATTERN.fullmatch(text):
        raise ValueError(f"not an integer literal: {text!r}")
    number = int(text)
    if not INT64_MIN <= number <= INT64_MAX:
        raise ValueError(f"integer out of 64-bit range: {text!r}")
    return number


def parse_decimal(text: str) -> float:
    """Parse a finite decimal literal, ignoring surrounding whitespace."""
    stripped = text.strip()
    if not DECIMAL_PATTERN.fullmatch(stripped):
        raise ValueError(f"not a decimal literal: {text!r}")
    number = float(stripped)
    if not math.isfinite(number):
        raise ValueError(f"decimal out of range: {text!r}")
    return number


def parse_float32(text: str) -> float:
    """Parse a decimal literal that fits the single-precision range."""
    number = parse_decimal(text)
    if abs(number) > FLOAT32_MAX:
        raise ValueError(f"decimal out of single-precision range: {text!r}")
    return number
