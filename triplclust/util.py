"""Shared helpers: linkage methods and strict number parsing."""

from __future__ import annotations

import enum
import re

__all__ = ["Linkage", "parse_number"]

_WHITESPACE = "\t\r\n "
_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class Linkage(enum.Enum):
    """Linkage method used by the hierarchical clustering."""

    SINGLE = "single"
    COMPLETE = "complete"
    AVERAGE = "average"


def parse_number(text: str) -> float:
    """Convert *text* to a float, ignoring surrounding whitespace.

    The whole remaining string must be a decimal number, otherwise
    ``ValueError("not a number")`` is raised.
    """
    stripped = text.strip(_WHITESPACE)
    if not _NUMBER.fullmatch(stripped):
        raise ValueError("not a number")
    return float(stripped)