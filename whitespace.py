"""Vertical-whitespace normalization for itinerary lines."""

import re

# Literal two-character escapes as typed in the itinerary text
_ESCAPES = ("\\v", "\\f", "\\r")

_VERTICAL_RE = re.compile(r"[\v\f\r]")
_BLANK_RUN_RE = re.compile(r"\n{3,}")


def normalize_whitespace(line: str) -> str:
    """Turn \\v, \\f, \\r (escaped or real) into newlines; cap blank runs at one blank line."""
    for escape in _ESCAPES:
        line = line.replace(escape, "\n")
    line = _VERTICAL_RE.sub("\n", line)
    return _BLANK_RUN_RE.sub("\n\n", line)
