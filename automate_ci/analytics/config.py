"""Configuration for the usage reporter."""

import re
from collections.abc import Iterator
from pathlib import Path

from pydantic import BaseModel

TRACKING_ID_KEY = "google.analytics.tracking.id"

_ESCAPE_PATTERN = re.compile(r"\\(u[0-9a-fA-F]{4}|.)", re.DOTALL)
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


class AnalyticsConfig(BaseModel):
    """Configuration for usage event reporting."""

    enabled: bool = True
    plugin_properties: Path = Path("plugin.properties")
    collect_url: str = "https://www.google-analytics.com/collect"
    timeout: float = 10.0


def _logical_lines(text: str) -> Iterator[str]:
    """Yield entries with comments dropped and continuation lines joined."""
    buffer = ""
    for raw_line in text.splitlines():
        line = raw_line.lstrip()
        if not buffer and (not line or line.startswith(("#", "!"))):
            continue

        trailing_backslashes = len(line) - len(line.rstrip("\\"))
        if trailing_backslashes % 2 == 1:
            buffer += line[:-1]
            continue

        yield buffer + line
        buffer = ""

    if buffer:
        yield buffer


def _unescape(text: str) -> str:
    return _ESCAPE_PATTERN.sub(
        lambda m: (
            chr(int(m.group(1)[1:], 16))
            if len(m.group(1)) == 5
            else _ESCAPES.get(m.group(1), m.group(1))
        ),
        text,
    )


def parse_properties(text: str) -> dict[str, str]:
    """Parse properties-style entries.

    Blank lines and lines starting with ``#`` or ``!`` are ignored, and a line
    ending in an odd number of backslashes continues on the next one. The key
    ends at the first unescaped ``=``, ``:`` or whitespace; backslash escapes
    are resolved in both keys and values.
    """
    properties: dict[str, str] = {}
    for line in _logical_lines(text):
        index = 0
        while index < len(line):
            char = line[index]
            if char == "\\":
                index += 2
                continue
            if char in "=:" or char.isspace():
                break
            index += 1

        value = line[index:].lstrip()
        if value[:1] in ("=", ":"):
            value = value[1:].lstrip()
        properties[_unescape(line[:index])] = _unescape(value)
    return properties


def load_tracking_id(path: Path) -> str | None:
    """Read the analytics tracking id from a plugin properties file.

    The file is decoded as ISO-8859-1, so any byte sequence is readable.

    Returns:
        The tracking id, or None when the key is missing or empty

    Raises:
        OSError: If the file cannot be read

    """
    properties = parse_properties(path.read_text(encoding="latin-1"))
    return properties.get(TRACKING_ID_KEY, "").strip() or None
