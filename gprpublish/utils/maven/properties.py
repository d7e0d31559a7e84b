"""
Reader for Java-style ``.properties`` files.

Handles the subset of the format used by Gradle projects:
comments, ``key=value`` / ``key:value`` / ``key value`` pairs,
line continuations and backslash escapes.
"""

import os
import re
from typing import Dict, List

from .errors import ConfigurationError

_ESCAPES = {
    't': '\t',
    'n': '\n',
    'r': '\r',
    'f': '\f',
}

_HEX4 = re.compile(r'[0-9A-Fa-f]{4}')
_SEPARATORS = '=:'
_WHITESPACE = ' \t\f'


def _logical_lines(text: str) -> List[str]:
    """Join continuation lines and drop comments and blank lines."""
    lines = []
    pending = None

    for raw in text.splitlines():
        if pending is None:
            line = raw.lstrip(_WHITESPACE)
            if not line or line[0] in '#!':
                continue
        else:
            # Leading whitespace of a continuation line is ignored
            line = raw.lstrip(_WHITESPACE)

        # An odd number of trailing backslashes continues the line
        trailing = len(line) - len(line.rstrip('\\'))
        if trailing % 2 == 1:
            pending = (pending or '') + line[:-1]
            continue

        lines.append((pending or '') + line)
        pending = None

    if pending is not None:
        lines.append(pending)

    return lines


def _unescape(value: str) -> str:
    result = []
    i = 0
    while i < len(value):
        ch = value[i]
        if ch != '\\' or i + 1 >= len(value):
            result.append(ch)
            i += 1
            continue

        nxt = value[i + 1]
        if nxt == 'u':
            code = value[i + 2:i + 6]
            if not _HEX4.fullmatch(code):
                raise ConfigurationError(f"Malformed \\uXXXX escape: \\u{code}")
            result.append(chr(int(code, 16)))
            i += 6
            continue

        result.append(_ESCAPES.get(nxt, nxt))
        i += 2

    return ''.join(result)


def _split_pair(line: str):
    """Split a logical line into raw key and raw value."""
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == '\\':
            i += 2
            continue
        if ch in _SEPARATORS or ch in _WHITESPACE:
            break
        i += 1

    key = line[:i]
    rest = line[i:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)

    return key, rest


def parse_properties(text: str) -> Dict[str, str]:
    """
    Parse properties text into a dictionary.

    Later definitions of a key override earlier ones.
    """
    properties = {}
    for line in _logical_lines(text):
        key, value = _split_pair(line)
        properties[_unescape(key)] = _unescape(value)
    return properties


def load_properties(path: str) -> Dict[str, str]:
    """
    Load a ``.properties`` file.

    Args:
        path: Path to the properties file

    Returns:
        Dictionary of keys to values

    Raises:
        ConfigurationError: If the file is missing or cannot be read
    """
    if not os.path.isfile(path):
        raise ConfigurationError(f"Properties file not found: {path}")

    try:
        with open(path, 'rb') as f:
            data = f.read()
    except OSError as e:
        raise ConfigurationError(f"Cannot read properties file {path}: {e}")

    try:
        text = data.decode('utf-8')
    except UnicodeDecodeError:
        # Java's historical default encoding for properties files
        text = data.decode('iso-8859-1')

    return parse_properties(text)
