"""Embedded tag encoding.

Revision tables keep an entity's tags in a single text column::

    highway=residential;name=Main Street

Entries are separated by ``;`` and each key is separated from its value by
the first unescaped ``=``. A backslash escapes ``;``, ``=`` and itself, so
keys and values may contain any character.
"""

from typing import Callable, Dict, List, Mapping, Optional

ENTRY_SEPARATOR = ";"
KEY_VALUE_SEPARATOR = "="
ESCAPE = "\\"

_RESERVED = (ESCAPE, ENTRY_SEPARATOR, KEY_VALUE_SEPARATOR)

TagParser = Callable[[Optional[str]], Dict[str, str]]


def _split_unescaped(raw: str, separator: str, maxsplit: int = -1) -> List[str]:
    """Split on ``separator`` where it is not escaped, keeping escapes intact."""
    parts: List[str] = []
    current: List[str] = []
    escaped = False
    for char in raw:
        if escaped:
            current.append(char)
            escaped = False
        elif char == ESCAPE:
            current.append(char)
            escaped = True
        elif char == separator and (maxsplit < 0 or len(parts) < maxsplit):
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return parts


def _unescape(value: str) -> str:
    chars: List[str] = []
    escaped = False
    for char in value:
        if escaped:
            chars.append(char)
            escaped = False
        elif char == ESCAPE:
            escaped = True
        else:
            chars.append(char)
    if escaped:
        chars.append(ESCAPE)
    return "".join(chars)


def _escape(value: str) -> str:
    for char in _RESERVED:
        value = value.replace(char, ESCAPE + char)
    return value


def parse_tags(raw: Optional[str]) -> Dict[str, str]:
    """Decode an embedded tag string into a mapping.

    Args:
        raw: Tag column value, possibly None or empty

    Returns:
        Mapping of tag key to value in source order. An entry without a
        separator maps its key to an empty value; empty entries are
        skipped. When a key repeats, the last value wins.

    Example:
        >>> parse_tags("k1=v1;k2=v2")
        {'k1': 'v1', 'k2': 'v2'}
        >>> parse_tags(None)
        {}
    """
    if not raw:
        return {}

    tags: Dict[str, str] = {}
    for entry in _split_unescaped(raw, ENTRY_SEPARATOR):
        if not entry:
            continue
        key_value = _split_unescaped(entry, KEY_VALUE_SEPARATOR, maxsplit=1)
        key = _unescape(key_value[0])
        value = _unescape(key_value[1]) if len(key_value) > 1 else ""
        tags[key] = value
    return tags


def format_tags(tags: Mapping[str, str]) -> str:
    """Encode a tag mapping into the embedded string form.

    Example:
        >>> format_tags({"k1": "v1", "k2": "v2"})
        'k1=v1;k2=v2'
    """
    return ENTRY_SEPARATOR.join(
        f"{_escape(key)}{KEY_VALUE_SEPARATOR}{_escape(value)}"
        for key, value in tags.items()
    )
