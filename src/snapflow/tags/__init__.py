"""Parsing and formatting of the embedded tag column."""

from snapflow.tags.parser import TagParser, format_tags, parse_tags

__all__ = [
    "TagParser",
    "parse_tags",
    "format_tags",
]
