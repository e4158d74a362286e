"""
Record parsing and serialization for user database lines.

A record line looks like::

    field1<TAB>field2<TAB>c=10 d=0.1111 t=12345

The first two fields form the record key, the third holds three
whitespace-separated ``name=value`` tokens: confidence, data and tag.
"""

import re
from dataclasses import dataclass

from loguru import logger

from userdb.config import (
    COMMENT_MARKER,
    CONFIDENCE_MAX,
    CONFIDENCE_MIN,
    FIELD_SEPARATOR,
)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

# Unicode White_Space characters only; \x1c-\x1f are not separators
_WHITESPACE_RE = re.compile(
    "[\t\n\x0b\x0c\r \x85\xa0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000]+"
)


@dataclass
class Record:
    """
    One merged entry of the user database.

    Only ``confidence`` and ``confidence_field`` change after a record has
    been inserted into a store.
    """
    key: str                    # field1 + TAB + field2
    confidence: int             # parsed value of confidence_field
    confidence_field: str       # e.g. "c=10", kept verbatim
    data_field: str             # opaque payload token
    tag_field: str              # tick tag token

    def to_line(self) -> str:
        """Serialize to an output line, including the trailing newline."""
        return format_record(self)


def split_whitespace(text: str) -> list[str]:
    """Split on runs of whitespace, ignoring leading and trailing whitespace."""
    return [token for token in _WHITESPACE_RE.split(text) if token]


def is_ignorable(line: str) -> bool:
    """Empty lines and comment lines carry no record."""
    return not line or line.startswith(COMMENT_MARKER)


def parse_confidence(value: str) -> int | None:
    """
    Parse a signed 32-bit decimal integer.

    Returns None for anything else (non-digits, underscores, overflow).
    """
    if not _INTEGER_RE.fullmatch(value):
        return None
    number = int(value)
    if not CONFIDENCE_MIN <= number <= CONFIDENCE_MAX:
        return None
    return number


def parse_record(line: str) -> Record | None:
    """
    Parse one line into a Record.

    Malformed lines are reported as warnings and yield None; this function
    never raises for bad input. An unparsable confidence value is reported
    too, but the record is kept with confidence 0.

    Args:
        line: A single line without its line terminator

    Returns:
        Parsed Record, or None for empty, comment and malformed lines
    """
    if is_ignorable(line):
        return None

    fields = line.split(FIELD_SEPARATOR)
    if len(fields) != 3:
        logger.warning(f"Invalid line: {line}")
        return None

    tokens = split_whitespace(fields[2])
    if len(tokens) != 3:
        logger.warning(f"Invalid line: {line}")
        return None

    confidence_parts = tokens[0].split("=")
    if len(confidence_parts) != 2:
        logger.warning(f"Invalid line: {line}")
        return None

    confidence = parse_confidence(confidence_parts[1])
    if confidence is None:
        logger.warning(f"Invalid line: {line}")
        confidence = 0

    return Record(
        key=f"{fields[0]}{FIELD_SEPARATOR}{fields[1]}",
        confidence=confidence,
        confidence_field=tokens[0],
        data_field=tokens[1],
        tag_field=tokens[2],
    )


def format_record(record: Record) -> str:
    """Format a record as ``<key>\\t<confidence> <data> <tag>\\n``."""
    return f"{record.key}{FIELD_SEPARATOR}{record.confidence_field} {record.data_field} {record.tag_field}\n"
