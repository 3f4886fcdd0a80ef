"""
Whole-collection archive codec.

The archive is an ordered list of to-do mappings, written either as a
property list (binary or XML) or as JSON. Property lists have no null value,
so a to-do without notes simply has no `notes` key. Due dates are stored as
ISO-8601 strings, which keeps microseconds and UTC offsets intact.
"""
from __future__ import annotations

import json
import plistlib
import re
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional
from xml.parsers.expat import ExpatError

from pydantic import TypeAdapter, ValidationError

from .models import ToDo

_TODO_LIST = TypeAdapter(List[ToDo])

# Lone surrogates have no UTF-8/UTF-16 form, and an XML property list refuses
# every control character except tab, newline and carriage return.
_UNENCODABLE = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff]")


# PUBLIC_INTERFACE
class ArchiveFormat(str, Enum):
    """Supported on-disk encodings for the to-do archive."""

    BINARY = "binary"
    XML = "xml"
    JSON = "json"


# PUBLIC_INTERFACE
class ArchiveError(Exception):
    """Raised when archive bytes cannot be turned back into to-dos."""


def _to_records(todos: Iterable[ToDo]) -> List[Dict[str, Any]]:
    return [todo.model_dump(mode="json", exclude_none=True) for todo in todos]


# PUBLIC_INTERFACE
def encode_todos(todos: Iterable[ToDo], fmt: ArchiveFormat = ArchiveFormat.BINARY) -> bytes:
    """
    Encode the to-dos, in order, into archive bytes.

    Args:
        todos: The to-dos to encode.
        fmt: The archive encoding to produce.

    Returns:
        The encoded archive.

    Raises:
        ArchiveError: if a title or notes value cannot be written in this format.
    """
    records = _to_records(todos)
    try:
        if fmt is ArchiveFormat.JSON:
            return json.dumps(records, indent=2, ensure_ascii=False).encode("utf-8")
        plist_fmt = plistlib.FMT_XML if fmt is ArchiveFormat.XML else plistlib.FMT_BINARY
        return plistlib.dumps(records, fmt=plist_fmt, sort_keys=True)
    except ValueError as e:
        # UnicodeEncodeError for lone surrogates, ValueError for XML control characters
        raise ArchiveError(f"Cannot write {fmt.value} archive: {e}") from e


# PUBLIC_INTERFACE
def decode_todos(data: bytes, fmt: ArchiveFormat = ArchiveFormat.BINARY) -> List[ToDo]:
    """
    Decode archive bytes back into an ordered list of to-dos.

    Property lists are detected as binary or XML from their header, so either
    flavour decodes when `fmt` is BINARY or XML.

    Raises:
        ArchiveError: if the bytes are malformed or do not describe a list of to-dos.
    """
    try:
        if fmt is ArchiveFormat.JSON:
            raw = json.loads(data.decode("utf-8"))
        else:
            raw = plistlib.loads(data)
    except (ValueError, ExpatError, TypeError, OverflowError, RecursionError) as e:
        # UnicodeDecodeError, JSONDecodeError and plistlib.InvalidFileException are ValueErrors
        raise ArchiveError(f"Unreadable {fmt.value} archive: {e}") from e

    try:
        return _TODO_LIST.validate_python(raw)
    except ValidationError as e:
        raise ArchiveError(f"Archive does not hold a list of to-dos: {e.error_count()} error(s)") from e


# PUBLIC_INTERFACE
def find_unencodable(text: str) -> Optional[str]:
    """Return the first character of `text` that some archive format cannot hold, if any."""
    match = _UNENCODABLE.search(text)
    return match.group() if match else None
