"""
Row resolution: one string per schema column, in schema order.

Precedence per column:
1. identity columns ("USN/ID", "USN/ID 1".."USN/ID 4") use a fixed alias chain
2. derived columns ("Event Name", "Screenshot") use the keys the service injects
3. anything else takes the first record key with the same normalized name

A column with no value resolves to "", never to an error.
"""

from __future__ import annotations

import re
from typing import Any, List, Mapping, Optional, Sequence

from .normalize import RecordIndex, is_empty, normalize_field_name
from .rules import EVENT_NAME_KEYS, IDENTITY_INDEXES, IDENTITY_PREFIXES, SCREENSHOT_KEYS
from .schemas import EventSchema

_INDEXED_IDENTITY = re.compile(r"^(?:%s)(\d+)$" % "|".join(sorted(IDENTITY_PREFIXES, key=len, reverse=True)))

_UNINDEXED_ALIASES = IDENTITY_PREFIXES
_FIRST_INDEXED_ALIASES = tuple(f"{prefix}1" for prefix in IDENTITY_PREFIXES)


def identity_aliases(column: str) -> Optional[Sequence[str]]:
    """
    Alias chain for an identity column, or None when `column` is not one.

    >>> identity_aliases("USN/ID")
    ('usn', 'usnid', 'usn1', 'usnid1')
    >>> identity_aliases("USN/ID 2")
    ('usn2', 'usnid2')
    """
    name = normalize_field_name(column)
    if name in IDENTITY_PREFIXES:
        return _UNINDEXED_ALIASES + _FIRST_INDEXED_ALIASES

    match = _INDEXED_IDENTITY.match(name)
    if match is None:
        return None
    n = int(match.group(1))
    if n not in IDENTITY_INDEXES:
        return None

    own = tuple(f"{prefix}{n}" for prefix in IDENTITY_PREFIXES)
    if n == 1:
        return own + _UNINDEXED_ALIASES
    return own


def render_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _first_exact(record: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        value = record.get(key)
        if not is_empty(value):
            return value
    return None


def resolve_value(column: str, record: Mapping[str, Any], index: RecordIndex) -> str:
    aliases = identity_aliases(column)
    if aliases is not None:
        return render_value(index.first_filled(aliases))

    name = normalize_field_name(column)
    if name == "eventname":
        return render_value(_first_exact(record, EVENT_NAME_KEYS))
    if name == "screenshot":
        return render_value(_first_exact(record, SCREENSHOT_KEYS))

    return render_value(index.get(name))


def resolve_row(schema: EventSchema, record: Mapping[str, Any]) -> List[str]:
    """Resolve `record` into a row aligned with `schema.columns`."""
    index = RecordIndex(record)
    return [resolve_value(column, record, index) for column in schema.columns]
