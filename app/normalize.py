"""
Field-name normalization.

Submitted records use whatever key spelling the client chose ("teamName",
"Team Name", "team_name"); schema columns use display text ("USN/ID 1").
Both sides are compared only after `normalize_field_name`.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, Mapping, Optional

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_field_name(name: Any) -> str:
    """
    Lower-case `name` and drop every character outside [a-z0-9].

    Total and idempotent: "USN/ID 1", "usn_id1" and "Usn Id 1" all become
    "usnid1".
    """
    return _NON_ALNUM.sub("", str(name).lower())


class RecordIndex:
    """
    Normalized-key view over a submitted record.

    Built once per validation or resolution pass. When several keys
    normalize to the same form, the first one in record order wins.
    """

    def __init__(self, record: Mapping[str, Any]) -> None:
        self._record = record
        self._keys: Dict[str, str] = {}
        for key in record:
            self._keys.setdefault(normalize_field_name(key), key)

    def has(self, name: str) -> bool:
        return normalize_field_name(name) in self._keys

    def key_for(self, name: str) -> Optional[str]:
        return self._keys.get(normalize_field_name(name))

    def get(self, name: str, default: Any = None) -> Any:
        key = self.key_for(name)
        if key is None:
            return default
        return self._record[key]

    def first_filled(self, names: Iterable[str]) -> Any:
        """
        Value of the first name whose match is present and non-empty.

        Only None and "" are skipped; a whitespace-only value is returned.
        """
        for name in names:
            value = self.get(name)
            if not is_empty(value):
                return value
        return None


def is_empty(value: Any) -> bool:
    return value is None or value == ""


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False
