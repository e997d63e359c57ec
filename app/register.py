"""
Registration flow: validate -> resolve -> append.

The HTTP layer only has to translate three outcomes: a RegistrationResult,
MissingRequiredFields or UnknownEvent. OSError from the append is a failed
registration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from .appender import append_row
from .config import Settings
from .exceptions import MissingRequiredFields
from .normalize import normalize_field_name
from .resolve import resolve_row
from .rules import EVENT_NAME_KEYS, SCREENSHOT_KEYS, TIMESTAMP_KEY
from .schemas import SchemaRegistry
from .validate import validate_record

logger = logging.getLogger(__name__)

_DERIVED_NAMES = frozenset(
    normalize_field_name(key) for key in SCREENSHOT_KEYS + EVENT_NAME_KEYS + (TIMESTAMP_KEY,)
)


@dataclass(frozen=True)
class RegistrationResult:
    event_key: str
    event_name: str
    file_path: str
    record: Dict[str, Any]


def prepare_record(
    payload: Mapping[str, Any],
    *,
    event_name: str,
    screenshot: str,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Copy `payload` and inject the server-derived fields.

    Client keys that normalize to a derived field ("Timestamp", "time_stamp",
    "Event Name", ...) are dropped first.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    record = {
        key: value
        for key, value in payload.items()
        if normalize_field_name(key) not in _DERIVED_NAMES
    }
    for key in SCREENSHOT_KEYS:
        record[key] = screenshot
    for key in EVENT_NAME_KEYS:
        record[key] = event_name
    record[TIMESTAMP_KEY] = now.isoformat(timespec="seconds")
    return record


def register(
    registry: SchemaRegistry,
    settings: Settings,
    event_key: str,
    record: Mapping[str, Any],
) -> RegistrationResult:
    validation = validate_record(
        registry, event_key, record, blank_is_missing=settings.blank_is_missing
    )
    if not validation.ok:
        raise MissingRequiredFields(event_key, validation.missing)

    schema = validation.schema
    row = resolve_row(schema, record)
    path = append_row(settings.csv_dir / schema.file_name, schema.columns, row)
    logger.info("Registered %s -> %s", event_key, path)

    event_name = ""
    for key in EVENT_NAME_KEYS:
        if record.get(key):
            event_name = str(record[key])
            break

    return RegistrationResult(
        event_key=event_key,
        event_name=event_name or schema.display_name,
        file_path=path,
        record=dict(record),
    )
