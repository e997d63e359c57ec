from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping

from .normalize import RecordIndex, is_blank
from .schemas import EventSchema, SchemaRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    schema: EventSchema
    missing: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.missing


def validate_record(
    registry: SchemaRegistry,
    event_key: str,
    record: Mapping[str, Any],
    *,
    blank_is_missing: bool = False,
) -> ValidationResult:
    """
    Check `record` against the required fields of `event_key`.

    Raises UnknownEvent when the event has no schema. Matching is done on
    normalized names and is existence-only unless `blank_is_missing` is set.
    The missing list keeps the schema's declaration order.
    """
    schema = registry.require(event_key)
    index = RecordIndex(record)

    missing: List[str] = []
    for required in schema.required_fields:
        if not index.has(required):
            missing.append(required)
        elif blank_is_missing and is_blank(index.get(required)):
            missing.append(required)

    if missing:
        logger.debug("Validation of %s failed, missing=%s", event_key, missing)
    return ValidationResult(schema=schema, missing=missing)
