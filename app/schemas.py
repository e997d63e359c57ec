"""
Static event schemas: the ordered CSV columns and the required submission
keys of every supported event.

Column order is the on-disk order of an event's log. Never reorder or rename
columns of an event whose log already holds rows.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import UnknownEvent
from .rules import LOG_DELIMITER, LOG_QUOTECHAR


class EventSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    event_key: str
    display_name: str
    file_name: str
    columns: Tuple[str, ...] = Field(min_length=1)
    required_fields: Tuple[str, ...] = ()


class SchemaRegistry:
    """
    Read-only mapping of event key to EventSchema, built once at startup.
    """

    def __init__(self, schemas: Iterable[EventSchema]) -> None:
        self._schemas: Dict[str, EventSchema] = {}
        files: set[str] = set()

        for schema in schemas:
            if schema.event_key in self._schemas:
                raise ValueError(f"Duplicate event key: {schema.event_key!r}")
            if schema.file_name in files:
                raise ValueError(f"Duplicate log file name: {schema.file_name!r}")
            for column in schema.columns:
                _check_header_safe(schema.event_key, column)
            self._schemas[schema.event_key] = schema
            files.add(schema.file_name)

    def lookup(self, event_key: str) -> Optional[EventSchema]:
        return self._schemas.get(event_key)

    def require(self, event_key: str) -> EventSchema:
        schema = self.lookup(event_key)
        if schema is None:
            raise UnknownEvent(event_key)
        return schema

    def events(self) -> List[EventSchema]:
        return list(self._schemas.values())

    def __contains__(self, event_key: object) -> bool:
        return event_key in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)


def _check_header_safe(event_key: str, column: str) -> None:
    # Header lines are written unquoted.
    bad = (LOG_DELIMITER, LOG_QUOTECHAR, "\n", "\r")
    if not column or any(ch in column for ch in bad):
        raise ValueError(f"Column {column!r} of {event_key!r} cannot be written as a bare header")


_PAID_SOLO_COLUMNS = (
    "Event Name",
    "Team Name",
    "Name 1",
    "USN/ID",
    "College",
    "Phone",
    "Email",
    "UTR ID",
    "UTR Number",
    "Screenshot",
    "Timestamp",
)

_PAID_SOLO_REQUIRED = (
    "teamName",
    "name1",
    "usn",
    "college",
    "phone",
    "email",
    "utrId",
    "utrNumber",
)


EVENT_SCHEMAS: Tuple[EventSchema, ...] = (
    EventSchema(
        event_key="it-quiz",
        display_name="IT Quiz",
        file_name="it_quiz.csv",
        columns=(
            "Event Name",
            "Team Name",
            "Name 1",
            "USN/ID 1",
            "Name 2",
            "USN/ID 2",
            "College",
            "Phone",
            "Email",
            "Screenshot",
            "Timestamp",
        ),
        required_fields=(
            "teamName",
            "name1",
            "usn1",
            "name2",
            "usn2",
            "college",
            "phone",
            "email",
        ),
    ),
    EventSchema(
        event_key="garuda-anveshana",
        display_name="Garuda Anveshana",
        file_name="garuda_anveshana.csv",
        columns=(
            "Event Name",
            "Team Name",
            "Name 1",
            "Name 2",
            "Name 3",
            "Name 4",
            "USN/ID",
            "College",
            "Phone",
            "Email",
            "UTR ID",
            "UTR Number",
            "Screenshot",
            "Timestamp",
        ),
        required_fields=(
            "teamName",
            "name1",
            "name2",
            "name3",
            "name4",
            "usn",
            "college",
            "phone",
            "email",
            "utrId",
            "utrNumber",
        ),
    ),
    EventSchema(
        event_key="web-kala-vinyasa",
        display_name="Web Kala Vinyasa",
        file_name="web_kala_vinyasa.csv",
        columns=(
            "Event Name",
            "Team Name",
            "Name 1",
            "Name 2",
            "USN/ID",
            "College",
            "Phone",
            "Email",
            "UTR ID",
            "UTR Number",
            "Screenshot",
            "Timestamp",
        ),
        required_fields=(
            "teamName",
            "name1",
            "name2",
            "usn",
            "college",
            "phone",
            "email",
            "utrId",
            "utrNumber",
        ),
    ),
    EventSchema(
        event_key="vedix",
        display_name="Vedix",
        file_name="vedix.csv",
        columns=_PAID_SOLO_COLUMNS,
        required_fields=_PAID_SOLO_REQUIRED,
    ),
    EventSchema(
        event_key="drishti",
        display_name="Drishti",
        file_name="drishti.csv",
        columns=_PAID_SOLO_COLUMNS,
        required_fields=_PAID_SOLO_REQUIRED,
    ),
    EventSchema(
        event_key="raja-neeti",
        display_name="Raja Neeti",
        file_name="raja_neeti.csv",
        columns=_PAID_SOLO_COLUMNS,
        required_fields=_PAID_SOLO_REQUIRED,
    ),
    EventSchema(
        event_key="chakravyuha",
        display_name="Chakravyuha",
        file_name="chakravyuha.csv",
        columns=(
            "Event Name",
            "Team Name",
            "Name 1",
            "USN/ID 1",
            "Name 2",
            "USN/ID 2",
            "Name 3",
            "USN/ID 3",
            "Name 4",
            "USN/ID 4",
            "College",
            "Phone",
            "Email",
            "UTR ID",
            "UTR Number",
            "Screenshot",
            "Timestamp",
        ),
        required_fields=(
            "teamName",
            "name1",
            "usn1",
            "name2",
            "usn2",
            "name3",
            "usn3",
            "name4",
            "usn4",
            "college",
            "phone",
            "email",
            "utrId",
            "utrNumber",
        ),
    ),
    EventSchema(
        event_key="dhwani-yuddha",
        display_name="Dhwani Yuddha",
        file_name="dhwani_yuddha.csv",
        columns=_PAID_SOLO_COLUMNS,
        required_fields=_PAID_SOLO_REQUIRED,
    ),
)

REGISTRY = SchemaRegistry(EVENT_SCHEMAS)
