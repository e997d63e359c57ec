from __future__ import annotations

from typing import List, Sequence


class RegistrationError(Exception):
    """Base class for registration failures reported to the HTTP layer."""


class UnknownEvent(RegistrationError):
    def __init__(self, event_key: str) -> None:
        super().__init__(f"Unknown event key: {event_key!r}")
        self.event_key = event_key


class MissingRequiredFields(RegistrationError):
    def __init__(self, event_key: str, missing: Sequence[str]) -> None:
        super().__init__(f"Missing fields for {event_key!r}: {', '.join(missing)}")
        self.event_key = event_key
        self.missing: List[str] = list(missing)
