"""
Environment-driven settings.

Nothing here touches the file system or the network at import time; the
directories are created lazily by the code that writes into them.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> Tuple[str, ...]:
    raw = os.environ.get(name, default)
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    csv_dir: Path = Path("csv")
    uploads_dir: Path = Path("uploads")

    email_user: Optional[str] = None
    email_pass: Optional[str] = None
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465
    email_from_name: str = "Zerone Events"
    email_signature: str = "Zerone Team"

    cors_origins: Tuple[str, ...] = field(default_factory=lambda: ("*",))
    # Treat present-but-blank required values as missing
    blank_is_missing: bool = False
    log_level: str = "INFO"

    @property
    def email_enabled(self) -> bool:
        return bool(self.email_user and self.email_pass)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            csv_dir=Path(os.environ.get("CSV_DIR", "csv")),
            uploads_dir=Path(os.environ.get("UPLOADS_DIR", "uploads")),
            email_user=os.environ.get("EMAIL_USER") or None,
            email_pass=os.environ.get("EMAIL_PASS") or None,
            smtp_host=os.environ.get("SMTP_HOST", "smtp.gmail.com"),
            smtp_port=int(os.environ.get("SMTP_PORT", "465")),
            email_from_name=os.environ.get("EMAIL_FROM_NAME", "Zerone Events"),
            email_signature=os.environ.get("EMAIL_SIGNATURE", "Zerone Team"),
            cors_origins=_env_list("CORS_ORIGINS", "*"),
            blank_is_missing=_env_bool("BLANK_IS_MISSING"),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def configure_logging(level: str = "INFO") -> None:
    """Install a stream handler on the root logger unless one is already configured."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
