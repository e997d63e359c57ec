from __future__ import annotations

import logging
import re
import shutil
import time
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import BinaryIO, Optional

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def safe_upload_name(original: str, now_ms: Optional[int] = None) -> str:
    """
    Stored name for an uploaded file: "<epoch millis>-<name>", with any
    directory part dropped and whitespace runs replaced by "_".
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    base = PureWindowsPath(PurePosixPath(original).name).name
    base = _WHITESPACE.sub("_", base.strip()) or "upload"
    return f"{now_ms}-{base}"


def store_upload(src: BinaryIO, original_name: str, uploads_dir: Path) -> str:
    """Persist `src` under `uploads_dir` and return the stored file name."""
    uploads_dir.mkdir(parents=True, exist_ok=True)
    name = safe_upload_name(original_name)
    with open(uploads_dir / name, "wb") as fh:
        shutil.copyfileobj(src, fh)
    logger.info("Stored upload %s", name)
    return name
