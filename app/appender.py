"""
Append-only CSV writer for event logs.

Data fields are always quoted with embedded quotes doubled; the header is
the bare column names joined by the delimiter. Existing file content is
never read or rewritten.
"""

from __future__ import annotations

import csv
import io
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, Sequence, Union

from .rules import LOG_DELIMITER, LOG_ENCODING, LOG_LINE_TERMINATOR, LOG_QUOTECHAR

logger = logging.getLogger(__name__)

_locks_guard = threading.Lock()
_file_locks: Dict[str, threading.Lock] = {}


def _lock_for(path: str) -> threading.Lock:
    with _locks_guard:
        lock = _file_locks.get(path)
        if lock is None:
            lock = _file_locks[path] = threading.Lock()
        return lock


def format_header(columns: Sequence[str]) -> str:
    return LOG_DELIMITER.join(columns) + LOG_LINE_TERMINATOR


def format_row(values: Sequence[Any]) -> str:
    outp = io.StringIO(newline="")
    writer = csv.writer(
        outp,
        delimiter=LOG_DELIMITER,
        quotechar=LOG_QUOTECHAR,
        quoting=csv.QUOTE_ALL,
        doublequote=True,
        lineterminator=LOG_LINE_TERMINATOR,
    )
    writer.writerow(["" if v is None else str(v) for v in values])
    return outp.getvalue()


def append_row(
    path: Union[str, os.PathLike],
    columns: Sequence[str],
    row: Sequence[Any],
) -> str:
    """
    Append `row` to the CSV at `path`, writing the header first if the file
    does not exist yet. Returns the absolute path written.

    Appends to the same file are serialized within this process. OSError
    from the file system propagates unchanged.
    A value that cannot be encoded raises UnicodeEncodeError before the
    file is created or opened.
    """
    if len(row) != len(columns):
        raise ValueError(f"Row has {len(row)} values, expected {len(columns)}")

    target = Path(path).resolve()
    # Nothing touches the file until every value is encoded
    line = format_row(row).encode(LOG_ENCODING)
    header = format_header(columns).encode(LOG_ENCODING)

    with _lock_for(str(target)):
        target.parent.mkdir(parents=True, exist_ok=True)
        is_new = not target.exists()
        with open(target, "ab") as fh:
            fh.write(header + line if is_new else line)

    logger.info("CSV %s: %s", "created" if is_new else "updated", target)
    return str(target)
