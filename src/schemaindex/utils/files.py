"""Utility helpers for working with files, hashes and timestamps."""

from __future__ import annotations

import hashlib
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Iterator


def normalize_path(path: Path) -> Path:
    """Return an absolute, lexically cleaned path without touching symlinks."""
    return Path(os.path.normpath(os.path.abspath(path)))


def iter_schema_paths(inputs: Iterable[Path], *, extension: str = "json") -> Iterator[Path]:
    """Yield normalized schema paths from input paths, descending into directories."""
    suffix = f".{extension.lower()}"
    for item in inputs:
        if item.is_dir():
            yield from iter_schema_paths(
                sorted(child for child in item.rglob(f"*.{extension}") if child.is_file()),
                extension=extension,
            )
        elif item.is_file() and item.suffix.lower() == suffix:
            yield normalize_path(item)


def compute_url_hash(url: str) -> str:
    """Compute the SHA256 hex digest of a URL."""
    return hashlib.sha256(url.encode("utf-8")).hexdigest()


def format_rfc3339(moment: datetime) -> str:
    """Format a datetime as RFC 3339 in UTC with seconds precision."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).replace(microsecond=0).isoformat()


def format_unix_timestamp(seconds: int) -> str:
    return format_rfc3339(datetime.fromtimestamp(seconds, tz=timezone.utc))
