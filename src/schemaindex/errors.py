"""Exceptions raised while building a schema index."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


class SchemaIndexError(Exception):
    """Base exception for schema index failures."""


class GitError(SchemaIndexError):
    """Raised when the git repository cannot be read."""


class UncommittedFilesError(SchemaIndexError):
    """Raised when schema files on disk never appear in repository history."""

    def __init__(self, paths: Iterable[Path]) -> None:
        self.paths = sorted(paths)
        listing = ", ".join(str(path) for path in self.paths)
        super().__init__(f"all schema files must be committed, missing: {listing}")


class InvalidSchemaError(SchemaIndexError):
    """Raised when a local schema document cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"invalid schema: {path}: {reason}")


class IndexWriteError(SchemaIndexError):
    """Raised when the output index cannot be written."""


class CatalogError(SchemaIndexError):
    """Raised when the remote schema catalog cannot be fetched or parsed."""


class GlobError(SchemaIndexError):
    """Raised when a file-match glob cannot be compiled."""

    def __init__(self, glob: str, reason: str) -> None:
        self.glob = glob
        self.reason = reason
        super().__init__(f"invalid glob {glob!r}: {reason}")


class DuplicateSchemaUrlError(SchemaIndexError):
    """Raised when two schema files would be published under the same URL."""

    def __init__(self, url: str, paths: Iterable[Path]) -> None:
        self.url = url
        self.paths = sorted(paths)
        listing = ", ".join(str(path) for path in self.paths)
        super().__init__(f"schema URL {url} is shared by: {listing}")
