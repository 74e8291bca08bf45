"""Schema index assembly pipeline."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Set

import httpx

from schemaindex.catalog.schemastore import fetch_catalog, integrate_catalog
from schemaindex.config import AppConfig
from schemaindex.errors import (
    CatalogError,
    DuplicateSchemaUrlError,
    IndexWriteError,
    SchemaIndexError,
    UncommittedFilesError,
)
from schemaindex.index.history import HistoryResolver
from schemaindex.index.records import SchemaRecordBuilder
from schemaindex.models import SchemaIndex, SchemaMeta
from schemaindex.utils.files import iter_schema_paths
from schemaindex.utils.git import GitRepository

LOGGER = logging.getLogger(__name__)


def find_schemas(root: Path, *, extension: str = "json") -> Set[Path]:
    """Collect candidate schema files under `root`."""
    if not root.is_dir():
        raise SchemaIndexError(f"schema directory not found: {root}")
    return set(iter_schema_paths([root], extension=extension))


@dataclass(slots=True)
class IndexStats:
    local: int = 0
    remote: int = 0
    catalog_skipped: bool = False
    catalog_error: Optional[str] = None

    @property
    def total(self) -> int:
        return self.local + self.remote


class Indexer:
    """Coordinates history resolution, record building and catalog integration."""

    def __init__(
        self,
        config: AppConfig,
        repository: GitRepository,
        *,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.config = config
        self.repository = repository
        self.client = client
        self.resolver = HistoryResolver(repository)
        self.builder = SchemaRecordBuilder(config.base_url)
        self.stats = IndexStats()

    def build(self, now: datetime) -> SchemaIndex:
        """Build the complete index; `now` stamps catalog entries.

        Raises:
            UncommittedFilesError: If a schema file is missing from history.
            DuplicateSchemaUrlError: If two schema files share a base name.
            InvalidSchemaError: If a schema document is malformed.
            SchemaIndexError: If the schema directory or a schema file cannot be read.
            GitError: If repository history cannot be read.
        """
        self.stats = IndexStats()
        index = SchemaIndex(schemas=self._build_local())
        self.stats.local = len(index.schemas)

        if self.config.schema_store:
            remote = self._build_remote(now)
            index.schemas.extend(remote)
            self.stats.remote = len(remote)

        return index

    def _build_local(self) -> List[SchemaMeta]:
        root = self.config.resolve_schema_dir()
        pending = find_schemas(root, extension=self.config.schema_extension)
        LOGGER.info("Found %d schema file(s) under %s", len(pending), root)
        if not pending:
            return []

        resolved = self.resolver.resolve(pending)
        if pending:
            raise UncommittedFilesError(pending)

        entries: List[SchemaMeta] = []
        published: Dict[str, Path] = {}
        for path, commit in resolved.items():
            try:
                entry = self.builder.build_from_file(path, commit)
            except OSError as exc:
                raise SchemaIndexError(f"failed to read {path}: {exc}") from exc
            if entry.url in published:
                raise DuplicateSchemaUrlError(entry.url, [published[entry.url], path])
            published[entry.url] = path
            entries.append(entry)
        return entries

    def _build_remote(self, now: datetime) -> List[SchemaMeta]:
        try:
            catalog = fetch_catalog(self.config.catalog_url, client=self.client)
        except CatalogError as exc:
            LOGGER.warning("Error fetching schema store: %s", exc)
            self.stats.catalog_skipped = True
            self.stats.catalog_error = str(exc)
            return []
        return integrate_catalog(catalog, now, extension=self.config.catalog_extension)


def write_index(index: SchemaIndex, path: Path) -> None:
    """Serialize the index as compact JSON.

    Raises:
        IndexWriteError: If the file cannot be written.
    """
    payload = json.dumps(index.to_dict(), ensure_ascii=False, separators=(",", ":"))
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload, encoding="utf-8")
    except OSError as exc:
        raise IndexWriteError(f"failed to write {path}: {exc}") from exc
    LOGGER.info("Wrote %d schema(s) to %s", len(index.schemas), path)
