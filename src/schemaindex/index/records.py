"""Build index entries from local schema documents."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from schemaindex.errors import InvalidSchemaError
from schemaindex.models import SchemaDocument, SchemaMeta
from schemaindex.utils.files import compute_url_hash, format_unix_timestamp
from schemaindex.utils.git import CommitRecord

LOGGER = logging.getLogger(__name__)


def parse_schema_document(path: Path, content: str) -> SchemaDocument:
    """Parse the metadata of a JSON schema document.

    Raises:
        InvalidSchemaError: If the content is not a JSON object of the expected shape.
    """
    try:
        return SchemaDocument.model_validate_json(content)
    except ValidationError as exc:
        raise InvalidSchemaError(path, str(exc)) from exc


def schema_url(base_url: str, path: Path) -> str:
    """Public URL of a schema file; only the base name is used."""
    return f"{base_url.rstrip('/')}/{path.name}"


class SchemaRecordBuilder:
    """Turns resolved schema files into index entries."""

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url.rstrip("/")

    def build(self, path: Path, content: str, commit: CommitRecord) -> SchemaMeta:
        document = parse_schema_document(path, content)
        url = schema_url(self.base_url, path)
        return SchemaMeta(
            title=document.title,
            description=document.description,
            updated=format_unix_timestamp(commit.timestamp),
            url=url,
            url_hash=compute_url_hash(url),
            extra=document.extra.to_extra(),
        )

    def build_from_file(self, path: Path, commit: CommitRecord) -> SchemaMeta:
        """Read `path` and build its entry.

        Raises:
            InvalidSchemaError: If the file cannot be decoded or parsed.
            OSError: If the file cannot be read.
        """
        try:
            content = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidSchemaError(path, f"not valid UTF-8: {exc}") from exc
        LOGGER.debug("Building record for %s", path)
        return self.build(path, content, commit)
