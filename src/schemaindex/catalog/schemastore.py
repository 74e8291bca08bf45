"""Third-party schemas from the SchemaStore catalog."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

import httpx
from pydantic import ValidationError

from schemaindex.catalog.glob import glob_to_regex
from schemaindex.errors import CatalogError, GlobError
from schemaindex.models import Catalog, CatalogSchema, SchemaExtraInfo, SchemaMeta
from schemaindex.utils.files import compute_url_hash, format_rfc3339

LOGGER = logging.getLogger(__name__)

CATALOG_AUTHOR = "automatically included from https://schemastore.org"


def fetch_catalog(url: str, *, client: Optional[httpx.Client] = None) -> Catalog:
    """Download and validate the catalog with a single request.

    Raises:
        CatalogError: If the request fails or the response is not a valid catalog.
    """
    LOGGER.info("Fetching schema catalog from %s", url)
    try:
        if client is None:
            response = httpx.get(url, follow_redirects=True)
        else:
            response = client.get(url)
        response.raise_for_status()
        return Catalog.model_validate(response.json())
    except httpx.HTTPError as exc:
        raise CatalogError(f"failed to fetch {url}: {exc}") from exc
    except (ValidationError, ValueError) as exc:
        raise CatalogError(f"invalid catalog at {url}: {exc}") from exc


def _strip_extension(glob: str, suffix: str) -> str:
    while glob.endswith(suffix):
        glob = glob[: -len(suffix)]
    return glob


def translate_file_matches(file_match: List[str], extension: str = "toml") -> List[str]:
    """Translate the globs ending in `extension`, skipping malformed ones."""
    suffix = f".{extension}"
    patterns: List[str] = []
    for glob in file_match:
        if not glob.endswith(suffix):
            continue
        try:
            patterns.append(glob_to_regex(_strip_extension(glob, suffix), extension))
        except GlobError as exc:
            LOGGER.debug("Skipping file match: %s", exc)
    return patterns


def catalog_entry_to_meta(schema: CatalogSchema, updated: str, extension: str = "toml") -> SchemaMeta:
    return SchemaMeta(
        title=schema.name,
        description=schema.description,
        updated=updated,
        url=schema.url,
        url_hash=compute_url_hash(schema.url),
        extra=SchemaExtraInfo(
            authors=[CATALOG_AUTHOR],
            patterns=translate_file_matches(schema.file_match, extension),
        ),
    )


def integrate_catalog(catalog: Catalog, now: datetime, *, extension: str = "toml") -> List[SchemaMeta]:
    """Build index entries for catalog schemas that match `extension` files.

    The catalog carries no history, so every entry is stamped with `now`.
    """
    suffix = f".{extension}"
    updated = format_rfc3339(now)
    entries: List[SchemaMeta] = []
    for schema in catalog.schemas:
        if not any(glob.endswith(suffix) for glob in schema.file_match):
            continue
        entries.append(catalog_entry_to_meta(schema, updated, extension))
    LOGGER.info("Included %d of %d catalog schemas", len(entries), len(catalog.schemas))
    return entries
