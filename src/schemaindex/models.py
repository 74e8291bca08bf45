"""Core schema index data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


@dataclass(slots=True)
class SchemaExtraInfo:
    """Consumer-specific annotations flattened into each index entry."""

    authors: List[str] = field(default_factory=list)
    version: Optional[str] = None
    patterns: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.authors:
            data["authors"] = list(self.authors)
        if self.version is not None:
            data["version"] = self.version
        if self.patterns:
            data["patterns"] = list(self.patterns)
        return data


@dataclass(slots=True)
class SchemaMeta:
    """A single entry of the schema index."""

    url: str
    url_hash: str
    title: Optional[str] = None
    description: Optional[str] = None
    updated: Optional[str] = None
    extra: SchemaExtraInfo = field(default_factory=SchemaExtraInfo)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "updated": self.updated,
            "url": self.url,
            "urlHash": self.url_hash,
        }
        data.update(self.extra.to_dict())
        return data


@dataclass(slots=True)
class SchemaIndex:
    """Ordered collection of index entries, local entries first."""

    schemas: List[SchemaMeta] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"schemas": [schema.to_dict() for schema in self.schemas]}


class _LenientModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ExtraInfoPayload(_LenientModel):
    authors: List[str] = Field(default_factory=list)
    version: Optional[str] = None
    patterns: List[str] = Field(default_factory=list)

    def to_extra(self) -> SchemaExtraInfo:
        return SchemaExtraInfo(
            authors=list(self.authors),
            version=self.version,
            patterns=list(self.patterns),
        )


class SchemaDocument(_LenientModel):
    """The parts of a local JSON schema document the index cares about."""

    title: Optional[str] = None
    description: Optional[str] = None
    extra: ExtraInfoPayload = Field(default_factory=ExtraInfoPayload, alias="x-taplo-info")


class CatalogSchema(_LenientModel):
    """One schema descriptor from the remote catalog."""

    name: Optional[str] = None
    description: Optional[str] = None
    url: str
    file_match: List[str] = Field(default_factory=list, alias="fileMatch")


class Catalog(_LenientModel):
    schemas: List[CatalogSchema] = Field(default_factory=list)
