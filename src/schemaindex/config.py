"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_BASE_URL = "https://taplo.tamasfe.dev/schemas"
DEFAULT_CATALOG_URL = "https://www.schemastore.org/api/json/catalog.json"
DEFAULT_OUTPUT = Path("schema_index.json")


@dataclass(slots=True)
class AppConfig:
    schema_dir: Path = Path(".")
    git_dir: Path = Path(".")
    out_path: Path = DEFAULT_OUTPUT
    base_url: str = DEFAULT_BASE_URL
    schema_store: bool = False
    catalog_url: str = DEFAULT_CATALOG_URL
    schema_extension: str = "json"
    catalog_extension: str = "toml"

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")

    def resolve_out_path(self, base_dir: Path | None = None) -> Path:
        if Path(self.out_path).is_absolute() or base_dir is None:
            return Path(self.out_path)
        return base_dir / self.out_path

    def resolve_schema_dir(self) -> Path:
        """Return the absolute directory to scan; `schema_dir` is relative to `git_dir`."""
        return Path(self.git_dir).resolve() / self.schema_dir
