"""File-based cache with mtime invalidation.

Cache structure:
    .cache/
    ├── pages/
    │   └── global-transitions.html   # Rendered exercise HTML
    └── meta/
        └── global-transitions.json   # Source mtime and ToC
"""

import json
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import TypedDict


class TocEntryDict(TypedDict):
    """Serialized table of contents entry."""

    level: int
    title: str
    id: str


class CachedMetadata(TypedDict):
    """Cached exercise metadata structure."""

    source_mtime: float
    toc: list[TocEntryDict]


@dataclass
class CacheEntry:
    """Result of cache lookup."""

    html: str
    meta: CachedMetadata


class FileCache:
    """File-based cache for rendered exercise HTML.

    Entries are valid while the cached mtime matches the current mtime of
    the exercise source file.
    """

    _GITIGNORE_CONTENT = "# Ignore everything in this directory\n*\n"

    def __init__(self, cache_dir: Path) -> None:
        self._cache_dir = cache_dir
        self._pages_dir = cache_dir / "pages"
        self._meta_dir = cache_dir / "meta"

    @property
    def cache_dir(self) -> Path:
        """Root cache directory."""
        return self._cache_dir

    def _ensure_cache_dir(self) -> None:
        """Create cache directory with .gitignore if it doesn't exist."""
        if not self._cache_dir.exists():
            self._cache_dir.mkdir(parents=True, exist_ok=True)
            gitignore_path = self._cache_dir / ".gitignore"
            gitignore_path.write_text(self._GITIGNORE_CONTENT, encoding="utf-8")

    def get(self, slug: str, source_mtime: float) -> CacheEntry | None:
        """Retrieve cached entry if valid.

        Args:
            slug: Exercise slug
            source_mtime: Current mtime of the exercise source file

        Returns:
            CacheEntry if cache hit and valid, None otherwise
        """
        html_path = self._pages_dir / f"{slug}.html"
        meta_path = self._meta_dir / f"{slug}.json"

        if not html_path.exists() or not meta_path.exists():
            return None

        meta = self._read_meta(meta_path)
        if meta is None:
            return None

        if meta["source_mtime"] != source_mtime:
            return None

        try:
            html = html_path.read_text(encoding="utf-8")
        except OSError:
            return None

        return CacheEntry(html=html, meta=meta)

    def set(
        self,
        slug: str,
        html: str,
        source_mtime: float,
        toc: list[TocEntryDict],
    ) -> None:
        """Store entry in cache.

        Args:
            slug: Exercise slug
            html: Rendered HTML content
            source_mtime: Source file mtime for invalidation
            toc: Table of contents entries
        """
        self._ensure_cache_dir()
        self._pages_dir.mkdir(parents=True, exist_ok=True)
        self._meta_dir.mkdir(parents=True, exist_ok=True)

        (self._pages_dir / f"{slug}.html").write_text(html, encoding="utf-8")

        meta: CachedMetadata = {"source_mtime": source_mtime, "toc": toc}
        (self._meta_dir / f"{slug}.json").write_text(json.dumps(meta), encoding="utf-8")

    def invalidate(self, slug: str) -> None:
        """Remove entry from cache."""
        for path in (self._pages_dir / f"{slug}.html", self._meta_dir / f"{slug}.json"):
            if path.exists():
                path.unlink()

    def clear(self) -> None:
        """Remove all cached entries."""
        if self._pages_dir.exists():
            shutil.rmtree(self._pages_dir)
        if self._meta_dir.exists():
            shutil.rmtree(self._meta_dir)

    def _read_meta(self, meta_path: Path) -> CachedMetadata | None:
        try:
            data = json.loads(meta_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            return None

        if not isinstance(data, dict):
            return None
        if "source_mtime" not in data or "toc" not in data:
            return None

        return CachedMetadata(source_mtime=data["source_mtime"], toc=data["toc"])
