"""Markdown rendering with caching.

Renders exercise narratives with mistune and persists the result in a
FileCache keyed by source file mtime.
"""

import html
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import mistune

from tutorhost.core.cache import CacheEntry, FileCache, TocEntryDict

logger = logging.getLogger(__name__)

FRONTMATTER_PATTERN = re.compile(r"\A---\s*\n(.*?)\n---\s*(?:\n|\Z)", re.DOTALL)

FRONTMATTER_LINE_PATTERN = re.compile(r"^([A-Za-z_][\w-]*)\s*:\s*(.*?)\s*$")

TAG_PATTERN = re.compile(r"<[^>]+>")

ANCHOR_STRIP_PATTERN = re.compile(r"[^\w\s-]")

ANCHOR_SPACE_PATTERN = re.compile(r"[\s_-]+")


@dataclass
class TocEntry:
    """Table of contents entry."""

    level: int
    title: str
    id: str

    def to_dict(self) -> TocEntryDict:
        """Convert to dictionary for JSON serialization."""
        return {"level": self.level, "title": self.title, "id": self.id}


@dataclass
class RenderResult:
    """Result of rendering an exercise narrative."""

    html: str
    toc: list[TocEntry]
    from_cache: bool


def split_frontmatter(text: str) -> tuple[dict[str, str], str]:
    """Split a markdown document into frontmatter fields and body.

    Frontmatter is a leading block delimited by ``---`` lines holding
    ``key: value`` pairs. Surrounding quotes are removed from values.

    Args:
        text: Markdown source

    Returns:
        Tuple of (fields, body). Fields are empty when no frontmatter exists.

    Raises:
        ValueError: If a frontmatter line is not a ``key: value`` pair
    """
    match = FRONTMATTER_PATTERN.match(text)
    if match is None:
        return {}, text

    fields: dict[str, str] = {}
    for line in match.group(1).splitlines():
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        line_match = FRONTMATTER_LINE_PATTERN.match(line)
        if line_match is None:
            raise ValueError(f"Invalid frontmatter line: {line!r}")
        key, value = line_match.groups()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        fields[key] = value

    return fields, text[match.end() :]


class _AnchoredHTMLRenderer(mistune.HTMLRenderer):
    """HTML renderer that gives headings ids and records them as ToC."""

    def __init__(self) -> None:
        super().__init__(escape=False)
        self.toc: list[TocEntry] = []
        self._seen: dict[str, int] = {}

    def heading(self, text: str, level: int, **attrs: Any) -> str:
        title = html.unescape(TAG_PATTERN.sub("", text)).strip()
        anchor = self._unique_anchor(_anchor_for(title))
        self.toc.append(TocEntry(level=level, title=title, id=anchor))
        return f'<h{level} id="{anchor}">{text}</h{level}>\n'

    def _unique_anchor(self, anchor: str) -> str:
        count = self._seen.get(anchor, 0)
        self._seen[anchor] = count + 1
        return anchor if count == 0 else f"{anchor}-{count}"


def _anchor_for(title: str) -> str:
    anchor = ANCHOR_STRIP_PATTERN.sub("", title.lower())
    anchor = ANCHOR_SPACE_PATTERN.sub("-", anchor).strip("-")
    return anchor or "section"


class ExerciseRenderer:
    """Renders exercise markdown with optional caching.

    Cache invalidation is based on the source file mtime. Frontmatter is
    stripped before rendering.
    """

    def __init__(self, cache: FileCache | None = None) -> None:
        """Initialize renderer.

        Args:
            cache: FileCache for rendered content, or None to disable caching
        """
        self._cache = cache

    @property
    def cache(self) -> FileCache | None:
        """Cache used for rendered content."""
        return self._cache

    def render(self, source_path: Path, slug: str) -> RenderResult:
        """Render an exercise narrative.

        Args:
            source_path: Path to the exercise markdown file
            slug: Exercise slug, used as cache key

        Returns:
            RenderResult with HTML and ToC

        Raises:
            FileNotFoundError: If source markdown file doesn't exist
        """
        if not source_path.exists():
            raise FileNotFoundError(f"Source file not found: {source_path}")

        source_mtime = source_path.stat().st_mtime

        if self._cache is not None:
            cached = self._cache.get(slug, source_mtime)
            if cached is not None:
                return _from_cache(cached)

        _, body = split_frontmatter(source_path.read_text(encoding="utf-8"))
        renderer = _AnchoredHTMLRenderer()
        markdown = mistune.Markdown(renderer=renderer)
        logger.debug(f"Rendering {slug} from {source_path}")
        rendered = str(markdown(body))

        if self._cache is not None:
            self._cache.set(slug, rendered, source_mtime, [e.to_dict() for e in renderer.toc])

        return RenderResult(html=rendered, toc=renderer.toc, from_cache=False)


def _from_cache(cached: CacheEntry) -> RenderResult:
    toc = [
        TocEntry(level=int(entry["level"]), title=str(entry["title"]), id=str(entry["id"]))
        for entry in cached.meta["toc"]
    ]
    return RenderResult(html=cached.html, toc=toc, from_cache=True)
