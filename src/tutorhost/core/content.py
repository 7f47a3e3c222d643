"""Tutorial content access.

Exercises live in a directory tree ordered by numeric prefixes:

    tutorial/
    ├── 01-basics/                    # part (meta.json holds the title)
    │   └── 01-introduction/          # chapter (meta.json holds the title)
    │       └── 01-welcome/           # exercise
    │           ├── index.md          # frontmatter + narrative
    │           ├── app-a/            # starting files
    │           └── app-b/            # solution files, overlaid on app-a

The numeric prefix is stripped to form slugs, so ``01-welcome`` is served
as ``welcome``. Exercise slugs are unique across the whole tutorial.
"""

import asyncio
import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, TypedDict

from tutorhost.core.renderer import ExerciseRenderer, split_frontmatter
from tutorhost.core.types import Slug

logger = logging.getLogger(__name__)

ORDERED_DIR_PATTERN = re.compile(r"^(\d+)-(.+)$")

EXERCISE_FILENAME = "index.md"
META_FILENAME = "meta.json"
STARTING_FILES_DIR = "app-a"
SOLUTION_FILES_DIR = "app-b"


class SectionDict(TypedDict):
    """Dictionary representation of a part or chapter."""

    slug: str
    title: str


class ExerciseDict(TypedDict):
    """Dictionary representation of exercise metadata."""

    slug: str
    title: str
    part: SectionDict
    chapter: SectionDict
    prev: str | None
    next: str | None
    focus: str | None


@dataclass(frozen=True)
class Section:
    """Part or chapter heading."""

    slug: Slug
    title: str

    def to_dict(self) -> SectionDict:
        """Convert to dictionary for JSON serialization."""
        return {"slug": self.slug, "title": self.title}


@dataclass(frozen=True)
class Exercise:
    """Tutorial exercise located in the content tree."""

    slug: Slug
    title: str
    part: Section
    chapter: Section
    directory: Path
    prev: Slug | None = None
    next: Slug | None = None
    focus: str | None = None

    @property
    def source_path(self) -> Path:
        """Markdown file holding the exercise narrative."""
        return self.directory / EXERCISE_FILENAME

    def to_dict(self) -> ExerciseDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "slug": self.slug,
            "title": self.title,
            "part": self.part.to_dict(),
            "chapter": self.chapter.to_dict(),
            "prev": self.prev,
            "next": self.next,
            "focus": self.focus,
        }


@dataclass
class Chapter:
    """Chapter with its exercises in tutorial order."""

    section: Section
    exercises: list[Exercise] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            **self.section.to_dict(),
            "exercises": [{"slug": e.slug, "title": e.title} for e in self.exercises],
        }


@dataclass
class Part:
    """Part with its chapters in tutorial order."""

    section: Section
    chapters: list[Chapter] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            **self.section.to_dict(),
            "chapters": [chapter.to_dict() for chapter in self.chapters],
        }


class ContentStore(Protocol):
    """Slug-keyed access to tutorial content."""

    async def load_content(self, slug: str) -> dict[str, Any] | None:
        """Load the full renderable payload for an exercise."""
        ...

    async def load_exercise(self, slug: str) -> Exercise | None:
        """Look up exercise metadata, or None if no such exercise exists."""
        ...


class FileContentStore:
    """Content store backed by a tutorial directory tree.

    The tree is scanned on every lookup so edits are picked up without a
    restart. Filesystem work runs in a worker thread.
    """

    def __init__(self, source_dir: Path, renderer: ExerciseRenderer) -> None:
        """Initialize store.

        Args:
            source_dir: Root of the tutorial directory tree
            renderer: Renderer for exercise narratives
        """
        self._source_dir = source_dir
        self._renderer = renderer

    @property
    def source_dir(self) -> Path:
        """Root of the tutorial directory tree."""
        return self._source_dir

    @property
    def renderer(self) -> ExerciseRenderer:
        """Renderer for exercise narratives."""
        return self._renderer

    async def load_exercise(self, slug: str) -> Exercise | None:
        return await asyncio.to_thread(self._find_exercise, slug)

    async def load_content(self, slug: str) -> dict[str, Any] | None:
        return await asyncio.to_thread(self._load_content, slug)

    async def load_index(self) -> list[Part]:
        """Load all parts, chapters and exercises in tutorial order."""
        return await asyncio.to_thread(self._scan)

    def _find_exercise(self, slug: str) -> Exercise | None:
        for part in self._scan():
            for chapter in part.chapters:
                for exercise in chapter.exercises:
                    if exercise.slug == slug:
                        return exercise
        return None

    def _load_content(self, slug: str) -> dict[str, Any] | None:
        exercise = self._find_exercise(slug)
        if exercise is None:
            logger.debug(f"No content for {slug!r}")
            return None

        result = self._renderer.render(exercise.source_path, exercise.slug)
        starting_files = _read_files(exercise.directory / STARTING_FILES_DIR)
        solution_files = _read_files(exercise.directory / SOLUTION_FILES_DIR)

        return {
            **exercise.to_dict(),
            "html": result.html,
            "toc": [entry.to_dict() for entry in result.toc],
            "a": starting_files,
            "b": {**starting_files, **solution_files},
        }

    def _scan(self) -> list[Part]:
        if not self._source_dir.is_dir():
            raise FileNotFoundError(f"Tutorial directory not found: {self._source_dir}")

        parts: list[Part] = []
        # (part, chapter, directory, frontmatter) in tutorial order
        located: list[tuple[Part, Chapter, Path, dict[str, str]]] = []

        for part_dir in _ordered_dirs(self._source_dir):
            part = Part(section=_read_section(part_dir))
            parts.append(part)
            for chapter_dir in _ordered_dirs(part_dir):
                chapter = Chapter(section=_read_section(chapter_dir))
                part.chapters.append(chapter)
                for exercise_dir in _ordered_dirs(chapter_dir):
                    source_path = exercise_dir / EXERCISE_FILENAME
                    if not source_path.is_file():
                        continue
                    fields, _ = split_frontmatter(source_path.read_text(encoding="utf-8"))
                    located.append((part, chapter, exercise_dir, fields))

        slugs = [_slug_for(directory) for _, _, directory, _ in located]
        seen: set[Slug] = set()
        for slug in slugs:
            if slug in seen:
                raise ValueError(f"Duplicate exercise slug: {slug}")
            seen.add(slug)

        for i, (part, chapter, directory, fields) in enumerate(located):
            chapter.exercises.append(
                Exercise(
                    slug=slugs[i],
                    title=fields.get("title") or slugs[i],
                    part=part.section,
                    chapter=chapter.section,
                    directory=directory,
                    prev=slugs[i - 1] if i > 0 else None,
                    next=slugs[i + 1] if i + 1 < len(slugs) else None,
                    focus=fields.get("focus") or None,
                ),
            )

        return parts


def _ordered_dirs(parent: Path) -> list[Path]:
    """Subdirectories carrying a numeric ordering prefix, in order."""
    dirs = [
        child
        for child in parent.iterdir()
        if child.is_dir() and ORDERED_DIR_PATTERN.match(child.name)
    ]
    return sorted(dirs, key=lambda d: (int(ORDERED_DIR_PATTERN.match(d.name).group(1)), d.name))


def _slug_for(directory: Path) -> Slug:
    match = ORDERED_DIR_PATTERN.match(directory.name)
    return Slug(match.group(2) if match else directory.name)


def _read_section(directory: Path) -> Section:
    slug = _slug_for(directory)
    meta_path = directory / META_FILENAME
    if not meta_path.exists():
        return Section(slug=slug, title=slug)

    data = json.loads(meta_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{meta_path} must contain a JSON object")
    title = data.get("title", slug)
    if not isinstance(title, str):
        raise ValueError(f"{meta_path}: title must be a string")
    return Section(slug=slug, title=title)


def _read_files(root: Path) -> dict[str, str]:
    """Read exercise files keyed by their absolute in-app path."""
    if not root.is_dir():
        return {}
    return {
        "/" + path.relative_to(root).as_posix(): path.read_text(encoding="utf-8")
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }
