"""In-memory content store recording every call."""

from pathlib import Path
from typing import Any

from tutorhost.core.content import Exercise, Section
from tutorhost.core.types import Slug


def make_exercise(slug: str, title: str | None = None) -> Exercise:
    return Exercise(
        slug=Slug(slug),
        title=title or slug,
        part=Section(slug=Slug("basics"), title="Basic Svelte"),
        chapter=Section(slug=Slug("introduction"), title="Introduction"),
        directory=Path("/tutorial") / slug,
    )


class FakeContentStore:
    """Content store over a dict of exercises."""

    def __init__(
        self,
        *exercises: Exercise,
        content_error: Exception | None = None,
        exercise_error: Exception | None = None,
    ) -> None:
        self.exercises = {exercise.slug: exercise for exercise in exercises}
        self.calls: list[tuple[str, str]] = []
        self._content_error = content_error
        self._exercise_error = exercise_error

    async def load_content(self, slug: str) -> dict[str, Any] | None:
        self.calls.append(("load_content", slug))
        if self._content_error is not None:
            raise self._content_error
        exercise = self.exercises.get(slug)
        if exercise is None:
            return None
        return {"slug": exercise.slug, "title": exercise.title, "html": "<p>content</p>"}

    async def load_exercise(self, slug: str) -> Exercise | None:
        self.calls.append(("load_exercise", slug))
        if self._exercise_error is not None:
            raise self._exercise_error
        return self.exercises.get(slug)
