"""Exercise lookup.

Classifies a Content Store lookup as found or not found. Absence is an
expected outcome; store failures propagate unchanged.
"""

import logging
from dataclasses import dataclass

from tutorhost.core.content import ContentStore, Exercise
from tutorhost.core.types import ensure_slug

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Found:
    """Exercise exists for the requested slug."""

    exercise: Exercise


@dataclass(frozen=True)
class NotFound:
    """No exercise exists for the requested slug."""


class ExerciseResolver:
    """Resolves slugs to exercises through a content store."""

    def __init__(self, store: ContentStore) -> None:
        self._store = store

    async def resolve(self, slug: str) -> Found | NotFound:
        """Look up the exercise for a slug.

        Raises:
            ValueError: If slug is empty
        """
        exercise = await self._store.load_exercise(ensure_slug(slug))
        if exercise is None:
            logger.debug(f"Exercise {slug!r} not found")
            return NotFound()
        return Found(exercise)
