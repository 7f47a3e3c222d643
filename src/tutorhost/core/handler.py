"""Tutorial page request handling.

Turns a requested slug into exactly one page outcome:

1. The exercise content is loaded first, on every path.
2. Deprecated slugs redirect permanently to their canonical page, even when
   an exercise also exists under the deprecated slug.
3. Otherwise the exercise is resolved; a missing exercise yields a 404.

Store failures are not caught here.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from tutorhost.core.content import ContentStore
from tutorhost.core.resolver import ExerciseResolver, NotFound
from tutorhost.core.router import SlugRouter
from tutorhost.core.types import Slug, URLPath, ensure_slug, tutorial_path

logger = logging.getLogger(__name__)

PERMANENT_REDIRECT = 308
NOT_FOUND = 404
NOT_FOUND_MESSAGE = "No such tutorial found"


@dataclass(frozen=True)
class Redirect:
    """Permanent redirect to a canonical tutorial page."""

    target: Slug
    status: int = PERMANENT_REDIRECT

    @property
    def location(self) -> URLPath:
        return tutorial_path(self.target)


@dataclass(frozen=True)
class Render:
    """Page data for an existing exercise."""

    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PageError:
    """User-facing error response."""

    status: int
    message: str


PageOutcome = Redirect | Render | PageError


class TutorialPageHandler:
    """Orchestrates slug routing and exercise resolution for one request."""

    def __init__(
        self,
        store: ContentStore,
        router: SlugRouter,
        resolver: ExerciseResolver | None = None,
    ) -> None:
        """Initialize handler.

        Args:
            store: Content store providing exercise content and lookups
            router: Router holding the deprecated slug table
            resolver: Exercise resolver (default: one backed by store)
        """
        self._store = store
        self._router = router
        self._resolver = resolver if resolver is not None else ExerciseResolver(store)

    @property
    def router(self) -> SlugRouter:
        return self._router

    async def handle(self, slug: str) -> PageOutcome:
        """Resolve a requested slug into a page outcome.

        Args:
            slug: Requested slug

        Returns:
            Redirect, Render or PageError

        Raises:
            ValueError: If slug is empty
        """
        slug = ensure_slug(slug)
        content = await self._store.load_content(slug)

        target = self._router.route(slug)
        if target is not None:
            logger.info(f"Redirecting {slug!r} to {target!r}")
            return Redirect(target=target)

        resolution = await self._resolver.resolve(slug)
        if isinstance(resolution, NotFound):
            logger.info(f"No tutorial for {slug!r}")
            return PageError(status=NOT_FOUND, message=NOT_FOUND_MESSAGE)

        return Render(data={"exercise": content})
