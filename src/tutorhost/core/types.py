"""Core type definitions."""

from typing import NewType

# URL path segment identifying a tutorial exercise (e.g., "global-transitions")
Slug = NewType("Slug", str)

# URL path for routing (e.g., "/tutorial/global-transitions")
URLPath = NewType("URLPath", str)

TUTORIAL_PREFIX = "/tutorial"


def ensure_slug(slug: str) -> Slug:
    """Validate a slug supplied by the caller.

    Raises:
        ValueError: If slug is empty
    """
    if not slug:
        raise ValueError("slug must not be empty")
    return Slug(slug)


def tutorial_path(slug: Slug) -> URLPath:
    """Build the tutorial page path for a slug."""
    return URLPath(f"{TUTORIAL_PREFIX}/{slug}")
