"""Deprecated slug routing.

Maps retired tutorial slugs to their canonical replacements. The table is
fixed at construction and shared read-only between requests.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType

from tutorhost.core.types import Slug, ensure_slug

logger = logging.getLogger(__name__)

DEFAULT_REDIRECTS: Mapping[Slug, Slug] = MappingProxyType(
    {Slug("local-transitions"): Slug("global-transitions")},
)


class SlugRouter:
    """Exact-match lookup of deprecated slugs."""

    __slots__ = ("_redirects",)

    def __init__(self, redirects: Mapping[str, str] = DEFAULT_REDIRECTS) -> None:
        """Initialize router with a redirect table.

        Args:
            redirects: Deprecated slug to canonical slug pairs

        Raises:
            ValueError: If the table contains empty slugs, self-mappings,
                or targets that are themselves deprecated
        """
        _validate_redirects(redirects)
        self._redirects: Mapping[Slug, Slug] = MappingProxyType(
            {Slug(old): Slug(new) for old, new in redirects.items()},
        )

    @property
    def redirects(self) -> Mapping[Slug, Slug]:
        """Read-only redirect table."""
        return self._redirects

    def route(self, slug: str) -> Slug | None:
        """Return the canonical slug if slug is a deprecated alias.

        Args:
            slug: Requested slug

        Returns:
            Canonical slug, or None when slug is not deprecated

        Raises:
            ValueError: If slug is empty
        """
        target = self._redirects.get(ensure_slug(slug))
        if target is not None:
            logger.debug(f"Slug {slug!r} is deprecated in favour of {target!r}")
        return target

    def entries(self) -> list[Slug]:
        """Deprecated slugs that need prerendered redirect pages."""
        return list(self._redirects)


def _validate_redirects(redirects: Mapping[str, str]) -> None:
    for old, new in redirects.items():
        if not isinstance(old, str) or not old:
            raise ValueError(f"Redirect source must be a non-empty string: {old!r}")
        if not isinstance(new, str) or not new:
            raise ValueError(f"Redirect target for {old!r} must be a non-empty string")
        if old == new:
            raise ValueError(f"Slug {old!r} redirects to itself")
        if new in redirects:
            raise ValueError(
                f"Redirect target {new!r} for {old!r} is itself a deprecated slug",
            )
