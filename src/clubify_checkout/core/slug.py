"""Slug generation and uniqueness resolution."""

import logging
import re
from typing import Awaitable, Callable

from .exceptions import SlugGenerationError, ValidationError

logger = logging.getLogger(__name__)


class SlugRules:
    """Slug normalization rules."""

    DISALLOWED = re.compile(r'[^A-Za-z0-9-]+')
    SLUG_PATTERN = re.compile(r'^[a-z0-9-]+$')

    @staticmethod
    def generate(name: str) -> str:
        """Turn a display name into a slug.

        Every run of characters outside ``[A-Za-z0-9-]`` becomes a single
        dash, surrounding dashes are trimmed and the result is lower-cased.
        Applying it to its own output returns the same slug.

        Raises:
            ValidationError: if nothing usable remains
        """
        if not isinstance(name, str):
            raise ValidationError("Slug source must be a string", errors={"slug": ["must be a string"]})
        slug = SlugRules.DISALLOWED.sub("-", name).strip("-").lower()
        if not slug:
            raise ValidationError(
                f"Cannot build a slug from '{name}'",
                errors={"slug": ["must contain at least one letter or digit"]},
            )
        return slug

    @staticmethod
    def is_valid(slug: str) -> bool:
        return bool(slug) and bool(SlugRules.SLUG_PATTERN.match(slug)) and slug == slug.strip("-")


async def resolve_unique_slug(
    base: str,
    exists: Callable[[str], Awaitable[bool]],
    max_attempts: int = 100,
) -> str:
    """Return ``base`` or the first free ``base-N`` (N = 1, 2, ...).

    Raises:
        SlugGenerationError: when ``max_attempts`` suffixes are all taken
    """
    if not await exists(base):
        return base

    for counter in range(1, max_attempts + 1):
        candidate = f"{base}-{counter}"
        if not await exists(candidate):
            logger.debug(f"Slug {base} taken, using {candidate}")
            return candidate

    raise SlugGenerationError(
        f"No free slug for '{base}' after {max_attempts} attempts",
        details={"base": base, "max_attempts": max_attempts},
    )
