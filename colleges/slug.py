"""College name to URL slug conversion."""

import re
from typing import Optional

from colleges.errors import InvalidCollegeError


def slugify(name: str) -> str:
    """Convert a college name to a URL-safe slug.

    Whitespace runs become hyphens, anything outside ``[a-z0-9-]`` is
    dropped, repeated hyphens collapse and the ends are trimmed.

    Examples:
        >>> slugify("Indian Institute of Technology Bombay")
        'indian-institute-of-technology-bombay'
        >>> slugify("Birla Institute of Technology and Science, Pilani")
        'birla-institute-of-technology-and-science-pilani'
        >>> slugify("St. Xavier's College - Mumbai")
        'st-xaviers-college-mumbai'
    """
    s = name.lower()
    s = re.sub(r"\s+", "-", s)
    s = re.sub(r"[^a-z0-9-]", "", s)
    s = re.sub(r"-{2,}", "-", s)
    return s.strip("-")


# Fixed paths under /colleges that shadow the public detail route
RESERVED_SLUGS = frozenset({"filters"})


def resolve_slug(supplied: Optional[str], name: Optional[str]) -> str:
    """Pick the stored slug: the supplied one if non-blank, else one from ``name``."""
    slug = (supplied or "").strip() or slugify(name or "")
    if not slug:
        raise InvalidCollegeError("Unable to derive a slug from the college name")
    if slug in RESERVED_SLUGS:
        raise InvalidCollegeError(f"Slug '{slug}' is reserved")
    return slug
