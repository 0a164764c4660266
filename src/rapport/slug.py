"""Directory slugs derived from display names."""

from __future__ import annotations

import re
import unicodedata

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def name_to_slug(name: str) -> str:
    """Convert a name to a filesystem-friendly slug.

    "Alex Chen" -> "alex-chen", "María García" -> "maria-garcia".
    """
    folded = unicodedata.normalize("NFKD", name.lower())
    ascii_only = "".join(c for c in folded if not unicodedata.combining(c))
    return _NON_ALNUM_RE.sub("-", ascii_only).strip("-")
