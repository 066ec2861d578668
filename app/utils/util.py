import re
import unicodedata
from datetime import datetime, timezone
from typing import Iterable, Optional

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize a timestamp to UTC. Naive timestamps are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def slugify(name: str) -> str:
    """
    Lowercase, ASCII-only, hyphen separated form of a name.

    "Seepage Plot #1" -> "seepage-plot-1"
    """
    normalized = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    slug = _SLUG_STRIP.sub("-", normalized.lower()).strip("-")
    return slug or "untitled"


def next_unique_slug(name: str, used: Iterable[str]) -> str:
    """
    Slug for name that does not collide with any slug in used.

    Collisions get a numeric suffix: "piezometer", "piezometer-1", "piezometer-2", ...
    """
    taken = set(used)
    base = slugify(name)
    if base not in taken:
        return base
    suffix = 1
    while f"{base}-{suffix}" in taken:
        suffix += 1
    return f"{base}-{suffix}"
