"""Slug Derivation — turns a product name into its public lookup key.

Invariants:
    - Output matches SLUG_PATTERN or is empty (caller rejects empty)
    - Deterministic: same name always yields the same slug
    - Never longer than MAX_SLUG_LENGTH; truncation prefers a word boundary

Design Decisions:
    - NFKD + ASCII drop: "Café Crème" -> "cafe-creme" without a transliteration dependency
"""

import re
import unicodedata

MAX_SLUG_LENGTH = 140
SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def derive_slug(name: str) -> str:
    """Derive a URL-safe slug from a product name."""
    normalized = unicodedata.normalize("NFKD", name)
    ascii_only = normalized.encode("ascii", "ignore").decode("ascii")
    slug = _NON_ALNUM.sub("-", ascii_only.lower()).strip("-")
    if len(slug) <= MAX_SLUG_LENGTH:
        return slug
    cut = slug[:MAX_SLUG_LENGTH]
    if slug[MAX_SLUG_LENGTH] != "-" and "-" in cut:
        cut = cut.rsplit("-", 1)[0]
    return cut.strip("-")
