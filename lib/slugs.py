# =============================================================================
# lib/slugs.py - Slug and Reading Helpers
# =============================================================================
# Small text helpers shared by the content layer and the renderer:
# - generate_slug / is_valid_slug / unique_slug
# - estimate_read_time for posts
# =============================================================================

import math
import re
from collections.abc import Iterable

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

_NON_WORD = re.compile(r"[^\w\s-]")
_SEPARATORS = re.compile(r"[\s_-]+")
_HTML_TAG = re.compile(r"<[^>]*>")
_MARKUP_CHARS = re.compile(r"[#*`]")

WORDS_PER_MINUTE = 200


def generate_slug(text: str) -> str:
    """
    Turn a title into a URL-safe slug.

    Example:
        generate_slug("Hello, World!  2024") -> "hello-world-2024"
    """
    slug = _NON_WORD.sub("", text.lower().strip())
    slug = _SEPARATORS.sub("-", slug)
    slug = slug.strip("-")
    # \w keeps non-ASCII letters; drop anything the URL pattern won't accept
    return re.sub(r"[^a-z0-9-]", "", slug).strip("-")


def is_valid_slug(slug: str | None) -> bool:
    """Lowercase letters, digits and single hyphens between them."""
    return bool(slug) and SLUG_PATTERN.match(slug) is not None


def unique_slug(text: str, existing: Iterable[str], current: str | None = None) -> str:
    """
    Generate a slug from `text` that does not collide with `existing`.

    `current` is the entity's own slug when editing, which never counts as a
    collision.
    """
    taken = set(existing)
    slug = generate_slug(text)

    if slug == current or slug not in taken:
        return slug

    counter = 1
    while f"{slug}-{counter}" in taken:
        counter += 1
    return f"{slug}-{counter}"


def estimate_read_time(content: str) -> str:
    """Reading time at 200 words per minute, never below one minute."""
    text = _MARKUP_CHARS.sub("", _HTML_TAG.sub("", content or ""))
    words = len(text.split())
    minutes = max(1, math.ceil(words / WORDS_PER_MINUTE))
    return f"{minutes} min"
