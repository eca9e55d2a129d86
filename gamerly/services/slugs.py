"""Slugs and detail-page paths for game links.

The detail-page router resolves ``/game/<id>-<slug>`` by id only, but links
in the sitemap and on list pages must use the same slug rules or they drift.
"""

import re

QUOTES = re.compile(r"['\"]")
NON_ALNUM = re.compile(r"[^a-z0-9]+")
REPEATED_HYPHENS = re.compile(r"-+")
EDGE_HYPHENS = re.compile(r"(^-|-$)")

DETAIL_PATH = re.compile(r"^/game/(\d+)(?:-.*)?$")


def slugify(text: str | None) -> str:
    """Lowercase, drop quotes and collapse everything else to single hyphens."""
    if not text:
        return ""
    slug = text.lower().strip()
    slug = QUOTES.sub("", slug)
    slug = NON_ALNUM.sub("-", slug)
    slug = REPEATED_HYPHENS.sub("-", slug)
    return EDGE_HYPHENS.sub("", slug)


def game_detail_path(game_id, name: str | None) -> str:
    slug = slugify(name)
    return f"/game/{game_id}-{slug}" if slug else f"/game/{game_id}"


def parse_game_id(path: str | None) -> str | None:
    """Extract the numeric id from a ``/game/<id>[-slug]`` path, ignoring query and fragment."""
    clean = (path or "").split("?")[0].split("#")[0]
    match = DETAIL_PATH.match(clean)
    return match.group(1) if match else None
