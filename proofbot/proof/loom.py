"""
Loom share-link validation.

Only share links (``loom.com/share/<id>``) are accepted. Other Loom URL
shapes, such as library or embed pages, are rejected.
"""

from __future__ import annotations

import re

# The id is the alphanumeric run directly after the share path; anything
# after it (query string, title slug) is ignored.
_LOOM_SHARE_RE = re.compile(r"loom\.com/share/([a-zA-Z0-9]+)")

LOOM_THUMBNAIL_TEMPLATE = "https://cdn.loom.com/sessions/thumbnails/{video_id}-with-play.gif"


def extract_loom_video_id(url: str) -> str | None:
    """Return the video id of the first Loom share link in ``url``, or None."""
    match = _LOOM_SHARE_RE.search(url)
    return match.group(1) if match else None


def is_valid_loom_url(url: str) -> bool:
    """True if ``url`` mentions loom.com and contains a share link."""
    return "loom.com" in url and extract_loom_video_id(url) is not None


def loom_thumbnail_url(video_id: str) -> str:
    """Animated thumbnail served by Loom's CDN for a shared video."""
    return LOOM_THUMBNAIL_TEMPLATE.format(video_id=video_id)
