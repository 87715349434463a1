"""Parser for the history store's ``list`` dump (core domain).

The dump format is owned by cliphist and is undocumented, so every
assumption about it lives here. One record per line::

    <numeric id>\t<preview text>
    <numeric id>\t[[ binary data <size> <format> [<W>x<H>] ]]

Only the first tab separates the id; later tabs belong to the content.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Set, Tuple

from clipscope.core.errors import ParseSkip
from clipscope.core.models import CONTENT_BINARY, CONTENT_IMAGE, CONTENT_TEXT, Entry

LOGGER = logging.getLogger(__name__)

DEFAULT_PREVIEW_CHARS = 100
ELLIPSIS = "..."

_BINARY_MARKER = re.compile(r"^\[\[\s*binary data\s+(?P<body>.*?)\s*\]\]$", re.IGNORECASE)
_DIMENSIONS = re.compile(r"\b\d+x\d+\b")
_IMAGE_FORMATS = {"png", "jpeg", "jpg", "gif", "bmp", "webp", "tiff", "svg", "ico", "avif"}
_MIME_ALIASES = {"jpg": "jpeg", "svg": "svg+xml"}


def _collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def make_preview(content: str, limit: int = DEFAULT_PREVIEW_CHARS) -> str:
    """Normalize content to a single display line and clip it to ``limit`` chars."""

    preview = _collapse_whitespace(content)
    if len(preview) <= limit:
        return preview
    return preview[: limit - len(ELLIPSIS)] + ELLIPSIS


def classify_content(content: str) -> Tuple[str, Optional[str]]:
    """Return ``(content_type, mime_type)`` for a preview string."""

    marker = _BINARY_MARKER.match(content.strip())
    if not marker:
        return CONTENT_TEXT, None

    tokens = [token.lower() for token in marker.group("body").split()]
    has_dimensions = bool(_DIMENSIONS.search(marker.group("body")))
    for token in tokens:
        if token in _IMAGE_FORMATS:
            return CONTENT_IMAGE, f"image/{_MIME_ALIASES.get(token, token)}"
    if has_dimensions:
        return CONTENT_IMAGE, "image/png"
    return CONTENT_BINARY, "application/octet-stream"


def parse_line(line: str, preview_chars: int = DEFAULT_PREVIEW_CHARS) -> Entry:
    """Parse one dump line into an Entry or raise ParseSkip."""

    entry_id, sep, content = line.partition("\t")
    if not sep:
        raise ParseSkip("missing tab separator")
    entry_id = entry_id.strip()
    if not entry_id:
        raise ParseSkip("empty id")
    # isdigit() accepts non-ASCII digits such as superscripts.
    if not (entry_id.isascii() and entry_id.isdigit()):
        raise ParseSkip(f"non-numeric id {entry_id[:20]!r}")

    content_type, mime_type = classify_content(content)
    if content_type == CONTENT_TEXT:
        preview = make_preview(content, preview_chars)
    else:
        preview = _collapse_whitespace(content)
    return Entry(
        id=entry_id,
        preview=preview,
        content_type=content_type,
        mime_type=mime_type,
        raw_line=line,
    )


def parse_history(raw_dump: str, preview_chars: int = DEFAULT_PREVIEW_CHARS) -> List[Entry]:
    """Convert a raw ``list`` dump into entries, preserving dump order.

    Malformed lines are dropped rather than failing the whole listing.
    """

    entries: List[Entry] = []
    seen_ids: Set[str] = set()
    skipped = 0

    # split("\n") instead of splitlines(): content may hold \x0b, \x1c, \u2028
    # and friends, which splitlines() would treat as record boundaries.
    for line in raw_dump.split("\n"):
        if line.endswith("\r"):
            line = line[:-1]
        if not line.strip():
            continue
        try:
            entry = parse_line(line, preview_chars)
            if entry.id in seen_ids:
                raise ParseSkip(f"duplicate id {entry.id}")
        except ParseSkip as skip:
            skipped += 1
            LOGGER.debug("Skipping history line: %s", skip.reason)
            continue
        seen_ids.add(entry.id)
        entries.append(entry)

    if skipped:
        LOGGER.debug("Parsed %s entries, skipped %s malformed lines", len(entries), skipped)
    return entries
