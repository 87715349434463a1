"""Shared constants for the Textual UI."""

from __future__ import annotations

ACCENT = "#7AA2F7"
PREVIEW_COLUMN_WIDTH = 80
TYPE_BADGES = {"text": "txt", "image": "img", "binary": "bin"}
