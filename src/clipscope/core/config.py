"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

CLIPBOARD_PREFERENCES = ("auto", "wayland", "x11")


@dataclass(frozen=True)
class StoreConfig:
    """Settings for talking to the external history store."""

    binary: str = "cliphist"
    timeout_seconds: float = 5.0
    preview_chars: int = 100


@dataclass(frozen=True)
class ClipboardConfig:
    """Clipboard writer selection consumed by the clipboard adapter."""

    preferred: str = "auto"
    timeout_seconds: float = 5.0


@dataclass(frozen=True)
class SearchConfig:
    """Search-as-you-type behaviour for interactive frontends."""

    debounce_ms: int = 150


@dataclass(frozen=True)
class LoggingConfig:
    """Optional console/file logging."""

    enabled: bool = False
    level: str = "INFO"
    console: bool = True
    file_enabled: bool = False
    file_path: Optional[str] = None
    max_bytes: int = 5 * 1024 * 1024
    backup_count: int = 5


@dataclass(frozen=True)
class AppConfig:
    """Top-level configuration assembled by ``settings.load_settings``."""

    store: StoreConfig = field(default_factory=StoreConfig)
    clipboard: ClipboardConfig = field(default_factory=ClipboardConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
