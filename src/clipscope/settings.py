"""Configuration loading for clipscope.

User-editable settings live in a single JSON file so the store binary,
timeouts, and logging can be tweaked without touching Python. Environment
variables (optionally from a ``.env`` file) override the file.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

from clipscope.core.config import (
    CLIPBOARD_PREFERENCES,
    AppConfig,
    ClipboardConfig,
    LoggingConfig,
    SearchConfig,
    StoreConfig,
)

APP_NAME = "clipscope"
DEFAULT_LOG_PATH = "~/.cache/clipscope/clipscope.log"


def default_config_path(env: Optional[Mapping[str, str]] = None) -> Path:
    """Return $CLIPSCOPE_CONFIG or the XDG config location."""

    env = os.environ if env is None else env
    explicit = env.get("CLIPSCOPE_CONFIG")
    if explicit:
        return Path(explicit).expanduser()
    base = env.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    return Path(base) / APP_NAME / "config.json"


def _load_json_config(path: Path) -> dict:
    """Load the JSON config, treating a missing file as empty."""

    if not path.exists():
        return {}
    try:
        loaded = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path}: {exc.msg} (line {exc.lineno})") from exc
    if not isinstance(loaded, dict):
        raise ValueError(f"{path}: config root must be an object")
    return loaded


def _section(config: dict, name: str, label: Optional[str] = None) -> dict[str, Any]:
    value = config.get(name) or {}
    if not isinstance(value, dict):
        raise ValueError(f"config section '{label or name}' must be an object")
    return value


def _positive_float(value: Any, name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a number") from exc
    if number <= 0:
        raise ValueError(f"{name} must be positive")
    return number


def _int(value: Any, name: str) -> int:
    # bool is an int subclass, but true/false is never a meaningful count.
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be an integer") from exc


def build_config(raw: dict, env: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Validate a raw config mapping and apply environment overrides."""

    env = os.environ if env is None else env

    store = _section(raw, "store")
    binary = env.get("CLIPSCOPE_CLIPHIST_BIN") or store.get("binary", "cliphist")
    if not isinstance(binary, str) or not binary.strip():
        raise ValueError("store.binary must be a non-empty string")
    timeout = _positive_float(env.get("CLIPSCOPE_TIMEOUT") or store.get("timeout_seconds", 5), "store.timeout_seconds")

    preview = _section(raw, "preview")
    preview_chars = _int(preview.get("max_chars", 100), "preview.max_chars")
    # Room for at least one character plus the ellipsis.
    if preview_chars < 4:
        raise ValueError("preview.max_chars must be at least 4")

    clipboard = _section(raw, "clipboard")
    preferred = str(clipboard.get("preferred", "auto")).lower()
    if preferred not in CLIPBOARD_PREFERENCES:
        raise ValueError(f"clipboard.preferred must be one of {', '.join(CLIPBOARD_PREFERENCES)}")

    search = _section(raw, "search")
    debounce_ms = max(0, _int(search.get("debounce_ms", 150), "search.debounce_ms"))

    logging_cfg = _section(raw, "logging")
    file_cfg = _section(logging_cfg, "file", "logging.file")
    file_path = file_cfg.get("path", DEFAULT_LOG_PATH)
    if not isinstance(file_path, str):
        raise ValueError("logging.file.path must be a string")

    return AppConfig(
        store=StoreConfig(binary=binary, timeout_seconds=timeout, preview_chars=preview_chars),
        clipboard=ClipboardConfig(preferred=preferred, timeout_seconds=timeout),
        search=SearchConfig(debounce_ms=debounce_ms),
        logging=LoggingConfig(
            enabled=bool(logging_cfg.get("enabled", False)),
            level=str(logging_cfg.get("level", "INFO")).upper(),
            console=bool(logging_cfg.get("console", True)),
            file_enabled=bool(file_cfg.get("enabled", False)),
            file_path=os.path.expanduser(file_path),
            max_bytes=_int(file_cfg.get("max_bytes", 5 * 1024 * 1024), "logging.file.max_bytes"),
            backup_count=_int(file_cfg.get("backup_count", 5), "logging.file.backup_count"),
        ),
    )


def load_settings(path: Optional[Path] = None) -> AppConfig:
    """Load .env, then the JSON config, and return the validated AppConfig."""

    load_dotenv()
    config_path = path or default_config_path()
    return build_config(_load_json_config(config_path))
