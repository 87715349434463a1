"""Application entry point for clipscope."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint

from clipscope import settings
from clipscope.adapters.clipboard_writer import ClipboardWriter
from clipscope.adapters.commands import CommandResult, HistoryCommands
from clipscope.adapters.subprocess_invoker import SubprocessInvoker
from clipscope.core.config import AppConfig, LoggingConfig
from clipscope.core.store import HistoryStore

NAME = "CLIPSCOPE"
FONT = "tarty-1"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


def _configure_logging(config: LoggingConfig, console: bool = True) -> None:
    if not config.enabled:
        return

    level = getattr(logging, config.level, logging.INFO)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    handlers: list[logging.Handler] = []

    # The TUI owns the terminal, so it only ever logs to file.
    if config.console and console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    if config.file_enabled and config.file_path:
        directory = os.path.dirname(config.file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        file_handler = RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def build_commands(config: AppConfig) -> HistoryCommands:
    """Wire the real adapters into a HistoryStore and wrap it for callers."""

    invoker = SubprocessInvoker(default_timeout=config.store.timeout_seconds)
    clipboard = ClipboardWriter(invoker, config.clipboard)
    store = HistoryStore(invoker, clipboard, config.store)
    return HistoryCommands(store)


def _emit(result: CommandResult, as_json: bool) -> int:
    if as_json:
        print(json.dumps(result.to_dict(), ensure_ascii=False))
        return 0 if result.ok else 1
    if not result.ok and result.error is not None:
        print(result.error.message, file=sys.stderr)
        return 1
    return 0


def _print_entries(result: CommandResult, as_json: bool) -> int:
    if as_json or not result.ok:
        return _emit(result, as_json)
    for entry in result.data:
        print(f"{entry['id']}\t{entry['content_type']}\t{entry['preview']}")
    return 0


def _run_ui(config: AppConfig, commands: HistoryCommands) -> int:
    from clipscope.frontend.app import ClipscopeApp

    ClipscopeApp(commands, debounce_ms=config.search.debounce_ms).run()
    return 0


def _check(commands: HistoryCommands, config: AppConfig, as_json: bool) -> int:
    result = commands.check_available()
    if as_json:
        return _emit(result, as_json)
    _print_banner()
    if result.data:
        print(f"{config.store.binary}: available")
        return 0
    print(f"{config.store.binary}: not found on PATH", file=sys.stderr)
    return 1


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="clipscope")
    parser.add_argument("--json", action="store_true", help="Print structured JSON results")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("ui", help="Launch the history browser TUI (default)")
    subparsers.add_parser("check", help="Check whether cliphist is installed")
    subparsers.add_parser("list", help="List clipboard history, newest first")
    search_parser = subparsers.add_parser("search", help="Search clipboard history")
    search_parser.add_argument("query")
    for name, help_text in (
        ("show", "Print the full content of an entry"),
        ("copy", "Copy an entry back onto the clipboard"),
        ("delete", "Delete an entry from history"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("entry_id")

    args = parser.parse_args(argv)
    try:
        config = settings.load_settings()
    except ValueError as exc:
        print(f"config error: {exc}", file=sys.stderr)
        return 2

    interactive = args.command in (None, "ui")
    _configure_logging(config.logging, console=not interactive)
    logging.getLogger(__name__).debug("Starting clipscope (%s)", args.command or "ui")
    commands = build_commands(config)

    if interactive:
        return _run_ui(config, commands)
    if args.command == "check":
        return _check(commands, config, args.json)
    if args.command == "list":
        return _print_entries(commands.get_history(), args.json)
    if args.command == "search":
        return _print_entries(commands.search_history(args.query), args.json)
    if args.command == "show":
        result = commands.get_entry_content(args.entry_id)
        if result.ok and not args.json:
            sys.stdout.write(result.data)
            return 0
        return _emit(result, args.json)
    if args.command == "copy":
        return _emit(commands.copy_entry(args.entry_id), args.json)
    return _emit(commands.delete_entry(args.entry_id), args.json)


if __name__ == "__main__":
    sys.exit(main())
