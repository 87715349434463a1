from __future__ import annotations

import pytest

from clipscope.core.config import StoreConfig
from clipscope.core.errors import EntryNotFound, ToolNotFound, ToolTimedOut
from clipscope.core.store import HistoryStore


def test_list_entries_preserves_store_order(store, invoker) -> None:
    entries = store.list_entries()
    assert [entry.id for entry in entries] == ["3", "2", "1"]
    assert invoker.calls[-1].args == ["list"]
    assert invoker.calls[-1].timeout == StoreConfig().timeout_seconds


def test_search_ranks_listing(store) -> None:
    assert [entry.id for entry in store.search("buy")] == ["2", "1"]
    assert [entry.id for entry in store.search("call eggs")] == ["3", "2"]


def test_blank_search_equals_listing(store) -> None:
    assert store.search("  ") == store.list_entries()


def test_is_available_reflects_binary(invoker, clipboard) -> None:
    assert HistoryStore(invoker, clipboard).is_available()
    invoker.tools.discard("cliphist")
    assert not HistoryStore(invoker, clipboard).is_available()


def test_is_available_swallows_probe_errors(clipboard) -> None:
    class BrokenInvoker:
        def which(self, command):
            raise OSError("probe exploded")

    assert HistoryStore(BrokenInvoker(), clipboard).is_available() is False


def test_missing_binary_raises_tool_not_found(invoker, clipboard) -> None:
    invoker.tools.discard("cliphist")
    store = HistoryStore(invoker, clipboard)
    with pytest.raises(ToolNotFound) as excinfo:
        store.list_entries()
    assert "installed" in excinfo.value.message


def test_timeout_propagates_unchanged(store, invoker) -> None:
    invoker.list_error = ToolTimedOut("cliphist", 5)
    with pytest.raises(ToolTimedOut):
        store.search("buy")


def test_malformed_lines_do_not_fail_listing(store, invoker) -> None:
    invoker.raw_list = "3\tcall mom\ngarbage line\n1\tbuy milk\n"
    assert [entry.id for entry in store.list_entries()] == ["3", "1"]


def test_get_full_content_decodes_entry(store, invoker) -> None:
    invoker.records[0].payload = b"call mom\nand dad\n"
    assert store.get_full_content("3") == "call mom\nand dad\n"
    assert invoker.calls[-1].args == ["decode", "3"]


def test_get_full_content_stale_id(store, invoker) -> None:
    invoker.records = [record for record in invoker.records if record.entry_id != "2"]
    with pytest.raises(EntryNotFound):
        store.get_full_content("2")
    assert not any(call.args[:1] == ["decode"] for call in invoker.calls)


def test_get_full_content_race_maps_to_entry_not_found(store, invoker) -> None:
    invoker.vanish_on_decode.add("2")
    with pytest.raises(EntryNotFound):
        store.get_full_content("2")


def test_delete_pipes_raw_line(store, invoker) -> None:
    store.delete_entry("2")
    delete_call = invoker.calls[-1]
    assert delete_call.args == ["delete"]
    assert delete_call.stdin == "2\tbuy eggs\n"
    assert "2" not in [entry.id for entry in store.list_entries()]


def test_delete_unknown_id(store) -> None:
    with pytest.raises(EntryNotFound):
        store.delete_entry("42")
    with pytest.raises(EntryNotFound):
        store.delete_entry("")


def test_copy_writes_full_text(store, invoker, clipboard) -> None:
    invoker.records[1].payload = b"buy eggs\r\nand bread"
    store.copy_entry("2")
    assert clipboard.writes == [(b"buy eggs\r\nand bread", "text", None)]


def test_copy_image_passes_bytes_untouched(store, invoker, clipboard) -> None:
    png = b"\x89PNG\r\n\x1a\n\x00\xff\xfe"
    invoker.add("4", "[[ binary data 1 KiB png 2x2 ]]", png)
    store.copy_entry("4")
    assert clipboard.writes == [(png, "image", "image/png")]


def test_copy_stale_id_skips_clipboard(store, clipboard) -> None:
    with pytest.raises(EntryNotFound):
        store.copy_entry("99")
    assert clipboard.writes == []


def test_custom_binary_and_preview_length(invoker, clipboard) -> None:
    invoker.tools.add("/opt/cliphist")
    invoker.store_binaries.add("/opt/cliphist")
    invoker.add("8", "y" * 40)
    config = StoreConfig(binary="/opt/cliphist", timeout_seconds=1, preview_chars=10)
    entries = HistoryStore(invoker, clipboard, config).list_entries()
    assert entries[-1].preview == "yyyyyyy..."
    assert invoker.calls[-1].command == "/opt/cliphist"
    assert invoker.calls[-1].timeout == 1
