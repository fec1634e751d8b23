"""Tests for EnvironmentStore: snapshot capture, overlay load, restore."""

from __future__ import annotations

import os

import pytest

from envlet.env_file import Definition, parse_env_text
from envlet.stores.memory import MemoryEnvironmentStore
from envlet.stores.process import ProcessEnvironmentStore


def test_snapshot_captured_at_creation(memory_store):
    assert dict(memory_store.snapshot) == {"HOME": "/home/test", "PATH": "/usr/bin"}


def test_snapshot_is_read_only(memory_store):
    with pytest.raises(TypeError):
        memory_store.snapshot["X"] = "1"  # type: ignore[index]


def test_load_overlays_snapshot(memory_store):
    env = memory_store.load([Definition("PATH", "/opt/bin"), Definition("A", "1")])
    assert env == {"HOME": "/home/test", "PATH": "/opt/bin", "A": "1"}
    assert memory_store.as_dict() == env


def test_load_last_definition_wins(memory_store):
    memory_store.load(parse_env_text("A=1\nA=2\n"))
    assert memory_store.get("A") == "2"


def test_load_does_not_change_snapshot(memory_store):
    memory_store.load([Definition("HOME", "/elsewhere")])
    assert memory_store.snapshot["HOME"] == "/home/test"


def test_repeated_loads_drop_stale_names(memory_store):
    """Names defined only by an earlier document disappear on the next load."""
    memory_store.load(parse_env_text("B=2\nHOME=/tmp\n"))
    assert memory_store.get("B") == "2"
    memory_store.load(parse_env_text("C=3\n"))
    assert memory_store.get("B") is None
    assert memory_store.get("C") == "3"
    assert memory_store.get("HOME") == "/home/test"


def test_restore(memory_store):
    memory_store.load([Definition("A", "1"), Definition("HOME", "/x")])
    memory_store.restore()
    assert memory_store.as_dict() == {"HOME": "/home/test", "PATH": "/usr/bin"}


def test_load_override_false_keeps_snapshot_values(memory_store):
    env = memory_store.load(
        [Definition("HOME", "/elsewhere"), Definition("A", "1")], override=False,
    )
    assert env["HOME"] == "/home/test"
    assert env["A"] == "1"


def test_load_skips_invalid_names(memory_store):
    env = memory_store.load([Definition("weird name", "x"), Definition("", "y"), Definition("OK", "z")])
    assert "weird name" not in env
    assert "" not in env
    assert env["OK"] == "z"


def test_effective_does_not_touch_table(memory_store):
    env = memory_store.effective([Definition("A", "1")])
    assert env["A"] == "1"
    assert memory_store.get("A") is None


def test_explicit_snapshot():
    """An explicit snapshot is the baseline even if the table holds more."""
    store = MemoryEnvironmentStore(initial={"X": "1", "Y": "2"}, snapshot={"Y": "0"})
    store.load([])
    assert store.as_dict() == {"Y": "0"}


def test_capture_reflects_current_table(memory_store):
    memory_store.set("NEW", "v")
    assert memory_store.capture()["NEW"] == "v"
    assert "NEW" not in memory_store.snapshot


def test_process_store_load_and_restore(monkeypatch):
    monkeypatch.setenv("ENVLET_TEST_KEEP", "keep")
    monkeypatch.delenv("ENVLET_TEST_NEW", raising=False)
    store = ProcessEnvironmentStore()
    try:
        store.load([Definition("ENVLET_TEST_NEW", "1"), Definition("ENVLET_TEST_KEEP", "changed")])
        assert os.environ["ENVLET_TEST_NEW"] == "1"
        assert os.environ["ENVLET_TEST_KEEP"] == "changed"
        store.restore()
        assert "ENVLET_TEST_NEW" not in os.environ
        assert os.environ["ENVLET_TEST_KEEP"] == "keep"
    finally:
        os.environ.pop("ENVLET_TEST_NEW", None)


def test_process_store_primitives(monkeypatch):
    monkeypatch.delenv("ENVLET_TEST_PRIM", raising=False)
    store = ProcessEnvironmentStore()
    store.set("ENVLET_TEST_PRIM", "v")
    try:
        assert store.get("ENVLET_TEST_PRIM") == "v"
        assert "ENVLET_TEST_PRIM" in store.list_keys()
        store.delete("ENVLET_TEST_PRIM")
        assert store.get("ENVLET_TEST_PRIM") is None
        store.delete("ENVLET_TEST_PRIM")
    finally:
        os.environ.pop("ENVLET_TEST_PRIM", None)


def test_load_skips_values_with_nul(memory_store):
    env = memory_store.load(parse_env_text("A=ok\nB=a\x00b\n"))
    assert env["A"] == "ok"
    assert "B" not in env
    assert memory_store.get("B") is None


def test_load_rejects_bad_target_before_any_write():
    """A target that cannot be applied leaves the table exactly as it was."""
    store = MemoryEnvironmentStore(initial={"OLD": "1"}, snapshot={"X": "a\x00b"})
    with pytest.raises(ValueError, match="NUL"):
        store.load([Definition("A", "1")])
    assert store.as_dict() == {"OLD": "1"}


def test_process_store_value_with_nul(monkeypatch):
    monkeypatch.delenv("ENVLET_TEST_A", raising=False)
    monkeypatch.delenv("ENVLET_TEST_B", raising=False)
    store = ProcessEnvironmentStore()
    try:
        store.load(parse_env_text("ENVLET_TEST_A=ok\nENVLET_TEST_B=a\x00b\n"))
        assert os.environ["ENVLET_TEST_A"] == "ok"
        assert "ENVLET_TEST_B" not in os.environ
    finally:
        store.restore()
        os.environ.pop("ENVLET_TEST_A", None)


def test_load_skips_name_with_trailing_newline(memory_store):
    env = memory_store.load([Definition("FOO\n", "x")])
    assert "FOO\n" not in env
