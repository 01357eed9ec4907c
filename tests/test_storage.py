"""Tests for the data file helpers."""

from core.storage import load_text, save_text


def test_load_missing_file_returns_default(tmp_path):
    assert load_text(tmp_path / "missing.json", "[]") == "[]"


def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "todos.json"

    save_text(path, '[{"text": "café"}]')

    assert load_text(path, "[]") == '[{"text": "café"}]\n'
    assert [p.name for p in path.parent.iterdir()] == ["todos.json"]


def test_save_replaces_existing(tmp_path):
    path = tmp_path / "timecard.json"
    save_text(path, "{}")
    save_text(path, '{"2025-01-15": []}')

    assert path.read_text(encoding="utf-8") == '{"2025-01-15": []}\n'
