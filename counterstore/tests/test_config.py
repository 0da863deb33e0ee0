"""Tests for YAML store configuration."""

import pytest

from counterstore.config import StoreConfig, load_config


def _write(tmp_path, text, name="store.yml"):
    path = tmp_path / name
    path.write_text(text)
    return path


class TestLoadConfig:
    def test_flat_mapping(self, tmp_path):
        path = _write(tmp_path, "window_seconds: 60\nthread_safe: false\nname: api\n")
        assert load_config(path) == StoreConfig(60, False, "api")

    def test_nested_under_store_key(self, tmp_path):
        path = _write(tmp_path, "store:\n  window_seconds: 120\n")
        cfg = load_config(str(path))
        assert cfg.window_seconds == 120
        assert cfg.thread_safe is True
        assert cfg.name == "default"

    def test_empty_file_gives_defaults(self, tmp_path):
        assert load_config(_write(tmp_path, "")) == StoreConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yml")

    def test_unknown_field(self, tmp_path):
        path = _write(tmp_path, "window: 60\n")
        with pytest.raises(ValueError, match="unknown field 'window'"):
            load_config(path)

    def test_wrong_type(self, tmp_path):
        path = _write(tmp_path, "window_seconds: '60'\n")
        with pytest.raises(ValueError, match="window_seconds"):
            load_config(path)

    def test_bool_is_not_a_window_size(self, tmp_path):
        path = _write(tmp_path, "window_seconds: true\n")
        with pytest.raises(ValueError):
            load_config(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = _write(tmp_path, "- 1\n- 2\n")
        with pytest.raises(ValueError, match="mapping"):
            load_config(path)
