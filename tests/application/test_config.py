from pathlib import Path

import pytest
from pydantic import ValidationError

from typetest.application.config import config_path, find_config_file, resolve_config


def test_defaults(mock_home):
    config = resolve_config()

    assert config.test_length_seconds == 60
    assert config.line_width == 80
    assert config.word_pool_file is None
    assert config.seed is None
    assert set(config.model_dump()) == {
        "test_length_seconds",
        "line_width",
        "show_wpm",
        "show_timer",
        "word_pool_file",
        "passage_file",
        "seed",
    }


def test_config_file_is_loaded(mock_home):
    cfg = mock_home / ".config/typetest/config.toml"
    cfg.parent.mkdir(parents=True)
    cfg.write_text("test_length_seconds = 30\nline_width = 40\nshow_wpm = false\n")

    config = resolve_config()

    assert find_config_file() == cfg
    assert config.test_length_seconds == 30
    assert config.line_width == 40
    assert config.show_wpm is False


def test_env_overrides_file_and_cli_overrides_env(mock_home, monkeypatch):
    cfg = mock_home / ".typetest.toml"
    cfg.write_text("line_width = 40\n")
    monkeypatch.setenv("TYPETEST_LINE_WIDTH", "50")

    assert resolve_config().line_width == 50
    assert resolve_config({"line_width": 60}).line_width == 60


def test_none_overrides_are_ignored(mock_home):
    config = resolve_config({"line_width": None, "seed": None, "test_length_seconds": 15})
    assert config.line_width == 80
    assert config.test_length_seconds == 15


def test_word_pool_path_is_resolved(mock_home, tmp_path):
    config = resolve_config({"word_pool_file": tmp_path / "pool.txt"})
    assert config.word_pool_file == (tmp_path / "pool.txt").resolve()


def test_invalid_values_are_rejected(mock_home):
    with pytest.raises(ValidationError):
        resolve_config({"test_length_seconds": 0})
    with pytest.raises(ValidationError):
        resolve_config({"line_width": -1})


def test_config_path_prefers_existing_file(mock_home):
    assert config_path() == mock_home / ".config/typetest/config.toml"

    alt = mock_home / ".typetest.toml"
    alt.write_text("")
    assert config_path() == alt
    assert isinstance(config_path(), Path)
