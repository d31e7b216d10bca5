#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for configuration loading.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from media_browser.config import (
    ConfigError, LibraryConfig, load_config, DEFAULT_THUMBNAIL_COUNT, DEFAULT_COMMAND
)


def test_yaml_config(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text(
        "thumbnail:\n"
        "  dir: ~/thumbs\n"
        "  count: 4\n"
        "  size: 320\n"
        "commands:\n"
        "  MKV:\n"
        "    default: mpv --fs\n"
        "    vlc: vlc\n"
        "  zip: mcomix\n",
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.thumbnail_dir == Path("~/thumbs").expanduser()
    assert config.thumbnail_count == 4
    assert config.thumbnail_size == 320
    assert config.get_command("mkv") == "mpv --fs"
    assert config.get_all_commands("MKV") == {"default": "mpv --fs", "vlc": "vlc"}
    assert config.get_command("zip") == "mcomix"


def test_json_config_flat_keys(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"thumbnail_count": 2, "database": "/tmp/x.db"}), encoding="utf-8")
    config = load_config(path)
    assert config.thumbnail_count == 2
    assert config.database == Path("/tmp/x.db")
    assert config.get_command("mp4") == DEFAULT_COMMAND


def test_defaults_without_file():
    with patch("media_browser.config.config_file", return_value=None):
        config = load_config()
    assert config == LibraryConfig()
    assert config.thumbnail_count == DEFAULT_THUMBNAIL_COUNT


def test_empty_yaml_uses_defaults(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == LibraryConfig()


@pytest.mark.parametrize("content", [
    "thumbnail: {count: 0}\n",
    "thumbnail: {size: big}\n",
    "commands: [mpv]\n",
    "- just\n- a list\n",
    "thumbnail: [\n",
])
def test_invalid_config(tmp_path, content):
    path = tmp_path / "config.yml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_unreadable_config(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yml")
